"""
Tag reference data (public, read-only).
"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlmodel import Session

from app.database import get_session
from app.services import reference_data
from app.services.errors import CatalogError
from app.utils.http_errors import to_http_exception

router = APIRouter()


class TagResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name_vi: str
    name_en: Optional[str] = None
    category: str
    icon: Optional[str] = None


class GroupedTagsResponse(BaseModel):
    positive: List[TagResponse]
    negative: List[TagResponse]


@router.get("/tags", response_model=GroupedTagsResponse)
def list_tags(session: Session = Depends(get_session)):
    """All tags ordered by name, grouped into positive and negative"""
    try:
        grouped = reference_data.list_tags(session)
    except CatalogError as e:
        raise to_http_exception(e)
    return GroupedTagsResponse(
        positive=[TagResponse.model_validate(t) for t in grouped["positive"]],
        negative=[TagResponse.model_validate(t) for t in grouped["negative"]],
    )


@router.get("/tags/{tag_id}", response_model=TagResponse)
def get_tag(tag_id: str, session: Session = Depends(get_session)):
    try:
        return reference_data.get_tag(session, tag_id)
    except CatalogError as e:
        raise to_http_exception(e)
