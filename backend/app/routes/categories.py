"""
Venue category reference data (public, read-only).
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


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    slug: str
    name_vi: str
    name_en: Optional[str] = None
    icon: Optional[str] = None
    sort_order: int


@router.get("/categories", response_model=List[CategoryResponse])
def list_categories(session: Session = Depends(get_session)):
    try:
        return reference_data.list_categories(session)
    except CatalogError as e:
        raise to_http_exception(e)


@router.get("/categories/{category_id}", response_model=CategoryResponse)
def get_category(category_id: str, session: Session = Depends(get_session)):
    try:
        return reference_data.get_category(session, category_id)
    except CatalogError as e:
        raise to_http_exception(e)
