"""
Tag vote API Routes

- GET    /locations/{location_id}/tags               ranked tag stats (public; personalised if authenticated)
- POST   /locations/{location_id}/tags/{tag_id}/vote  vote (authenticated, idempotent)
- DELETE /locations/{location_id}/tags/{tag_id}/vote  remove vote (authenticated, idempotent)
"""

from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlmodel import Session

from app.auth import get_current_user, get_optional_user
from app.database import get_session
from app.services import tag_votes
from app.services.errors import CatalogError
from app.services.ownership import Actor
from app.utils.http_errors import to_http_exception

router = APIRouter()


class TagStatResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    tag_id: str
    name: str
    vote_count: int
    viewer_voted: bool


class VoteAck(BaseModel):
    success: bool = True


@router.get("/locations/{location_id}/tags", response_model=List[TagStatResponse])
def get_tag_stats(
    location_id: str,
    viewer: Optional[Actor] = Depends(get_optional_user),
    session: Session = Depends(get_session),
):
    """
    Vote counts per tag for a location, highest first (ties by tag id).

    viewer_voted reflects the caller's own votes when a valid bearer token is sent.
    """
    try:
        stats = tag_votes.tag_stats(session, location_id, viewer.id if viewer else None)
    except CatalogError as e:
        raise to_http_exception(e)
    return [TagStatResponse.model_validate(s) for s in stats]


@router.post("/locations/{location_id}/tags/{tag_id}/vote", response_model=VoteAck)
def vote_tag(
    location_id: str,
    tag_id: str,
    user: Actor = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Vote for a tag. Repeating the vote is a no-op."""
    try:
        tag_votes.vote(session, location_id, tag_id, user.id)
    except CatalogError as e:
        raise to_http_exception(e)
    return VoteAck()


@router.delete("/locations/{location_id}/tags/{tag_id}/vote", response_model=VoteAck)
def unvote_tag(
    location_id: str,
    tag_id: str,
    user: Actor = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Withdraw a vote. Succeeds even if there was no vote."""
    try:
        tag_votes.unvote(session, location_id, tag_id, user.id)
    except CatalogError as e:
        raise to_http_exception(e)
    return VoteAck()
