"""
Tag votes: the per-(location, tag, user) ledger and its aggregation.

A vote has no payload; the row existing *is* the vote. Both writes are single
statements on the full key, so concurrent duplicates converge instead of
raising:
  vote   -> INSERT ... ON CONFLICT DO NOTHING
  unvote -> DELETE ... WHERE location_id AND tag_id AND user_id

Stats are tallied fresh on every call and ranked by vote count, then tag id.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from app.models.location import Location, LocationStatus
from app.models.location_tag import LocationTag
from app.models.tag import Tag
from app.services.errors import DataAccessError, NotFoundError
from app.utils.sql import insert_ignore

logger = logging.getLogger(__name__)


@dataclass
class TagStat:
    tag_id: str
    name: str
    vote_count: int = 0
    viewer_voted: bool = False


def _require_vote_target(session: Session, location_id: str, tag_id: str) -> None:
    location = session.get(Location, location_id)
    if location is None or location.status != LocationStatus.approved.value:
        raise NotFoundError(f"Location with ID '{location_id}' not found")
    if session.get(Tag, tag_id) is None:
        raise NotFoundError(f"Tag with ID '{tag_id}' not found")


def vote(session: Session, location_id: str, tag_id: str, user_id: str) -> None:
    """Record user's vote. Voting again for the same tag is a silent no-op."""
    try:
        _require_vote_target(session, location_id, tag_id)
        stmt = insert_ignore(
            session,
            LocationTag,
            {
                "location_id": location_id,
                "tag_id": tag_id,
                "user_id": user_id,
                "created_at": datetime.now(timezone.utc),
            },
        )
        session.exec(stmt)
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Vote failed (location=%s, tag=%s, user=%s): %s", location_id, tag_id, user_id, exc)
        raise DataAccessError("Failed to record vote") from exc

    logger.info("Vote location=%s tag=%s user=%s", location_id, tag_id, user_id)


def unvote(session: Session, location_id: str, tag_id: str, user_id: str) -> None:
    """Remove user's vote. Removing a vote that does not exist succeeds."""
    try:
        session.exec(
            delete(LocationTag).where(
                LocationTag.location_id == location_id,
                LocationTag.tag_id == tag_id,
                LocationTag.user_id == user_id,
            )
        )
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Unvote failed (location=%s, tag=%s, user=%s): %s", location_id, tag_id, user_id, exc)
        raise DataAccessError("Failed to remove vote") from exc

    logger.info("Unvote location=%s tag=%s user=%s", location_id, tag_id, user_id)


def tag_stats(session: Session, location_id: str, viewer_id: Optional[str] = None) -> List[TagStat]:
    """
    Per-tag vote tallies for a location.

    Returns:
        TagStat list ordered by vote_count desc, tag_id asc. viewer_voted is
        set for tags the viewer voted on; without a viewer it is always False.
    """
    try:
        votes = session.exec(
            select(LocationTag.tag_id, Tag.name_vi)
            .join(Tag, Tag.id == LocationTag.tag_id)
            .where(LocationTag.location_id == location_id)
        ).all()

        viewer_tag_ids = set()
        if viewer_id:
            viewer_tag_ids = set(
                session.exec(
                    select(LocationTag.tag_id).where(
                        LocationTag.location_id == location_id,
                        LocationTag.user_id == viewer_id,
                    )
                ).all()
            )
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Tag stats query failed for location %s: %s", location_id, exc)
        raise DataAccessError("Failed to fetch tag statistics") from exc

    stats: Dict[str, TagStat] = {}
    for tag_id, name in votes:
        stat = stats.get(tag_id)
        if stat is None:
            stat = stats[tag_id] = TagStat(tag_id=tag_id, name=name)
        stat.vote_count += 1

    for tag_id in viewer_tag_ids:
        if tag_id in stats:
            stats[tag_id].viewer_voted = True

    return sorted(stats.values(), key=lambda s: (-s.vote_count, s.tag_id))
