"""
Who may edit a location.

The rule is two clauses and nothing else:
  - the actor is an admin, or
  - the actor holds an *approved* LocationOwner row for that location.

can_mutate() evaluates the rule over rows already in hand; can_mutate_location()
loads those rows and denies on any lookup failure.
"""
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from app.models.location_owner import LocationOwner, OwnershipStatus
from app.models.user import UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Actor:
    """Authenticated caller as resolved by the identity provider."""

    id: str
    role: str = UserRole.user.value
    email: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin.value


def can_mutate(actor: Actor, location_id: str, owners: Iterable[LocationOwner]) -> bool:
    if actor.is_admin:
        return True
    return any(
        owner.user_id == actor.id
        and owner.location_id == location_id
        and owner.status == OwnershipStatus.approved.value
        for owner in owners
    )


def load_ownership_rows(session: Session, location_id: str, user_id: str) -> List[LocationOwner]:
    return list(
        session.exec(
            select(LocationOwner).where(
                LocationOwner.location_id == location_id,
                LocationOwner.user_id == user_id,
            )
        ).all()
    )


def can_mutate_location(session: Session, actor: Actor, location_id: str) -> bool:
    if actor.is_admin:
        return True

    try:
        owners = load_ownership_rows(session, location_id, actor.id)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Ownership lookup failed for location %s, user %s: %s", location_id, actor.id, exc)
        return False

    allowed = can_mutate(actor, location_id, owners)
    if not allowed:
        logger.info("Denied edit of location %s for user %s (role=%s)", location_id, actor.id, actor.role)
    return allowed
