"""
Location Catalog Service

Create/read/update/delete and moderation of venue listings.

Guarantees:
- Public reads only ever see approved locations
- Existence and authorization are checked before any write
- Slugs are recomputed from names and kept unique per language
- Store failures are rolled back and raised as DataAccessError (no partial writes)
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import delete, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from app.models.category import Category
from app.models.location import Location, LocationStatus
from app.models.photo import Photo
from app.models.user import User
from app.services.errors import ConflictError, DataAccessError, ForbiddenError, InvalidInputError, NotFoundError
from app.services.location_query import LocationFilters, PageMeta, query_approved_locations
from app.services.ownership import Actor, can_mutate_location
from app.utils.slug import slugify

logger = logging.getLogger(__name__)

FALLBACK_SLUG = "location"

# Columns a create/update payload may set. id, status, slugs, submitted_by,
# approved_by and timestamps are owned by this service.
EDITABLE_FIELDS = frozenset(
    {
        "name_vi",
        "name_en",
        "address_vi",
        "address_en",
        "district_vi",
        "district_en",
        "cuisine_vi",
        "cuisine_en",
        "description_vi",
        "description_en",
        "latitude",
        "longitude",
        "category",
        "category_id",
        "price_range",
        "phone",
        "website",
        "hours_open",
        "hours_close",
    }
)

MODERATION_TARGETS = (LocationStatus.approved.value, LocationStatus.rejected.value)


@dataclass
class LocationDetail:
    location: Location
    photos: List[Photo] = field(default_factory=list)
    submitter: Optional[User] = None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _check_fields(data: Dict[str, Any]) -> None:
    unknown = sorted(set(data) - EDITABLE_FIELDS)
    if unknown:
        raise InvalidInputError(f"Fields cannot be set: {', '.join(unknown)}")


def _check_category(session: Session, data: Dict[str, Any]) -> None:
    category_id = data.get("category_id")
    if category_id and session.get(Category, category_id) is None:
        raise InvalidInputError(f"Category with ID '{category_id}' does not exist")


def unique_slug(session: Session, column, name: str, exclude_id: Optional[str] = None) -> str:
    """slugify(name), suffixed -2, -3, ... until no other location in this language uses it."""
    base = slugify(name) or FALLBACK_SLUG
    query = select(column).where(or_(column == base, column.like(f"{base}-%")))
    if exclude_id is not None:
        query = query.where(Location.id != exclude_id)
    try:
        taken = set(session.exec(query).all())
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Slug lookup failed for '%s': %s", base, exc)
        raise DataAccessError("Failed to generate slug") from exc

    candidate = base
    suffix = 2
    while candidate in taken:
        candidate = f"{base}-{suffix}"
        suffix += 1
    return candidate


def _commit(session: Session, action: str, location_id: Optional[str]) -> None:
    try:
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        logger.warning("Integrity error while trying to %s location %s: %s", action, location_id, exc)
        raise ConflictError(f"Failed to {action} location: conflicting data") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Store error while trying to %s location %s: %s", action, location_id, exc)
        raise DataAccessError(f"Failed to {action} location") from exc


def _fetch(session: Session, location_id: str) -> Optional[Location]:
    try:
        return session.get(Location, location_id)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Failed to load location %s: %s", location_id, exc)
        raise DataAccessError("Failed to fetch location") from exc


def list_locations(session: Session, filters: LocationFilters) -> Tuple[List[Location], PageMeta]:
    """Approved locations matching filters, newest first, plus page metadata."""
    rows, total = query_approved_locations(session, filters)
    return rows, PageMeta.create(filters.page, filters.limit, total)


def get_location(session: Session, location_id: str) -> LocationDetail:
    """
    Get one approved location with its photos (primary first) and submitter.

    Raises:
        NotFoundError: absent, or not approved
    """
    location = _fetch(session, location_id)
    if location is None or location.status != LocationStatus.approved.value:
        raise NotFoundError(f"Location with ID '{location_id}' not found")

    try:
        photos = session.exec(
            select(Photo)
            .where(Photo.location_id == location_id)
            .order_by(Photo.is_primary.desc(), Photo.created_at)
        ).all()
        submitter = session.get(User, location.submitted_by)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Failed to load details for location %s: %s", location_id, exc)
        raise DataAccessError("Failed to fetch location") from exc

    return LocationDetail(location=location, photos=list(photos), submitter=submitter)


def create_location(session: Session, data: Dict[str, Any], submitter_id: str) -> Location:
    """Store a new submission as pending; it stays hidden until moderated."""
    _check_fields(data)
    _check_category(session, data)

    location = Location(**data)
    location.slug_vi = unique_slug(session, Location.slug_vi, data["name_vi"])
    location.slug_en = unique_slug(session, Location.slug_en, data["name_en"]) if data.get("name_en") else None
    location.status = LocationStatus.pending.value
    location.submitted_by = submitter_id
    location.approved_by = None

    session.add(location)
    _commit(session, "create", location.id)
    session.refresh(location)

    logger.info("Location %s submitted by %s (slug=%s)", location.id, submitter_id, location.slug_vi)
    return location


def update_location(session: Session, location_id: str, patch: Dict[str, Any], actor: Actor) -> Location:
    """
    Apply a partial update on behalf of an admin or approved owner.

    Raises:
        NotFoundError: location does not exist (any status)
        ForbiddenError: actor is neither admin nor approved owner; nothing written
    """
    _check_fields(patch)

    location = _fetch(session, location_id)
    if location is None:
        raise NotFoundError(f"Location with ID '{location_id}' not found")

    if not can_mutate_location(session, actor, location_id):
        raise ForbiddenError("You do not have permission to update this location")

    _check_category(session, patch)

    if patch.get("name_vi"):
        location.slug_vi = unique_slug(session, Location.slug_vi, patch["name_vi"], exclude_id=location_id)
    if "name_en" in patch:
        if patch["name_en"]:
            location.slug_en = unique_slug(session, Location.slug_en, patch["name_en"], exclude_id=location_id)
        else:
            location.slug_en = None

    for field_name, value in patch.items():
        setattr(location, field_name, value)

    location.updated_at = _utcnow()
    session.add(location)
    _commit(session, "update", location_id)
    session.refresh(location)

    logger.info("Location %s updated by %s (%s)", location_id, actor.id, ", ".join(sorted(patch)) or "no fields")
    return location


def remove_location(session: Session, location_id: str) -> None:
    """Hard delete. Caller must have verified the admin role. Absent id is not an error."""
    try:
        session.exec(delete(Location).where(Location.id == location_id))
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Failed to delete location %s: %s", location_id, exc)
        raise DataAccessError(f"Failed to delete location: {exc.__class__.__name__}") from exc

    logger.info("Location %s deleted", location_id)


def moderate_location(session: Session, location_id: str, status: str, admin_id: str) -> Location:
    """Approve or reject a location. Caller must have verified the admin role."""
    if status not in MODERATION_TARGETS:
        raise InvalidInputError(f"status must be one of: {', '.join(MODERATION_TARGETS)}")

    location = _fetch(session, location_id)
    if location is None:
        raise NotFoundError(f"Location with ID '{location_id}' not found")

    location.status = status
    location.approved_by = admin_id if status == LocationStatus.approved.value else None
    location.updated_at = _utcnow()
    session.add(location)
    _commit(session, "moderate", location_id)
    session.refresh(location)

    logger.info("Location %s moderated to %s by %s", location_id, status, admin_id)
    return location
