"""Row builders shared by the test modules."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlmodel import Session

from app.models.location import Location
from app.models.location_owner import LocationOwner
from app.models.location_tag import LocationTag
from app.models.tag import Tag
from app.models.user import User

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_user(session: Session, user_id: str, role: str = "user", name: Optional[str] = None) -> User:
    user = User(id=user_id, email=f"{user_id}@example.com", name=name or user_id.title(), role=role)
    session.add(user)
    session.commit()
    return user


def make_location(
    session: Session,
    name_vi: str,
    submitted_by: str,
    status: str = "approved",
    minutes: int = 0,
    **fields,
) -> Location:
    """Insert a location directly. `minutes` offsets created_at from BASE_TIME."""
    stamp = BASE_TIME + timedelta(minutes=minutes)
    values = dict(
        name_vi=name_vi,
        slug_vi=fields.pop("slug_vi", None) or f"{name_vi.lower().replace(' ', '-')}-{minutes}",
        address_vi="12 Bạch Đằng, Hải Châu",
        district_vi="Hải Châu",
        cuisine_vi="Việt Nam",
        latitude=16.06,
        longitude=108.22,
        category="food",
        price_range="100-300k",
        status=status,
        submitted_by=submitted_by,
        created_at=stamp,
        updated_at=stamp,
    )
    values.update(fields)
    location = Location(**values)
    session.add(location)
    session.commit()
    session.refresh(location)
    return location


def make_owner(session: Session, location_id: str, user_id: str, status: str) -> LocationOwner:
    owner = LocationOwner(location_id=location_id, user_id=user_id, status=status)
    session.add(owner)
    session.commit()
    return owner


def make_tag(session: Session, tag_id: str, name_vi: str, category: str = "positive", name_en: str = None) -> Tag:
    tag = Tag(id=tag_id, name_vi=name_vi, name_en=name_en, category=category, icon="👍")
    session.add(tag)
    session.commit()
    return tag


def add_vote(session: Session, location_id: str, tag_id: str, user_id: str) -> None:
    session.add(LocationTag(location_id=location_id, tag_id=tag_id, user_id=user_id))
    session.commit()


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
