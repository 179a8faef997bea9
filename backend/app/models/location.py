from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, List, Optional
from uuid import uuid4

from sqlalchemy import String
from sqlmodel import Column, Field, Relationship, SQLModel

if TYPE_CHECKING:
    from app.models.location_owner import LocationOwner
    from app.models.photo import Photo


class LocationStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class LocationCategory(str, Enum):
    food = "food"
    cafe = "cafe"
    bar = "bar"


class PriceRange(str, Enum):
    under_100k = "duoi-100k"
    from_100k_to_300k = "100-300k"
    from_300k_to_500k = "300-500k"
    over_500k = "tren-500k"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Location(SQLModel, table=True):
    __tablename__ = "locations"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)

    # Bilingual text (vi is required, en optional)
    name_vi: str
    name_en: Optional[str] = None
    slug_vi: str = Field(sa_column=Column(String, unique=True, index=True, nullable=False))
    slug_en: Optional[str] = Field(default=None, sa_column=Column(String, unique=True, index=True, nullable=True))
    address_vi: str
    address_en: Optional[str] = None
    district_vi: str = Field(index=True)
    district_en: Optional[str] = None
    cuisine_vi: str = Field(index=True)
    cuisine_en: Optional[str] = None
    description_vi: Optional[str] = None
    description_en: Optional[str] = None

    latitude: float
    longitude: float

    category: LocationCategory = Field(sa_column=Column(String, index=True, nullable=False))
    category_id: Optional[str] = Field(default=None, foreign_key="categories.id", index=True)
    price_range: PriceRange = Field(sa_column=Column(String, index=True, nullable=False))

    phone: Optional[str] = None
    website: Optional[str] = None
    hours_open: Optional[str] = None
    hours_close: Optional[str] = None

    # Moderation
    status: LocationStatus = Field(
        default=LocationStatus.pending, sa_column=Column(String, index=True, nullable=False)
    )
    submitted_by: str = Field(foreign_key="users.id")
    approved_by: Optional[str] = Field(default=None, foreign_key="users.id")

    created_at: datetime = Field(default_factory=_utcnow, index=True)
    updated_at: datetime = Field(default_factory=_utcnow)

    # Relationships
    photos: List["Photo"] = Relationship(
        back_populates="location", sa_relationship_kwargs={"passive_deletes": True}
    )
    owners: List["LocationOwner"] = Relationship(
        back_populates="location", sa_relationship_kwargs={"passive_deletes": True}
    )
