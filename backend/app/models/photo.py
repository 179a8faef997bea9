from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional
from uuid import uuid4

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from app.models.location import Location


class Photo(SQLModel, table=True):
    __tablename__ = "photos"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    location_id: str = Field(foreign_key="locations.id", ondelete="CASCADE", index=True)
    user_id: str = Field(foreign_key="users.id")
    url: str
    is_primary: bool = Field(default=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Relationships
    location: "Location" = Relationship(back_populates="photos")
