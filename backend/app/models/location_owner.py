from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import String
from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Column, Field, Relationship, SQLModel

if TYPE_CHECKING:
    from app.models.location import Location


class OwnershipStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class LocationOwner(SQLModel, table=True):
    """Claim of a user over a location. Only approved claims grant edit rights."""

    __tablename__ = "location_owners"
    __table_args__ = (SAUniqueConstraint("location_id", "user_id", name="uq_location_owner"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    location_id: str = Field(foreign_key="locations.id", ondelete="CASCADE", index=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    status: OwnershipStatus = Field(
        default=OwnershipStatus.pending, sa_column=Column(String, nullable=False)
    )
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Relationships
    location: "Location" = Relationship(back_populates="owners")
