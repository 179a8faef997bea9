from datetime import datetime, timezone

from sqlmodel import Field, SQLModel


class LocationTag(SQLModel, table=True):
    """One user's vote for a tag on a location.

    The composite primary key is the whole row: a vote either exists or not.
    """

    __tablename__ = "location_tags"

    location_id: str = Field(foreign_key="locations.id", ondelete="CASCADE", primary_key=True)
    tag_id: str = Field(foreign_key="tags.id", ondelete="CASCADE", primary_key=True, index=True)
    user_id: str = Field(foreign_key="users.id", primary_key=True, index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
