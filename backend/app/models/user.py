from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy import String
from sqlmodel import Column, Field, SQLModel


class UserRole(str, Enum):
    user = "user"
    admin = "admin"


class User(SQLModel, table=True):
    """Local profile for an identity issued by the external auth provider."""

    __tablename__ = "users"

    id: str = Field(primary_key=True)  # auth provider subject
    email: Optional[str] = None
    name: Optional[str] = None
    role: UserRole = Field(default=UserRole.user, sa_column=Column(String, nullable=False))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
