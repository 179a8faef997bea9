from enum import Enum
from typing import Optional
from uuid import uuid4

from sqlalchemy import String
from sqlmodel import Column, Field, SQLModel


class TagCategory(str, Enum):
    positive = "positive"
    negative = "negative"


class Tag(SQLModel, table=True):
    __tablename__ = "tags"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    name_vi: str
    name_en: Optional[str] = None
    category: TagCategory = Field(sa_column=Column(String, nullable=False))
    icon: Optional[str] = None
