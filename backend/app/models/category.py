from typing import Optional
from uuid import uuid4

from sqlmodel import Field, SQLModel


class Category(SQLModel, table=True):
    __tablename__ = "categories"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    slug: str = Field(unique=True, index=True)
    name_vi: str
    name_en: Optional[str] = None
    icon: Optional[str] = None
    sort_order: int = Field(default=0)
