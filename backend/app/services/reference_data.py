"""
Read-only reference data: voteable tags and venue categories.
"""
from typing import Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from app.models.category import Category
from app.models.tag import Tag, TagCategory
from app.services.errors import DataAccessError, NotFoundError


def list_tags(session: Session) -> Dict[str, List[Tag]]:
    """All tags by name, split into positive and negative."""
    try:
        tags = session.exec(select(Tag).order_by(Tag.name_vi)).all()
    except SQLAlchemyError as exc:
        raise DataAccessError("Failed to fetch tags") from exc

    return {
        TagCategory.positive.value: [t for t in tags if t.category == TagCategory.positive.value],
        TagCategory.negative.value: [t for t in tags if t.category == TagCategory.negative.value],
    }


def get_tag(session: Session, tag_id: str) -> Tag:
    tag = session.get(Tag, tag_id)
    if not tag:
        raise NotFoundError(f"Tag with ID '{tag_id}' not found")
    return tag


def list_categories(session: Session) -> List[Category]:
    try:
        return list(session.exec(select(Category).order_by(Category.sort_order, Category.name_vi)).all())
    except SQLAlchemyError as exc:
        raise DataAccessError("Failed to fetch categories") from exc


def get_category(session: Session, category_id: str) -> Category:
    category = session.get(Category, category_id)
    if not category:
        raise NotFoundError("Category not found")
    return category
