"""
Public listing query: filters → bounded, ordered, counted page of approved locations.

Only the filters that are actually set contribute a predicate; the predicate
list is then applied to both the page query and the count query so the two can
never disagree.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, func, select

from app.models.location import Location, LocationStatus
from app.models.location_tag import LocationTag
from app.services.errors import DataAccessError, InvalidInputError
from app.utils.sql import scalar_int

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100

# (filter attribute, column) pairs matched by equality
EXACT_FILTERS = (
    ("cuisine", Location.cuisine_vi),
    ("district", Location.district_vi),
    ("price_range", Location.price_range),
    ("category", Location.category),
    ("category_id", Location.category_id),
)

SEARCH_COLUMNS = (
    Location.name_vi,
    Location.name_en,
    Location.address_vi,
    Location.address_en,
)


@dataclass
class LocationFilters:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    cuisine: Optional[str] = None
    district: Optional[str] = None
    price_range: Optional[str] = None
    category: Optional[str] = None
    category_id: Optional[str] = None
    search: Optional[str] = None
    tags: List[str] = field(default_factory=list)


@dataclass
class PageMeta:
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def create(cls, page: int, limit: int, total: int) -> "PageMeta":
        total_pages = math.ceil(total / limit)
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )


def validate_paging(page: int, limit: int) -> None:
    if page < 1:
        raise InvalidInputError("page must be at least 1")
    if limit < 1 or limit > MAX_LIMIT:
        raise InvalidInputError(f"limit must be between 1 and {MAX_LIMIT}")


def build_predicates(filters: LocationFilters) -> list:
    """Return the WHERE clauses for a public listing; approved-only is always first."""
    predicates = [Location.status == LocationStatus.approved.value]

    for attr, column in EXACT_FILTERS:
        value = getattr(filters, attr)
        if value:
            predicates.append(column == value)

    term = (filters.search or "").strip()
    if term:
        predicates.append(or_(*(column.icontains(term, autoescape=True) for column in SEARCH_COLUMNS)))

    # A location must carry at least one vote for every requested tag
    for tag_id in dict.fromkeys(t for t in filters.tags if t):
        voted = select(LocationTag.location_id).where(LocationTag.tag_id == tag_id)
        predicates.append(Location.id.in_(voted))

    return predicates


def query_approved_locations(session: Session, filters: LocationFilters) -> Tuple[List[Location], int]:
    """Fetch one page of approved locations (newest first) and the total match count."""
    validate_paging(filters.page, filters.limit)
    predicates = build_predicates(filters)
    offset = (filters.page - 1) * filters.limit

    page_query = (
        select(Location)
        .where(*predicates)
        .order_by(Location.created_at.desc(), Location.id.desc())
        .offset(offset)
        .limit(filters.limit)
    )
    count_query = select(func.count()).select_from(Location).where(*predicates)

    try:
        rows = list(session.exec(page_query).all())
        total = scalar_int(session.exec(count_query).one())
    except SQLAlchemyError as exc:
        logger.exception("Location listing query failed: %s", exc)
        raise DataAccessError("Failed to fetch locations") from exc

    return rows, total
