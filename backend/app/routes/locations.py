"""
Location API Routes

- GET    /locations                  list approved locations (public, filters + paging)
- GET    /locations/{id}             approved location with photos and submitter (public)
- POST   /locations                  submit a location, created as pending (authenticated)
- PUT    /locations/{id}             update (admin or approved owner)
- DELETE /locations/{id}             hard delete (admin)
- POST   /locations/{id}/moderation  approve/reject (admin)
"""

from datetime import datetime
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field, model_validator
from sqlmodel import Session

from app.auth import get_current_user, require_admin
from app.database import get_session
from app.models.location import LocationCategory, PriceRange
from app.services import location_catalog
from app.services.errors import CatalogError
from app.services.location_query import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT, LocationFilters
from app.services.ownership import Actor
from app.utils.http_errors import to_http_exception

router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================


class LocationCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name_vi: str = Field(min_length=3, max_length=200)
    name_en: Optional[str] = Field(default=None, max_length=200)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    address_vi: str = Field(min_length=5)
    address_en: Optional[str] = None
    district_vi: str
    district_en: Optional[str] = None
    cuisine_vi: str
    cuisine_en: Optional[str] = None
    category: LocationCategory
    category_id: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    hours_open: Optional[str] = None
    hours_close: Optional[str] = None
    price_range: PriceRange
    description_vi: Optional[str] = Field(default=None, max_length=2000)
    description_en: Optional[str] = Field(default=None, max_length=2000)


# Columns that are NOT NULL in the table; an update may omit them but not null them
_REQUIRED_COLUMNS = (
    "name_vi",
    "latitude",
    "longitude",
    "address_vi",
    "district_vi",
    "cuisine_vi",
    "category",
    "price_range",
)


class LocationUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name_vi: Optional[str] = Field(default=None, min_length=3, max_length=200)
    name_en: Optional[str] = Field(default=None, max_length=200)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    address_vi: Optional[str] = Field(default=None, min_length=5)
    address_en: Optional[str] = None
    district_vi: Optional[str] = None
    district_en: Optional[str] = None
    cuisine_vi: Optional[str] = None
    cuisine_en: Optional[str] = None
    category: Optional[LocationCategory] = None
    category_id: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    hours_open: Optional[str] = None
    hours_close: Optional[str] = None
    price_range: Optional[PriceRange] = None
    description_vi: Optional[str] = Field(default=None, max_length=2000)
    description_en: Optional[str] = Field(default=None, max_length=2000)

    @model_validator(mode="after")
    def reject_null_required(self):
        nulled = [name for name in _REQUIRED_COLUMNS if name in self.model_fields_set and getattr(self, name) is None]
        if nulled:
            raise ValueError(f"fields cannot be null: {', '.join(nulled)}")
        return self


class ModerationRequest(BaseModel):
    status: Literal["approved", "rejected"]


class LocationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name_vi: str
    name_en: Optional[str] = None
    slug_vi: str
    slug_en: Optional[str] = None
    latitude: float
    longitude: float
    address_vi: str
    address_en: Optional[str] = None
    district_vi: str
    district_en: Optional[str] = None
    cuisine_vi: str
    cuisine_en: Optional[str] = None
    category: str
    category_id: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    hours_open: Optional[str] = None
    hours_close: Optional[str] = None
    price_range: str
    description_vi: Optional[str] = None
    description_en: Optional[str] = None
    status: str
    submitted_by: str
    approved_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PhotoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    url: str
    is_primary: bool


class SubmitterResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: Optional[str] = None


class LocationDetailResponse(LocationResponse):
    photos: List[PhotoResponse] = []
    submitted_by_user: Optional[SubmitterResponse] = None


class LocationPageResponse(BaseModel):
    items: List[LocationResponse]
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class MessageResponse(BaseModel):
    message: str


# ============================================================================
# Location Endpoints
# ============================================================================


@router.get("/locations", response_model=LocationPageResponse)
def list_locations(
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    cuisine: Optional[str] = Query(None, description="Exact match on cuisine_vi"),
    district: Optional[str] = Query(None, description="Exact match on district_vi"),
    price_range: Optional[PriceRange] = Query(None),
    category: Optional[LocationCategory] = Query(None),
    category_id: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Case-insensitive substring of name/address"),
    tags: Optional[List[str]] = Query(None, description="Tag IDs; every tag must have at least one vote"),
    session: Session = Depends(get_session),
):
    """
    List approved locations, newest first.

    Filters are optional and combined with AND. Absent filters do not restrict.
    """
    filters = LocationFilters(
        page=page,
        limit=limit,
        cuisine=cuisine,
        district=district,
        price_range=price_range.value if price_range else None,
        category=category.value if category else None,
        category_id=category_id,
        search=search,
        tags=tags or [],
    )
    try:
        items, meta = location_catalog.list_locations(session, filters)
    except CatalogError as e:
        raise to_http_exception(e)

    return LocationPageResponse(
        items=[LocationResponse.model_validate(item) for item in items],
        page=meta.page,
        limit=meta.limit,
        total=meta.total,
        total_pages=meta.total_pages,
        has_next=meta.has_next,
        has_prev=meta.has_prev,
    )


@router.get("/locations/{location_id}", response_model=LocationDetailResponse)
def get_location(location_id: str, session: Session = Depends(get_session)):
    """Get an approved location with its photos and submitter summary"""
    try:
        detail = location_catalog.get_location(session, location_id)
    except CatalogError as e:
        raise to_http_exception(e)

    response = LocationDetailResponse.model_validate(detail.location)
    response.photos = [PhotoResponse.model_validate(p) for p in detail.photos]
    response.submitted_by_user = SubmitterResponse.model_validate(detail.submitter) if detail.submitter else None
    return response


@router.post("/locations", response_model=LocationResponse, status_code=201)
def create_location(
    request: LocationCreate,
    user: Actor = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Submit a new location. It is stored as pending until an admin approves it."""
    try:
        return location_catalog.create_location(session, request.model_dump(mode="json"), user.id)
    except CatalogError as e:
        raise to_http_exception(e)


@router.put("/locations/{location_id}", response_model=LocationResponse)
def update_location(
    location_id: str,
    request: LocationUpdate,
    user: Actor = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """
    Update a location.

    Allowed for admins and for users holding an approved ownership of the location.
    404 if the location does not exist, 403 if the caller may not edit it.
    """
    patch = request.model_dump(mode="json", exclude_unset=True)
    try:
        return location_catalog.update_location(session, location_id, patch, user)
    except CatalogError as e:
        raise to_http_exception(e)


@router.delete("/locations/{location_id}", response_model=MessageResponse)
def delete_location(
    location_id: str,
    admin: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    """Delete a location and everything attached to it (admin only)"""
    try:
        location_catalog.remove_location(session, location_id)
    except CatalogError as e:
        raise to_http_exception(e)
    return MessageResponse(message="Location deleted successfully")


@router.post("/locations/{location_id}/moderation", response_model=LocationResponse)
def moderate_location(
    location_id: str,
    request: ModerationRequest,
    admin: Actor = Depends(require_admin),
    session: Session = Depends(get_session),
):
    """Approve or reject a submitted location (admin only)"""
    try:
        return location_catalog.moderate_location(session, location_id, request.status, admin.id)
    except CatalogError as e:
        raise to_http_exception(e)
