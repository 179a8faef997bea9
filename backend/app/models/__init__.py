from app.models.category import Category
from app.models.location import Location, LocationCategory, LocationStatus, PriceRange
from app.models.location_owner import LocationOwner, OwnershipStatus
from app.models.location_tag import LocationTag
from app.models.photo import Photo
from app.models.tag import Tag, TagCategory
from app.models.user import User, UserRole

__all__ = [
    "Category",
    "Location",
    "LocationCategory",
    "LocationStatus",
    "PriceRange",
    "LocationOwner",
    "OwnershipStatus",
    "LocationTag",
    "Photo",
    "Tag",
    "TagCategory",
    "User",
    "UserRole",
]
