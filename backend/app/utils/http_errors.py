"""
Translate service-layer errors into HTTP responses.

Routes wrap service calls:

    try:
        ...
    except CatalogError as e:
        raise to_http_exception(e)
"""
import logging

from fastapi import HTTPException

from app.services.errors import CatalogError

logger = logging.getLogger(__name__)


def to_http_exception(error: CatalogError) -> HTTPException:
    if error.status_code >= 500:
        logger.error("Request failed with %d: %s", error.status_code, error.message)
    return HTTPException(status_code=error.status_code, detail=error.message)
