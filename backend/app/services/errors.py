"""
Domain errors raised by the catalog and tag-vote services.

Each error carries the HTTP status its route should answer with; see
app.utils.http_errors.
"""


class CatalogError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(CatalogError):
    """Entity absent, or hidden by the visibility rule (not approved)."""

    status_code = 404


class ForbiddenError(CatalogError):
    """Authenticated but failed the role/ownership check."""

    status_code = 403


class InvalidInputError(CatalogError):
    status_code = 400


class ConflictError(CatalogError):
    status_code = 409


class DataAccessError(CatalogError):
    """The store failed; nothing was applied. Safe for the caller to retry."""

    status_code = 503

