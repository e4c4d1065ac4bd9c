"""
Practice Engine Exceptions

The scoring and session functions are total and never raise. Exceptions
are reserved for the edges that touch files: loading catalogs and writing
the performance document.

Usage:
    from mkpractice.errors import CatalogError

    raise CatalogError("Practice catalog is not a list", details={"path": path})
"""

from typing import Optional


class PracticeError(Exception):
    """
    Base exception for practice engine errors.

    Provides consistent error handling with:
    - Error code for categorization
    - Optional details for debugging

    Example:
        raise PracticeError("Unexpected catalog layout", error_code="catalog_error")
    """

    error_code: str = "practice_error"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        self.details = details


class CatalogError(PracticeError):
    """
    Catalog loading error.

    Raised when a practice or grammar topic catalog is missing, cannot be
    parsed, or contains invalid entries.
    """

    error_code = "catalog_error"


class StorageError(PracticeError):
    """
    Performance storage error.

    Raised when the performance document cannot be written.
    """

    error_code = "storage_error"
