"""Error taxonomy for catalog operations."""
from typing import Optional


class CatalogError(Exception):
    """Base class for all catalog client errors."""


class ApiError(CatalogError):
    """A request to the catalog service failed."""
    
    def __init__(self, message: str, status_code: Optional[int] = None, server_message: Optional[str] = None):
        """
        Initialize API error.
        
        Args:
            message: Description of the failure (for logs)
            status_code: HTTP status code, None for transport failures
            server_message: Value of the ``error`` field in the response body, if any
        """
        super().__init__(message)
        self.status_code = status_code
        self.server_message = server_message


class FetchFailure(ApiError):
    """Reading from the catalog failed; stale data is retained."""


class MutationFailure(ApiError):
    """Create, update or delete failed; local state is unchanged."""


class SessionStateError(CatalogError):
    """An edit session operation was called in the wrong state."""
