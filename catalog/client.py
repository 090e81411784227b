"""HTTP client for the library catalog REST service."""
import requests
from typing import Optional, Dict, Any, List
import logging

from catalog.errors import FetchFailure, MutationFailure
from catalog.models import Book, parse_book, parse_books_response

logger = logging.getLogger(__name__)


class CatalogClient:
    """Client for the ``/books`` endpoints: one round trip per call, no retries."""
    
    def __init__(
        self,
        base_url: str = "http://localhost:8080/api/v1",
        timeout: int = 10,
        health_url: Optional[str] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize catalog client.
        
        Args:
            base_url: API root, e.g. ``http://localhost:8080/api/v1``
            timeout: Request timeout in seconds
            health_url: Health check URL (defaults to ``<base_url>/health``)
            session: Optional session to use instead of a new one
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.health_url = health_url or f"{self.base_url}/health"
        
        # Create session for connection pooling
        self.session = session or requests.Session()
    
    def list(self) -> List[Book]:
        """Fetch the full book collection."""
        url = f"{self.base_url}/books"
        body = self._request("GET", url, FetchFailure)
        if body is None:
            body = {}
        
        # Expect {"data": [ {...}, ... ]}, data may be null
        items = body.get("data") if isinstance(body, dict) else None
        if (
            not isinstance(body, dict)
            or not isinstance(items, (list, type(None)))
            or not all(isinstance(item, dict) for item in items or [])
        ):
            logger.error(f"GET {url} returned a malformed response: {body!r}")
            raise FetchFailure(f"GET {url} returned a malformed response")
        return parse_books_response(body)
    
    def get(self, book_id) -> Book:
        """Fetch a single book."""
        url = f"{self.base_url}/books/{book_id}"
        body = self._request("GET", url, FetchFailure)
        if body is None:
            body = {}
        item = body.get("data") if isinstance(body, dict) else None
        if not isinstance(item, dict):
            raise FetchFailure(f"GET {url} returned a malformed response")
        book = parse_book(item)
        if book is None:
            raise FetchFailure(f"Book {book_id} missing from response")
        return book
    
    def create(self, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Create a book; returns the server's record as a mapping."""
        body = self._request("POST", f"{self.base_url}/books", MutationFailure, json=payload)
        return body.get("data") if isinstance(body, dict) else None
    
    def update(self, book_id, partial_payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Apply a merge-patch style update; only supplied fields change."""
        body = self._request("PUT", f"{self.base_url}/books/{book_id}", MutationFailure, json=partial_payload)
        return body.get("data") if isinstance(body, dict) else None
    
    def remove(self, book_id) -> None:
        """Delete a book."""
        self._request("DELETE", f"{self.base_url}/books/{book_id}", MutationFailure)
    
    def health(self) -> Dict[str, Any]:
        """Query the service health endpoint."""
        return self._request("GET", self.health_url, FetchFailure) or {}
    
    def _request(self, method: str, url: str, failure, **kwargs) -> Optional[Dict[str, Any]]:
        """
        Make a single HTTP request.
        
        Args:
            method: HTTP method
            url: Request URL
            failure: ApiError subclass raised on failure
            
        Returns:
            Decoded JSON body, or None for an empty body
        """
        logger.info(f"{method} {url}")
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise failure(f"{method} {url} failed: {e}") from e
        
        if response.status_code >= 400:
            server_message = _error_message(response)
            logger.error(f"{method} {url} returned {response.status_code}: {server_message or response.text}")
            raise failure(
                f"{method} {url} returned {response.status_code}",
                status_code=response.status_code,
                server_message=server_message
            )
        
        if not response.content:
            return None
        
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"{method} {url} returned invalid JSON: {e}")
            raise failure(f"{method} {url} returned invalid JSON", status_code=response.status_code) from e
    
    def close(self):
        """Close the session."""
        self.session.close()
    
    def __enter__(self):
        """Context manager entry."""
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()


def _error_message(response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return None
