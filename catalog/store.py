"""Catalog store: last fetched book list, search term and error slot."""
from typing import List, Optional, Tuple
import logging

from catalog.errors import CatalogError
from catalog.models import Book

logger = logging.getLogger(__name__)

FETCH_ERROR_MESSAGE = "Failed to fetch books"
EMPTY_SEARCH_MESSAGE = "Try adjusting your search terms"
EMPTY_CATALOG_MESSAGE = "Add your first book to get started"


class CatalogStore:
    """
    Holds the catalog snapshot.
    
    The book list is a tuple replaced wholesale by ``refresh``; readers
    never see a partially updated list.
    """
    
    def __init__(self, client):
        """
        Initialize store.
        
        Args:
            client: Object with a ``list()`` method returning books
        """
        self.client = client
        self._books: Tuple[Book, ...] = ()
        self.search_term = ""
        self.error = ""
        self.loading = False
    
    @property
    def books(self) -> Tuple[Book, ...]:
        return self._books
    
    def refresh(self) -> bool:
        """
        Replace the book list with a fresh copy from the service.
        
        Returns:
            True on success; on failure the previous list is kept and
            ``error`` holds a generic message
        """
        self.loading = True
        try:
            books = self.client.list()
        except CatalogError as e:
            logger.error(f"Error fetching books: {e}")
            self.error = FETCH_ERROR_MESSAGE
            return False
        finally:
            self.loading = False
        
        self._books = tuple(books)
        self.error = ""
        logger.info(f"Fetched {len(self._books)} books")
        return True
    
    def set_search_term(self, term: Optional[str]):
        self.search_term = term or ""
    
    def visible_books(self, term: Optional[str] = None) -> List[Book]:
        """
        Filter by title or author (case-insensitive) or ISBN (case-sensitive).
        
        Args:
            term: Search term; defaults to the stored search term
        """
        if term is None:
            term = self.search_term
        if not term:
            return list(self._books)
        
        needle = term.lower()
        return [
            book for book in self._books
            if needle in book.title.lower()
            or needle in book.author.lower()
            or term in book.isbn
        ]
    
    def is_empty(self) -> bool:
        return not self.visible_books()
    
    def empty_state_message(self) -> str:
        return EMPTY_SEARCH_MESSAGE if self.search_term else EMPTY_CATALOG_MESSAGE
    
    def set_error(self, message: str):
        self.error = message
    
    def clear_error(self):
        self.error = ""
