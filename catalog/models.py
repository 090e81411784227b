"""Data models for books and drafts."""
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "author", "isbn", "publication_year", "available")
MIN_PUBLICATION_YEAR = 1000


@dataclass(frozen=True)
class Book:
    """Server-owned book record."""
    id: Any
    title: str
    author: str
    isbn: str
    publication_year: int
    available: bool
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    
    @property
    def status(self) -> str:
        """Human readable availability."""
        return "Available" if self.available else "Unavailable"
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn,
            "publication_year": self.publication_year,
            "available": self.available,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass
class Draft:
    """In-progress form state; the year is kept as text until submit."""
    title: str = ""
    author: str = ""
    isbn: str = ""
    publication_year: str = ""
    available: bool = True
    original: Optional[Book] = field(default=None, compare=False)
    
    @classmethod
    def from_book(cls, book: Book) -> "Draft":
        return cls(
            title=book.title,
            author=book.author,
            isbn=book.isbn,
            publication_year=str(book.publication_year),
            available=book.available,
            original=book,
        )


def parse_year(text: Any) -> int:
    """Parse a year typed as text, 0 when it is not an integer."""
    if isinstance(text, bool):
        return 0
    if isinstance(text, int):
        return text
    try:
        return int(str(text).strip())
    except (TypeError, ValueError):
        return 0


def year_in_range(year: int, today: Optional[date] = None) -> bool:
    """Input hint only: the backend decides what it accepts."""
    today = today or date.today()
    return MIN_PUBLICATION_YEAR <= year <= today.year + 1


def parse_book(item: Dict[str, Any]) -> Optional[Book]:
    """
    Parse a single book item from the catalog service.
    
    Args:
        item: Book mapping as returned by the service
        
    Returns:
        Book object or None if the item has no id
    """
    book_id = item.get("id")
    if book_id is None or book_id == "":
        logger.warning(f"Skipping book without id: {item!r}")
        return None
    
    return Book(
        id=book_id,
        title=str(item.get("title") or ""),
        author=str(item.get("author") or ""),
        isbn=str(item.get("isbn") or ""),
        publication_year=parse_year(item.get("publication_year")),
        available=bool(item.get("available", False)),
        created_at=item.get("created_at"),
        updated_at=item.get("updated_at"),
    )


def parse_books_response(response_json: Dict[str, Any]) -> List[Book]:
    """
    Parse the full list response.
    
    Args:
        response_json: Complete response JSON, ``{"data": [...]}``
        
    Returns:
        List of Book objects (empty if ``data`` is missing or null)
    """
    items = response_json.get("data") or []
    books = []
    
    for item in items:
        book = parse_book(item)
        if book:
            books.append(book)
    
    return books
