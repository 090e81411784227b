"""Edit session: the draft behind the add/edit form."""
from enum import Enum
from typing import Any, Dict, Optional
import logging

from catalog.errors import SessionStateError
from catalog.models import Book, Draft, EDITABLE_FIELDS, parse_year

logger = logging.getLogger(__name__)


class SessionState(Enum):
    IDLE = "idle"
    EDITING = "editing"


class EditSession:
    """
    Two-state machine: IDLE, or EDITING a draft.
    
    In EDITING the draft either creates a book (no original) or updates
    one (original set). The original book is only read, never modified.
    """
    
    def __init__(self):
        self.state = SessionState.IDLE
        self.draft = Draft()
    
    @property
    def is_editing(self) -> bool:
        return self.state is SessionState.EDITING
    
    @property
    def original(self) -> Optional[Book]:
        return self.draft.original
    
    @property
    def mode(self) -> Optional[str]:
        if not self.is_editing:
            return None
        return "update" if self.original is not None else "create"
    
    def start_create(self):
        self.draft = Draft()
        self.state = SessionState.EDITING
    
    def start_edit(self, book: Book):
        self.draft = Draft.from_book(book)
        self.state = SessionState.EDITING
        logger.debug(f"Editing book {book.id}")
    
    def update_field(self, name: str, value: Any):
        if name not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown draft field: {name}")
        setattr(self.draft, name, value)
    
    def cancel(self):
        self.draft = Draft()
        self.state = SessionState.IDLE
    
    def compute_payload(self) -> Dict[str, Any]:
        """
        Build the request body for the current draft.
        
        Create mode returns all editable fields. Update mode returns only
        the fields that differ from the original, comparing the year as
        a parsed integer.
        
        Raises:
            SessionStateError: If no session is open
        """
        if not self.is_editing:
            raise SessionStateError("No edit session is open")
        
        draft = self.draft
        year = parse_year(draft.publication_year)
        
        if draft.original is None:
            return {
                "title": draft.title,
                "author": draft.author,
                "isbn": draft.isbn,
                "publication_year": year,
                "available": draft.available,
            }
        
        original = draft.original
        payload: Dict[str, Any] = {}
        for name in ("title", "author", "isbn"):
            value = getattr(draft, name)
            if value != getattr(original, name):
                payload[name] = value
        if year != original.publication_year:
            payload["publication_year"] = year
        if draft.available != original.available:
            payload["available"] = draft.available
        return payload
