"""Composition root: wires the store, the edit session and the client."""
from typing import Callable, Optional
import logging

from catalog.client import CatalogClient
from catalog.config import Config
from catalog.errors import ApiError, CatalogError
from catalog.session import EditSession
from catalog.store import CatalogStore

logger = logging.getLogger(__name__)

SAVE_ERROR_MESSAGE = "Failed to save book"
DELETE_ERROR_MESSAGE = "Failed to delete book"
DELETE_PROMPT = "Are you sure you want to delete this book?"


class CatalogApp:
    """
    Owns the catalog state and sequences every mutation before its refresh.
    
    Failures end up in ``store.error``; nothing raises past this class.
    """
    
    def __init__(self, client, store: Optional[CatalogStore] = None, session: Optional[EditSession] = None):
        self.client = client
        self.store = store or CatalogStore(client)
        self.session = session or EditSession()
    
    @classmethod
    def from_config(cls, config: Config) -> "CatalogApp":
        client = CatalogClient(
            base_url=config.LIBRARY_API_URL,
            timeout=config.DEFAULT_TIMEOUT,
            health_url=config.HEALTH_URL
        )
        return cls(client)
    
    @property
    def error(self) -> str:
        return self.store.error
    
    def load(self) -> bool:
        """Initial fetch."""
        return self.store.refresh()
    
    def submit(self) -> bool:
        """
        Send the current draft, then refresh and close the session.
        
        Returns:
            True on success; on failure the session stays open for retry
        """
        if not self.session.is_editing:
            logger.warning("Submit called with no open edit session")
            return False
        
        payload = self.session.compute_payload()
        original = self.session.original
        
        try:
            if original is not None:
                logger.info(f"Updating book {original.id} with {sorted(payload)}")
                self.client.update(original.id, payload)
            else:
                logger.info("Creating book")
                self.client.create(payload)
        except ApiError as e:
            logger.error(f"Error saving book: {e}")
            self.store.set_error(e.server_message or SAVE_ERROR_MESSAGE)
            return False
        
        self.session.cancel()
        self.store.clear_error()
        self.store.refresh()
        return True
    
    def delete(self, book_id, confirm: Callable[[str], bool]) -> bool:
        """
        Delete a book after confirmation, then refresh.
        
        Args:
            book_id: Id of the book to delete
            confirm: Called with the prompt text; False aborts without a request
        """
        if not confirm(DELETE_PROMPT):
            logger.info(f"Deletion of book {book_id} declined")
            return False
        
        try:
            self.client.remove(book_id)
        except CatalogError as e:
            logger.error(f"Error deleting book {book_id}: {e}")
            self.store.set_error(DELETE_ERROR_MESSAGE)
            return False
        
        self.store.clear_error()
        self.store.refresh()
        return True
