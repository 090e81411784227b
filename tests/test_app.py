"""Tests for submit/delete sequencing in the composition root."""
from unittest.mock import MagicMock

from catalog.app import CatalogApp, DELETE_ERROR_MESSAGE, DELETE_PROMPT, SAVE_ERROR_MESSAGE
from catalog.config import Config
from catalog.errors import FetchFailure, MutationFailure
from catalog.models import parse_books_response
from catalog.session import SessionState
from catalog.store import FETCH_ERROR_MESSAGE


def test_load_and_search_scenario():
    """Fetch one book, then search for it by author."""
    client = MagicMock()
    app = CatalogApp(client)
    client.list.return_value = parse_books_response({"data": [
        {"id": 1, "title": "Dune", "author": "Herbert", "isbn": "111", "publication_year": 1965, "available": True}
    ]})
    
    assert app.load() is True
    assert [book.id for book in app.store.visible_books("herb")] == [1]


def test_submit_create_then_refresh(client):
    app = CatalogApp(client)
    app.session.start_create()
    app.session.update_field("title", "Emma")
    app.session.update_field("publication_year", "abc")
    
    assert app.submit() is True
    
    sent = client.create.call_args[0][0]
    assert sent["publication_year"] == 0
    client.list.assert_called_once()
    assert app.session.state is SessionState.IDLE
    assert app.error == ""


def test_submit_update_sends_diff(client, dune):
    app = CatalogApp(client)
    app.session.start_edit(dune)
    app.session.update_field("available", False)
    
    assert app.submit() is True
    
    client.update.assert_called_once_with(1, {"available": False})
    client.create.assert_not_called()


def test_mutation_completes_before_refresh(client, dune):
    calls = []
    client.update.side_effect = lambda *args: calls.append("update")
    client.list.side_effect = lambda: calls.append("list") or []
    app = CatalogApp(client)
    app.session.start_edit(dune)
    app.session.update_field("title", "Children of Dune")
    
    app.submit()
    
    assert calls == ["update", "list"]


def test_submit_failure_keeps_session_open(client, dune):
    """A failed save keeps the draft so the user can retry."""
    client.update.side_effect = MutationFailure("PUT failed", status_code=500, server_message="Failed to update book: boom")
    app = CatalogApp(client)
    app.session.start_edit(dune)
    app.session.update_field("title", "X")
    
    assert app.submit() is False
    
    assert app.error == "Failed to update book: boom"
    assert app.session.is_editing
    assert app.session.draft.title == "X"
    client.list.assert_not_called()


def test_submit_failure_without_server_message(client):
    client.create.side_effect = MutationFailure("POST failed")
    app = CatalogApp(client)
    app.session.start_create()
    
    assert app.submit() is False
    assert app.error == SAVE_ERROR_MESSAGE


def test_refresh_failure_after_submit_is_reported(client):
    client.list.side_effect = FetchFailure("GET failed")
    app = CatalogApp(client)
    app.session.start_create()
    
    assert app.submit() is True
    assert app.error == FETCH_ERROR_MESSAGE
    assert app.session.state is SessionState.IDLE


def test_delete_then_empty_catalog(client, books):
    """Remove the last book; the refreshed catalog is empty."""
    client.list.return_value = books[:1]
    app = CatalogApp(client)
    app.load()
    client.list.return_value = []
    confirm = MagicMock(return_value=True)
    
    assert app.delete(1, confirm) is True
    
    confirm.assert_called_once_with(DELETE_PROMPT)
    client.remove.assert_called_once_with(1)
    assert app.store.visible_books("") == []
    assert app.store.is_empty()


def test_delete_declined_is_noop(client):
    app = CatalogApp(client)
    app.store.set_error("previous")
    
    assert app.delete(1, lambda prompt: False) is False
    
    client.remove.assert_not_called()
    client.list.assert_not_called()
    assert app.error == "previous"


def test_delete_failure(client, books):
    client.remove.side_effect = MutationFailure("DELETE failed", status_code=500)
    app = CatalogApp(client)
    app.load()
    
    assert app.delete(1, lambda prompt: True) is False
    
    assert app.error == DELETE_ERROR_MESSAGE
    assert list(app.store.books) == books
    client.list.assert_called_once()


def test_from_config_builds_client():
    config = Config()
    config.LIBRARY_API_URL = "http://books.test/api/v1"
    config.DEFAULT_TIMEOUT = 4
    
    app = CatalogApp.from_config(config)
    
    assert app.client.base_url == "http://books.test/api/v1"
    assert app.client.timeout == 4
    assert app.client.health_url == "http://books.test/health"


def test_submit_without_session_is_noop(client):
    """Submitting while idle sends nothing and does not raise."""
    app = CatalogApp(client)
    
    assert app.submit() is False
    
    client.create.assert_not_called()
    client.update.assert_not_called()
    client.list.assert_not_called()
    assert app.session.state is SessionState.IDLE
