"""Tests for book parsing and draft helpers."""
from datetime import date

from catalog.models import Book, Draft, parse_book, parse_books_response, parse_year, year_in_range


def test_parse_book_complete():
    """Test parsing a book with all fields present."""
    item = {
        "id": 1,
        "title": "Dune",
        "author": "Herbert",
        "isbn": "111",
        "publication_year": 1965,
        "available": True,
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-02T00:00:00Z"
    }
    
    book = parse_book(item)
    
    assert book is not None
    assert book.id == 1
    assert book.title == "Dune"
    assert book.author == "Herbert"
    assert book.publication_year == 1965
    assert book.available is True
    assert book.updated_at == "2024-01-02T00:00:00Z"


def test_parse_book_no_id():
    """Test that a book without ID returns None."""
    assert parse_book({"title": "No ID Book"}) is None


def test_parse_books_response():
    """Test parsing the list response."""
    response = {
        "message": "Books retrieved successfully",
        "data": [
            {"id": 1, "title": "Book 1", "author": "A", "isbn": "1", "publication_year": 2000, "available": True},
            {"id": 2, "title": "Book 2", "author": "B", "isbn": "2", "publication_year": 2001, "available": False}
        ]
    }
    
    books = parse_books_response(response)
    
    assert [book.title for book in books] == ["Book 1", "Book 2"]
    assert books[1].status == "Unavailable"


def test_parse_books_response_null_data():
    """An empty catalog may come back as null data."""
    assert parse_books_response({"data": None}) == []
    assert parse_books_response({}) == []


def test_parse_year():
    assert parse_year("1965") == 1965
    assert parse_year(" 2001 ") == 2001
    assert parse_year("") == 0
    assert parse_year("abc") == 0
    assert parse_year(None) == 0
    assert parse_year(1999) == 1999


def test_year_in_range():
    today = date(2024, 6, 1)
    assert year_in_range(1000, today)
    assert year_in_range(2025, today)
    assert not year_in_range(2026, today)
    assert not year_in_range(999, today)


def test_draft_from_book_keeps_year_as_text():
    book = Book(1, "Dune", "Herbert", "111", 1965, True)
    draft = Draft.from_book(book)
    
    assert draft.publication_year == "1965"
    assert draft.original is book
