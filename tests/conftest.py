import pytest
from unittest.mock import MagicMock

from catalog.models import Book


@pytest.fixture
def dune():
    return Book(id=1, title="Dune", author="Herbert", isbn="111", publication_year=1965, available=True)


@pytest.fixture
def books(dune):
    return [
        dune,
        Book(id=2, title="Neuromancer", author="William Gibson", isbn="978-0441569595", publication_year=1984, available=False),
        Book(id=3, title="Foundation", author="Isaac Asimov", isbn="ABC-123", publication_year=1951, available=True),
    ]


@pytest.fixture
def client(books):
    client = MagicMock()
    client.list.return_value = list(books)
    return client
