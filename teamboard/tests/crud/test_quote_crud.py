import pytest
from sqlalchemy.orm import Session

from teamboard.crud import quote as quote_crud
from teamboard.crud.quote import create_quote, get_quotes, get_random_quote, get_quote, delete_quote
from teamboard.core.exceptions import QuoteNotFound, QuoteValidationError


def test_create_quote(db: Session):
    quote = create_quote(db, {"content": "  Stay hungry.  ", "author": "Steve Jobs"})
    assert quote.id is not None
    assert quote.content == "Stay hungry."
    assert quote.author == "Steve Jobs"
    assert quote.created_at is not None


def test_create_quote_without_author(db: Session):
    quote = create_quote(db, {"content": "Anonymous wisdom", "author": "  "})
    assert quote.author is None


@pytest.mark.parametrize("payload", [{}, {"content": None}, {"content": "   "}])
def test_create_quote_requires_content(db: Session, payload):
    with pytest.raises(QuoteValidationError, match="Content is required"):
        create_quote(db, payload)


def test_get_quotes_newest_first(db: Session):
    first = create_quote(db, {"content": "First"})
    second = create_quote(db, {"content": "Second"})
    assert [q.id for q in get_quotes(db)] == [second.id, first.id]


def test_random_quote_empty(db: Session):
    assert get_random_quote(db) is None


def test_random_quote_uses_offset(db: Session, monkeypatch):
    quotes = [create_quote(db, {"content": f"Quote {i}"}) for i in range(3)]
    monkeypatch.setattr(quote_crud.random, "randrange", lambda count: count - 1)
    assert get_random_quote(db).id == quotes[-1].id
    monkeypatch.setattr(quote_crud.random, "randrange", lambda count: 0)
    assert get_random_quote(db).id == quotes[0].id


def test_delete_quote(db: Session):
    quote = create_quote(db, {"content": "Temporary"})
    assert delete_quote(db, quote.id) is True
    with pytest.raises(QuoteNotFound):
        get_quote(db, quote.id)
    with pytest.raises(QuoteNotFound):
        delete_quote(db, quote.id)
