# teamboard/crud/quote.py
from sqlalchemy.orm import Session
from typing import List, Optional
from teamboard.models.quote import Quote
from teamboard.core.exceptions import QuoteNotFound, QuoteValidationError
import logging
import random

logger = logging.getLogger("TeamBoard.Quotes")

def create_quote(db: Session, data: dict) -> Quote:
    """
    Добавить цитату. Текст обязателен, автор необязателен.
    """
    content = (data.get("content") or "").strip()
    if not content:
        raise QuoteValidationError("Content is required.")
    author = (data.get("author") or "").strip() or None
    quote = Quote(content=content, author=author)
    db.add(quote)
    try:
        db.commit()
        db.refresh(quote)
        logger.info(f"Created quote {quote.id}")
        return quote
    except Exception as e:
        db.rollback()
        logger.error(f"Exception while creating quote: {e}")
        raise QuoteValidationError("Database error while creating quote.")

def get_quotes(db: Session) -> List[Quote]:
    return db.query(Quote).order_by(Quote.created_at.desc(), Quote.id.desc()).all()

def get_random_quote(db: Session) -> Optional[Quote]:
    """
    Случайная цитата: число строк, затем одна строка по случайному смещению.
    None, если цитат нет.
    """
    count = db.query(Quote).count()
    if count == 0:
        return None
    return db.query(Quote).order_by(Quote.id.asc()).offset(random.randrange(count)).first()

def get_quote(db: Session, quote_id: int) -> Quote:
    quote = db.get(Quote, quote_id)
    if not quote:
        raise QuoteNotFound(f"Quote with id={quote_id} not found.")
    return quote

def delete_quote(db: Session, quote_id: int) -> bool:
    quote = get_quote(db, quote_id)
    try:
        db.delete(quote)
        db.commit()
        logger.info(f"Deleted quote {quote_id}")
        return True
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete quote {quote_id}: {e}")
        raise QuoteValidationError("Database error while deleting quote.")
