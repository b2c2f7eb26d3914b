# teamboard/models/quote.py
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, func
from teamboard.models.base import Base

class Quote(Base):
    """
    Quote — цитата для главной страницы (список и случайная цитата дня).
    """
    __tablename__ = "quotes"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    content: str = Column(Text, nullable=False, doc="Текст цитаты")
    author: str = Column(String(200), nullable=True, doc="Автор")
    created_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Quote(id={self.id}, author='{self.author}')>"
