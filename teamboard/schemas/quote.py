#teamboard/schemas/quote.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

class QuoteCreate(BaseModel):
    # пустой или отсутствующий текст отклоняется в crud с 400
    content: Optional[str] = Field(None, examples=["Simplicity is prerequisite for reliability."], description="Текст цитаты")
    author: Optional[str] = Field(None, examples=["Edsger W. Dijkstra"], description="Автор")

class QuoteRead(BaseModel):
    id: int
    content: str
    author: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
