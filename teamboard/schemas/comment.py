#teamboard/schemas/comment.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

from teamboard.schemas.user import UserShort

class CommentCreate(BaseModel):
    """
    CommentCreate — новый комментарий к проекту.
    """
    content: str = Field(..., examples=["Looks good to me"], description="Текст")
    user_id: int = Field(..., description="ID автора")

class CommentRead(BaseModel):
    id: int
    content: str
    project_id: int
    user_id: int
    user: Optional[UserShort] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
