#teamboard/schemas/user.py
from pydantic import BaseModel, ConfigDict, Field, EmailStr
from typing import Optional, Literal, List
from datetime import datetime

UserRole = Literal["admin", "member"]

class UserBase(BaseModel):
    """
    UserBase — базовая схема пользователя (используется для create/read).
    """
    name: str = Field(..., examples=["John Doe"], description="Имя")
    email: EmailStr = Field(..., examples=["john.doe@example.com"], description="Email пользователя")
    avatar: Optional[str] = Field(None, examples=["https://cdn.example.com/avatars/john.jpg"], description="URL аватара")
    role: UserRole = Field("member", description="Роль: admin, member")

class UserCreate(UserBase):
    """
    UserCreate — создание пользователя.
    """
    pass

class UserUpdate(BaseModel):
    """
    UserUpdate — обновление пользователя (все поля опциональны).
    """
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    avatar: Optional[str] = None
    role: Optional[UserRole] = None

class UserShort(BaseModel):
    id: int
    name: str
    email: str
    avatar: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class UserRead(UserBase):
    """
    UserRead — схема для выдачи пользователя (response).
    """
    id: int
    email: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class UserAssignmentProject(BaseModel):
    id: int
    name: str
    status: str
    priority: str
    progress: int
    parent_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)

class UserAssignment(BaseModel):
    id: int
    role: str
    project: UserAssignmentProject

    model_config = ConfigDict(from_attributes=True)

class UserCommentRead(BaseModel):
    id: int
    content: str
    project_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

class UserListItem(UserRead):
    """
    UserListItem — пользователь в списке участников с количеством назначений.
    """
    assignment_count: int = 0
    comment_count: int = 0

class UserDetail(UserRead):
    """
    UserDetail — профиль участника: назначения и последние комментарии.
    """
    assignments: List[UserAssignment] = Field(default_factory=list)
    recent_comments: List[UserCommentRead] = Field(default_factory=list)
