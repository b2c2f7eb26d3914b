#teamboard/schemas/auth.py
from pydantic import BaseModel, Field
from datetime import datetime

class AdminLogin(BaseModel):
    password: str = Field(..., description="Пароль администратора")

class TokenResponse(BaseModel):
    """
    TokenResponse — токен администратора, передаётся в заголовке Authorization.
    """
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
