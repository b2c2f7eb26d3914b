# teamboard/core/security.py

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Any, Dict
from jose import JWTError, jwt
from teamboard.core.settings import settings

from fastapi.security import OAuth2PasswordBearer

# Настройки
ALGORITHM = settings.JWT_ALGORITHM
ADMIN_SUBJECT = "admin"

def check_admin_password(password: str) -> bool:
    """
    Сравнивает пароль с ADMIN_PASSWORD за постоянное время.
    """
    return secrets.compare_digest(password.encode("utf-8"), settings.ADMIN_PASSWORD.encode("utf-8"))

def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None
) -> tuple[str, datetime]:
    """
    Генерирует access token (JWT) и возвращает (token, expire_time)
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire, "type": "access"})
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt, expire

def create_admin_token(expires_delta: Optional[timedelta] = None) -> tuple[str, datetime]:
    return create_access_token({"sub": ADMIN_SUBJECT}, expires_delta=expires_delta)

def verify_access_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Декодирует и валидирует access token.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
        if payload.get("type") != "access":
            return None
        return payload
    except JWTError:
        return None

# FastAPI OAuth2 scheme (используется в Depends)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)
