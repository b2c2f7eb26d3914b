#teamboard/api/auth.py
from fastapi import APIRouter, HTTPException, status
from teamboard.schemas.auth import AdminLogin, TokenResponse
from teamboard.core.security import check_admin_password, create_admin_token
import logging

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger("TeamBoard.Auth")

@router.post("/login", response_model=TokenResponse, status_code=status.HTTP_200_OK)
def login(data: AdminLogin):
    """
    Вход администратора по паролю. Возвращает токен для изменяющих запросов.
    """
    if not check_admin_password(data.password):
        logger.warning("Failed admin login attempt")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect password")
    access_token, expires_at = create_admin_token()
    logger.info("Admin logged in")
    return TokenResponse(access_token=access_token, expires_at=expires_at)
