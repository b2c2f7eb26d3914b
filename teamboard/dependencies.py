# teamboard/dependencies.py

from typing import Generator, Optional
from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session
from teamboard.core.security import ADMIN_SUBJECT, oauth2_scheme, verify_access_token
from teamboard.database import SessionLocal
from teamboard.models.project import Project as ProjectModel
from teamboard.crud.project import get_project as get_project_crud
from teamboard.core.exceptions import ProjectNotFound

def get_db() -> Generator[Session, None, None]:
    """
    Создает и возвращает сессию базы данных, гарантирует закрытие после использования.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def require_admin(token: Optional[str] = Depends(oauth2_scheme)) -> dict:
    """
    Пропускает запрос только с валидным admin-токеном (Authorization: Bearer ...).
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Admin authorization required",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if not token:
        raise credentials_exception
    payload = verify_access_token(token)
    if payload is None or payload.get("sub") != ADMIN_SUBJECT:
        raise credentials_exception
    return payload

def get_project_or_404(
    project_id: int,
    db: Session = Depends(get_db),
) -> ProjectModel:
    """
    Получить проект по ID или выдать 404.
    """
    try:
        return get_project_crud(db, project_id)
    except ProjectNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
