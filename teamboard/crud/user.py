# teamboard/crud/user.py
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.exc import IntegrityError
from datetime import datetime, timezone
from typing import List, Optional, Dict, Any
from teamboard.models.user import User
from teamboard.models.assignee import ProjectAssignee
from teamboard.models.comment import Comment
from teamboard.core.constants import USER_ROLES
from teamboard.core.exceptions import UserNotFound, UserValidationError
import logging

logger = logging.getLogger("TeamBoard.Users")

RECENT_COMMENTS_LIMIT = 10

def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()

def create_user(db: Session, data: dict) -> User:
    """
    Создать участника. Email должен быть уникальным.
    """
    name = (data.get("name") or "").strip()
    if not name:
        raise UserValidationError("User name is required.")
    role = data.get("role") or "member"
    if role not in USER_ROLES:
        raise UserValidationError(f"Unknown user role: {role!r}")
    email = (data.get("email") or "").strip().lower()
    if not email:
        raise UserValidationError("User email is required.")
    if get_user_by_email(db, email):
        raise UserValidationError(f"User with email '{email}' already exists.")

    user = User(
        name=name,
        email=email,
        avatar=data.get("avatar"),
        role=role,
    )
    db.add(user)
    try:
        db.commit()
        db.refresh(user)
        logger.info(f"Created user '{user.name}' (ID: {user.id})")
        return user
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Integrity error while creating user: {e}")
        raise UserValidationError(f"User with email '{email}' already exists.")
    except Exception as e:
        db.rollback()
        logger.error(f"Exception while creating user: {e}")
        raise UserValidationError("Database error while creating user.")

def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise UserNotFound(f"User with id={user_id} not found.")
    return user

def get_users(db: Session, filters: Optional[Dict[str, Any]] = None) -> List[User]:
    """
    Список участников по имени; фильтры role и search (имя/email).
    """
    query = db.query(User).options(
        selectinload(User.assignments).joinedload(ProjectAssignee.project),
        selectinload(User.comments),
    )
    filters = filters or {}
    if "role" in filters:
        query = query.filter(User.role == filters["role"])
    if "search" in filters:
        search = f"%{filters['search']}%"
        query = query.filter((User.name.ilike(search)) | (User.email.ilike(search)))
    return query.order_by(User.name.asc()).all()

def get_recent_comments(db: Session, user_id: int, limit: int = RECENT_COMMENTS_LIMIT) -> List[Comment]:
    return (
        db.query(Comment)
        .filter(Comment.user_id == user_id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .limit(limit)
        .all()
    )

def update_user(db: Session, user_id: int, data: dict) -> User:
    """
    Обновить участника: меняются только переданные поля.
    """
    user = get_user(db, user_id)
    if "name" in data:
        name = (data["name"] or "").strip()
        if not name:
            raise UserValidationError("User name is required.")
        user.name = name
    if data.get("email") is not None:
        email = data["email"].strip().lower()
        existing = db.query(User).filter(User.email == email, User.id != user_id).first()
        if existing:
            raise UserValidationError(f"User with email '{email}' already exists.")
        user.email = email
    if "avatar" in data:
        user.avatar = data["avatar"]
    if data.get("role") is not None:
        if data["role"] not in USER_ROLES:
            raise UserValidationError(f"Unknown user role: {data['role']!r}")
        user.role = data["role"]
    user.updated_at = datetime.now(timezone.utc)
    try:
        db.commit()
        db.refresh(user)
        logger.info(f"Updated user {user.id}")
        return user
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating user {user_id}: {e}")
        raise UserValidationError("Database error while updating user.")

def delete_user(db: Session, user_id: int) -> bool:
    """
    Удалить участника вместе с его назначениями, задачами, комментариями и участием в событиях.
    """
    user = get_user(db, user_id)
    try:
        db.delete(user)
        db.commit()
        db.expire_all()
        logger.info(f"Deleted user {user_id}")
        return True
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete user {user_id}: {e}")
        raise UserValidationError("Database error while deleting user.")
