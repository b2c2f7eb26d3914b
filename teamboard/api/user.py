#teamboard/api/user.py
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from teamboard.schemas.user import UserCreate, UserUpdate, UserRead, UserListItem, UserDetail, UserCommentRead
from teamboard.crud.user import (
    create_user,
    get_user,
    get_users,
    get_recent_comments,
    update_user,
    delete_user,
)
from teamboard.dependencies import get_db, require_admin
from teamboard.schemas.response import SuccessResponse
from teamboard.core.exceptions import UserNotFound, UserValidationError
import logging

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger("TeamBoard.UsersAPI")

@router.get("/", response_model=List[UserListItem])
def list_users(
    role: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """
    Список участников с количеством назначений и комментариев.
    """
    filters = {"role": role, "search": search}
    filters = {k: v for k, v in filters.items() if v is not None}
    try:
        return get_users(db, filters=filters)
    except Exception as e:
        logger.error(f"Failed to list users: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch users.")

@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(
    data: UserCreate,
    db: Session = Depends(get_db),
    _admin: dict = Depends(require_admin),
):
    """
    Добавить участника команды.
    """
    try:
        return create_user(db, data.model_dump())
    except UserValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error in register_user: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An unexpected error occurred during user creation.")

@router.get("/{user_id}", response_model=UserDetail)
def get_user_profile(user_id: int, db: Session = Depends(get_db)):
    """
    Профиль участника: назначения и последние комментарии.
    """
    try:
        user = get_user(db, user_id)
    except UserNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    detail = UserDetail.model_validate(user)
    detail.recent_comments = [UserCommentRead.model_validate(c) for c in get_recent_comments(db, user_id)]
    return detail

@router.patch("/{user_id}", response_model=UserRead)
def update_user_profile(
    user_id: int,
    data: UserUpdate,
    db: Session = Depends(get_db),
    _admin: dict = Depends(require_admin),
):
    try:
        return update_user(db, user_id, data.model_dump(exclude_unset=True))
    except UserNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except UserValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to update user {user_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An unexpected error occurred during user update.")

@router.delete("/{user_id}", response_model=SuccessResponse)
def delete_user_profile(
    user_id: int,
    db: Session = Depends(get_db),
    _admin: dict = Depends(require_admin),
):
    """
    Удалить участника вместе с его назначениями и комментариями.
    """
    try:
        delete_user(db, user_id)
        return SuccessResponse(result=user_id, detail="User deleted")
    except UserNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except UserValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to delete user {user_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An unexpected error occurred during user deletion.")
