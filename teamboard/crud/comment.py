# teamboard/crud/comment.py
from sqlalchemy.orm import Session, joinedload
from typing import List
from teamboard.models.comment import Comment
from teamboard.core.exceptions import CommentNotFound, ProjectValidationError
from teamboard.crud.project import get_project
from teamboard.crud.user import get_user
import logging

logger = logging.getLogger("TeamBoard.Comments")

def create_comment(db: Session, project_id: int, data: dict) -> Comment:
    """
    Оставить комментарий к проекту от имени участника.
    """
    project = get_project(db, project_id)
    user = get_user(db, data.get("user_id"))
    content = (data.get("content") or "").strip()
    if not content:
        raise ProjectValidationError("Comment content is required.")
    comment = Comment(project=project, user=user, content=content)
    db.add(comment)
    try:
        db.commit()
        db.refresh(comment)
        logger.info(f"User {user.id} commented on project {project.id}")
        return comment
    except Exception as e:
        db.rollback()
        logger.error(f"Exception while creating comment: {e}")
        raise ProjectValidationError("Database error while creating comment.")

def get_project_comments(db: Session, project_id: int) -> List[Comment]:
    """
    Комментарии проекта, новые первыми.
    """
    get_project(db, project_id)
    return (
        db.query(Comment)
        .options(joinedload(Comment.user))
        .filter(Comment.project_id == project_id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .all()
    )

def delete_comment(db: Session, comment_id: int) -> bool:
    comment = db.get(Comment, comment_id)
    if not comment:
        raise CommentNotFound(f"Comment with id={comment_id} not found.")
    try:
        db.delete(comment)
        db.commit()
        db.expire_all()
        logger.info(f"Deleted comment {comment_id}")
        return True
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete comment {comment_id}: {e}")
        raise ProjectValidationError("Database error while deleting comment.")
