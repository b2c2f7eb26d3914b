#teamboard/api/comment.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from teamboard.schemas.response import SuccessResponse
from teamboard.crud.comment import delete_comment
from teamboard.dependencies import get_db
from teamboard.core.exceptions import CommentNotFound, ValidationError
import logging

router = APIRouter(prefix="/comments", tags=["Comments"])
logger = logging.getLogger("TeamBoard.CommentsAPI")

@router.delete("/{comment_id}", response_model=SuccessResponse)
def delete_one_comment(comment_id: int, db: Session = Depends(get_db)):
    """
    Удалить комментарий.
    """
    try:
        delete_comment(db, comment_id)
        return SuccessResponse(result=comment_id, detail="Comment deleted")
    except CommentNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to delete comment {comment_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An unexpected error occurred during comment deletion.")
