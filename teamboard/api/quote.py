#teamboard/api/quote.py
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional, Union
from teamboard.schemas.quote import QuoteCreate, QuoteRead
from teamboard.schemas.response import SuccessResponse
from teamboard.crud.quote import create_quote, get_quotes, get_random_quote, delete_quote
from teamboard.dependencies import get_db, require_admin
from teamboard.core.exceptions import QuoteNotFound, ValidationError
import logging

router = APIRouter(prefix="/quotes", tags=["Quotes"])
logger = logging.getLogger("TeamBoard.QuotesAPI")

@router.get("/", response_model=Union[List[QuoteRead], Optional[QuoteRead]])
def list_quotes(
    random: bool = Query(False, description="Вернуть одну случайную цитату (или null)"),
    db: Session = Depends(get_db),
):
    """
    Все цитаты, новые первыми. С random=true — одна случайная цитата.
    """
    try:
        if random:
            return get_random_quote(db)
        return get_quotes(db)
    except Exception as e:
        logger.error(f"Failed to fetch quotes: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch quotes.")

@router.post("/", response_model=QuoteRead, status_code=status.HTTP_201_CREATED)
def create_new_quote(
    data: QuoteCreate,
    db: Session = Depends(get_db),
    _admin: dict = Depends(require_admin),
):
    try:
        return create_quote(db, data.model_dump())
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create quote: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An unexpected error occurred during quote creation.")

@router.delete("/{quote_id}", response_model=SuccessResponse)
def delete_one_quote(
    quote_id: int,
    db: Session = Depends(get_db),
    _admin: dict = Depends(require_admin),
):
    try:
        delete_quote(db, quote_id)
        return SuccessResponse(result=quote_id, detail="Quote deleted")
    except QuoteNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to delete quote {quote_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An unexpected error occurred during quote deletion.")
