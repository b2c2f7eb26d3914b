#teamboard/schemas/response.py
from pydantic import BaseModel, Field
from typing import Any, Optional

class SuccessResponse(BaseModel):
    """
    SuccessResponse — универсальный ответ с результатом выполнения операции.
    """
    result: Any = Field(..., description="Результат запроса (может быть любым объектом)")
    detail: Optional[str] = Field(None, examples=["Operation successful"], description="Дополнительная информация")
