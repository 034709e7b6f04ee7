from pydantic import BaseModel
from typing import Optional, Any


class StandardErrorResponse(BaseModel):
    success: bool = False
    message: str
    detail: Optional[Any] = None
    stack: Optional[str] = None
