from typing import List, Optional

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    message: str
    field: Optional[str] = None


class ErrorResponse(BaseModel):
    errors: List[ErrorDetail]


class MessageResponse(BaseModel):
    message: str
