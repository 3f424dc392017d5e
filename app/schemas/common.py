# backend-server/app/schemas/common.py
# Every response is wrapped in {success, message, data}.
import math
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

class Envelope(BaseModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None

class Pagination(BaseModel):
    current: int
    pages: int
    total: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(current=page, pages=math.ceil(total / limit) if limit else 0, total=total)

def ok(data=None, message: str | None = None) -> dict:
    return {"success": True, "message": message, "data": data}
