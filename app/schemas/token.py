# backend-server/app/schemas/token.py
from pydantic import BaseModel

class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"

class TokenData(BaseModel):
    user_id: int
    type: str = "access"

class RefreshRequest(BaseModel):
    refresh_token: str | None = None
