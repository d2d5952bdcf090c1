from datetime import datetime

from pydantic import BaseModel


class TokenPayload(BaseModel):
    sub: str  # user id
    iat: datetime
    exp: datetime


class TokenResponse(BaseModel):
    token: str
