from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from carnival.schema.base import CamelModel


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    full_name: Optional[str] = None


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class UserOut(CamelModel):
    id: str
    email: str
    created_at: Optional[datetime] = None
