from pydantic import BaseModel
from typing import Optional


class UserLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None  # "student" or "teacher"


class SessionUser(BaseModel):
    id: Optional[int] = None
    email: str
    name: str = ""
    role: str


class Token(BaseModel):
    access_token: str
    token_type: str
    user: SessionUser
