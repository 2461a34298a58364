from pydantic import BaseModel, ConfigDict, EmailStr, Field
from datetime import datetime
from typing import Optional


class UserCreate(BaseModel):
    """Schema for creating a user. ``password`` is the plain password."""
    username: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)
    email_verified: bool = False
    phone: Optional[str] = None
    nickname: str = ""
    picture: Optional[str] = None
    blocked: bool = False


class UserResponse(BaseModel):
    """User projection returned to callers, without the password hash."""
    id: str
    username: str
    email: str
    phone: Optional[str] = None
    nickname: str
    picture: Optional[str] = None
    blocked: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
