# expense_tracker/schemas/user.py
from pydantic import BaseModel, EmailStr, Field

from expense_tracker.core.auth import UserRead

class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    password: str

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class LoginResponse(BaseModel):
    user: UserRead
    token: str
    token_type: str = "bearer"
