from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr
from typing import Optional

from ..core.security import UserRole

class UserRegister(BaseModel):
    name: str
    email: EmailStr
    password: str
    role: UserRole = UserRole.PATIENT
    gender: Optional[str] = None

class UserLogin(BaseModel):
    # Plain str: a malformed address is just another failed login
    email: str
    password: str

class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    role: Optional[UserRole] = None

class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: UserRole
    gender: Optional[str] = None
    created_at: Optional[datetime] = None

class UserEnvelope(BaseModel):
    message: str
    user: UserResponse

class LoginResponse(BaseModel):
    message: str
    user: UserResponse
    token: str
