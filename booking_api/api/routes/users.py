from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from ...core.database import get_db
from ...core.exceptions import store_errors
from ...core.security import SessionIssuer
from ...api.deps import get_session_issuer
from ...services.auth_service import AuthService
from ...services.user_service import UserService
from ...schemas.user import (
    UserRegister, UserLogin, UserUpdate, UserResponse,
    UserEnvelope, LoginResponse
)

# User management routes carry no authentication guard
router = APIRouter(prefix="/user", tags=["Users"])

@router.post("/register", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    db: Session = Depends(get_db),
    issuer: SessionIssuer = Depends(get_session_issuer),
):
    """Register a new user."""
    with store_errors("Error registering user"):
        user = AuthService(db, issuer).register_user(user_data)

    return UserEnvelope(
        message="User registered successfully",
        user=UserResponse.model_validate(user),
    )

@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: UserLogin,
    db: Session = Depends(get_db),
    issuer: SessionIssuer = Depends(get_session_issuer),
):
    """Authenticate user and return a signed token."""
    with store_errors("Server error. Please try again later."):
        return AuthService(db, issuer).authenticate_user(login_data)

@router.get("/", response_model=List[UserResponse])
async def list_users(db: Session = Depends(get_db)):
    """List all users."""
    with store_errors("Error fetching users"):
        return UserService(db).list_users()

@router.get("/find/doctors", response_model=List[UserResponse])
async def list_doctors(db: Session = Depends(get_db)):
    """List users registered as doctors."""
    with store_errors("Error fetching doctors"):
        return UserService(db).list_doctors()

@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, db: Session = Depends(get_db)):
    with store_errors("Error fetching user"):
        return UserService(db).get_user(user_id)

@router.put("/{user_id}", response_model=UserEnvelope)
async def update_user(
    user_id: int,
    update: UserUpdate,
    db: Session = Depends(get_db)
):
    with store_errors("Error updating user"):
        user = UserService(db).update_user(user_id, update)

    return UserEnvelope(
        message="User updated successfully",
        user=UserResponse.model_validate(user),
    )

@router.delete("/{user_id}", response_model=UserEnvelope)
async def delete_user(user_id: int, db: Session = Depends(get_db)):
    with store_errors("Error deleting user"):
        user = UserService(db).delete_user(user_id)

    return UserEnvelope(
        message="User deleted successfully",
        user=UserResponse.model_validate(user),
    )
