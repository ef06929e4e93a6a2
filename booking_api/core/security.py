from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel, ValidationError
from enum import Enum

from .config import Settings

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

class UserRole(str, Enum):
    ADMIN = "admin"
    DOCTOR = "doctor"
    PATIENT = "patient"

class TokenPayload(BaseModel):
    id: int
    name: Optional[str] = None
    role: UserRole
    exp: Optional[int] = None

class InvalidCredentialError(Exception):
    """Credential is malformed, carries a bad signature, or has expired."""

# Password utilities
def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """Generate password hash."""
    return pwd_context.hash(password)

class SessionIssuer:
    """Signs and checks the bearer credentials handed out at login."""

    def __init__(self, settings: Settings):
        self.secret_key = settings.SECRET_KEY
        self.algorithm = settings.ALGORITHM
        self.lifetime = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    def issue(self, user, expires_delta: Optional[timedelta] = None) -> str:
        """Create a credential carrying the user's id, name and role."""
        expire = datetime.utcnow() + (expires_delta if expires_delta is not None else self.lifetime)
        to_encode = {
            "id": user.id,
            "name": user.name,
            "role": UserRole(user.role).value,
            "exp": expire,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def validate(self, token: str) -> TokenPayload:
        """Decode a credential, raising InvalidCredentialError when it can't be trusted."""
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm]
            )
            return TokenPayload(**payload)
        except (JWTError, ValidationError) as exc:
            raise InvalidCredentialError(str(exc)) from exc
