from email_validator import EmailNotValidError, validate_email
from sqlalchemy.orm import Session
import logging

from ..models.user import User
from ..core.exceptions import AuthenticationError, BadRequestError, DuplicateEmailError
from ..core.security import verify_password, get_password_hash, SessionIssuer
from ..schemas.user import UserLogin, UserRegister, LoginResponse, UserResponse
from ..stores.identity_store import IdentityStore

logger = logging.getLogger(__name__)

def normalize_email(email: str) -> str:
    """The form EmailStr stores at registration; malformed input is returned as is."""
    try:
        return validate_email(email, check_deliverability=False).normalized
    except EmailNotValidError:
        return email

class AuthService:
    def __init__(self, db: Session, issuer: SessionIssuer):
        self.users = IdentityStore(db)
        self.issuer = issuer

    def register_user(self, user_data: UserRegister) -> User:
        """Register a new user."""
        try:
            new_user = self.users.create(
                name=user_data.name,
                email=user_data.email,
                password_hash=get_password_hash(user_data.password),
                role=user_data.role,
                gender=user_data.gender,
            )
        except DuplicateEmailError:
            raise BadRequestError("User already exists")

        logger.info(f"Registered user {new_user.id} as {new_user.role.value}")
        return new_user

    def authenticate_user(self, login_data: UserLogin) -> LoginResponse:
        """Check credentials and hand out a signed token."""
        user = self.users.find_by_email(normalize_email(login_data.email))

        if not user or not verify_password(login_data.password, user.password_hash):
            logger.warning(f"Failed login for {login_data.email}")
            raise AuthenticationError("Invalid credentials")

        token = self.issuer.issue(user)
        logger.info(f"User {user.id} logged in")

        return LoginResponse(
            message="Login successful",
            user=UserResponse.model_validate(user),
            token=token,
        )
