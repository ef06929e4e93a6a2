from fastapi import Depends, Request
from sqlalchemy.orm import Session
import logging

from ..core.config import Settings
from ..core.database import get_db
from ..core.exceptions import AuthenticationError
from ..core.security import InvalidCredentialError, SessionIssuer
from ..models.user import User
from ..schemas.user import UserResponse
from ..services.policy import Actor
from ..stores.identity_store import IdentityStore

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_session_issuer(request: Request) -> SessionIssuer:
    return request.app.state.session_issuer

async def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    issuer: SessionIssuer = Depends(get_session_issuer),
) -> User:
    """Resolve the credential in the token header to a stored user."""
    token = request.headers.get(settings.TOKEN_HEADER)
    if not token:
        raise AuthenticationError("Access denied. No token provided.")

    if token.startswith(BEARER_PREFIX):
        token = token[len(BEARER_PREFIX):]

    try:
        token_payload = issuer.validate(token)
    except InvalidCredentialError as exc:
        logger.info(f"Rejected credential: {exc}")
        raise AuthenticationError("Invalid token")

    user = IdentityStore(db).find_by_id(token_payload.id)
    if not user:
        raise AuthenticationError("Invalid token. User no longer exists")

    # Downstream handlers read the caller from here, never the password hash
    request.state.user = UserResponse.model_validate(user)
    return user

async def get_current_actor(
    request: Request,
    _: User = Depends(get_current_user)
) -> Actor:
    """The authenticated caller as the policy sees it."""
    caller: UserResponse = request.state.user
    return Actor(id=caller.id, role=caller.role)
