from contextlib import contextmanager
from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from typing import Optional
import logging

logger = logging.getLogger(__name__)

# Store-level errors, raised without any HTTP knowledge
class StoreError(Exception):
    pass

class RecordNotFoundError(StoreError):
    def __init__(self, kind: str, record_id):
        super().__init__(f"{kind} {record_id} not found")
        self.kind = kind
        self.record_id = record_id

class DuplicateEmailError(StoreError):
    def __init__(self, email: str):
        super().__init__(f"Email {email} already registered")
        self.email = email

# HTTP errors
class AuthenticationError(HTTPException):
    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

class AuthorizationError(HTTPException):
    def __init__(self, detail: str = "Not enough permissions"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )

class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )

class BadRequestError(HTTPException):
    def __init__(self, detail: str = "Bad request"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )

class ServerError(HTTPException):
    """500 carrying the underlying failure in ``error``."""

    def __init__(self, detail: str = "Internal server error", error: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
        )
        self.error = error

@contextmanager
def store_errors(message: str):
    """Report database failures inside the block as a 500 with ``message``."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception(message)
        raise ServerError(message, error=str(exc)) from exc
