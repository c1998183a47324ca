import logging

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from ..config import Settings
from ..database import get_db
from ..errors import InvalidCredentials
from ..schemas.user import LoginRequest, MessageResponse, TokenClaims, TokenResponse, UserCreate
from ..security import create_access_token, get_current_user, get_settings, hash_password
from ..stores.users import authenticate_user, register_user

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    user: UserCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Create a new user account and return an access token."""
    db_user = register_user(db, user.name, user.email, hash_password(user.password))
    return {"token": create_access_token(db_user, settings)}


@router.post("/login", response_model=TokenResponse)
def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Exchange email and password for an access token."""
    db_user = authenticate_user(db, credentials.email, credentials.password)
    if not db_user:
        logger.warning("Failed login attempt")
        raise InvalidCredentials()

    logger.info("User %s logged in", db_user.id)
    return {"token": create_access_token(db_user, settings)}


@router.post("/logout", response_model=MessageResponse)
def logout():
    """Tokens are stateless; the client discards its copy."""
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=TokenClaims)
def read_users_me(current_user: TokenClaims = Depends(get_current_user)):
    """Get current user information."""
    return current_user
