"""Password hashing, access tokens, and the bearer-token dependency.

Tokens are verified without any lookup: a token stays valid until it
expires, and logging out only means the client throws it away.
"""
from datetime import datetime, timedelta, timezone
import logging
from typing import Optional

from fastapi import Depends, Request
from jose import JWTError, jwt
from pydantic import ValidationError as PydanticValidationError
import bcrypt

from .config import Settings
from .errors import InvalidToken, MissingToken
from .models import User
from .schemas.user import TokenClaims

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
BCRYPT_ROUNDS = 10
BCRYPT_MAX_BYTES = 72


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    password_bytes = plain_password.encode('utf-8')[:BCRYPT_MAX_BYTES]
    hashed_bytes = hashed_password.encode('utf-8') if isinstance(hashed_password, str) else hashed_password
    return bcrypt.checkpw(password_bytes, hashed_bytes)


def hash_password(password: str) -> str:
    """Hash a password using bcrypt directly."""
    password_bytes = password.encode('utf-8')[:BCRYPT_MAX_BYTES]
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode('utf-8')


def create_access_token(
    user: User,
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a JWT carrying the user's id, name and email."""
    issued_at = datetime.now(timezone.utc)
    expire = issued_at + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode = {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "iat": issued_at,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> TokenClaims:
    """Verify a token and return its claims.

    Expired, malformed, badly signed, and incomplete tokens all raise
    InvalidToken.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
        return TokenClaims(**payload)
    except (JWTError, PydanticValidationError) as exc:
        raise InvalidToken() from exc


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _get_token_from_request(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def get_current_user(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> TokenClaims:
    """Resolve the caller from the bearer token and attach it to the request."""
    token = _get_token_from_request(request)
    if not token:
        raise MissingToken()

    try:
        claims = decode_access_token(token, settings)
    except InvalidToken:
        logger.warning("Rejected token on %s %s", request.method, request.url.path)
        raise

    request.state.user = claims
    return claims
