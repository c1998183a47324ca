import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..errors import DuplicateEmail
from ..models import User
from ..security import verify_password

logger = logging.getLogger(__name__)


def register_user(session: Session, name: str, email: str, password_hash: str) -> User:
    """Persist a new user; the unique email index rejects duplicates."""
    user = User(name=name, email=email, hashed_password=password_hash)
    session.add(user)
    try:
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        raise DuplicateEmail() from exc

    session.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


def find_user_by_email(session: Session, email: str) -> Optional[User]:
    return session.exec(select(User).where(User.email == email)).first()


def authenticate_user(session: Session, email: str, password: str) -> Optional[User]:
    """Return the user when the password matches, otherwise None."""
    user = find_user_by_email(session, email)
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user
