from sqlmodel import SQLModel, Field
from datetime import datetime, timezone
from uuid import uuid4


class User(SQLModel, table=True):
    """Registered account. Only the bcrypt hash of the password is kept."""
    __tablename__ = "users"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)
    hashed_password: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
