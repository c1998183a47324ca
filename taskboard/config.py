from dataclasses import dataclass, field
from pathlib import Path
from typing import List
import os

from dotenv import load_dotenv

PACKAGE_ROOT = Path(__file__).resolve().parents[1]


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, fixed for the lifetime of the app.

    Tokens live one hour. ACCESS_TOKEN_EXPIRE_MINUTES overrides that as a
    deployment extension; leave it unset to keep the one-hour lifetime.
    """

    database_url: str = "sqlite:///./taskboard.db"
    secret_key: str = "change-me"
    access_token_expire_minutes: int = 60
    port: int = 3000
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: Path = None) -> "Settings":
        """Build settings from the environment, loading a .env file first if present."""
        load_dotenv(env_file or PACKAGE_ROOT / ".env")

        return cls(
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            secret_key=os.getenv("SECRET_KEY", cls.secret_key),
            access_token_expire_minutes=int(
                os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(cls.access_token_expire_minutes))
            ),
            port=int(os.getenv("PORT", str(cls.port))),
            cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "http://localhost:3000")),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
        )
