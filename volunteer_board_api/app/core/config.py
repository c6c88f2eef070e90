"""
Simple configuration management.

The ``Settings`` dataclass is immutable and is built exactly once at
startup by ``Settings.from_env``, which reads environment variables
(after loading an optional ``.env`` file).  The instance is attached
to the application and handed to request handlers through the
``get_settings`` dependency, so nothing below this module reads
``os.environ`` directly.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv
from fastapi import Request


def _split_csv(raw: str, lower: bool = False) -> Tuple[str, ...]:
    items = [item.strip() for item in raw.split(",")]
    if lower:
        items = [item.lower() for item in items]
    return tuple(item for item in items if item)


def _positive_int(raw: Optional[str], fallback: int) -> int:
    try:
        value = int(raw) if raw is not None else fallback
    except ValueError:
        return fallback
    return value if value > 0 else fallback


@dataclass(frozen=True)
class Settings:
    """Application settings."""

    project_name: str = "Volunteer Board API"
    api_version: str = "1.0.0"
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # Signing key and lifetime for bearer tokens verified by
    # ``core.security``.
    secret_key: str = "change_me"
    access_token_expire_minutes: int = 60 * 24
    algorithm: str = "HS256"

    # Legacy shared secret accepted in the ``X-Admin-Token`` header when
    # no bearer token is presented.  Empty disables the legacy path.
    admin_secret: str = ""

    # Lower‑cased emails allowed to act as administrators.  When empty,
    # any successfully verified bearer token is accepted.
    admin_emails: Tuple[str, ...] = ()

    # Origins allowed by the CORS middleware.
    client_origins: Tuple[str, ...] = ("http://localhost:5173",)

    # Path to the SQLite database.  Relative paths are resolved against
    # the project root by ``core.db``.
    database_url: str = "volunteer_board.db"

    default_page_size: int = 25
    max_page_size: int = 50

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``env`` (defaults to ``os.environ``).

        A ``.env`` file in the working directory is loaded first when
        reading the real process environment; variables that are already
        set take precedence over the file.
        """
        if env is None:
            load_dotenv()
            env = os.environ
        max_page_size = _positive_int(env.get("MAX_PAGE_SIZE"), 50)
        return cls(
            project_name=env.get("PROJECT_NAME", "Volunteer Board API"),
            api_version=env.get("API_VERSION", "1.0.0"),
            log_level=env.get("LOG_LEVEL", "INFO"),
            log_file=env.get("LOG_FILE") or None,
            secret_key=env.get("SECRET_KEY", "change_me"),
            access_token_expire_minutes=_positive_int(
                env.get("ACCESS_TOKEN_EXPIRE_MINUTES"), 60 * 24
            ),
            algorithm=env.get("ALGORITHM", "HS256"),
            admin_secret=env.get("ADMIN_SECRET", ""),
            admin_emails=_split_csv(env.get("ADMIN_EMAILS", ""), lower=True),
            client_origins=_split_csv(env.get("CLIENT_ORIGIN", "http://localhost:5173")),
            database_url=env.get("DATABASE_URL", "volunteer_board.db"),
            default_page_size=min(_positive_int(env.get("DEFAULT_PAGE_SIZE"), 25), max_page_size),
            max_page_size=max_page_size,
        )


def get_settings(request: Request) -> Settings:
    """FastAPI dependency returning the settings bound to the running app."""
    return request.app.state.settings
