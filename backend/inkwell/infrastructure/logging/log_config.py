"""Logging setup for the API process.

The root level comes from ``LOG_LEVEL``; SQL, HTTP client, uvicorn, the
article deletion chain and authentication each get their own level so
they can be turned up or down independently.
"""

import logging
import sys

from inkwell.config import Settings, get_settings

# Settings field → loggers it controls
_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_sql": ["sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite"],
    "log_level_http": ["httpx", "httpcore"],
    "log_level_uvicorn": ["uvicorn", "uvicorn.access", "uvicorn.error"],
    "log_level_lifecycle": ["ArticleLifecycle"],
    "log_level_auth": [
        "inkwell.infrastructure.identity",
        "inkwell.application.services.auth_service",
    ],
}


def setup_logging() -> None:
    """Apply log levels from settings. Called from the app lifespan."""
    settings = get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    if not root.handlers:
        # uvicorn installs its own handlers; scripts and tests do not
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s"))
        root.addHandler(handler)

    _apply_category_levels(settings)


def _apply_category_levels(settings: Settings) -> None:
    levels: dict[str, str] = {}
    for field_name, logger_names in _CATEGORY_MAP.items():
        raw_level = getattr(settings, field_name, "INFO")
        levels[field_name] = raw_level
        for name in logger_names:
            logging.getLogger(name).setLevel(_parse_level(raw_level))

    logging.getLogger(__name__).debug(
        "Log levels: root=%s %s",
        settings.log_level,
        " ".join(f"{k.removeprefix('log_level_')}={v}" for k, v in levels.items()),
    )


def _parse_level(raw: str) -> int:
    """Level name → logging constant; unknown names fall back to INFO."""
    numeric = logging.getLevelName(raw.upper())
    return numeric if isinstance(numeric, int) else logging.INFO
