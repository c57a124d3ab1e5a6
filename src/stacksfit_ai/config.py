# src/stacksfit_ai/config.py
"""
Process-wide settings for the StacksFit AI service.

Settings are read from the environment once (after `load_dotenv()` in main.py)
and handed to the adapters and the orchestrator. Nothing re-reads os.environ
per request.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

DEFAULT_OPENAI_MODEL = "gpt-3.5-turbo"
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash-lite"
DEFAULT_TIMEOUT = 30.0
DEFAULT_PORT = 3001
DEFAULT_CORS_ORIGINS = ("http://localhost:3000", "http://localhost:19006")

# values shipped in .env.example files; treated as "not configured"
PLACEHOLDER_KEYS = {
    "your_openai_api_key_here",
    "your_gemini_api_key_here",
    "changeme",
}


def is_configured_key(value: Optional[str]) -> bool:
    if not value:
        return False
    value = value.strip()
    if not value:
        return False
    return value.lower() not in PLACEHOLDER_KEYS


@dataclass(frozen=True)
class Settings:
    openai_api_key: Optional[str] = None
    openai_model: str = DEFAULT_OPENAI_MODEL
    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    request_timeout: float = DEFAULT_TIMEOUT
    cors_origins: Tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)
    log_level: str = "INFO"
    port: int = DEFAULT_PORT

    @property
    def openai_configured(self) -> bool:
        return is_configured_key(self.openai_api_key)

    @property
    def gemini_configured(self) -> bool:
        return is_configured_key(self.gemini_api_key)


def _parse_origins(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return DEFAULT_CORS_ORIGINS
    return tuple(o.strip() for o in raw.split(",") if o.strip())


def _parse_timeout(raw: Optional[str]) -> float:
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        logging.getLogger(__name__).warning("Invalid AI_REQUEST_TIMEOUT %r; using %s", raw, DEFAULT_TIMEOUT)
        return DEFAULT_TIMEOUT
    return value if value > 0 else DEFAULT_TIMEOUT


def _parse_port(raw: Optional[str]) -> int:
    if raw and raw.strip().isdigit():
        return int(raw)
    return DEFAULT_PORT


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from `environ` (defaults to os.environ)."""
    env = os.environ if environ is None else environ
    return Settings(
        openai_api_key=env.get("OPENAI_API_KEY") or None,
        openai_model=env.get("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL,
        gemini_api_key=env.get("GEMINI_API_KEY") or None,
        gemini_model=env.get("GEMINI_MODEL") or DEFAULT_GEMINI_MODEL,
        request_timeout=_parse_timeout(env.get("AI_REQUEST_TIMEOUT")),
        cors_origins=_parse_origins(env.get("CORS_ORIGINS")),
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        port=_parse_port(env.get("PORT")),
    )


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a single stream handler to the package logger."""
    logger = logging.getLogger("stacksfit_ai")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger
