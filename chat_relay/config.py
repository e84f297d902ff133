import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

DEFAULT_ENDPOINT = "https://api.openai.com/v1/chat/completions"


class ConfigError(Exception):
    pass


class Settings(BaseModel):
    openai_api_key: str
    host: str = "0.0.0.0"
    port: int = 5173
    upstream_endpoint: str = DEFAULT_ENDPOINT
    # seconds; None waits for the upstream indefinitely
    upstream_timeout: Optional[float] = 900
    static_dir: str = "public"
    allowed_origins: list[str] = ["*"]


def _parse_timeout(raw: str) -> Optional[float]:
    raw = raw.strip().lower()
    if raw in ("", "0", "none"):
        return None
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigError(f"UPSTREAM_TIMEOUT must be a number of seconds, got {raw!r}")
    if timeout < 0:
        raise ConfigError(f"UPSTREAM_TIMEOUT must not be negative, got {raw!r}")
    return timeout


def _parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        raise ConfigError(f"PORT must be an integer, got {raw!r}")
    if not 0 < port < 65536:
        raise ConfigError(f"PORT out of range: {port}")
    return port


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    Build the process settings from the environment (and a .env file, if any).

    Called once at startup; the result is handed to create_app().
    Raises ConfigError when OPENAI_API_KEY is missing or a value is malformed.
    """
    load_dotenv(env_file)

    api_key = os.getenv("OPENAI_API_KEY", "").strip()
    if not api_key:
        raise ConfigError("Set OPENAI_API_KEY in .env")

    return Settings(
        openai_api_key=api_key,
        host=os.getenv("HOST", "0.0.0.0"),
        port=_parse_port(os.getenv("PORT", "5173")),
        upstream_endpoint=os.getenv("OPENAI_ENDPOINT", DEFAULT_ENDPOINT),
        upstream_timeout=_parse_timeout(os.getenv("UPSTREAM_TIMEOUT", "900")),
        static_dir=os.getenv("STATIC_DIR", "public"),
        allowed_origins=[o.strip() for o in os.getenv("ALLOWED_ORIGINS", "*").split(",") if o.strip()],
    )
