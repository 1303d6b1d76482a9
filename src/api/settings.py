"""Runtime configuration read from environment variables."""

import os
from dataclasses import dataclass

DEFAULT_ALLOWED_ORIGIN = "https://ron-datadriven.github.io"
DEFAULT_GITHUB_REPO = "RON-DATADRIVEN/eos-roadmap"
DEFAULT_PORT = 8080

# Headers sent with every allowed cross-origin response
CORS_ALLOW_METHODS = "POST, OPTIONS"
CORS_ALLOW_HEADERS = "Content-Type"
CORS_MAX_AGE_SECONDS = 3600


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, loaded once at startup."""
    allowed_origin: str = ""
    default_allowed_origin: str = DEFAULT_ALLOWED_ORIGIN
    github_repo: str = DEFAULT_GITHUB_REPO
    log_level: str = "INFO"
    port: int = DEFAULT_PORT


def _env(name: str, default: str = "") -> str:
    return (os.getenv(name) or "").strip() or default


def load_settings() -> Settings:
    """Build Settings from the environment.

    A blank DEFAULT_ALLOWED_ORIGIN falls back to the public roadmap site so
    the published frontend is never locked out by a deploy typo.
    """
    port_raw = _env("PORT", str(DEFAULT_PORT))
    try:
        port = int(port_raw)
    except ValueError:
        raise ValueError(f"PORT must be an integer, got {port_raw!r}")

    return Settings(
        allowed_origin=_env("ALLOWED_ORIGIN"),
        default_allowed_origin=_env("DEFAULT_ALLOWED_ORIGIN", DEFAULT_ALLOWED_ORIGIN),
        github_repo=_env("GITHUB_REPO", DEFAULT_GITHUB_REPO),
        log_level=_env("LOG_LEVEL", "INFO"),
        port=port,
    )
