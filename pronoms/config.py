"""App configuration — environment variable loading with typed defaults.

Loads settings from .env file (via python-dotenv) and os.environ.
Real environment variables take precedence over .env file values.

The provider is chosen here, at configuration time: ``PRONOMS_PROVIDER=remote``
plays against the quiz service, ``local`` plays offline from the CSV dataset,
``mock`` plays the built-in scripted session.

Usage:
    from pronoms.config import get_settings, build_provider
    settings = get_settings()
    provider = build_provider(settings)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from pronoms.providers.base import SentenceProvider
from pronoms.providers.local import LocalDatasetProvider
from pronoms.providers.mock import MockProvider
from pronoms.providers.remote import RemoteProvider

# Only load .env from the project root, never from parent directories.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_DOTENV_PATH = _PROJECT_ROOT / ".env"

PROVIDERS = ("remote", "local", "mock")
LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


@dataclass(frozen=True)
class Settings:
    """Typed configuration for the quiz.

    All fields have sensible defaults for local development.
    """

    provider: str
    api_base_url: str
    request_timeout: float
    dataset_path: Path
    state_path: Path
    log_level: str


def _resolve_provider(value: str) -> str:
    """Validates the provider name.

    Raises:
        ValueError: If the value is not one of PROVIDERS.
    """
    name = value.strip().lower()
    if name in PROVIDERS:
        return name
    raise ValueError(
        f"Invalid value for PRONOMS_PROVIDER: {value!r}. "
        f"Valid options: {', '.join(PROVIDERS)}"
    )


def _resolve_log_level(value: str) -> str:
    """Validates the logging level name.

    Raises:
        ValueError: If the value is not one of LOG_LEVELS.
    """
    name = value.strip().lower()
    if name in LOG_LEVELS:
        return name
    raise ValueError(
        f"Invalid value for LOG_LEVEL: {value!r}. "
        f"Valid options: {', '.join(LOG_LEVELS)}"
    )


def _load_settings() -> Settings:
    """Loads configuration from .env file and environment variables.

    Returns:
        A fully resolved Settings instance.
    """
    load_dotenv(_DOTENV_PATH)

    return Settings(
        provider=_resolve_provider(os.environ.get("PRONOMS_PROVIDER", "remote")),
        api_base_url=os.environ.get("PRONOMS_API_BASE_URL", "http://localhost:8000"),
        request_timeout=float(os.environ.get("PRONOMS_REQUEST_TIMEOUT", "10.0")),
        dataset_path=Path(os.environ.get("PRONOMS_DATASET_PATH", "data/sentences.csv")),
        state_path=Path(
            os.environ.get("PRONOMS_STATE_PATH", "~/.pronoms/state.json")
        ).expanduser(),
        log_level=_resolve_log_level(os.environ.get("LOG_LEVEL", "info")),
    )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Returns the singleton Settings instance. Loads .env on first call."""
    global _settings
    if _settings is None:
        _settings = _load_settings()
    return _settings


def build_provider(settings: Settings) -> SentenceProvider:
    """Instantiates the provider the settings select."""
    if settings.provider == "remote":
        return RemoteProvider(settings.api_base_url, timeout=settings.request_timeout)
    if settings.provider == "local":
        return LocalDatasetProvider(settings.dataset_path)
    return MockProvider()
