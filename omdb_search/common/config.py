"""Configuration management for the OMDb search service.

Settings are environment-driven and built on ``pydantic_settings.BaseSettings``
so they can be provided via environment variables, a ``.env`` file, or
defaults. The CLI entry point overlays its flags on top of these values.

Usage
- Build once at startup: ``config = SearchServiceConfig()``
- Override selected values: ``config.model_copy(update={"omdb_port": 8080})``
"""

from pathlib import Path
from typing import Optional, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_OMDB_BASE_URL = "https://www.omdbapi.com/"
DEFAULT_PORT = 60000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_SITE_DIR = str(Path(__file__).resolve().parent.parent / "service" / "site")


class SearchServiceConfig(BaseSettings):
    """Configuration for the search service.

    Each field is read from the environment variable of the same name
    (``OMDB_API_KEY``, ``OMDB_PORT``, ...), case-insensitively.

    Notes
    - ``omdb_api_key`` has no default; the entry point refuses to start
      without one.
    - ``omdb_timeout_seconds`` of ``None`` disables the outbound deadline.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    omdb_env: str = Field(default="local")

    # Remote API
    omdb_api_key: Optional[str] = Field(default=None, description="OMDb API key")
    omdb_base_url: str = Field(default=DEFAULT_OMDB_BASE_URL)
    omdb_timeout_seconds: Optional[float] = Field(default=None, gt=0)

    # HTTP listener
    omdb_host: str = Field(default=DEFAULT_HOST)
    omdb_port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)
    omdb_site_dir: str = Field(default=DEFAULT_SITE_DIR)

    # Logging
    omdb_log_level: str = Field(default="INFO")
    omdb_log_format: str = Field(default="json")


def parse_listen_address(value: str, default_host: str = DEFAULT_HOST) -> Tuple[str, int]:
    """Split a listen address into ``(host, port)``.

    Accepts a bare port (``60000``), a colon-prefixed port (``:60000``), or
    ``host:port``. Raises ``ValueError`` for anything else.
    """
    value = value.strip()
    host, sep, port = value.rpartition(":")
    if not sep:
        host, port = "", value
    if not port.isdigit():
        raise ValueError(f"invalid port: {value!r}")
    port_number = int(port)
    if port_number > 65535:
        raise ValueError(f"port out of range: {value!r}")
    return host or default_host, port_number
