"""Common utilities shared across the service.

Includes:
- ``config``: Pydantic-based service configuration from environment variables.
- ``logging``: structured logging setup with structlog.
- ``metrics``: Prometheus metrics helpers.

Import pattern:
- from omdb_search.common.config import SearchServiceConfig
- from omdb_search.common.logging import configure_logging
"""
