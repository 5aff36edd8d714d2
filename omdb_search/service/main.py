"""Search service main application."""

import argparse
import os
import sys
import time
from contextlib import asynccontextmanager
from typing import List, Optional

import httpx
import structlog
import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from pydantic import ValidationError

from .. import __version__
from ..common.config import SearchServiceConfig, parse_listen_address
from ..common.logging import configure_logging
from ..common.metrics import MetricsCollector
from ..remote.base import RemoteConfigurationError
from ..remote.factory import create_search_backend
from .api.routes import router as api_router

SERVICE_NAME = "omdb-search"

logger = structlog.get_logger("omdb_search.service")


def create_app(
    config: SearchServiceConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Build the FastAPI application.

    The search backend is created here, once, from ``config`` and shared by
    every request; it is closed when the application shuts down.

    Raises ``RemoteConfigurationError`` when the backend cannot be built
    (missing API key, malformed base URL).
    """
    configure_logging(SERVICE_NAME, config.omdb_log_level, config.omdb_log_format)

    metrics_collector = MetricsCollector(SERVICE_NAME)
    search_backend = create_search_backend(config, metrics=metrics_collector, transport=transport)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Search service started", base_url=config.omdb_base_url)
        yield
        logger.info("Shutting down search service")
        await app.state.search_backend.aclose()
        logger.info("Search service shutdown complete")

    app = FastAPI(
        title="OMDb Search Service",
        description="Proxies movie searches to the Open Movie Database",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.search_backend = search_backend
    app.state.metrics_collector = metrics_collector

    @app.middleware("http")
    async def metrics_middleware(request: Request, call_next):
        """Collect metrics and add a processing time header."""
        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception("Unhandled error", path=request.url.path, error=str(e))
            response = PlainTextResponse("Internal Server Error", status_code=500)

        duration = time.time() - start_time
        response.headers["X-Process-Time"] = str(duration)

        route = request.scope.get("route") or request.scope.get("endpoint")
        endpoint = getattr(route, "path", None) or "static"
        metrics_collector.record_http_request(
            method=request.method,
            endpoint=endpoint,
            status=response.status_code,
            duration=duration,
        )
        return response

    app.include_router(api_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": SERVICE_NAME}

    @app.get("/metrics")
    async def metrics():
        """Prometheus metrics endpoint."""
        return Response(content=metrics_collector.get_metrics(), media_type="text/plain")

    # Mounted last so the API routes above take precedence.
    if os.path.isdir(config.omdb_site_dir):
        app.mount("/", StaticFiles(directory=config.omdb_site_dir, html=True), name="site")
    else:
        logger.warning("Static site directory not found", site_dir=config.omdb_site_dir)

    return app


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=SERVICE_NAME,
        description="Serve the movie search front end and proxy searches to OMDb.",
    )
    parser.add_argument("--key", help="The OMDb API key (default: $OMDB_API_KEY).")
    parser.add_argument(
        "--port",
        help="The port number to listen on, as PORT, :PORT or HOST:PORT (default: 60000).",
    )
    parser.add_argument("--site-dir", help="Directory of static files served at /.")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parse flags, build the application and serve it until interrupted."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = SearchServiceConfig()
    except ValidationError as e:
        print(f"invalid configuration: {e}", file=sys.stderr)
        return 1

    updates = {}
    if args.key:
        updates["omdb_api_key"] = args.key
    if args.port:
        try:
            host, port = parse_listen_address(args.port, default_host=config.omdb_host)
        except ValueError as e:
            parser.error(str(e))
        updates["omdb_host"] = host
        updates["omdb_port"] = port
    if args.site_dir:
        updates["omdb_site_dir"] = args.site_dir
    if args.log_level:
        updates["omdb_log_level"] = args.log_level
    config = config.model_copy(update=updates)

    if not config.omdb_api_key:
        print("--key is required.", file=sys.stderr)
        return 1

    try:
        app = create_app(config)
    except (RemoteConfigurationError, ValueError) as e:
        print(f"failed to start: {e}", file=sys.stderr)
        return 1

    uvicorn.run(
        app,
        host=config.omdb_host,
        port=config.omdb_port,
        log_level=config.omdb_log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
