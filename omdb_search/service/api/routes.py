"""API routes for the search service."""

import time
from typing import Union

import structlog
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError
from starlette.requests import ClientDisconnect
from starlette.routing import Route
from starlette.types import Receive, Scope, Send

from ...remote.base import InvalidSearchRequest, RemoteSearchError, SearchBackend
from ...remote.models import SearchRequest, encode_results

logger = structlog.get_logger("omdb_search.service.api")

router = APIRouter()

# Non-POST requests get 404 rather than 405; see ``SearchNotFound`` for
# methods outside this list.
SEARCH_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
NOT_FOUND_BODY = "404 page not found"


def get_search_backend(request: Request) -> SearchBackend:
    """Get the search backend from application state."""
    return request.app.state.search_backend


def error_response(error: Union[Exception, str], status_code: int) -> PlainTextResponse:
    """Plain-text error response carrying the error's message."""
    message = error if isinstance(error, str) else (str(error) or error.__class__.__name__)
    return PlainTextResponse(
        message + "\n",
        status_code=status_code,
        headers={"X-Content-Type-Options": "nosniff"},
    )


@router.api_route("/search", methods=SEARCH_METHODS)
async def search(
    request: Request,
    backend: SearchBackend = Depends(get_search_backend),
):
    """Search the remote movie database.

    Body: ``{"title": str, "type"?: str, "release_year"?: str, "api_verison": str}``.
    Responds with a JSON array of ``{"Title", "Year", "IMDBID", "Type"}``, or a
    plain-text error (400 bad request body, 500 upstream or encoding failure).
    """
    if request.method != "POST":
        return error_response(NOT_FOUND_BODY, 404)

    try:
        body = await request.body()
    except ClientDisconnect as e:
        logger.info("Search request body unreadable", error=str(e))
        return error_response(e, 400)

    try:
        search_request = SearchRequest.model_validate_json(body)
    except ValidationError as e:
        logger.info("Invalid search request", error=str(e))
        return error_response(e, 400)

    start_time = time.time()
    try:
        results = await backend.search(search_request)
    except InvalidSearchRequest as e:
        logger.info("Invalid search request", title=search_request.title, error=str(e))
        return error_response(e, 400)
    except RemoteSearchError as e:
        logger.error("Search failed", title=search_request.title, error=str(e))
        return error_response(e, 500)

    try:
        content = encode_results(results)
    except PydanticSerializationError as e:
        logger.error("Search result encoding failed", title=search_request.title, error=str(e))
        return error_response(e, 500)

    logger.info(
        "Search completed",
        title=search_request.title,
        media_type=search_request.media_type,
        release_year=search_request.release_year,
        results_count=len(results),
        latency_ms=(time.time() - start_time) * 1000,
    )
    return Response(content=content, media_type="application/json")


class SearchNotFound:
    """ASGI endpoint answering 404 on ``/search`` for any other method."""

    path = "/search"

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        response = error_response(NOT_FOUND_BODY, 404)
        await response(scope, receive, send)


# Registered after ``search`` with no method restriction, so it only sees
# methods the route above does not accept.
router.routes.append(Route("/search", endpoint=SearchNotFound(), methods=None, include_in_schema=False))
