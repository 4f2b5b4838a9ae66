"""API routes for feedjson.

Serves feeds as JSONP (for cross-domain script inclusion) or plain JSON.
"""

from typing import Callable

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel

from feedjson import __version__
from feedjson.config.settings import Settings, settings
from feedjson.encoders.json_encoder import render_output
from feedjson.exceptions import CacheError, ConfigurationError, ParseError, RetrievalError
from feedjson.models.parsed import ParsedFeed
from feedjson.services.feed_manager import FeedManager

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["feeds"])

ManagerFactory = Callable[[str | None], FeedManager]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str


def get_settings() -> Settings:
    return settings


def get_manager_factory(app_settings: Settings = Depends(get_settings)) -> ManagerFactory:
    """Dependency returning a function that builds a manager for a feed URL."""

    def factory(feed_url: str | None) -> FeedManager:
        return FeedManager.from_settings(app_settings, feed_url=feed_url)

    return factory


def _load_feed(factory: ManagerFactory, feed_url: str | None) -> ParsedFeed:
    """Run the manager and translate core errors into HTTP errors."""
    try:
        return factory(feed_url).process()
    except ConfigurationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except (RetrievalError, ParseError) as e:
        logger.warning("Feed unavailable", feed=feed_url, error=str(e))
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from e
    except CacheError as e:
        logger.error("Feed cache failure", feed=feed_url, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Feed cache unavailable"
        ) from e


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="ok", version=__version__)


@router.get(
    "/feed",
    response_class=PlainTextResponse,
    summary="Feed as JSONP",
    responses={
        200: {"description": "callback(json); body"},
        400: {"description": "Invalid feed URL or callback name"},
        502: {"description": "Feed could not be fetched or parsed"},
    },
)
def feed_jsonp(
    feed: str | None = Query(None, description="Feed URL (defaults to the configured feed)"),
    callback: str | None = Query(None, description="JSONP callback function name"),
    factory: ManagerFactory = Depends(get_manager_factory),
    app_settings: Settings = Depends(get_settings),
) -> PlainTextResponse:
    """Fetch a feed and return it wrapped in a JSONP callback."""
    data = _load_feed(factory, feed)
    try:
        body = render_output(
            data,
            callback=callback,
            jsonp=True,
            force_object=app_settings.force_object,
            default_callback=app_settings.default_callback,
        )
    except ConfigurationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return PlainTextResponse(body, media_type="text/plain; charset=utf-8")


@router.get("/feed.json", summary="Feed as JSON")
def feed_json(
    feed: str | None = Query(None, description="Feed URL (defaults to the configured feed)"),
    factory: ManagerFactory = Depends(get_manager_factory),
    app_settings: Settings = Depends(get_settings),
) -> Response:
    """Fetch a feed and return it as plain JSON."""
    data = _load_feed(factory, feed)
    body = render_output(data, force_object=app_settings.force_object)
    return Response(body, media_type="application/json")
