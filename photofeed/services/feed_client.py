"""HTTP client for the public photo feed."""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from photofeed.config import FeedSettings
from photofeed.domain.models import SearchResult
from photofeed.logging import logger
from photofeed.services.exceptions import (
    MalformedResponse,
    NotFound,
    TransportError,
    Unauthorized,
    UnexpectedStatus,
)

FORMAT_PARAM = ("format", "json")
CALLBACK_PARAM = ("nojsoncallback", "1")
TAGS_KEY = "tags"


async def _log_request(request: httpx.Request) -> None:
    logger.debug("feed_request", method=request.method, url=str(request.url))


async def _log_response(response: httpx.Response) -> None:
    logger.debug(
        "feed_response",
        url=str(response.request.url),
        status_code=response.status_code,
    )


def create_http_client(
    settings: FeedSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Build the shared async client pointed at the feed host."""

    settings = settings or FeedSettings()
    kwargs = {}
    if settings.request_timeout_seconds is not None:
        kwargs["timeout"] = settings.request_timeout_seconds
    return httpx.AsyncClient(
        base_url=str(settings.base_url),
        transport=transport,
        event_hooks={"request": [_log_request], "response": [_log_response]},
        **kwargs,
    )


class FeedClient:
    """Fetches photo metadata for a tag query.

    One GET per call, no retries. Non-200 statuses and transport faults are
    raised as :class:`~photofeed.services.exceptions.FetchError` subclasses.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: FeedSettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or FeedSettings()

    async def fetch(self, query: str) -> SearchResult:
        if not query:
            raise ValueError("Search query must not be empty.")

        params = [FORMAT_PARAM, CALLBACK_PARAM, (TAGS_KEY, query)]
        try:
            response = await self._client.get(self._request_url(), params=params)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("feed_transport_error", query=query, error=str(exc))
            raise TransportError(str(exc)) from exc

        if response.status_code == httpx.codes.UNAUTHORIZED:
            raise Unauthorized()
        if response.status_code == httpx.codes.NOT_FOUND:
            raise NotFound()
        if response.status_code != httpx.codes.OK:
            raise UnexpectedStatus(response.status_code)

        try:
            result = SearchResult.model_validate_json(response.content)
        except ValidationError as exc:
            logger.warning("feed_malformed_response", query=query, errors=exc.error_count())
            raise MalformedResponse("Unexpected error: malformed feed response.") from exc

        logger.info("feed_fetched", query=query, items=len(result))
        return result

    def _request_url(self) -> str:
        # clients built by create_http_client already carry the feed host
        if self._client.base_url.host:
            return self._settings.path
        return f"{str(self._settings.base_url).rstrip('/')}/{self._settings.path}"


__all__ = ["FeedClient", "create_http_client"]
