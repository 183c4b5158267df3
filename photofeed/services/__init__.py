from photofeed.services.exceptions import (
    FetchError,
    MalformedResponse,
    NavigationError,
    NotFound,
    ServiceError,
    TransportError,
    Unauthorized,
    UnexpectedStatus,
)
from photofeed.services.feed_client import FeedClient, create_http_client
from photofeed.services.search_pipeline import SearchPipeline

__all__ = [
    "FeedClient",
    "FetchError",
    "MalformedResponse",
    "NavigationError",
    "NotFound",
    "SearchPipeline",
    "ServiceError",
    "TransportError",
    "Unauthorized",
    "UnexpectedStatus",
    "create_http_client",
]
