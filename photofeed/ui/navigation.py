"""Routes between the search screen and the detail screen.

The selected photo travels inside the detail route as URL-encoded JSON, the
same way a URL is embedded in another URL.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote, unquote

from pydantic import ValidationError

from photofeed.domain.models import PhotoItem
from photofeed.logging import logger
from photofeed.services.exceptions import NavigationError

SEARCH_ROUTE = "search"
DETAIL_PREFIX = "detail/"


@dataclass(frozen=True, slots=True)
class Route:
    name: str
    photo: PhotoItem | None = None


def detail_route(photo: PhotoItem) -> str:
    payload = photo.model_dump_json()
    return f"{DETAIL_PREFIX}{quote(payload, safe='')}"


def parse_route(route: str) -> Route:
    if route == SEARCH_ROUTE:
        return Route(SEARCH_ROUTE)
    if route.startswith(DETAIL_PREFIX):
        encoded = route[len(DETAIL_PREFIX):]
        try:
            photo = PhotoItem.model_validate_json(unquote(encoded))
        except ValidationError as exc:
            raise NavigationError("Detail route does not carry a valid photo.") from exc
        return Route("detail", photo)
    raise NavigationError(f"Unknown route: {route}")


class Navigator:
    """Back stack of parsed routes, starting at the search screen."""

    def __init__(self) -> None:
        self._stack: list[Route] = [Route(SEARCH_ROUTE)]

    @property
    def current(self) -> Route:
        return self._stack[-1]

    @property
    def depth(self) -> int:
        return len(self._stack)

    def navigate(self, route: str) -> Route:
        parsed = parse_route(route)
        self._stack.append(parsed)
        logger.debug("navigate", route=parsed.name, depth=len(self._stack))
        return parsed

    def navigate_up(self) -> bool:
        if len(self._stack) == 1:
            return False
        self._stack.pop()
        return True


__all__ = ["DETAIL_PREFIX", "Navigator", "Route", "SEARCH_ROUTE", "detail_route", "parse_route"]
