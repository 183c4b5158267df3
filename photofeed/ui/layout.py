"""Map view states to render directives.

Pure functions: the same state, orientation and screen size always give the
same directive.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from photofeed.config import LayoutSettings
from photofeed.domain.models import PhotoItem
from photofeed.domain.states import Content, EmptyResults, Error, Idle, Loading, ViewState


class Orientation(str, Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"

    @classmethod
    def from_size(cls, width: float, height: float) -> "Orientation":
        return cls.LANDSCAPE if width > height else cls.PORTRAIT


class GridAxis(str, Enum):
    COLUMNS = "columns"
    ROWS = "rows"


@dataclass(frozen=True, slots=True)
class MessageDirective:
    message_key: str
    detail: str | None = None


@dataclass(frozen=True, slots=True)
class LoadingDirective:
    pass


@dataclass(frozen=True, slots=True)
class GridDirective:
    axis: GridAxis
    count: int
    item_size: int
    items: tuple[PhotoItem, ...]


RenderDirective = Union[MessageDirective, LoadingDirective, GridDirective]


def project(
    view_state: ViewState,
    orientation: Orientation,
    screen_width: float,
    screen_height: float,
    layout: LayoutSettings | None = None,
) -> RenderDirective:
    layout = layout or LayoutSettings()
    if isinstance(view_state, Idle):
        return MessageDirective("search_screen_idle")
    if isinstance(view_state, Loading):
        return LoadingDirective()
    if isinstance(view_state, EmptyResults):
        return MessageDirective("search_screen_empty")
    if isinstance(view_state, Error):
        return MessageDirective("search_screen_error", detail=view_state.message)
    if isinstance(view_state, Content):
        return grid_for(view_state.result.items, orientation, screen_width, screen_height, layout)
    raise TypeError(f"Unknown view state: {view_state!r}")


def grid_for(
    items: tuple[PhotoItem, ...],
    orientation: Orientation,
    screen_width: float,
    screen_height: float,
    layout: LayoutSettings,
) -> GridDirective:
    """Portrait scrolls vertically in fixed columns, landscape horizontally in fixed rows."""

    if orientation is Orientation.LANDSCAPE:
        count = layout.landscape_rows
        return GridDirective(GridAxis.ROWS, count, int(screen_height / count), items)
    count = layout.portrait_columns
    return GridDirective(GridAxis.COLUMNS, count, int(screen_width / count), items)


__all__ = [
    "GridAxis",
    "GridDirective",
    "LoadingDirective",
    "MessageDirective",
    "Orientation",
    "RenderDirective",
    "grid_for",
    "project",
]
