"""UI state variants published by the search pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from photofeed.domain.models import SearchResult


@dataclass(frozen=True, slots=True)
class Idle:
    """No active search."""


@dataclass(frozen=True, slots=True)
class Loading:
    """A query is waiting for its debounce window or its fetch."""


@dataclass(frozen=True, slots=True)
class Content:
    result: SearchResult

    def __post_init__(self) -> None:
        if self.result.is_empty:
            raise ValueError("Content requires at least one item; use EmptyResults instead.")


@dataclass(frozen=True, slots=True)
class EmptyResults:
    """The fetch succeeded but matched nothing."""


@dataclass(frozen=True, slots=True)
class Error:
    message: str | None = None


ViewState = Union[Idle, Loading, Content, EmptyResults, Error]


class InputFieldState(str, Enum):
    IDLE = "idle"
    FOCUSED_NO_INPUT = "focused_no_input"
    HAS_INPUT = "has_input"

    @classmethod
    def derive(cls, query: str, focused: bool) -> "InputFieldState":
        if not focused:
            return cls.IDLE
        return cls.HAS_INPUT if query else cls.FOCUSED_NO_INPUT


__all__ = [
    "Content",
    "EmptyResults",
    "Error",
    "Idle",
    "InputFieldState",
    "Loading",
    "ViewState",
]
