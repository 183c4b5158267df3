from photofeed.domain.models import PhotoItem, SearchResult
from photofeed.domain.states import (
    Content,
    EmptyResults,
    Error,
    Idle,
    InputFieldState,
    Loading,
    ViewState,
)

__all__ = [
    "Content",
    "EmptyResults",
    "Error",
    "Idle",
    "InputFieldState",
    "Loading",
    "PhotoItem",
    "SearchResult",
    "ViewState",
]
