"""View model mediating between the search screen and the pipeline."""

from __future__ import annotations

from photofeed.domain.states import InputFieldState, ViewState
from photofeed.services.search_pipeline import SearchPipeline


class SearchViewModel:
    """Tracks the input field alongside the pipeline's view state.

    The input field state is derived from the current query and whether the
    field has been interacted with since the last clear.
    """

    def __init__(self, pipeline: SearchPipeline) -> None:
        self.pipeline = pipeline
        self._focused = False

    @property
    def view_state(self) -> ViewState:
        return self.pipeline.state

    @property
    def search_query(self) -> str:
        return self.pipeline.query

    @property
    def input_field_state(self) -> InputFieldState:
        return InputFieldState.derive(self.pipeline.query, self._focused)

    @property
    def show_header(self) -> bool:
        return self.input_field_state is InputFieldState.IDLE

    def update_search_query(self, query: str) -> None:
        self._focused = True
        self.pipeline.submit_query(query)

    def on_search_input_clicked(self) -> None:
        self._focused = True

    def on_search_input_cleared(self) -> None:
        self._focused = False
        self.pipeline.submit_query("")


__all__ = ["SearchViewModel"]
