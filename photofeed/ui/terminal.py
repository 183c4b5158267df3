"""Interactive terminal front end for the search screen."""

from __future__ import annotations

from typing import AsyncIterable, Callable

from photofeed.config import LayoutSettings
from photofeed.domain.models import PhotoItem
from photofeed.domain.states import Content, InputFieldState, ViewState
from photofeed.i18n import I18nService
from photofeed.logging import logger
from photofeed.services.exceptions import NavigationError
from photofeed.ui.details import detail_layout, detail_lines
from photofeed.ui.layout import Orientation, project
from photofeed.ui.navigation import SEARCH_ROUTE, Navigator, detail_route
from photofeed.ui.text import render_directive
from photofeed.ui.view_model import SearchViewModel

Output = Callable[[str], None]


class TerminalApp:
    """Feeds input lines to the view model and prints every published state.

    A plain line replaces the query as if it had been typed. Lines starting
    with ``:`` are commands: ``:focus``, ``:open N``, ``:back``, ``:clear``, ``:quit``.
    """

    def __init__(
        self,
        view_model: SearchViewModel,
        i18n: I18nService,
        layout: LayoutSettings | None = None,
        *,
        navigator: Navigator | None = None,
        output: Output = print,
    ) -> None:
        self.view_model = view_model
        self.i18n = i18n
        self.layout = layout or LayoutSettings()
        self.navigator = navigator or Navigator()
        self._output = output
        self.orientation = Orientation.from_size(self.layout.screen_width, self.layout.screen_height)

    async def run(self, lines: AsyncIterable[str]) -> None:
        pipeline = self.view_model.pipeline
        pipeline.add_listener(self.on_state)
        self._emit(self.i18n.gettext("cli_help"))
        self.on_state(pipeline.state)
        try:
            async for raw in lines:
                if not self.handle_line(raw.rstrip("\r\n")):
                    break
            else:
                # input exhausted: let the last query resolve before leaving
                await pipeline.wait_idle()
        finally:
            pipeline.remove_listener(self.on_state)
            await pipeline.close()

    def handle_line(self, line: str) -> bool:
        """Apply one input line; return False when the user asked to quit."""

        if not line.startswith(":"):
            self.view_model.update_search_query(line)
            return True

        command, _, argument = line[1:].strip().partition(" ")
        if command == "quit":
            return False
        if command == "focus":
            self.view_model.on_search_input_clicked()
            if self.view_model.input_field_state is InputFieldState.FOCUSED_NO_INPUT:
                self._emit(self.i18n.gettext("search_placeholder"))
        elif command == "clear":
            self.view_model.on_search_input_cleared()
        elif command == "open":
            self._open(argument.strip())
        elif command == "back":
            if self.navigator.navigate_up():
                self.on_state(self.view_model.view_state)
        else:
            self._emit(self.i18n.gettext("cli_help"))
        return True

    def on_state(self, state: ViewState) -> None:
        if self.navigator.current.name != SEARCH_ROUTE:
            return
        if self.view_model.show_header:
            self._emit(self.i18n.gettext("search_header"))
        directive = project(
            state,
            self.orientation,
            self.layout.screen_width,
            self.layout.screen_height,
            self.layout,
        )
        for text in render_directive(directive, self.i18n):
            self._emit(text)

    def _open(self, argument: str) -> None:
        state = self.view_model.view_state
        try:
            index = int(argument) - 1
        except ValueError:
            index = -1
        if not isinstance(state, Content) or not 0 <= index < len(state.result):
            self._emit(self.i18n.gettext("cli_invalid_index", index=argument or "?"))
            return

        try:
            route = self.navigator.navigate(detail_route(state.result.items[index]))
        except NavigationError:
            logger.exception("detail_navigation_failed", index=index)
            return

        logger.debug("detail_opened", title=route.photo.title)
        for text in self._detail_text(route.photo):
            self._emit(text)

    def _detail_text(self, photo: PhotoItem) -> list[str]:
        placement = detail_layout(self.orientation, self.layout)
        if placement.image_beside_metadata:
            image = self.i18n.gettext("detail_image_beside", size=placement.image_width, url=photo.image_url)
        else:
            image = self.i18n.gettext("detail_image_above", size=placement.image_height, url=photo.image_url)
        return [image, *detail_lines(photo, self.i18n), self.i18n.gettext("back")]

    def _emit(self, text: str) -> None:
        self._output(text)


__all__ = ["TerminalApp"]
