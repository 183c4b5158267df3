"""Plain-text rendering of directives for the terminal client."""

from __future__ import annotations

from photofeed.domain.models import PhotoItem
from photofeed.i18n import I18nService
from photofeed.ui.layout import GridAxis, GridDirective, LoadingDirective, MessageDirective, RenderDirective

TITLE_LIMIT = 60


def render_directive(directive: RenderDirective, i18n: I18nService, *, locale: str | None = None) -> list[str]:
    if isinstance(directive, LoadingDirective):
        return [i18n.gettext("search_screen_loading", locale=locale)]
    if isinstance(directive, MessageDirective):
        lines = [i18n.gettext(directive.message_key, locale=locale)]
        if directive.detail:
            lines.append(i18n.gettext("search_screen_error_detail", locale=locale, detail=directive.detail))
        return lines
    if isinstance(directive, GridDirective):
        return render_grid(directive)
    raise TypeError(f"Unknown directive: {directive!r}")


def render_grid(directive: GridDirective) -> list[str]:
    """One line per item, prefixed with its 1-based position and grid cell."""

    lines = []
    for index, item in enumerate(directive.items):
        if directive.axis is GridAxis.COLUMNS:
            row, col = divmod(index, directive.count)
        else:
            col, row = divmod(index, directive.count)
        lines.append(f"{index + 1:>3}. [{row},{col}] {_shorten(item)}")
    return lines


def _shorten(item: PhotoItem) -> str:
    title = item.title.strip() or item.image_url
    if len(title) > TITLE_LIMIT:
        title = f"{title[: TITLE_LIMIT - 3].rstrip()}..."
    return title


__all__ = ["render_directive", "render_grid"]
