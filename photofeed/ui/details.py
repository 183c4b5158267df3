"""Detail view for a single photo."""

from __future__ import annotations

import re
from dataclasses import dataclass

from photofeed.config import LayoutSettings
from photofeed.domain.models import PhotoItem
from photofeed.i18n import I18nService
from photofeed.ui.layout import Orientation

# Expects a literal "+" between the two attributes. Feed markup separates them
# with a space, so real descriptions usually yield no dimensions.
DIMENSIONS_RE = re.compile(r'width="(\d+)"\+height="(\d+)"')


@dataclass(frozen=True, slots=True)
class DetailLayout:
    image_beside_metadata: bool
    image_width: int | None
    image_height: int | None


def extract_dimensions(description_html: str) -> tuple[int, int] | None:
    match = DIMENSIONS_RE.search(description_html)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


def detail_lines(photo: PhotoItem, i18n: I18nService, *, locale: str | None = None) -> list[str]:
    lines = [i18n.gettext("detail_title", locale=locale, value=photo.title)]
    dimensions = extract_dimensions(photo.description_html)
    if dimensions is not None:
        width, height = dimensions
        lines.append(i18n.gettext("detail_width", locale=locale, value=width))
        lines.append(i18n.gettext("detail_height", locale=locale, value=height))
    lines.append(i18n.gettext("detail_author", locale=locale, value=photo.author))
    return lines


def detail_layout(orientation: Orientation, layout: LayoutSettings | None = None) -> DetailLayout:
    layout = layout or LayoutSettings()
    if orientation is Orientation.LANDSCAPE:
        return DetailLayout(True, image_width=layout.detail_image_width, image_height=None)
    return DetailLayout(False, image_width=None, image_height=layout.detail_image_height)


__all__ = ["DIMENSIONS_RE", "DetailLayout", "detail_layout", "detail_lines", "extract_dimensions"]
