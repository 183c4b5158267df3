from photofeed.ui.layout import Orientation, project
from photofeed.ui.navigation import Navigator, detail_route, parse_route
from photofeed.ui.view_model import SearchViewModel

__all__ = [
    "Navigator",
    "Orientation",
    "SearchViewModel",
    "detail_route",
    "parse_route",
    "project",
]
