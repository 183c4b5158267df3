"""Application entrypoint."""

from __future__ import annotations

import asyncio
import sys
from typing import AsyncIterator

from photofeed.config import get_settings
from photofeed.i18n import I18nService
from photofeed.logging import configure_logging, logger
from photofeed.services.feed_client import FeedClient, create_http_client
from photofeed.services.search_pipeline import SearchPipeline
from photofeed.ui.terminal import TerminalApp
from photofeed.ui.view_model import SearchViewModel


async def read_stdin_lines() -> AsyncIterator[str]:
    loop = asyncio.get_running_loop()
    while True:
        line = await loop.run_in_executor(None, sys.stdin.readline)
        if not line:
            return
        yield line


async def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    i18n = I18nService(default_locale=settings.default_language)
    locales = i18n.available_locales()
    if i18n.default_locale not in locales:
        logger.warning("default_language_missing", language=settings.default_language, available=locales)

    async with create_http_client(settings.feed) as http_client:
        feed_client = FeedClient(http_client, settings=settings.feed)
        pipeline = SearchPipeline(feed_client, debounce_seconds=settings.search.debounce_seconds)
        app = TerminalApp(SearchViewModel(pipeline), i18n, settings.layout)

        logger.info("photofeed_starting", environment=settings.environment)
        await app.run(read_stdin_lines())
    logger.info("photofeed_stopped")


def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
