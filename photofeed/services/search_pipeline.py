"""Debounced query-to-result pipeline.

Every call to :meth:`SearchPipeline.submit_query` advances a query token and
re-arms a debounce timer. When the timer fires it cancels any fetch still in
flight and starts one for the latest query, so at most one fetch runs at a
time. Each fetch carries the token it was armed with; an outcome whose token
is no longer the latest (a newer query is still waiting out its debounce
window) is dropped. Observers therefore never see a state derived from a query
older than the last one submitted.

All mutation happens on the running event loop, so no locking is needed.
"""

from __future__ import annotations

import asyncio
from typing import AsyncIterator, Callable, Protocol

from photofeed.domain.models import SearchResult
from photofeed.domain.states import Content, EmptyResults, Error, Idle, Loading, ViewState
from photofeed.logging import logger
from photofeed.services.exceptions import FetchError

DEFAULT_DEBOUNCE_SECONDS = 0.5

StateListener = Callable[[ViewState], None]

_CLOSED = object()


class PhotoFetcher(Protocol):
    async def fetch(self, query: str) -> SearchResult: ...


class SearchPipeline:
    def __init__(
        self,
        fetcher: PhotoFetcher,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        self._fetcher = fetcher
        self._debounce_seconds = debounce_seconds
        self._state: ViewState = Idle()
        self._query = ""
        self._token = 0
        self._timer: asyncio.TimerHandle | None = None
        self._fetches: set[asyncio.Task[None]] = set()
        self._listeners: list[StateListener] = []
        self._watchers: set[asyncio.Queue] = set()
        self._closed = False

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def query(self) -> str:
        return self._query

    @property
    def in_flight(self) -> int:
        return len(self._fetches)

    def submit_query(self, query: str) -> None:
        """Record ``query`` and restart the debounce window.

        An empty query clears the search: the pending timer is dropped and the
        state goes straight to ``Idle``.
        """

        if self._closed:
            raise RuntimeError("Search pipeline is closed.")

        self._token += 1
        self._query = query
        self._cancel_timer()

        if not query:
            self._cancel_fetches()
            self._publish(Idle())
            return

        self._publish(Loading())
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(
            self._debounce_seconds, self._on_debounce_elapsed, self._token, query
        )

    def add_listener(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: StateListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    async def watch(self) -> AsyncIterator[ViewState]:
        """Yield the current state, then every state published after it."""

        if self._closed:
            yield self._state
            return

        queue: asyncio.Queue = asyncio.Queue()
        queue.put_nowait(self._state)
        self._watchers.add(queue)
        try:
            while True:
                item = await queue.get()
                if item is _CLOSED:
                    return
                yield item
        finally:
            self._watchers.discard(queue)

    async def wait_idle(self) -> None:
        """Wait until no debounce timer is armed and no fetch is running."""

        loop = asyncio.get_running_loop()
        while self._timer is not None or self._fetches:
            if self._fetches:
                await asyncio.gather(*list(self._fetches), return_exceptions=True)
            else:
                await asyncio.sleep(max(0.0, self._timer.when() - loop.time()))

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._cancel_timer()
        pending = list(self._fetches)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        for queue in list(self._watchers):
            queue.put_nowait(_CLOSED)
        logger.debug("search_pipeline_closed", cancelled_fetches=len(pending))

    async def __aenter__(self) -> "SearchPipeline":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _cancel_fetches(self) -> None:
        for task in list(self._fetches):
            task.cancel()

    def _on_debounce_elapsed(self, token: int, query: str) -> None:
        self._timer = None
        if token != self._token:
            return
        if not query:
            self._publish(Idle())
            return

        logger.debug("search_debounced", query=query, token=token)
        self._cancel_fetches()
        task = asyncio.get_running_loop().create_task(self._run_fetch(token, query))
        self._fetches.add(task)
        task.add_done_callback(self._fetches.discard)

    async def _run_fetch(self, token: int, query: str) -> None:
        try:
            result = await self._fetcher.fetch(query)
        except asyncio.CancelledError:
            logger.debug("search_fetch_cancelled", query=query, token=token)
            raise
        except FetchError as exc:
            outcome: ViewState = Error(str(exc) or None)
        except Exception as exc:
            logger.exception("search_fetch_failed", query=query)
            outcome = Error(str(exc) or None)
        else:
            outcome = EmptyResults() if result.is_empty else Content(result)

        if token != self._token:
            logger.info(
                "search_result_discarded",
                query=query,
                token=token,
                latest_token=self._token,
            )
            return
        self._publish(outcome)

    def _publish(self, state: ViewState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("search_listener_failed", state=type(state).__name__)
        for queue in self._watchers:
            queue.put_nowait(state)


__all__ = ["DEFAULT_DEBOUNCE_SECONDS", "PhotoFetcher", "SearchPipeline", "StateListener"]
