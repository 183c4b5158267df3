"""Debounce, latest-wins and state derivation of the search pipeline."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from factories import FakeFetcher, feed_entry, make_result
from photofeed.config import FeedSettings
from photofeed.domain.states import Content, EmptyResults, Error, Idle, Loading
from photofeed.services.exceptions import MalformedResponse, TransportError, Unauthorized
from photofeed.services.feed_client import FeedClient, create_http_client
from photofeed.services.search_pipeline import DEFAULT_DEBOUNCE_SECONDS, SearchPipeline

DEBOUNCE = 0.05


def _pipeline(fetcher, states: list | None = None) -> SearchPipeline:
    pipeline = SearchPipeline(fetcher, debounce_seconds=DEBOUNCE)
    if states is not None:
        pipeline.add_listener(states.append)
    return pipeline


def test_default_debounce_is_half_a_second():
    assert DEFAULT_DEBOUNCE_SECONDS == 0.5


@pytest.mark.asyncio
async def test_initial_state_is_idle(fetcher):
    pipeline = _pipeline(fetcher)
    assert pipeline.state == Idle()
    assert pipeline.query == ""
    await pipeline.close()


@pytest.mark.asyncio
async def test_submit_emits_loading_then_fetches_once_after_debounce():
    fetcher = FakeFetcher({"cats": make_result("one")})
    states: list = []
    pipeline = _pipeline(fetcher, states)

    pipeline.submit_query("cats")
    assert pipeline.state == Loading()
    assert fetcher.calls == []

    await pipeline.wait_idle()

    assert fetcher.calls == ["cats"]
    assert states == [Loading(), Content(make_result("one"))]
    await pipeline.close()


@pytest.mark.asyncio
async def test_rapid_queries_only_fetch_the_last():
    fetcher = FakeFetcher({"dogs": make_result("dog")})
    pipeline = _pipeline(fetcher)

    for query in ("c", "ca", "cat", "cats"):
        pipeline.submit_query(query)
        await asyncio.sleep(DEBOUNCE / 10)
    pipeline.submit_query("dogs")
    await pipeline.wait_idle()

    assert fetcher.calls == ["dogs"]
    assert pipeline.state == Content(make_result("dog"))
    await pipeline.close()


@pytest.mark.asyncio
async def test_each_submit_restarts_debounce_window():
    window = 0.08
    fetcher = FakeFetcher()
    pipeline = SearchPipeline(fetcher, debounce_seconds=window)

    # every gap is shorter than the window, the whole burst is much longer
    for query in ("a", "ab", "abc", "abcd", "abcde", "abcdef"):
        pipeline.submit_query(query)
        await asyncio.sleep(0.03)
    assert fetcher.calls == []
    assert pipeline.state == Loading()

    await pipeline.wait_idle()

    assert fetcher.calls == ["abcdef"]
    assert pipeline.state == EmptyResults()
    await pipeline.close()


@pytest.mark.asyncio
async def test_content_preserves_items_in_order():
    result = make_result("a", "b", "c")
    pipeline = _pipeline(FakeFetcher({"cats": result}))

    pipeline.submit_query("cats")
    await pipeline.wait_idle()

    assert isinstance(pipeline.state, Content)
    assert [item.title for item in pipeline.state.result.items] == ["a", "b", "c"]
    await pipeline.close()


@pytest.mark.asyncio
async def test_empty_fetch_maps_to_empty_results(fetcher):
    pipeline = _pipeline(fetcher)

    pipeline.submit_query("zzz_no_match")
    await pipeline.wait_idle()

    assert pipeline.state == EmptyResults()
    await pipeline.close()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error, message",
    [
        (Unauthorized(), "Unauthorized: Please check your API permissions."),
        (TransportError("timed out"), "Unexpected error: timed out"),
        (MalformedResponse(), None),
    ],
)
async def test_fetch_errors_map_to_error_state(error, message):
    pipeline = _pipeline(FakeFetcher({"cats": error}))

    pipeline.submit_query("cats")
    await pipeline.wait_idle()

    assert pipeline.state == Error(message)
    await pipeline.close()


@pytest.mark.asyncio
async def test_unexpected_exception_does_not_escape():
    pipeline = _pipeline(FakeFetcher({"cats": RuntimeError("boom")}))

    pipeline.submit_query("cats")
    await pipeline.wait_idle()

    assert pipeline.state == Error("boom")
    await pipeline.close()


@pytest.mark.asyncio
async def test_empty_query_goes_idle_immediately_without_fetch(fetcher):
    states: list = []
    pipeline = _pipeline(fetcher, states)

    pipeline.submit_query("")

    assert pipeline.state == Idle()
    await pipeline.wait_idle()
    assert fetcher.calls == []
    assert states == [Idle()]
    await pipeline.close()


@pytest.mark.asyncio
async def test_clearing_during_debounce_cancels_fetch(fetcher):
    pipeline = _pipeline(fetcher)

    pipeline.submit_query("cats")
    pipeline.submit_query("")
    await asyncio.sleep(DEBOUNCE * 2)

    assert fetcher.calls == []
    assert pipeline.state == Idle()
    await pipeline.close()


@pytest.mark.asyncio
async def test_clear_after_content_returns_to_idle():
    pipeline = _pipeline(FakeFetcher({"cats": make_result("one")}))

    pipeline.submit_query("cats")
    await pipeline.wait_idle()
    assert isinstance(pipeline.state, Content)

    pipeline.submit_query("")
    assert pipeline.state == Idle()
    await pipeline.close()


@pytest.mark.asyncio
async def test_newer_query_cancels_in_flight_fetch():
    fetcher = FakeFetcher({"cats": make_result("cat"), "dogs": make_result("dog")})
    fetcher.gate("cats")
    release_dogs = fetcher.gate("dogs")
    states: list = []
    pipeline = _pipeline(fetcher, states)

    pipeline.submit_query("cats")
    await fetcher.started["cats"].wait()
    assert pipeline.in_flight == 1

    pipeline.submit_query("dogs")
    await fetcher.started["dogs"].wait()
    await asyncio.sleep(0)

    assert pipeline.in_flight == 1
    assert fetcher.cancelled == ["cats"]

    release_dogs.set()
    await pipeline.wait_idle()

    assert fetcher.calls == ["cats", "dogs"]
    assert pipeline.state == Content(make_result("dog"))
    assert states == [Loading(), Loading(), Content(make_result("dog"))]
    await pipeline.close()


@pytest.mark.asyncio
async def test_stale_result_landing_during_debounce_is_discarded():
    fetcher = FakeFetcher({"cats": make_result("cat"), "dogs": make_result("dog")})
    release_cats = fetcher.gate("cats")
    pipeline = _pipeline(fetcher)

    pipeline.submit_query("cats")
    await fetcher.started["cats"].wait()
    pipeline.submit_query("dogs")
    release_cats.set()
    await asyncio.sleep(DEBOUNCE / 5)

    assert fetcher.calls == ["cats"]
    assert pipeline.state == Loading()

    await pipeline.wait_idle()
    assert fetcher.calls == ["cats", "dogs"]
    assert fetcher.cancelled == []
    assert pipeline.state == Content(make_result("dog"))
    await pipeline.close()


@pytest.mark.asyncio
async def test_clear_cancels_in_flight_fetch():
    fetcher = FakeFetcher({"cats": make_result("cat")})
    release = fetcher.gate("cats")
    pipeline = _pipeline(fetcher)

    pipeline.submit_query("cats")
    await fetcher.started["cats"].wait()
    pipeline.submit_query("")
    release.set()
    await pipeline.wait_idle()

    assert pipeline.state == Idle()
    assert fetcher.cancelled == ["cats"]
    await pipeline.close()


@pytest.mark.asyncio
async def test_watch_yields_current_then_published_states():
    pipeline = _pipeline(FakeFetcher({"cats": make_result("one")}))
    seen: list = []

    async def consume():
        async for state in pipeline.watch():
            seen.append(state)

    task = asyncio.create_task(consume())
    await asyncio.sleep(0)
    pipeline.submit_query("cats")
    await pipeline.wait_idle()
    await pipeline.close()
    await asyncio.wait_for(task, timeout=1)

    assert seen == [Idle(), Loading(), Content(make_result("one"))]


@pytest.mark.asyncio
async def test_close_cancels_in_flight_fetch():
    fetcher = FakeFetcher({"cats": make_result("cat")})
    fetcher.gate("cats")
    pipeline = _pipeline(fetcher)

    pipeline.submit_query("cats")
    await fetcher.started["cats"].wait()
    await pipeline.close()

    assert pipeline.in_flight == 0
    assert pipeline.state == Loading()
    with pytest.raises(RuntimeError):
        pipeline.submit_query("dogs")


@pytest.mark.asyncio
async def test_failing_listener_does_not_block_others(fetcher):
    pipeline = _pipeline(fetcher)
    states: list = []

    def broken(state):
        raise RuntimeError("listener failed")

    pipeline.add_listener(broken)
    pipeline.add_listener(states.append)
    pipeline.submit_query("")

    assert states == [Idle()]
    pipeline.remove_listener(broken)
    pipeline.remove_listener(broken)
    await pipeline.close()


@pytest.mark.asyncio
async def test_pipeline_with_feed_client_end_to_end():
    requested: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        tags = request.url.params["tags"]
        requested.append(tags)
        if tags == "cats":
            return httpx.Response(200, json={"items": [feed_entry("Cat")]})
        if tags == "private":
            return httpx.Response(401)
        return httpx.Response(200, json={"items": []})

    transport = httpx.MockTransport(handler)
    async with create_http_client(FeedSettings(), transport=transport) as http_client:
        async with SearchPipeline(FeedClient(http_client), debounce_seconds=DEBOUNCE) as pipeline:
            pipeline.submit_query("cats")
            await pipeline.wait_idle()
            assert isinstance(pipeline.state, Content)
            assert len(pipeline.state.result) == 1

            pipeline.submit_query("zzz_no_match")
            await pipeline.wait_idle()
            assert pipeline.state == EmptyResults()

            pipeline.submit_query("private")
            await pipeline.wait_idle()
            assert pipeline.state == Error("Unauthorized: Please check your API permissions.")

    assert requested == ["cats", "zzz_no_match", "private"]
