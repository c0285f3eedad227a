"""Tests for TrelloClient - endpoints, auth params, retry and error mapping."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from boardmirror.contracts.exceptions import AuthenticationError, RemoteFetchError
from boardmirror.providers.trello.client import TrelloClient

_SLEEP_BACKOFF = "boardmirror.providers.trello.client.TrelloClient._sleep_backoff"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _client(handler: Callable[[httpx.Request], httpx.Response], *, max_retries: int = 2) -> TrelloClient:
    return TrelloClient(
        api_key="key-1",
        api_token="tok-1",
        base_url="https://trello.test/1/",
        max_retries=max_retries,
        transport=httpx.MockTransport(handler),
    )


def _responder(*responses: httpx.Response) -> tuple[Callable[[httpx.Request], httpx.Response], list[httpx.Request]]:
    seen: list[httpx.Request] = []
    queue = list(responses)

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return queue.pop(0) if len(queue) > 1 else queue[0]

    return handler, seen


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


class TestEndpoints:
    @pytest.mark.asyncio
    async def test_fetch_board_requests_lists_and_cards(self) -> None:
        handler, seen = _responder(
            httpx.Response(
                200,
                json={
                    "id": "b1",
                    "name": "Roadmap",
                    "closed": False,
                    "lists": [{"id": "L1", "name": "To Do", "closed": False}],
                    "cards": [{"id": "c1", "name": "Write docs", "idList": "L1", "due": None, "desc": ""}],
                },
            )
        )

        async with _client(handler) as client:
            board = await client.fetch_board("b1")

        request = seen[0]
        assert request.url.path == "/1/boards/b1"
        assert request.url.params["key"] == "key-1"
        assert request.url.params["token"] == "tok-1"
        assert request.url.params["lists"] == "open"
        assert request.url.params["cards"] == "visible"
        assert board.name == "Roadmap"
        assert [card.id for card in board.lists[0].cards] == ["c1"]

    @pytest.mark.asyncio
    async def test_fetch_lists_and_cards_paths(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/1/boards/b1/lists":
                return httpx.Response(200, json=[{"id": "L1", "name": "To Do", "closed": False, "idBoard": "b1"}])
            if request.url.path == "/1/lists/L1/cards":
                return httpx.Response(200, json=[{"id": "c1", "name": "x", "due": "2024-05-01", "closed": True}])
            return httpx.Response(404, text="not found")

        async with _client(handler) as client:
            lists = await client.fetch_lists("b1")
            cards = await client.fetch_cards("L1")

        assert [(item.id, item.name) for item in lists] == [("L1", "To Do")]
        assert (cards[0].due, cards[0].closed) == ("2024-05-01", True)

    @pytest.mark.asyncio
    async def test_requires_context_manager(self) -> None:
        handler, _ = _responder(httpx.Response(200, json=[]))

        with pytest.raises(RemoteFetchError, match="not initialized"):
            await _client(handler).fetch_lists("b1")


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------


class TestErrors:
    @pytest.mark.parametrize("status_code", [401, 403])
    @pytest.mark.asyncio
    async def test_rejected_credentials_raise_authentication_error(self, status_code: int) -> None:
        handler, seen = _responder(httpx.Response(status_code, text="invalid token"))

        async with _client(handler) as client:
            with pytest.raises(AuthenticationError) as exc_info:
                await client.fetch_lists("b1")

        assert exc_info.value.status_code == status_code
        assert len(seen) == 1

    @pytest.mark.asyncio
    async def test_not_found_raises_remote_fetch_error(self) -> None:
        handler, _ = _responder(httpx.Response(404, text="board not found"))

        async with _client(handler) as client:
            with pytest.raises(RemoteFetchError) as exc_info:
                await client.fetch_board("missing")

        assert exc_info.value.status_code == 404
        assert not isinstance(exc_info.value, AuthenticationError)

    @pytest.mark.asyncio
    async def test_invalid_json_raises_remote_fetch_error(self) -> None:
        handler, _ = _responder(httpx.Response(200, text="<html>"))

        async with _client(handler) as client:
            with pytest.raises(RemoteFetchError, match="invalid JSON"):
                await client.fetch_cards("L1")

    @pytest.mark.asyncio
    async def test_unexpected_shape_raises_remote_fetch_error(self) -> None:
        handler, _ = _responder(httpx.Response(200, json={"id": "L1"}))

        async with _client(handler) as client:
            with pytest.raises(RemoteFetchError, match="Malformed"):
                await client.fetch_cards("L1")


# ---------------------------------------------------------------------------
# Retry
# ---------------------------------------------------------------------------


class TestRetry:
    @pytest.mark.asyncio
    @patch(_SLEEP_BACKOFF, new_callable=AsyncMock)
    async def test_retries_retryable_status_then_succeeds(self, mock_backoff: AsyncMock) -> None:
        handler, seen = _responder(
            httpx.Response(503, text="busy"),
            httpx.Response(429, headers={"Retry-After": "0"}),
            httpx.Response(200, json=[]),
        )

        async with _client(handler) as client:
            assert await client.fetch_cards("L1") == []

        assert len(seen) == 3
        assert mock_backoff.await_count == 2
        mock_backoff.assert_any_await(0, "/lists/L1/cards")
        mock_backoff.assert_any_await(1, "/lists/L1/cards")

    @pytest.mark.asyncio
    @patch(_SLEEP_BACKOFF, new_callable=AsyncMock)
    async def test_gives_up_after_max_retries(self, mock_backoff: AsyncMock) -> None:
        handler, seen = _responder(httpx.Response(502, text="bad gateway"))

        async with _client(handler, max_retries=1) as client:
            with pytest.raises(RemoteFetchError) as exc_info:
                await client.fetch_cards("L1")

        assert exc_info.value.status_code == 502
        assert len(seen) == 2
        assert mock_backoff.await_count == 1

    @pytest.mark.asyncio
    @patch(_SLEEP_BACKOFF, new_callable=AsyncMock)
    async def test_transport_errors_are_retried_then_wrapped(self, mock_backoff: AsyncMock) -> None:
        calls = {"count": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["count"] += 1
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler, max_retries=2) as client:
            with pytest.raises(RemoteFetchError, match="connection refused"):
                await client.fetch_lists("b1")

        assert calls["count"] == 3
        assert mock_backoff.await_count == 2

    @pytest.mark.asyncio
    @patch(_SLEEP_BACKOFF, new_callable=AsyncMock)
    async def test_client_errors_are_not_retried(self, mock_backoff: AsyncMock) -> None:
        handler, seen = _responder(httpx.Response(400, text="bad request"))

        async with _client(handler) as client:
            with pytest.raises(RemoteFetchError):
                await client.fetch_lists("b1")

        assert len(seen) == 1
        mock_backoff.assert_not_awaited()

    @pytest.mark.parametrize(
        ("header", "expected"),
        [(None, 0.0), ("3", 3.0), ("1.5", 1.5), ("-2", 0.0), ("Wed, 21 Oct 2015 07:28:00 GMT", 0.0)],
    )
    def test_parse_retry_after(self, header: str | None, expected: float) -> None:
        headers = {"Retry-After": header} if header is not None else {}

        assert TrelloClient._parse_retry_after(httpx.Response(429, headers=headers)) == expected
