"""Trello REST client used by the resync engine."""

from __future__ import annotations

import asyncio
import logging
import random
from types import TracebackType
from typing import Any

import httpx

from boardmirror.contracts.config import DEFAULT_BASE_URL
from boardmirror.contracts.exceptions import AuthenticationError, RemoteFetchError
from boardmirror.contracts.remote import RemoteBoard, RemoteCard, RemoteClient, RemoteList
from boardmirror.providers.trello.mapper import parse_board, parse_cards, parse_lists

logger = logging.getLogger(__name__)

# Status codes considered transient and eligible for automatic retry.
_RETRYABLE_STATUS_CODES = frozenset({429, 502, 503, 504})


class TrelloClient(RemoteClient):
    """Async read-only Trello client.

    Credentials travel as ``key``/``token`` query parameters. Transport
    errors, 429 and 502/503/504 responses are retried with exponential
    backoff and jitter up to *max_retries* times; every request is bounded by
    *timeout_seconds*.
    """

    def __init__(
        self,
        *,
        api_key: str,
        api_token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 30.0,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._api_token = api_token
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._max_retries = max_retries
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> TrelloClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                params={"key": self._api_key, "token": self._api_token},
                headers={"Accept": "application/json"},
                limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
                timeout=httpx.Timeout(self._timeout_seconds),
                transport=self._transport,
            )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch_board(self, board_id: str) -> RemoteBoard:
        payload = await self._get_json(f"/boards/{board_id}", {"lists": "open", "cards": "visible"})
        return parse_board(payload)

    async def fetch_lists(self, board_id: str) -> list[RemoteList]:
        payload = await self._get_json(f"/boards/{board_id}/lists")
        return parse_lists(payload)

    async def fetch_cards(self, list_id: str) -> list[RemoteCard]:
        payload = await self._get_json(f"/lists/{list_id}/cards")
        return parse_cards(payload)

    async def _get_json(self, path: str, params: dict[str, str] | None = None) -> Any:
        if self._client is None:
            raise RemoteFetchError("Trello client is not initialized. Use 'async with'.")

        response = await self._get_with_retry(path, params or {})
        if response.status_code in {401, 403}:
            raise AuthenticationError(
                f"Trello rejected the credentials for GET {path} ({response.status_code})",
                status_code=response.status_code,
            )
        if not response.is_success:
            raise RemoteFetchError(
                f"GET {path} failed with status {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise RemoteFetchError(f"GET {path} returned invalid JSON", status_code=response.status_code) from exc

    async def _get_with_retry(self, path: str, params: dict[str, str]) -> httpx.Response:
        assert self._client is not None
        for attempt in range(self._max_retries + 1):
            logger.debug("GET %s (attempt %d)", path, attempt + 1)
            try:
                response = await self._client.get(path, params=params)
            except httpx.TransportError as exc:
                if attempt >= self._max_retries:
                    raise RemoteFetchError(f"GET {path} failed: {exc}") from exc
                await self._sleep_backoff(attempt, path)
                continue

            if response.status_code in _RETRYABLE_STATUS_CODES and attempt < self._max_retries:
                retry_after = self._parse_retry_after(response)
                if retry_after > 0:
                    await asyncio.sleep(retry_after)
                await self._sleep_backoff(attempt, path)
                continue
            return response

        raise RemoteFetchError(f"GET {path} failed after retries")  # pragma: no cover

    @staticmethod
    async def _sleep_backoff(attempt: int, path: str) -> None:
        seconds = min(4.0, float(2**attempt)) + random.uniform(0.0, 0.25)
        logger.warning("Retrying Trello request %s (attempt %d)", path, attempt + 1)
        await asyncio.sleep(seconds)

    @staticmethod
    def _parse_retry_after(response: httpx.Response) -> float:
        raw = response.headers.get("Retry-After")
        if raw is None:
            return 0.0
        try:
            return max(0.0, float(raw))
        except ValueError:
            return 0.0
