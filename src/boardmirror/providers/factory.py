"""Factory for the remote-service client."""

from __future__ import annotations

from boardmirror.auth import create_credential_resolver
from boardmirror.contracts.config import MirrorConfig
from boardmirror.contracts.remote import RemoteClient
from boardmirror.providers.trello.client import TrelloClient


async def create_remote_client(config: MirrorConfig) -> RemoteClient:
    """Resolve credentials for *config* and build an (unopened) remote client.

    The returned client is an async context manager::

        async with await create_remote_client(config) as client:
            board = await client.fetch_board(board_id)
    """
    credentials = await create_credential_resolver(config).resolve()
    return TrelloClient(
        api_key=credentials.api_key,
        api_token=credentials.api_token,
        base_url=config.base_url,
        timeout_seconds=config.timeout_seconds,
        max_retries=config.max_retries,
    )
