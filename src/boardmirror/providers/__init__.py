"""Remote client implementations and factory."""

from boardmirror.providers.factory import create_remote_client
from boardmirror.providers.trello import TrelloClient

__all__ = ["TrelloClient", "create_remote_client"]
