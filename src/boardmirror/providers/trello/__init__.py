"""Trello remote client."""

from boardmirror.providers.trello.client import TrelloClient

__all__ = ["TrelloClient"]
