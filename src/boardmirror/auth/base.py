"""Credential resolver interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel


class ApiCredentials(BaseModel):
    api_key: str
    api_token: str

    model_config = {"frozen": True}


class CredentialResolver(ABC):
    @abstractmethod
    async def resolve(self) -> ApiCredentials:
        """Resolve and return the remote API key and token."""
