"""Static credential resolver."""

from __future__ import annotations

from boardmirror.auth.base import ApiCredentials, CredentialResolver
from boardmirror.contracts.exceptions import AuthenticationError


class StaticCredentialResolver(CredentialResolver):
    def __init__(self, *, api_key: str, api_token: str) -> None:
        self._api_key = api_key
        self._api_token = api_token

    async def resolve(self) -> ApiCredentials:
        key = self._api_key.strip()
        token = self._api_token.strip()
        if not key or not token:
            raise AuthenticationError("Static api_key/api_token are empty")
        return ApiCredentials(api_key=key, api_token=token)
