"""Environment credential resolver."""

from __future__ import annotations

import os

from boardmirror.auth.base import ApiCredentials, CredentialResolver
from boardmirror.contracts.exceptions import AuthenticationError

KEY_VARIABLE = "TRELLO_API_KEY"
TOKEN_VARIABLE = "TRELLO_API_TOKEN"


class EnvCredentialResolver(CredentialResolver):
    async def resolve(self) -> ApiCredentials:
        key = (os.getenv(KEY_VARIABLE) or "").strip()
        token = (os.getenv(TOKEN_VARIABLE) or "").strip()
        missing = [name for name, value in ((KEY_VARIABLE, key), (TOKEN_VARIABLE, token)) if not value]
        if missing:
            raise AuthenticationError(f"{', '.join(missing)} not set or empty")
        return ApiCredentials(api_key=key, api_token=token)
