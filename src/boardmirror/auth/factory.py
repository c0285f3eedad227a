"""Credential resolver factory."""

from __future__ import annotations

from boardmirror.auth.base import CredentialResolver
from boardmirror.auth.resolvers.env import EnvCredentialResolver
from boardmirror.auth.resolvers.static import StaticCredentialResolver
from boardmirror.contracts.config import MirrorConfig
from boardmirror.contracts.exceptions import ConfigError

RESOLVERS: dict[str, type[CredentialResolver]] = {
    "env": EnvCredentialResolver,
    "token": StaticCredentialResolver,
}


def create_credential_resolver(config: MirrorConfig) -> CredentialResolver:
    auth_mode = config.auth
    if auth_mode not in RESOLVERS:
        raise ConfigError(f"Unknown auth mode: {auth_mode}")

    if auth_mode == "env":
        return EnvCredentialResolver()
    return StaticCredentialResolver(api_key=config.api_key or "", api_token=config.api_token or "")
