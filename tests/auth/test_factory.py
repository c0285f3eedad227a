import pytest

from boardmirror.auth.factory import create_credential_resolver
from boardmirror.auth.resolvers.env import EnvCredentialResolver
from boardmirror.auth.resolvers.static import StaticCredentialResolver
from boardmirror.contracts.config import MirrorConfig
from boardmirror.contracts.exceptions import ConfigError


def test_factory_creates_env_resolver_by_default() -> None:
    resolver = create_credential_resolver(MirrorConfig())

    assert isinstance(resolver, EnvCredentialResolver)


def test_factory_creates_static_resolver() -> None:
    resolver = create_credential_resolver(MirrorConfig(auth="token", api_key="key-1", api_token="tok-1"))

    assert isinstance(resolver, StaticCredentialResolver)


def test_factory_raises_for_unknown_auth_mode() -> None:
    config = MirrorConfig.model_construct(auth="oauth", api_key=None, api_token=None)

    with pytest.raises(ConfigError):
        create_credential_resolver(config)
