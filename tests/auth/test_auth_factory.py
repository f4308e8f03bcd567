import pytest

from festmap.auth.factory import create_token_resolver
from festmap.auth.resolvers.env import EnvTokenResolver
from festmap.auth.resolvers.static import StaticTokenResolver
from festmap.contracts.config import FestMapConfig, StoreConfig
from festmap.contracts.exceptions import ConfigError

_STORE = StoreConfig(owner="festival", repo="map-data")


def test_factory_creates_env_resolver() -> None:
    resolver = create_token_resolver(FestMapConfig(store=_STORE, auth="env"))

    assert isinstance(resolver, EnvTokenResolver)


def test_factory_creates_static_resolver() -> None:
    resolver = create_token_resolver(FestMapConfig(store=_STORE, auth="token", token="ghp_abc"))

    assert isinstance(resolver, StaticTokenResolver)
    assert resolver.token == "ghp_abc"


def test_factory_raises_for_unknown_auth_mode() -> None:
    config = FestMapConfig.model_construct(store=_STORE, auth="unsupported", token=None)

    with pytest.raises(ConfigError, match="Unknown auth mode"):
        create_token_resolver(config)
