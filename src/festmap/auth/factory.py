"""Token resolver factory."""

from __future__ import annotations

from festmap.auth.base import TokenResolver
from festmap.auth.resolvers.env import EnvTokenResolver
from festmap.auth.resolvers.static import StaticTokenResolver
from festmap.contracts.config import FestMapConfig
from festmap.contracts.exceptions import ConfigError

RESOLVERS: dict[str, type[TokenResolver]] = {
    "env": EnvTokenResolver,
    "token": StaticTokenResolver,
}


def create_token_resolver(config: FestMapConfig) -> TokenResolver:
    auth_mode = config.auth
    if auth_mode not in RESOLVERS:
        raise ConfigError(f"Unknown auth mode: {auth_mode}")

    if auth_mode == "env":
        return EnvTokenResolver()
    return StaticTokenResolver(token=config.token or "")
