"""Store authentication."""

from festmap.auth.base import TokenResolver
from festmap.auth.factory import create_token_resolver
from festmap.auth.resolvers import EnvTokenResolver, StaticTokenResolver

__all__ = ["EnvTokenResolver", "StaticTokenResolver", "TokenResolver", "create_token_resolver"]
