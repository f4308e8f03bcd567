"""Token resolver implementations."""

from festmap.auth.resolvers.env import TOKEN_ENV_VAR, EnvTokenResolver
from festmap.auth.resolvers.static import StaticTokenResolver

__all__ = ["TOKEN_ENV_VAR", "EnvTokenResolver", "StaticTokenResolver"]
