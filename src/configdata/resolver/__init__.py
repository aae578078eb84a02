"""Location resolvers and the registry which dispatches to them."""

from .base import ConfigDataLocationResolverBase, ConfigDataLocationResolverContext
from .factories import resolver_factory, resolvers_factory
from .registry import ConfigDataLocationResolvers
from .standard import StandardConfigDataLocationResolver

__all__ = [
    "ConfigDataLocationResolverBase",
    "ConfigDataLocationResolverContext",
    "ConfigDataLocationResolvers",
    "StandardConfigDataLocationResolver",
    "resolver_factory",
    "resolvers_factory",
]
