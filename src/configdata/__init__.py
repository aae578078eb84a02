"""Configuration data location resolution.

This package turns configuration location specifiers into an ordered list of
configuration resources:

- Locations name a directory (`config/`), a file (`config/app.yaml`), a file
  with an extension hint (`config/app[.yaml]`) or a single-wildcard pattern
  (`config/*/`), optionally prefixed with `optional:` and `resource:`, and
  several of them can be packed together with `;`
- Directories are scanned for every configured base name and every
  extension of every format loader
- A profile-specific pass probes `<name>-<profile>.<ext>` candidates

Main Entry Point
----------------
resolvers_factory : Build the resolver registry used to resolve locations

Example
-------
>>> from configdata import ConfigDataLocation, resolvers_factory
>>> from configdata import ConfigDataLocationResolverContext
>>> resolvers = resolvers_factory()
>>> results = resolvers.resolve(
...     ConfigDataLocationResolverContext(),
...     ConfigDataLocation.of("optional:config/"),
...     ["dev"],
... )
"""

from .api import API_VERSION
from .binder import Binder
from .errors import (
    ConfigDataError,
    ConfigDataLocationNotFoundError,
    ConfigDataNotFoundError,
    ConfigDataResolutionError,
    ConfigDataResourceNotFoundError,
    InvalidConfigDataPropertyError,
    UnknownFileExtensionError,
    UnsupportedConfigDataLocationError,
)
from .load import load_resource, load_results
from .location import ConfigDataLocation, Profiles
from .reference import StandardConfigDataReference
from .resource import ConfigDataResolutionResult, StandardConfigDataResource
from .resource_loader import LocationResourceLoader, ResourceType
from .resolver import (
    ConfigDataLocationResolverBase,
    ConfigDataLocationResolverContext,
    ConfigDataLocationResolvers,
    StandardConfigDataLocationResolver,
    resolvers_factory,
)
from .version import __version__

__all__ = [
    "API_VERSION",
    "Binder",
    "ConfigDataError",
    "ConfigDataLocationNotFoundError",
    "ConfigDataNotFoundError",
    "ConfigDataResolutionError",
    "ConfigDataResourceNotFoundError",
    "InvalidConfigDataPropertyError",
    "UnknownFileExtensionError",
    "UnsupportedConfigDataLocationError",
    "ConfigDataLocation",
    "Profiles",
    "StandardConfigDataReference",
    "ConfigDataResolutionResult",
    "StandardConfigDataResource",
    "LocationResourceLoader",
    "ResourceType",
    "ConfigDataLocationResolverBase",
    "ConfigDataLocationResolverContext",
    "ConfigDataLocationResolvers",
    "StandardConfigDataLocationResolver",
    "load_resource",
    "load_results",
    "resolvers_factory",
    "__version__",
]
