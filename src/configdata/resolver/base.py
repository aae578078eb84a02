"""Contains the location resolver base class and the resolution context.

A resolver turns a `ConfigDataLocation` into resources. To add a custom
resolver, inherit from `ConfigDataLocationResolverBase`, give it a `name`,
list it in `__all__` of a module imported by `configdata.resolver.factories`
and add its name to the list of resolvers built at bootstrap.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from configdata.api import LOWEST_PRECEDENCE
from configdata.binder import Binder
from configdata.location import ConfigDataLocation

__all__ = ["ConfigDataLocationResolverContext", "ConfigDataLocationResolverBase"]


@dataclass(frozen=True)
class ConfigDataLocationResolverContext:
    """Context provided to resolvers for each resolution.

    Attributes
    ----------
    binder : Binder, optional
        Bound configuration available at the time of the resolution
    parent : object, optional
        Resource which declared the location being resolved (an import
        nested inside another configuration resource), if any
    """

    binder: Optional[Binder] = None
    parent: Optional[object] = None


class ConfigDataLocationResolverBase:
    """Parent class of all location resolvers.

    Attributes
    ----------
    name : str
        Name of the resolver, as listed in the bootstrap resolver names
    order : int
        Relative order of the resolver, lowest first (informative only: the
        registry keeps the bootstrap order, apart from moving the standard
        resolver last)
    """

    name = ""
    order = LOWEST_PRECEDENCE

    def is_resolvable(
        self, context: ConfigDataLocationResolverContext, location: ConfigDataLocation
    ) -> bool:
        """Placeholder to be defined by the daughter class."""
        raise NotImplementedError

    def resolve(
        self, context: ConfigDataLocationResolverContext, location: ConfigDataLocation
    ) -> List[object]:
        """Placeholder to be defined by the daughter class."""
        raise NotImplementedError

    def resolve_profile_specific(
        self,
        context: ConfigDataLocationResolverContext,
        location: ConfigDataLocation,
        profiles: Iterable[str],
    ) -> List[object]:
        """Resolve the profile-specific resources of a location.

        Resolvers which have no notion of profile keep this default.

        Parameters
        ----------
        context : ConfigDataLocationResolverContext
            Resolution context
        location : ConfigDataLocation
            Location to resolve
        profiles : Iterable[str]
            Accepted profile names, in order

        Returns
        -------
        List[object]
            Resolved resources
        """
        return []
