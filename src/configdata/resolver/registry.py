"""Manages the ordered collection of location resolvers."""

from typing import Iterable, List, Optional, Tuple

from configdata.errors import UnsupportedConfigDataLocationError
from configdata.location import ConfigDataLocation
from configdata.resource import ConfigDataResolutionResult
from configdata.utils.logger import logger

from .base import ConfigDataLocationResolverBase, ConfigDataLocationResolverContext
from .standard import StandardConfigDataLocationResolver

__all__ = ["ConfigDataLocationResolvers"]


class ConfigDataLocationResolvers:
    """Dispatches locations to the first resolver which accepts them.

    The resolvers are provided already instantiated (see
    `configdata.resolver.factories`); this class never discovers them. The
    standard resolver accepts any location, so it is always moved to the end
    of the list to give every other resolver a chance first.

    Attributes
    ----------
    resolvers : Tuple[ConfigDataLocationResolverBase]
        Resolvers, in dispatch order
    """

    def __init__(self, resolvers: Iterable[ConfigDataLocationResolverBase]):
        """Initialize the registry.

        Parameters
        ----------
        resolvers : Iterable[ConfigDataLocationResolverBase]
            Resolvers, in bootstrap order
        """
        self._resolvers = self._reorder(resolvers)

    @staticmethod
    def _reorder(
        resolvers: Iterable[ConfigDataLocationResolverBase],
    ) -> Tuple[ConfigDataLocationResolverBase, ...]:
        """Move the standard resolver to the end, keep the others in order.

        Parameters
        ----------
        resolvers : Iterable[ConfigDataLocationResolverBase]
            Resolvers, in bootstrap order

        Returns
        -------
        Tuple[ConfigDataLocationResolverBase]
            Resolvers, in dispatch order
        """
        reordered = []
        standard = None
        for resolver in resolvers:
            if isinstance(resolver, StandardConfigDataLocationResolver):
                standard = resolver
            else:
                reordered.append(resolver)

        if standard is not None:
            reordered.append(standard)

        logger.debug(
            "Config data location resolvers: %s",
            [type(resolver).__name__ for resolver in reordered],
        )

        return tuple(reordered)

    @property
    def resolvers(self) -> Tuple[ConfigDataLocationResolverBase, ...]:
        """Resolvers, in dispatch order."""
        return self._resolvers

    def resolve(
        self,
        context: ConfigDataLocationResolverContext,
        location: Optional[ConfigDataLocation],
        profiles: Optional[Iterable[str]] = None,
    ) -> List[ConfigDataResolutionResult]:
        """Resolve a location with the first resolver which accepts it.

        Parameters
        ----------
        context : ConfigDataLocationResolverContext
            Resolution context
        location : ConfigDataLocation, optional
            Location to resolve, nothing is resolved if `None`
        profiles : Iterable[str], optional
            Accepted profiles. If `None`, the profile-specific pass is skipped

        Returns
        -------
        List[ConfigDataResolutionResult]
            Results of the default pass followed by those of the
            profile-specific pass
        """
        if location is None:
            return []

        for resolver in self._resolvers:
            if resolver.is_resolvable(context, location):
                return self._resolve_with(resolver, context, location, profiles)

        raise UnsupportedConfigDataLocationError(location)

    def _resolve_with(self, resolver, context, location, profiles):
        """Run both passes of a resolver and tag their results."""
        resolved = self._wrap(location, False, resolver.resolve(context, location))
        if profiles is None:
            return resolved

        profile_specific = self._wrap(
            location, True, resolver.resolve_profile_specific(context, location, profiles)
        )

        return resolved + profile_specific

    @staticmethod
    def _wrap(location, profile_specific, resources) -> List[ConfigDataResolutionResult]:
        """Tag each resource of a pass with its location and pass."""
        return [
            ConfigDataResolutionResult(location, resource, profile_specific)
            for resource in resources or []
        ]
