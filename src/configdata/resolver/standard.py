"""Standard location resolver.

This resolver accepts any location. It expands each physical location into
candidate references and probes the backing store for each of them:

- A location ending with a separator is a directory. Every configured base
  name is combined with every extension of every format loader, e.g. with
  the default loaders, `config/` yields (for the name `application`)::

      config/application.yaml
      config/application.yml
      config/application.xml
      config/application.properties

  Missing candidates are silently skipped. If none of them exist but the
  directory does, a single empty directory placeholder is returned instead.
- Any other location is a file. Its extension must be recognized by a format
  loader, unless an extension hint is attached (`config/app[.yaml]`, the
  physical file being `config/app`).
- A single `*` expands over the immediate subdirectories of a directory
  (`config/*/`, `config/*/app.yaml`).

Locations may be prefixed with `resource:`. Relative locations found while
resolving imports nested in another resource are relative to that resource.
"""

import os
import re
from contextlib import contextmanager
from typing import Iterable, List, Optional, Tuple

from configdata.api import (
    CONFIG_NAME_PROPERTY,
    DEFAULT_CONFIG_NAMES,
    EXTENSION_HINT_PATTERN,
    LOWEST_PRECEDENCE,
    PATTERN_WILDCARD,
    RESOURCE_PREFIX,
    URL_PREFIX_PATTERN,
)
from configdata.binder import Binder
from configdata.errors import (
    ConfigDataError,
    ConfigDataLocationNotFoundError,
    ConfigDataResolutionError,
    InvalidConfigDataPropertyError,
    UnknownFileExtensionError,
)
from configdata.formats import default_format_loaders
from configdata.location import ConfigDataLocation
from configdata.reference import StandardConfigDataReference
from configdata.resource import PackageResource, StandardConfigDataResource
from configdata.resource_loader import LocationResourceLoader, ResourceType
from configdata.utils.logger import logger
from configdata.utils.ordered_set import OrderedSet, reversed_precedence

from .base import ConfigDataLocationResolverBase, ConfigDataLocationResolverContext

__all__ = ["StandardConfigDataLocationResolver"]


@contextmanager
def wrap_resolution_errors(location: ConfigDataLocation):
    """Re-raise unexpected errors as resolution errors naming the location.

    Errors of the `ConfigDataError` hierarchy are propagated unchanged.

    Parameters
    ----------
    location : ConfigDataLocation
        Location being resolved
    """
    try:
        yield

    except ConfigDataError:
        raise

    except Exception as err:
        raise ConfigDataResolutionError(location) from err


class StandardConfigDataLocationResolver(ConfigDataLocationResolverBase):
    """Resolver for directory, file and pattern locations.

    Attributes
    ----------
    config_names : Tuple[str]
        Base names probed in scanned directories
    format_loaders : Tuple[FormatLoaderBase]
        Format loaders, in registration order
    resource_loader : LocationResourceLoader
        Accessor to the backing resource store
    """

    name = "standard"
    order = LOWEST_PRECEDENCE

    def __init__(self, binder=None, format_loaders=None, resource_loader=None):
        """Initialize the resolver.

        Parameters
        ----------
        binder : Binder, optional
            Bound configuration, provides the `config.name` base names
        format_loaders : List[FormatLoaderBase], optional
            Format loaders in registration order, the default ones if not
            specified
        resource_loader : LocationResourceLoader, optional
            Accessor to the backing store, a file system one if not specified
        """
        if format_loaders is None:
            format_loaders = default_format_loaders()

        self.format_loaders = tuple(format_loaders)
        self.config_names = self._get_config_names(binder or Binder())
        self.resource_loader = resource_loader or LocationResourceLoader()

        self._url_prefix = re.compile(URL_PREFIX_PATTERN)
        self._extension_hint = re.compile(EXTENSION_HINT_PATTERN)

        logger.debug(
            "Standard resolver probing names %s with format loaders %s",
            list(self.config_names),
            [loader.name or type(loader).__name__ for loader in self.format_loaders],
        )

    @staticmethod
    def _get_config_names(binder: Binder) -> Tuple[str, ...]:
        """Bind the base names, rejecting wildcards.

        Parameters
        ----------
        binder : Binder
            Bound configuration

        Returns
        -------
        Tuple[str]
            Configured base names, or the default ones
        """
        names = binder.bind_list(CONFIG_NAME_PROPERTY)
        if names is None:
            names = DEFAULT_CONFIG_NAMES

        for name in names:
            if PATTERN_WILDCARD in name:
                raise InvalidConfigDataPropertyError(
                    CONFIG_NAME_PROPERTY,
                    name,
                    f"Config name '{name}' cannot contain '{PATTERN_WILDCARD}'",
                )

        return tuple(names)

    def is_resolvable(self, context, location) -> bool:
        """Accept any location."""
        return True

    def resolve(
        self, context: ConfigDataLocationResolverContext, location: ConfigDataLocation
    ) -> List[StandardConfigDataResource]:
        """Resolve the resources of a location, without profile.

        Parameters
        ----------
        context : ConfigDataLocationResolverContext
            Resolution context
        location : ConfigDataLocation
            Location to resolve

        Returns
        -------
        List[StandardConfigDataResource]
            Resolved resources, in precedence order
        """
        targets = [(sub, None) for sub in location.split()]

        return self._resolve(self._get_reference_groups(context, targets))

    def resolve_profile_specific(
        self,
        context: ConfigDataLocationResolverContext,
        location: ConfigDataLocation,
        profiles: Iterable[str],
    ) -> List[StandardConfigDataResource]:
        """Resolve the profile-specific resources of a location.

        All the sub-locations of a profile are visited before moving on to
        the next profile.

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
        List[StandardConfigDataResource]
            Resolved resources, in precedence order
        """
        subs = location.split()
        targets = [(sub, profile) for profile in profiles for sub in subs]

        return self._resolve(self._get_reference_groups(context, targets))

    def _get_reference_groups(
        self, context, targets: List[Tuple[ConfigDataLocation, Optional[str]]]
    ) -> List[OrderedSet]:
        """Build the references of each (sub-location, profile) target.

        A reference produced by an earlier target is not repeated in later
        ones.

        Parameters
        ----------
        context : ConfigDataLocationResolverContext
            Resolution context
        targets : List[Tuple[ConfigDataLocation, str]]
            Sub-locations and profiles, in resolution order

        Returns
        -------
        List[OrderedSet]
            One set of references per target
        """
        seen = OrderedSet()
        groups = []
        for location, profile in targets:
            references = self._get_references(context, location, profile)
            groups.append(OrderedSet(r for r in references if seen.add(r)))

        return groups

    def _get_references(
        self, context, location: ConfigDataLocation, profile: Optional[str]
    ) -> OrderedSet:
        """Build the references of a single physical location.

        Parameters
        ----------
        context : ConfigDataLocationResolverContext
            Resolution context
        location : ConfigDataLocation
            Physical location (no delimiter left)
        profile : str, optional
            Profile, `None` for the default pass

        Returns
        -------
        OrderedSet
            References, in precedence order
        """
        with wrap_resolution_errors(location):
            resource_location = self._get_resource_location(context, location)
            if self._is_directory(resource_location):
                return self._get_references_for_directory(
                    location, resource_location, profile
                )

            return self._get_references_for_file(location, resource_location, profile)

    def _get_resource_location(self, context, location: ConfigDataLocation) -> str:
        """Strip the resource prefix and anchor relative locations.

        Parameters
        ----------
        context : ConfigDataLocationResolverContext
            Resolution context, its parent anchors relative locations
        location : ConfigDataLocation
            Physical location

        Returns
        -------
        str
            Resource location
        """
        resource_location = location.get_non_prefixed_value(RESOURCE_PREFIX)
        is_absolute = resource_location.startswith("/") or bool(
            self._url_prefix.match(resource_location)
        )
        if is_absolute:
            return resource_location

        parent = getattr(context, "parent", None)
        if isinstance(parent, StandardConfigDataResource):
            parent_location = parent.reference.resource_location
            parent_directory = parent_location[: parent_location.rfind("/") + 1]
            return parent_directory + resource_location

        return resource_location

    @staticmethod
    def _is_directory(resource_location: str) -> bool:
        return resource_location.endswith("/") or resource_location.endswith(os.sep)

    def _get_references_for_directory(
        self, location: ConfigDataLocation, directory: str, profile: Optional[str]
    ) -> OrderedSet:
        """Build the candidate references of a scanned directory.

        Parameters
        ----------
        location : ConfigDataLocation
            Physical location
        directory : str
            Directory resource location, with trailing separator
        profile : str, optional
            Profile, `None` for the default pass

        Returns
        -------
        OrderedSet
            References, names in configured order
        """
        references = OrderedSet()
        for name in self.config_names:
            references.update(
                self._get_references_for_config_name(name, location, directory, profile)
            )

        return references

    def _get_references_for_config_name(
        self,
        name: str,
        location: ConfigDataLocation,
        directory: str,
        profile: Optional[str],
    ) -> OrderedSet:
        """Build the candidate references of one base name in a directory.

        The (format loader, extension) pairs are visited in reverse
        registration order: the loader registered last, and within a loader
        the extension listed last, is probed first and takes precedence.
        This ordering is relied upon downstream and must not be flipped.
        """
        candidates = (
            StandardConfigDataReference(
                location, directory, directory + name, profile, extension, loader
            )
            for loader in self.format_loaders
            for extension in loader.file_extensions
        )

        return reversed_precedence(candidates)

    def _get_references_for_file(
        self, location: ConfigDataLocation, file: str, profile: Optional[str]
    ) -> OrderedSet:
        """Build the single reference of an explicitly named file.

        Parameters
        ----------
        location : ConfigDataLocation
            Physical location
        file : str
            File resource location, possibly with an extension hint
        profile : str, optional
            Profile, `None` for the default pass

        Returns
        -------
        OrderedSet
            Single reference
        """
        hint = self._extension_hint.match(file)
        if hint is not None:
            file = hint.group(1) + hint.group(2)

        for loader in self.format_loaders:
            extension = self._get_loadable_file_extension(loader, file)
            if extension is not None:
                root = file[: -len(extension) - 1]
                reference = StandardConfigDataReference(
                    location,
                    None,
                    root,
                    profile,
                    extension if hint is None else None,
                    loader,
                )
                return OrderedSet([reference])

        raise UnknownFileExtensionError(location, file)

    @staticmethod
    def _get_loadable_file_extension(loader, file: str) -> Optional[str]:
        """Find the extension of a file among those a loader recognizes.

        The comparison ignores case, the extension returned is the one of
        the file itself.
        """
        lowered = file.lower()
        for extension in loader.file_extensions:
            if lowered.endswith("." + extension.lower()):
                return file[-len(extension) :]

        return None

    def _resolve(self, groups: List[OrderedSet]) -> List[StandardConfigDataResource]:
        """Probe the backing store for each group of references.

        A group which resolves nothing falls back on the directories it
        scanned, so that their existence remains visible.

        Parameters
        ----------
        groups : List[OrderedSet]
            References of each (sub-location, profile) target, in order

        Returns
        -------
        List[StandardConfigDataResource]
            Resolved resources
        """
        resolved = []
        placeholders = OrderedSet()
        for references in groups:
            found = []
            for reference in references:
                found.extend(self._resolve_reference(reference))

            if not found:
                empty = self._resolve_empty_directories(references)
                found = [resource for resource in empty if placeholders.add(resource)]

            resolved.extend(found)

        return resolved

    def _resolve_reference(
        self, reference: StandardConfigDataReference
    ) -> List[StandardConfigDataResource]:
        with wrap_resolution_errors(reference.config_data_location):
            if not self.resource_loader.is_pattern(reference.resource_location):
                return self._resolve_non_pattern(reference)

            return self._resolve_pattern(reference)

    def _resolve_non_pattern(
        self, reference: StandardConfigDataReference
    ) -> List[StandardConfigDataResource]:
        """Look up the single resource of a reference.

        A missing resource is dropped if the reference is skippable. It is
        otherwise returned as is, for the consumer to report it. Optional
        locations with a scheme the resource loader cannot read are treated
        as missing.
        """
        if self._is_unsupported_optional(reference):
            self._log_skipping_resource(reference)
            return []

        resource = self.resource_loader.get_resource(reference.resource_location)
        if not resource.exists() and reference.is_skippable:
            self._log_skipping_resource(reference)
            return []

        return [StandardConfigDataResource(reference, resource)]

    def _resolve_pattern(
        self, reference: StandardConfigDataReference
    ) -> List[StandardConfigDataResource]:
        """Expand a pattern reference against the backing store.

        Parameters
        ----------
        reference : StandardConfigDataReference
            Reference whose resource location contains a wildcard

        Returns
        -------
        List[StandardConfigDataResource]
            Matching resources
        """
        if self._is_unsupported_optional(reference):
            self._log_skipping_resource(reference)
            return []

        resources = self.resource_loader.get_resources(
            reference.resource_location, ResourceType.FILE
        )
        if not resources and not reference.is_skippable:
            location = reference.config_data_location
            raise ConfigDataLocationNotFoundError(
                location,
                f"Config data location '{location}' contains no files "
                f"matching '{reference.resource_location}'",
            )

        resolved = []
        for resource in resources:
            if not resource.exists() and reference.is_skippable:
                self._log_skipping_resource(reference)
            else:
                resolved.append(StandardConfigDataResource(reference, resource))

        return resolved

    def _resolve_empty_directories(self, references: OrderedSet) -> OrderedSet:
        """Build placeholders for the existing directories of a group.

        Parameters
        ----------
        references : OrderedSet
            References of one group

        Returns
        -------
        OrderedSet
            Empty directory placeholders, one per directory
        """
        empty = OrderedSet()
        for reference in references:
            if reference.directory is None:
                continue

            with wrap_resolution_errors(reference.config_data_location):
                if not self.resource_loader.is_pattern(reference.resource_location):
                    empty.update(self._resolve_non_pattern_empty_directories(reference))
                else:
                    empty.update(self._resolve_pattern_empty_directories(reference))

        return empty

    def _resolve_non_pattern_empty_directories(
        self, reference: StandardConfigDataReference
    ) -> List[StandardConfigDataResource]:
        if not self.resource_loader.is_supported(reference.directory):
            return []

        resource = self.resource_loader.get_resource(reference.directory)
        if isinstance(resource, PackageResource) or not resource.is_directory():
            return []

        return [StandardConfigDataResource(reference, resource, empty_directory=True)]

    def _resolve_pattern_empty_directories(
        self, reference: StandardConfigDataReference
    ) -> List[StandardConfigDataResource]:
        """Build placeholders for the subdirectories a pattern matches.

        Raises if a mandatory pattern location has no subdirectory at all.
        """
        if not self.resource_loader.is_supported(reference.directory):
            return []

        subdirectories = self.resource_loader.get_resources(
            reference.directory, ResourceType.DIRECTORY
        )
        location = reference.config_data_location
        if not location.optional and not subdirectories:
            raise ConfigDataLocationNotFoundError(
                location,
                f"Config data location '{location}' contains no subdirectories",
            )

        return [
            StandardConfigDataResource(reference, resource, empty_directory=True)
            for resource in subdirectories
            if resource.exists()
        ]

    def _is_unsupported_optional(self, reference: StandardConfigDataReference) -> bool:
        """Whether an optional reference uses a scheme the loader cannot read."""
        return reference.config_data_location.optional and not (
            self.resource_loader.is_supported(reference.resource_location)
        )

    def _log_skipping_resource(self, reference: StandardConfigDataReference) -> None:
        logger.debug("Skipping missing resource %s", reference)
