"""Candidate configuration data references.

A reference is the identity of one place where configuration data may live,
computed before the backing store is probed. References are collected in an
ordered set, so the same candidate reached twice is only probed once.
"""

from dataclasses import dataclass
from typing import Optional

from .api import PROFILE_SEPARATOR
from .location import ConfigDataLocation

__all__ = ["StandardConfigDataReference"]


@dataclass(frozen=True)
class StandardConfigDataReference:
    """Reference to a candidate configuration data resource.

    Attributes
    ----------
    config_data_location : ConfigDataLocation
        Location which produced the reference
    directory : str, optional
        Directory being scanned, `None` for an explicitly named file
    root : str
        Resource location without profile suffix and extension
    profile : str, optional
        Profile qualifying the resource, `None` for the default pass
    extension : str, optional
        File extension, `None` when the physical name carries none (hint)
    format_loader : FormatLoader
        Format loader able to parse the resource
    """

    config_data_location: ConfigDataLocation
    directory: Optional[str]
    root: str
    profile: Optional[str]
    extension: Optional[str]
    format_loader: object

    @property
    def resource_location(self) -> str:
        """Location of the resource in the backing store."""
        suffix = f"{PROFILE_SEPARATOR}{self.profile}" if self.profile else ""
        extension = f".{self.extension}" if self.extension is not None else ""

        return self.root + suffix + extension

    @property
    def is_skippable(self) -> bool:
        """Whether a missing resource for this reference is silently dropped.

        Guessed candidates (directory scans), profile-qualified candidates
        and candidates of optional locations are skippable. An explicitly
        named file of a mandatory location is not.
        """
        return (
            self.config_data_location.optional
            or self.directory is not None
            or self.profile is not None
        )

    @property
    def is_mandatory_directory(self) -> bool:
        """Whether the reference scans a directory which must exist."""
        return not self.config_data_location.optional and self.directory is not None

    def __str__(self) -> str:
        return self.resource_location
