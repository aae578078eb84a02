"""Handles onto the backing resource store and resolved configuration data.

Two layers are defined here:

- `Resource` and its implementations are plain handles onto something that
  may or may not exist in the backing store (a file system path or a file
  shipped inside an importable Python package);
- `StandardConfigDataResource` ties such a handle to the reference which
  produced it, and `ConfigDataResolutionResult` is what the resolver
  registry hands over to the downstream loader.
"""

import importlib.resources
import io
import os
from dataclasses import dataclass
from typing import BinaryIO, Optional

from .location import ConfigDataLocation

__all__ = [
    "Resource",
    "FileSystemResource",
    "PackageResource",
    "StandardConfigDataResource",
    "ConfigDataResolutionResult",
]


class Resource:
    """Base handle onto an entry of the backing resource store."""

    def exists(self) -> bool:
        """Placeholder to be defined by the daughter class."""
        raise NotImplementedError

    def is_directory(self) -> bool:
        """Placeholder to be defined by the daughter class."""
        raise NotImplementedError

    def open(self) -> BinaryIO:
        """Placeholder to be defined by the daughter class."""
        raise NotImplementedError

    @property
    def filename(self) -> str:
        """Placeholder to be defined by the daughter class."""
        raise NotImplementedError

    @property
    def description(self) -> str:
        """Placeholder to be defined by the daughter class."""
        raise NotImplementedError

    def read_bytes(self) -> bytes:
        """Read the full content of the resource.

        Returns
        -------
        bytes
            Resource content
        """
        with self.open() as stream:
            return stream.read()

    def __str__(self) -> str:
        return self.description


class FileSystemResource(Resource):
    """Resource backed by a path on the file system.

    Attributes
    ----------
    path : str
        Path to the file or directory, as provided
    """

    def __init__(self, path: str):
        """Initialize the handle.

        Parameters
        ----------
        path : str
            Path to the file or directory
        """
        self.path = path

    @property
    def absolute_path(self) -> str:
        """Normalized absolute path of the resource."""
        return os.path.abspath(self.path)

    def exists(self) -> bool:
        return os.path.exists(self.path)

    def is_directory(self) -> bool:
        return os.path.isdir(self.path)

    def open(self) -> BinaryIO:
        return open(self.path, "rb")

    @property
    def filename(self) -> str:
        return os.path.basename(os.path.normpath(self.path))

    @property
    def description(self) -> str:
        kind = "directory" if self.is_directory() else "file"
        return f"{kind} [{self.absolute_path}]"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FileSystemResource):
            return self.absolute_path == other.absolute_path

        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.absolute_path)

    def __repr__(self) -> str:
        return f"FileSystemResource({self.path!r})"


class PackageResource(Resource):
    """Resource shipped inside an importable Python package.

    Attributes
    ----------
    package : str
        Dotted name of the package which owns the resource
    path : str
        Path of the resource relative to the package directory
    """

    def __init__(self, package: str, path: str = ""):
        """Initialize the handle.

        Parameters
        ----------
        package : str
            Dotted name of the package
        path : str, optional
            Relative path inside the package, empty for the package itself
        """
        self.package = package
        self.path = path.strip("/")

    def _traversable(self):
        """Locate the resource inside the package, `None` if not importable."""
        try:
            root = importlib.resources.files(self.package)
        except ModuleNotFoundError:
            return None

        if not self.path:
            return root

        return root.joinpath(*self.path.split("/"))

    def exists(self) -> bool:
        entry = self._traversable()
        return entry is not None and (entry.is_file() or entry.is_dir())

    def is_directory(self) -> bool:
        entry = self._traversable()
        return entry is not None and entry.is_dir()

    def open(self) -> BinaryIO:
        entry = self._traversable()
        if entry is None or not entry.is_file():
            raise FileNotFoundError(self.description)

        return io.BytesIO(entry.read_bytes())

    @property
    def filename(self) -> str:
        return self.path.rsplit("/", 1)[-1] if self.path else self.package

    @property
    def description(self) -> str:
        return f"package resource [{self.package}/{self.path}]"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PackageResource):
            return (self.package, self.path) == (other.package, other.path)

        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.package, self.path))

    def __repr__(self) -> str:
        return f"PackageResource({self.package!r}, {self.path!r})"


class StandardConfigDataResource:
    """Configuration data resource produced by the standard resolver.

    Attributes
    ----------
    reference : StandardConfigDataReference
        Reference which produced this resource
    resource : Resource
        Handle onto the backing store
    empty_directory : bool
        `True` if this is a placeholder for an existing directory in which
        none of the candidate files exist
    """

    def __init__(self, reference, resource: Resource, empty_directory: bool = False):
        """Initialize the resource.

        Parameters
        ----------
        reference : StandardConfigDataReference
            Reference which produced this resource
        resource : Resource
            Handle onto the backing store
        empty_directory : bool, default False
            Whether this is an empty directory placeholder
        """
        assert reference is not None, "A reference must be provided."
        assert resource is not None, "A resource must be provided."
        self.reference = reference
        self.resource = resource
        self.empty_directory = empty_directory

    @property
    def profile(self) -> Optional[str]:
        """Profile of the reference which produced the resource, if any."""
        return self.reference.profile

    def exists(self) -> bool:
        """Whether the underlying resource exists in the backing store."""
        return self.resource.exists()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, StandardConfigDataResource):
            return (
                self.resource == other.resource
                and self.empty_directory == other.empty_directory
            )

        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.resource, self.empty_directory))

    def __str__(self) -> str:
        return str(self.resource)

    def __repr__(self) -> str:
        return (
            f"StandardConfigDataResource({self.reference}, {self.resource!r}, "
            f"empty_directory={self.empty_directory})"
        )


@dataclass(frozen=True)
class ConfigDataResolutionResult:
    """Result of resolving one location into one resource.

    Attributes
    ----------
    location : ConfigDataLocation
        Location which was resolved
    resource : StandardConfigDataResource
        Resolved resource
    profile_specific : bool
        `True` if the resource was produced by the profile-specific pass
    """

    location: ConfigDataLocation
    resource: object
    profile_specific: bool = False
