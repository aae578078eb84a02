"""Access to the backing resource store from resource location strings.

Resource locations are either single entries (`config/app.yaml`,
`file:/etc/app/`, `package:myapp/defaults.yaml`) or single-wildcard patterns
which expand over the immediate subdirectories of a file system directory
(`config/*/` for directories, `config/*/app.yaml` for files).
"""

import os
import posixpath
import re
from enum import Enum
from typing import List

from .api import FILE_URL_PREFIX, PACKAGE_URL_PREFIX, PATTERN_WILDCARD, URL_PREFIX_PATTERN
from .resource import FileSystemResource, PackageResource, Resource

__all__ = ["ResourceType", "LocationResourceLoader", "clean_path"]


class ResourceType(Enum):
    """Kind of resource a pattern should expand to."""

    FILE = "file"
    DIRECTORY = "directory"


def clean_path(path: str) -> str:
    """Normalize a resource path.

    Backslashes are turned into forward slashes and `.`/`..` segments are
    collapsed. A trailing separator is preserved, since it marks a directory.

    Parameters
    ----------
    path : str
        Path to normalize

    Returns
    -------
    str
        Normalized path
    """
    if not path:
        return path

    path = path.replace("\\", "/")
    trailing = path.endswith("/")
    cleaned = posixpath.normpath(path)
    if trailing and not cleaned.endswith("/"):
        cleaned += "/"

    return cleaned


class LocationResourceLoader:
    """Resolves resource locations against the backing store.

    The loader holds no state besides its configuration, so a single
    instance can be shared by every resolver.
    """

    def __init__(self, base_dir=None):
        """Initialize the loader.

        Parameters
        ----------
        base_dir : str, optional
            Directory against which relative file system paths are resolved.
            If not specified, the current working directory is used at
            lookup time.
        """
        self.base_dir = base_dir
        self._url_prefix = re.compile(URL_PREFIX_PATTERN)

    def is_pattern(self, location: str) -> bool:
        """Check whether a location contains a wildcard.

        Parameters
        ----------
        location : str
            Resource location

        Returns
        -------
        bool
            `True` if the location is a pattern
        """
        return location is not None and PATTERN_WILDCARD in location

    def is_supported(self, location: str) -> bool:
        """Check whether the scheme of a location can be read by this loader.

        Parameters
        ----------
        location : str
            Resource location

        Returns
        -------
        bool
            `True` for `file:`, `package:` and scheme-less locations
        """
        if location.startswith((FILE_URL_PREFIX, PACKAGE_URL_PREFIX)):
            return True

        return not self._url_prefix.match(location) or self._is_drive(location)

    def get_resource(self, location: str) -> Resource:
        """Get a single resource from a non-pattern location.

        Parameters
        ----------
        location : str
            Resource location, must not contain a wildcard

        Returns
        -------
        Resource
            Handle onto the resource (which may not exist)
        """
        if self.is_pattern(location):
            raise ValueError(f"Location '{location}' must not be a pattern")
        if not self.is_supported(location):
            raise ValueError(
                f"Location '{location}' uses an unsupported scheme, only "
                f"'{FILE_URL_PREFIX}' and '{PACKAGE_URL_PREFIX}' are supported"
            )

        if location.startswith(PACKAGE_URL_PREFIX):
            return self._get_package_resource(location[len(PACKAGE_URL_PREFIX) :])

        if location.startswith(FILE_URL_PREFIX):
            location = location[len(FILE_URL_PREFIX) :]
            if location.startswith("//"):
                location = location[2:]

        return FileSystemResource(self._file_path(clean_path(location)))

    def get_resources(self, location: str, resource_type: ResourceType) -> List[Resource]:
        """Get every resource matching a pattern location.

        Only the immediate subdirectories of the directory preceding the
        wildcard are visited. They are sorted by absolute path, and so are
        the files matched in each of them.

        Parameters
        ----------
        location : str
            Pattern location
        resource_type : ResourceType
            Whether the pattern selects directories or files

        Returns
        -------
        List[Resource]
            Existing matching resources
        """
        self._validate_pattern(location, resource_type)
        if location.startswith(FILE_URL_PREFIX):
            location = location[len(FILE_URL_PREFIX) :]

        directory_path = location[: location.index("*/")]
        file_name = location[location.rindex("/") + 1 :]
        directory = self.get_resource(directory_path or "./")
        if not directory.exists() or not directory.is_directory():
            return []

        root = directory.absolute_path
        subdirectories = sorted(
            os.path.join(root, name)
            for name in os.listdir(root)
            if not name.startswith("..") and os.path.isdir(os.path.join(root, name))
        )
        if resource_type is ResourceType.DIRECTORY:
            return [FileSystemResource(path + os.sep) for path in subdirectories]

        resources = []
        for subdirectory in subdirectories:
            path = os.path.join(subdirectory, file_name)
            if os.path.isfile(path):
                resources.append(FileSystemResource(path))

        return resources

    def _validate_pattern(self, location: str, resource_type: ResourceType) -> None:
        """Check that a pattern location has a supported shape.

        Parameters
        ----------
        location : str
            Pattern location
        resource_type : ResourceType
            Kind of resource the pattern selects
        """
        if not self.is_pattern(location):
            raise ValueError(f"Location '{location}' must be a pattern")
        if location.startswith(PACKAGE_URL_PREFIX):
            raise ValueError(f"Location '{location}' cannot use package wildcards")
        if location.count(PATTERN_WILDCARD) != 1:
            raise ValueError(f"Location '{location}' cannot contain multiple wildcards")

        if resource_type is ResourceType.DIRECTORY:
            directory_path = location
        else:
            directory_path = location[: location.rfind("/") + 1]
        if not directory_path.endswith("*/"):
            raise ValueError(f"Location '{location}' must end with '*/'")

    def _get_package_resource(self, location: str) -> PackageResource:
        """Split `pkg.name/some/path` into a package resource."""
        location = clean_path(location.lstrip("/"))
        package, _, path = location.partition("/")
        if not package or package == ".":
            raise ValueError(
                f"Package location '{PACKAGE_URL_PREFIX}{location}' must name a package"
            )

        return PackageResource(package, path)

    def _file_path(self, path: str) -> str:
        """Anchor a relative file system path to the base directory."""
        if self.base_dir is None or os.path.isabs(path):
            return path

        return os.path.join(self.base_dir, path)

    @staticmethod
    def _is_drive(location: str) -> bool:
        """Windows drive letters look like a one-letter scheme."""
        return len(location) > 1 and location[1] == ":" and location[0].isalpha()
