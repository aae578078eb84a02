"""Bound configuration properties consumed by the resolvers.

The binder exposes a flat property mapping (dotted keys) with an environment
variable fallback, e.g. `config.name` can be provided as::

    config:
      name: app,shared

or through the `CONFIGDATA_CONFIG_NAME` environment variable.
"""

import os
import re
from typing import Any, Mapping, Optional, Tuple

from .api import ENV_PREFIX
from .errors import ConfigDataResourceNotFoundError, UnknownFileExtensionError
from .formats import default_format_loaders, flatten
from .location import ConfigDataLocation
from .resource import FileSystemResource

__all__ = ["Binder", "env_key"]


def env_key(key: str) -> str:
    """Name of the environment variable which can provide a property.

    Parameters
    ----------
    key : str
        Dotted property key (e.g. `config.name`)

    Returns
    -------
    str
        Environment variable name (e.g. `CONFIGDATA_CONFIG_NAME`)
    """
    return ENV_PREFIX + re.sub(r"[.\-]", "_", key).upper()


class Binder:
    """Read-only view of configuration properties.

    Attributes
    ----------
    properties : Dict[str, Any]
        Flat mapping of dotted keys onto values
    """

    def __init__(self, properties: Optional[Mapping[str, Any]] = None, environ=None):
        """Initialize the binder.

        Parameters
        ----------
        properties : Mapping[str, Any], optional
            Nested or flat property mapping
        environ : Mapping[str, str], optional
            Environment to fall back on. If not specified, `os.environ` is
            used at lookup time. Pass an empty mapping to disable it.
        """
        self.properties = flatten(dict(properties)) if properties else {}
        self._environ = environ

    @classmethod
    def from_file(cls, path: str, format_loaders=None, environ=None):
        """Build a binder from a properties or YAML file.

        Parameters
        ----------
        path : str
            Path to the file, its extension selects the format loader
        format_loaders : List[FormatLoaderBase], optional
            Available format loaders, the default ones if not specified
        environ : Mapping[str, str], optional
            Environment to fall back on

        Returns
        -------
        Binder
            Binder over the merged documents of the file

        Raises
        ------
        UnknownFileExtensionError
            If no format loader recognizes the extension of the file
        ConfigDataResourceNotFoundError
            If the file does not exist
        """
        if format_loaders is None:
            format_loaders = default_format_loaders()

        extension = os.path.splitext(path)[-1].lstrip(".").lower()
        for loader in format_loaders:
            if extension in loader.file_extensions:
                break
        else:
            raise UnknownFileExtensionError(ConfigDataLocation.of(path), path)

        resource = FileSystemResource(path)
        ConfigDataResourceNotFoundError.throw_if_does_not_exist(resource)

        properties = {}
        for source in loader.load(path, resource):
            properties.update(source.properties)

        return cls(properties, environ=environ)

    @property
    def environ(self) -> Mapping[str, str]:
        """Environment used as a fallback."""
        return os.environ if self._environ is None else self._environ

    def get(self, key: str, default: Any = None) -> Any:
        """Fetch the raw value of a property.

        Parameters
        ----------
        key : str
            Dotted property key
        default : Any, optional
            Value returned if the property is not bound

        Returns
        -------
        Any
            Property value
        """
        if key in self.properties:
            return self.properties[key]

        items = self._indexed(key)
        if items:
            return items

        return self.environ.get(env_key(key), default)

    def bind_list(self, key: str) -> Optional[Tuple[str, ...]]:
        """Bind a property to a list of non-empty strings.

        Comma-separated strings are split, sequences are used item by item.

        Parameters
        ----------
        key : str
            Dotted property key

        Returns
        -------
        Tuple[str, ...], optional
            Bound values, `None` if the property is not bound
        """
        value = self.get(key)
        if value is None:
            return None

        if isinstance(value, str):
            value = value.split(",")
        elif not isinstance(value, (list, tuple)):
            value = [value]

        return tuple(str(v).strip() for v in value if str(v).strip())

    def _indexed(self, key: str) -> list:
        """Collect `key[0]`, `key[1]`, ... entries of a flattened sequence."""
        items = []
        while f"{key}[{len(items)}]" in self.properties:
            items.append(self.properties[f"{key}[{len(items)}]"])

        return items
