"""Contains the format loader base class.

Format loaders advertise the file extensions they recognize, which drives
candidate enumeration in the resolver, and parse resource content into flat
property sources for the downstream consumer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple

__all__ = ["PropertySource", "FormatLoaderBase", "flatten"]


@dataclass
class PropertySource:
    """Named, flat set of properties read from one document.

    Attributes
    ----------
    name : str
        Name of the source (resource description, document index)
    properties : Dict[str, Any]
        Flat mapping of dotted keys onto values
    """

    name: str
    properties: Dict[str, Any] = field(default_factory=dict)


def flatten(data: Any, prefix: str = "") -> Dict[str, Any]:
    """Flatten nested mappings and sequences into dotted keys.

    Nested mappings are joined with `.` and sequence items are indexed with
    `[i]`, e.g. `{"a": {"b": [1, 2]}}` becomes `{"a.b[0]": 1, "a.b[1]": 2}`.

    Parameters
    ----------
    data : Any
        Value to flatten
    prefix : str, optional
        Key under which `data` lives

    Returns
    -------
    Dict[str, Any]
        Flat mapping
    """
    result = {}
    if isinstance(data, Mapping):
        if not data and prefix:
            result[prefix] = ""
        for key, value in data.items():
            key = str(key)
            sub = f"{prefix}.{key}" if prefix else key
            result.update(flatten(value, sub))

    elif isinstance(data, (list, tuple)):
        if not data and prefix:
            result[prefix] = ""
        for i, value in enumerate(data):
            result.update(flatten(value, f"{prefix}[{i}]"))

    else:
        result[prefix] = data

    return result


class FormatLoaderBase:
    """Parent class of all format loaders.

    Attributes
    ----------
    name : str
        Name of the format loader, as requested in the configuration
    file_extensions : Tuple[str]
        Recognized file extensions, without the leading dot, in priority
        order
    """

    name = ""
    file_extensions: Tuple[str, ...] = ()

    def load(self, name: str, resource) -> List[PropertySource]:
        """Placeholder to be defined by the daughter class."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.file_extensions)})"
