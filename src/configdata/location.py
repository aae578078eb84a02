"""Configuration data locations and profile selections.

A location is the user-facing string which names a place to look for
configuration data, for instance::

    optional:file:./config/;config/*/
    resource:defaults/app[.yaml]

The `optional:` marker is parsed once, when the location is created, and is
carried as an explicit flag from then on.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Tuple

from .api import LOCATION_DELIMITER, OPTIONAL_PREFIX

__all__ = ["ConfigDataLocation", "Profiles"]


@dataclass(frozen=True)
class ConfigDataLocation:
    """Location from which configuration data can be resolved.

    Attributes
    ----------
    value : str
        Location text, without the `optional:` marker
    optional : bool
        If `True`, missing data at this location is never an error
    origin : str, optional
        Where the location was declared (property key, file, ...)
    """

    value: str
    optional: bool = False
    origin: Optional[str] = field(default=None, compare=False)

    @classmethod
    def of(cls, location: Optional[str], origin: Optional[str] = None):
        """Parse a location string.

        Parameters
        ----------
        location : str, optional
            Location text, possibly prefixed with `optional:`
        origin : str, optional
            Where the location was declared

        Returns
        -------
        ConfigDataLocation, optional
            Parsed location, `None` if the text is empty
        """
        if location is None:
            return None

        optional = location.startswith(OPTIONAL_PREFIX)
        value = location[len(OPTIONAL_PREFIX) :] if optional else location
        if not value.strip():
            return None

        return cls(value=value, optional=optional, origin=origin)

    def has_prefix(self, prefix: str) -> bool:
        """Check whether the location value starts with a given prefix."""
        return self.value.startswith(prefix)

    def get_non_prefixed_value(self, prefix: str) -> str:
        """Return the location value with a given prefix removed, if present.

        Parameters
        ----------
        prefix : str
            Prefix to remove (e.g. `resource:`)

        Returns
        -------
        str
            Location value without the prefix
        """
        if self.has_prefix(prefix):
            return self.value[len(prefix) :]

        return self.value

    def split(
        self, delimiter: str = LOCATION_DELIMITER
    ) -> Tuple["ConfigDataLocation", ...]:
        """Split the location into the physical locations it packs.

        Each piece is parsed on its own, so an `optional:` marker only
        applies to the piece which carries it. Blank pieces are dropped.

        Parameters
        ----------
        delimiter : str, default ';'
            Separator between physical locations

        Returns
        -------
        Tuple[ConfigDataLocation, ...]
            Sub-locations, in declaration order
        """
        pieces = str(self).split(delimiter)
        result = []
        for piece in pieces:
            location = ConfigDataLocation.of(piece, origin=self.origin)
            if location is not None:
                result.append(location)

        return tuple(result)

    def __str__(self) -> str:
        return (OPTIONAL_PREFIX if self.optional else "") + self.value


class Profiles:
    """Ordered selection of accepted profile names.

    Iterating yields each accepted profile once, in declaration order.
    """

    def __init__(self, names: Iterable[str] = ()):
        """Initialize the profile selection.

        Parameters
        ----------
        names : Iterable[str], optional
            Profile names, either as an iterable or as a comma-separated
            string. Blank names and duplicates are dropped.
        """
        if isinstance(names, str):
            names = names.split(",")

        accepted = []
        for name in names:
            name = name.strip()
            if name and name not in accepted:
                accepted.append(name)

        self._accepted = tuple(accepted)

    @property
    def accepted(self) -> Tuple[str, ...]:
        """Tuple of accepted profile names."""
        return self._accepted

    def __iter__(self) -> Iterator[str]:
        return iter(self._accepted)

    def __len__(self) -> int:
        return len(self._accepted)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Profiles):
            return self._accepted == other._accepted

        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._accepted)

    def __repr__(self) -> str:
        return f"Profiles({list(self._accepted)!r})"
