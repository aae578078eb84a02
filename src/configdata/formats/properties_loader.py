"""Format loader for `.properties` files and XML properties files."""

import xml.etree.ElementTree as ET
from typing import Dict, Iterator, List, Tuple

from .base import FormatLoaderBase, PropertySource

__all__ = ["PropertiesFormatLoader", "parse_properties", "parse_xml_properties"]

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def _logical_lines(text: str) -> Iterator[str]:
    """Join physical lines ending with an odd number of backslashes.

    Comment lines (`#` or `!`) and blank lines are dropped, leading
    whitespace of continuation lines is discarded.
    """
    buffer = None
    for line in text.splitlines():
        line = line.lstrip()
        if buffer is None and (not line or line[0] in "#!"):
            continue

        trailing = len(line) - len(line.rstrip("\\"))
        continued = trailing % 2 == 1
        if continued:
            line = line[:-1]

        buffer = line if buffer is None else buffer + line
        if not continued:
            yield buffer
            buffer = None

    if buffer is not None:
        yield buffer


def _unescape(text: str) -> str:
    """Resolve backslash escapes, including `\\uXXXX` sequences."""
    out = []
    i = 0
    while i < len(text):
        char = text[i]
        if char != "\\" or i + 1 == len(text):
            out.append(char)
            i += 1
            continue

        char = text[i + 1]
        if char == "u" and i + 6 <= len(text):
            out.append(chr(int(text[i + 2 : i + 6], 16)))
            i += 6
        else:
            out.append(_ESCAPES.get(char, char))
            i += 2

    return "".join(out)


def _split_entry(line: str) -> Tuple[str, str]:
    """Split a logical line into its raw key and raw value."""
    i = 0
    while i < len(line):
        char = line[i]
        if char == "\\":
            i += 2
            continue
        if char in "=: \t\f":
            break
        i += 1

    key = line[:i]
    rest = line[i:].lstrip(" \t\f")
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(" \t\f")

    return key, rest


def parse_properties(text: str) -> Dict[str, str]:
    """Parse the content of a `.properties` file.

    Parameters
    ----------
    text : str
        File content

    Returns
    -------
    Dict[str, str]
        Properties, in declaration order (later duplicates win)
    """
    result = {}
    for line in _logical_lines(text):
        key, value = _split_entry(line)
        result[_unescape(key)] = _unescape(value)

    return result


def parse_xml_properties(content: bytes) -> Dict[str, str]:
    """Parse an XML properties document.

    .. code-block:: xml

        <properties>
          <entry key="server.port">8080</entry>
        </properties>

    Parameters
    ----------
    content : bytes
        Document content

    Returns
    -------
    Dict[str, str]
        Properties, in declaration order
    """
    root = ET.fromstring(content)
    if root.tag != "properties":
        raise ValueError(f"Expected a <properties> root element, got <{root.tag}>")

    result = {}
    for entry in root.iter("entry"):
        key = entry.get("key")
        if key is None:
            raise ValueError("Every <entry> element must have a `key` attribute")
        result[key] = entry.text or ""

    return result


class PropertiesFormatLoader(FormatLoaderBase):
    """Loads `.properties` and XML properties files.

    `.properties` files are read as ISO-8859-1, other characters must be
    written as `\\uXXXX` escapes. XML files declare their own encoding.
    """

    name = "properties"
    file_extensions = ("properties", "xml")

    def load(self, name: str, resource) -> List[PropertySource]:
        """Parse a properties resource.

        Parameters
        ----------
        name : str
            Name given to the property source
        resource : Resource
            Resource to read

        Returns
        -------
        List[PropertySource]
            Single property source, or none if the file holds no property
        """
        content = resource.read_bytes()
        is_xml = resource.filename.lower().endswith(".xml")
        if is_xml or content.lstrip().startswith(b"<?xml"):
            properties = parse_xml_properties(content)
        else:
            properties = parse_properties(content.decode("latin-1"))

        if not properties:
            return []

        return [PropertySource(name, properties)]
