"""Configuration file format loaders.

Each loader declares the file extensions it recognizes. The order in which
loaders (and their extensions) are registered defines the resolution
precedence of candidates found by directory scans.
"""

from .base import FormatLoaderBase, PropertySource, flatten
from .factories import default_format_loaders, format_loader_factory
from .properties_loader import PropertiesFormatLoader
from .yaml_loader import YamlFormatLoader

__all__ = [
    "FormatLoaderBase",
    "PropertySource",
    "PropertiesFormatLoader",
    "YamlFormatLoader",
    "default_format_loaders",
    "format_loader_factory",
    "flatten",
]
