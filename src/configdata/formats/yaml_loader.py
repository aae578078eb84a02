"""Format loader for YAML files."""

from typing import List

import yaml

from .base import FormatLoaderBase, PropertySource, flatten

__all__ = ["YamlFormatLoader"]


class YamlFormatLoader(FormatLoaderBase):
    """Loads single or multi-document YAML files.

    Each non-empty document becomes its own property source, with nested
    blocks flattened into dotted keys.
    """

    name = "yaml"
    file_extensions = ("yml", "yaml")

    def load(self, name: str, resource) -> List[PropertySource]:
        """Parse a YAML resource.

        Parameters
        ----------
        name : str
            Name given to the property sources
        resource : Resource
            Resource to read

        Returns
        -------
        List[PropertySource]
            One property source per non-empty document
        """
        with resource.open() as stream:
            documents = [doc for doc in yaml.safe_load_all(stream) if doc]

        sources = []
        for i, document in enumerate(documents):
            if not isinstance(document, dict):
                raise ValueError(
                    f"YAML document #{i} of {resource} must be a mapping, "
                    f"got {type(document).__name__}"
                )

            source_name = name if len(documents) == 1 else f"{name} (document #{i})"
            sources.append(PropertySource(source_name, flatten(document)))

        return sources
