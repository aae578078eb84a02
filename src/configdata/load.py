"""Read resolved configuration data resources.

This is the minimal consumer of resolution results: it reads each resource
with the format loader of the reference which produced it. Merging the
property sources into an effective configuration is left to the caller.
"""

from typing import Iterable, List

from .errors import ConfigDataResourceNotFoundError
from .formats.base import PropertySource
from .resource import ConfigDataResolutionResult, StandardConfigDataResource

__all__ = ["load_resource", "load_results"]


def load_resource(resource: StandardConfigDataResource, location=None) -> List[PropertySource]:
    """Read the property sources of one resolved resource.

    Parameters
    ----------
    resource : StandardConfigDataResource
        Resolved resource
    location : ConfigDataLocation, optional
        Location the resource was resolved from, for error reporting

    Returns
    -------
    List[PropertySource]
        Property sources, empty for an empty directory placeholder

    Raises
    ------
    ConfigDataResourceNotFoundError
        If the resource does not exist
    """
    if resource.empty_directory:
        return []

    ConfigDataResourceNotFoundError.throw_if_does_not_exist(resource, location)

    reference = resource.reference
    name = f"Config resource '{resource}' via location '{reference.config_data_location}'"

    return reference.format_loader.load(name, resource.resource)


def load_results(results: Iterable[ConfigDataResolutionResult]) -> List[PropertySource]:
    """Read the property sources of a sequence of resolution results.

    Parameters
    ----------
    results : Iterable[ConfigDataResolutionResult]
        Resolution results, in precedence order

    Returns
    -------
    List[PropertySource]
        Property sources, in the order of the results
    """
    sources = []
    for result in results:
        sources.extend(load_resource(result.resource, result.location))

    return sources
