"""Construct location resolvers from their names.

This is the bootstrap step which turns the fixed list of resolver names into
resolver instances, once, before any location is resolved.
"""

from configdata.api import DEFAULT_RESOLVER_NAMES
from configdata.binder import Binder
from configdata.formats import default_format_loaders
from configdata.resource_loader import LocationResourceLoader
from configdata.utils.factory import instantiate, module_dict

from . import standard
from .registry import ConfigDataLocationResolvers

# Build a dictionary of available resolvers
RESOLVER_DICT = {}
for module in [standard]:
    RESOLVER_DICT.update(**module_dict(module))

__all__ = ["resolver_factory", "resolvers_factory"]


def resolver_factory(cfg, **collaborators):
    """Instantiates a resolver from a configuration block or a name.

    Parameters
    ----------
    cfg : Union[str, dict]
        Resolver name or configuration dictionary
    **collaborators : dict, optional
        Shared collaborators (`binder`, `format_loaders`, `resource_loader`)
        offered to the resolver, passed if its constructor accepts them

    Returns
    -------
    ConfigDataLocationResolverBase
        Initialized resolver
    """
    return instantiate(RESOLVER_DICT, cfg, **collaborators)


def resolvers_factory(
    names=DEFAULT_RESOLVER_NAMES,
    binder=None,
    format_loaders=None,
    resource_loader=None,
    resolver_dict=None,
):
    """Builds the resolver registry from an ordered list of resolver names.

    Parameters
    ----------
    names : List[Union[str, dict]], optional
        Resolver names (or configuration blocks), in bootstrap order
    binder : Binder, optional
        Bound configuration shared by the resolvers
    format_loaders : List[FormatLoaderBase], optional
        Format loaders shared by the resolvers, the default ones if not
        specified
    resource_loader : LocationResourceLoader, optional
        Backing store accessor shared by the resolvers
    resolver_dict : dict, optional
        Additional name to class mapping, for resolvers defined outside of
        this package

    Returns
    -------
    ConfigDataLocationResolvers
        Registry holding the instantiated resolvers
    """
    available = dict(RESOLVER_DICT)
    if resolver_dict is not None:
        available.update(resolver_dict)

    collaborators = {
        "binder": binder if binder is not None else Binder(),
        "format_loaders": (
            tuple(format_loaders)
            if format_loaders is not None
            else default_format_loaders()
        ),
        "resource_loader": resource_loader or LocationResourceLoader(),
    }

    resolvers = [instantiate(available, name, **collaborators) for name in names]

    return ConfigDataLocationResolvers(resolvers)
