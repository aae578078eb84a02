"""Construct format loaders from their names."""

from configdata.api import DEFAULT_FORMAT_LOADER_NAMES
from configdata.utils.factory import instantiate, module_dict

from . import properties_loader, yaml_loader

# Build a dictionary of available format loaders
FORMAT_DICT = {}
for module in [properties_loader, yaml_loader]:
    FORMAT_DICT.update(**module_dict(module))

__all__ = ["format_loader_factory", "default_format_loaders"]


def format_loader_factory(cfg):
    """Instantiates a format loader from a configuration block or a name.

    Parameters
    ----------
    cfg : Union[str, dict]
        Format loader name or configuration dictionary

    Returns
    -------
    FormatLoaderBase
        Initialized format loader
    """
    return instantiate(FORMAT_DICT, cfg)


def default_format_loaders(names=DEFAULT_FORMAT_LOADER_NAMES):
    """Instantiates the format loaders, in registration order.

    Parameters
    ----------
    names : List[Union[str, dict]], optional
        Format loader names (or configuration blocks), in registration order

    Returns
    -------
    Tuple[FormatLoaderBase]
        Initialized format loaders
    """
    return tuple(format_loader_factory(name) for name in names)
