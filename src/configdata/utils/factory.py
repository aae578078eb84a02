"""Contains functions needed to instantiate a class from a dictionary.

This allows to generically convert a configuration block (or a bare name)
into an instantiated class with all the appropriate checks that the class
exists and is provided with appropriate arguments.
"""

import inspect
from copy import deepcopy
from warnings import warn

from .logger import logger


def module_dict(module, class_name=None, pattern=None):
    """Converts module into a dictionary which maps class names onto classes.

    Parameters
    ----------
    module : module
        Module from which to fetch the classes
    class_name : str, optional
        If specified, only allow aliases that match it
    pattern : str, optional
        If specified, looks for a specific pattern in the class name

    Returns
    -------
    dict
        Dictionary which maps acceptable class names to classes themselves
    """
    # Loop over classes/functions in the module
    module_dict = {}
    cls_names = getattr(module, "__all__", dir(module))
    for cls_name in cls_names:
        # Skip private objects
        if cls_name[0] == "_":
            continue

        # If a pattern is specified, check for it in the class name
        cls = getattr(module, cls_name)
        if not inspect.isclass(cls):
            continue
        if pattern is not None and pattern not in cls.__name__:
            continue

        # Only consider classes which belong to the module of interest
        if module.__name__ in cls.__module__:

            # Store the class name as an option to fetch it
            module_dict[cls_name] = cls

            # If a name is provided, add it to the allowed options
            if getattr(cls, "name", None):
                module_dict[cls.name] = cls

            # If aliases are specified, it is allowed but should be avoided
            for al in getattr(cls, "aliases", ()):
                if class_name is not None and class_name == al:
                    warn(
                        f"This name ({al}) is deprecated. Use "
                        f"{cls.name} instead.",
                        DeprecationWarning,
                    )
                module_dict[al] = cls

    return module_dict


def accepted_kwargs(cls, **kwargs):
    """Restricts a set of keyword arguments to those a class constructor takes.

    Bootstrap code offers the same set of collaborators to every class it
    builds; each class only receives the ones it declares.

    Parameters
    ----------
    cls : type
        Class to be instantiated
    **kwargs : dict
        Available keyword arguments

    Returns
    -------
    dict
        Keyword arguments accepted by the class constructor
    """
    params = inspect.signature(cls.__init__).parameters
    if any(p.kind == p.VAR_KEYWORD for p in params.values()):
        return dict(kwargs)

    return {k: v for k, v in kwargs.items() if k in params}


def instantiate(module_dict, cfg, alt_name=None, **kwargs):
    """Instantiates a class based on a configuration dictionary and a list of
    possible classes to chose from.

    This function supports two configuration structures (parsed as a
    dictionary):

    .. code-block:: yaml

        resolver:
          name: resolver_name
          kwarg_1: value_1
          ...

    or

    .. code-block:: yaml

        resolver:
          name: resolver_name
          kwargs:
            kwarg_1: value_1
            ...

    A bare string is interpreted as a class name with no parameters.

    Parameters
    ----------
    module_dict : dict
        Dictionary which maps a class name onto an object class.
    cfg : Union[str, dict]
        Configuration dictionary or class name
    alt_name : str, optional
        Key under which the class name can be specfied, beside 'name' itself
    **kwargs : dict, optional
        Additional parameters to pass to the class, if it accepts them

    Returns
    -------
    object
        Instantiated object
    """
    # If the configuration is a string, assume it is a class name with no
    # parameters to be passed to it
    if isinstance(cfg, str):
        cfg = {"name": cfg}

    # Get the name of the class, check that it exists
    config = deepcopy(cfg)
    if alt_name is not None and alt_name in config:
        name = alt_name
    else:
        if "name" not in config:
            raise ValueError("Could not find the name of the class under `name`")
        name = "name"

    class_name = config.pop(name)

    # Check that the class we are looking for exists
    if class_name not in module_dict:
        valid_keys = list(module_dict.keys())
        raise ValueError(
            f"Could not find '{class_name}' in the dictionary "
            f"which maps names to classes. Available names: "
            f"{valid_keys}"
        )

    # Gather the arguments and keyword arguments to pass to the function
    cls = module_dict[class_name]
    args = config.pop("args", [])
    cfg_kwargs = dict(config.pop("kwargs", {}))
    for key, value in config.items():
        if key in cfg_kwargs:
            raise ValueError(
                f"The keyword argument {key} is provided "
                "at the top level and under `kwargs`. Ambiguous."
            )
        cfg_kwargs[key] = value

    # Collaborators are only injected if the class asks for them and the
    # configuration block did not set them explicitly
    extra = accepted_kwargs(cls, **kwargs)
    for key, value in extra.items():
        cfg_kwargs.setdefault(key, value)

    # Intialize
    try:
        return cls(*args, **cfg_kwargs)

    except Exception as err:
        logger.error(
            f"Failed to instantiate {cls.__name__} with these arguments:\n"
            f"  - args: {args}\n  - kwargs: {list(cfg_kwargs)}"
        )

        raise err
