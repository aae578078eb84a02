#!/usr/bin/env python3
"""Command line entry point to inspect how locations resolve."""

import argparse
import sys
from typing import List, Optional

from configdata.api import CONFIG_NAME_PROPERTY, DEFAULT_SEARCH_LOCATIONS
from configdata.binder import Binder
from configdata.errors import ConfigDataError
from configdata.load import load_resource
from configdata.location import ConfigDataLocation, Profiles
from configdata.resolver import ConfigDataLocationResolverContext, resolvers_factory


def describe(result) -> str:
    """Format one resolution result as a single line.

    Parameters
    ----------
    result : ConfigDataResolutionResult
        Resolution result

    Returns
    -------
    str
        Description of the result
    """
    resource = result.resource
    line = f"{resource}"
    if result.profile_specific:
        line = f"[{resource.profile}] {line}"
    if resource.empty_directory:
        line += " (empty directory)"
    elif not resource.exists():
        line += " (missing)"

    return line


def main(
    location: str,
    profiles: Optional[List[str]],
    names: Optional[List[str]],
    properties: Optional[str],
    load: bool,
) -> int:
    """Resolve a location and print the results.

    Parameters
    ----------
    location : str
        Location to resolve
    profiles : List[str], optional
        Accepted profiles, the profile-specific pass is skipped if `None`
    names : List[str], optional
        Base names to probe in directories, overrides `config.name`
    properties : str, optional
        Path to a properties or YAML file with the bound configuration
    load : bool
        If `True`, also print the properties read from each resource

    Returns
    -------
    int
        Exit code
    """
    try:
        binder = Binder.from_file(properties) if properties else Binder()
        if names:
            binder = Binder(
                dict(binder.properties, **{CONFIG_NAME_PROPERTY: list(names)}),
                environ=binder.environ,
            )

        resolvers = resolvers_factory(binder=binder)
        context = ConfigDataLocationResolverContext(binder=binder)
        results = resolvers.resolve(
            context,
            ConfigDataLocation.of(location, origin="command line"),
            Profiles(profiles) if profiles is not None else None,
        )
        for result in results:
            print(describe(result))
            if load and result.resource.exists():
                for source in load_resource(result.resource, result.location):
                    for key, value in source.properties.items():
                        print(f"    {key} = {value}")

    except ConfigDataError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1

    return 0


def cli(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Resolve configuration data locations into resources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  configdata                                     Resolve the default search locations
  configdata -l config/                          Scan a directory
  configdata -l "config/;optional:config/*/" -p dev prod
  configdata -l config/app[.yaml] --load         Resolve and read a file
""",
    )

    # Add a version command
    parser.add_argument(
        "--version", "-v", action="version", version=f"configdata {get_version()}"
    )

    parser.add_argument(
        "-l",
        "--location",
        default=DEFAULT_SEARCH_LOCATIONS,
        help="Location to resolve (default: the conventional search locations)",
    )

    parser.add_argument(
        "-p",
        "--profile",
        nargs="*",
        dest="profiles",
        help="Accepted profiles, enables the profile-specific pass",
    )

    parser.add_argument(
        "-n",
        "--name",
        nargs="+",
        dest="names",
        help=f"Base names probed in directories (overrides `{CONFIG_NAME_PROPERTY}`)",
    )

    parser.add_argument(
        "-c",
        "--properties",
        help="Properties or YAML file providing the bound configuration",
    )

    parser.add_argument(
        "--load",
        action="store_true",
        help="Print the properties read from each resolved resource",
    )

    # Parse the arguments
    args = parser.parse_args(argv)

    return main(
        location=args.location,
        profiles=args.profiles,
        names=args.names,
        properties=args.properties,
        load=args.load,
    )


def get_version():
    """Get the package version."""
    from configdata.version import __version__

    return __version__


if __name__ == "__main__":
    sys.exit(cli())
