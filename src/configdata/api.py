"""API version and grammar constants for configuration data resolution.

This module defines the location grammar and the configuration keys used
across the package.
"""

# Current API version
API_VERSION = "1.0"

# Location grammar
OPTIONAL_PREFIX = "optional:"
RESOURCE_PREFIX = "resource:"
FILE_URL_PREFIX = "file:"
PACKAGE_URL_PREFIX = "package:"
LOCATION_DELIMITER = ";"
PATTERN_WILDCARD = "*"
PROFILE_SEPARATOR = "-"

# A location is absolute if it starts at the root or carries a scheme
URL_PREFIX_PATTERN = r"^([a-zA-Z][a-zA-Z0-9*]*?:)(.*$)"

# Logical extension attached to a file name, e.g. `config/app[.yaml]`
EXTENSION_HINT_PATTERN = r"^(.*)\[(\.\w+)\](?!\[)$"

# Bound configuration
CONFIG_NAME_PROPERTY = "config.name"
ENV_PREFIX = "CONFIGDATA_"
DEFAULT_CONFIG_NAMES = ("application",)

# Resolver ordering, informative only
LOWEST_PRECEDENCE = 2**31 - 1

# Resolvers built at bootstrap, in order
DEFAULT_RESOLVER_NAMES = ("standard",)

# Format loaders built at bootstrap, in registration order
DEFAULT_FORMAT_LOADER_NAMES = ("properties", "yaml")

# Conventional search locations, lowest precedence first
DEFAULT_SEARCH_LOCATIONS = (
    "optional:package:configdata/;"
    "optional:file:./;"
    "optional:file:./config/;"
    "optional:file:./config/*/"
)
