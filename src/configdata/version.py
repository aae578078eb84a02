"""Version of the configdata package."""

__version__ = "0.1.0"
