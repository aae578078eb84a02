"""Utility modules shared by the configuration data resolution code."""
