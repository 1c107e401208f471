"""
umami_load package initializer.
Defines the package version; the CLI lives in :mod:`umami_load.cli`.
"""
__version__ = "0.1.0"
