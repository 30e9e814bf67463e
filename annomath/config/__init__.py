# annomath/config/__init__.py

"""
Configuration management for annomath.

This package handles loading configuration from files (TOML),
environment variables, and internal defaults, providing a unified
configuration object.
"""

from .models import AnnomathConfig
from .loaders import load_configuration, numeric_options

__all__ = [
    "AnnomathConfig",
    "load_configuration",
    "numeric_options",
]
