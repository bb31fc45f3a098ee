"""
Utility modules for kaleido.

This package contains configuration shared by the front end and the driver.
"""

from .settings import Settings, DEFAULT_SETTINGS, DEFAULT_PRECEDENCE

__all__ = [
    "Settings",
    "DEFAULT_SETTINGS",
    "DEFAULT_PRECEDENCE",
]
