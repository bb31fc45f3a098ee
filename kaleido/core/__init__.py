"""
Core module for kaleido.

This module contains the top-level driver that runs the parser over a whole
input and reports each construct.
"""

from .driver import ConstructKind, Driver, DriverResult, ParsedItem, parse_source

__all__ = [
    "ConstructKind",
    "Driver",
    "DriverResult",
    "ParsedItem",
    "parse_source",
]
