"""
Test suite for kaleido.

This package contains tests for the kaleido front end including:
- Unit tests for the lexer, parser and AST nodes
- Driver tests for top-level dispatch and error recovery
- CLI and resource-usage tests
"""

__version__ = "0.1.0"
