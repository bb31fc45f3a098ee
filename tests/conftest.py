"""
Pytest configuration and fixtures for kaleido tests.
"""

import io

import pytest

from kaleido.utils.settings import Settings


@pytest.fixture
def make_parser():
    """Provide a factory building a Parser over a source string."""
    from kaleido.frontend import Parser

    def factory(source, **settings):
        return Parser(source, Settings(**settings) if settings else None)
    return factory


@pytest.fixture
def parse_expr(make_parser):
    """Provide a function parsing a single expression from source."""
    def parse(source, **settings):
        return make_parser(source, **settings).parse_expression()
    return parse


@pytest.fixture
def run_driver():
    """Provide a function running the driver and capturing its streams.

    Returns (result, stdout_text, stderr_text).
    """
    from kaleido.core import Driver

    def run(source, **kwargs):
        out, err = io.StringIO(), io.StringIO()
        result = Driver(source, out=out, err=err, **kwargs).run()
        return result, out.getvalue(), err.getvalue()
    return run


@pytest.fixture
def sample_source_file(tmp_path):
    """Create a sample Kaleidoscope source file."""
    path = tmp_path / "sample.ks"
    path.write_text(
        "# Compute the x'th fibonacci number.\n"
        "extern sin(x)\n"
        "def fib(x)\n"
        "  if x < 3 then\n"
        "    1\n"
        "  else\n"
        "    fib(x-1)+fib(x-2)\n"
        "\n"
        "fib(40);\n",
        encoding="utf-8",
    )
    return path
