"""
Command-line interface for kaleido.

Provides the main entry point for the kaleido front end with subcommands
for parsing files, dumping tokens and running an interactive prompt.
"""

import argparse
import logging
import sys
from contextlib import contextmanager
from typing import Iterator, TextIO

from .core import Driver
from .frontend import Lexer
from .utils.settings import Settings


@contextmanager
def open_source(path: str) -> Iterator[TextIO]:
    """Open a source file for reading, or stdin for "-"."""
    if path == "-":
        yield sys.stdin
    else:
        with open(path, "r", encoding="utf-8") as f:
            yield f


def _add_frontend_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--no-conditionals",
        action="store_true",
        help="Reject if/then/else expressions"
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=100,
        help="Maximum expression nesting depth (default: 100, 0 for no limit)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        argparse.ArgumentParser: The configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="kaleido",
        description="kaleido: Kaleidoscope language front end",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m kaleido parse program.ks
  python -m kaleido tokens program.ks
  echo "def f(x) x * 2" | python -m kaleido parse -
  python -m kaleido repl
        """
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Parse command
    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse a source file and print each top-level construct"
    )
    parse_parser.add_argument(
        "input",
        type=str,
        help="Input source file, or - for stdin"
    )
    _add_frontend_options(parse_parser)

    # Tokens command
    tokens_parser = subparsers.add_parser(
        "tokens",
        help="Print the token stream of a source file"
    )
    tokens_parser.add_argument(
        "input",
        type=str,
        help="Input source file, or - for stdin"
    )
    tokens_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    # REPL command
    repl_parser = subparsers.add_parser(
        "repl",
        help="Parse constructs typed at an interactive prompt"
    )
    _add_frontend_options(repl_parser)

    # Version command
    subparsers.add_parser(
        "version",
        help="Show version information"
    )

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S"
    )


def build_settings(args: argparse.Namespace) -> Settings:
    """Build front-end settings from parsed command-line arguments."""
    if args.max_depth < 0:
        raise ValueError(f"--max-depth must not be negative, got {args.max_depth}")
    return Settings(
        enable_conditionals=not args.no_conditionals,
        max_nesting_depth=args.max_depth or None,
    )


def handle_parse(args: argparse.Namespace) -> int:
    """Handle the parse command.

    Args:
        args: Parsed command-line arguments

    Returns:
        int: Exit code (0 when every construct parsed, 1 otherwise)
    """
    try:
        settings = build_settings(args)
        with open_source(args.input) as source:
            result = Driver(source, settings=settings).run()
    except (OSError, ValueError) as e:
        print(f"[kaleido] Error: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"[kaleido] Parsed {len(result.items)} construct(s), "
              f"{len(result.errors)} error(s)", file=sys.stderr)
    return 0 if result.success else 1


def handle_tokens(args: argparse.Namespace) -> int:
    """Handle the tokens command.

    Args:
        args: Parsed command-line arguments

    Returns:
        int: Exit code
    """
    try:
        with open_source(args.input) as source:
            for token in Lexer(source):
                print(f"{token.lineno}:{token.col_offset}\t{token.kind.name}\t{token.text}")
    except OSError as e:
        print(f"[kaleido] Error: {e}", file=sys.stderr)
        return 1
    return 0


def handle_repl(args: argparse.Namespace) -> int:
    """Handle the repl command.

    Args:
        args: Parsed command-line arguments

    Returns:
        int: Exit code (always 0; errors are reported and skipped)
    """
    try:
        settings = build_settings(args)
    except ValueError as e:
        print(f"[kaleido] Error: {e}", file=sys.stderr)
        return 1
    try:
        Driver(sys.stdin, settings=settings, interactive=True).run()
    except KeyboardInterrupt:
        print()
    return 0


def handle_version(args: argparse.Namespace) -> int:
    """Handle the version command.

    Args:
        args: Parsed command-line arguments

    Returns:
        int: Exit code (always 0 for version)
    """
    from . import __version__, __author__
    print(f"kaleido version {__version__}")
    print(f"Author: {__author__}")
    return 0


def main(argv: list = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        int: Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(getattr(args, "verbose", False))

    if args.command == "parse":
        return handle_parse(args)
    elif args.command == "tokens":
        return handle_tokens(args)
    elif args.command == "repl":
        return handle_repl(args)
    elif args.command == "version":
        return handle_version(args)
    else:
        parser.print_help()
        return 2


if __name__ == "__main__":
    sys.exit(main())
