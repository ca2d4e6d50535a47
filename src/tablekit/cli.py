"""
tablekit Command-Line Interface.

Runs the signal demo and exposes the random helpers to the shell.

Usage:
    tablekit demo                       # Publish the demo phrase
    tablekit demo "some phrase"         # Publish a custom phrase
    tablekit pick red green blue        # Uniform pick
    tablekit pick a b --weights 1 3     # Weighted pick
    tablekit --seed 42 shuffle 1 2 3 4  # Reproducible shuffle
    tablekit info                       # Show version and operations
"""

import argparse
import logging
import os
import sys
from typing import Optional

from tablekit import __version__, build_table
from tablekit.namespace import Namespace
from tablekit.rng import RandomSource
from tablekit.signal import Signal
from tablekit.utils.errors import InvalidArgumentError, TableError

DEFAULT_PHRASE = "he wants his money back"

logger = logging.getLogger("tablekit")


# =============================================================================
# ANSI Color Codes for Terminal Output
# =============================================================================


class Colors:
    """ANSI escape codes for colored terminal output."""

    RED = "\033[91m"
    GREEN = "\033[92m"
    CYAN = "\033[96m"
    BOLD = "\033[1m"
    RESET = "\033[0m"

    @classmethod
    def disable(cls) -> None:
        """Disable all colors (for non-TTY output)."""
        cls.RED = ""
        cls.GREEN = ""
        cls.CYAN = ""
        cls.BOLD = ""
        cls.RESET = ""


def _init_colors() -> None:
    """Initialize colors based on terminal capabilities."""
    if not sys.stdout.isatty() or os.environ.get("NO_COLOR"):
        Colors.disable()


_init_colors()


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="tablekit",
        description="tablekit - functional helpers for tables and arrays",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed the random source for reproducible output",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    demo_parser = subparsers.add_parser("demo", help="Publish a phrase through a Signal")
    demo_parser.add_argument(
        "phrase",
        nargs="?",
        default=DEFAULT_PHRASE,
        help="Phrase to publish",
    )

    pick_parser = subparsers.add_parser("pick", help="Pick one item at random")
    pick_parser.add_argument("items", nargs="+", help="Items to choose from")
    pick_parser.add_argument(
        "-w",
        "--weights",
        nargs="+",
        type=int,
        default=None,
        help="Positive integer weight per item",
    )

    shuffle_parser = subparsers.add_parser("shuffle", help="Shuffle the given items")
    shuffle_parser.add_argument("items", nargs="*", help="Items to shuffle")

    subparsers.add_parser("info", help="Show version and available operations")

    return parser


# =============================================================================
# Commands
# =============================================================================


def cmd_demo(args: argparse.Namespace, table: Namespace) -> int:
    """Handle the demo command."""
    said = Signal()

    def announce(phrase: str) -> None:
        print(f'Sleit called, he said "{phrase}"')

    said.subscribe(announce)
    said.publish(args.phrase)
    return 0


def cmd_pick(args: argparse.Namespace, table: Namespace) -> int:
    """Handle the pick command."""
    items: list[str] = args.items

    if args.weights is None:
        _, item = table.Array.random(items)
    else:
        weights: list[int] = args.weights
        if len(weights) != len(items):
            raise InvalidArgumentError(
                f"expected {len(items)} weights, got {len(weights)}", operation="pick"
            )
        _, item = table.Array.random_weighted(items, lambda index, _: weights[index - 1])

    print(item)
    return 0


def cmd_shuffle(args: argparse.Namespace, table: Namespace) -> int:
    """Handle the shuffle command."""
    print(" ".join(table.Array.shuffle(args.items)))
    return 0


def cmd_info(args: argparse.Namespace, table: Namespace) -> int:
    """Handle the info command."""
    print(f"{Colors.BOLD}tablekit{Colors.RESET} {__version__}")
    print()
    print(f"{Colors.CYAN}Table:{Colors.RESET}")
    print("  " + ", ".join(table))
    print(f"{Colors.CYAN}Table.Array:{Colors.RESET}")
    print("  " + ", ".join(table.Array))
    print(f"{Colors.CYAN}Mutating:{Colors.RESET}")
    print("  " + ", ".join(sorted(table.MUTATING)))
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    command_handlers = {
        "demo": cmd_demo,
        "pick": cmd_pick,
        "shuffle": cmd_shuffle,
        "info": cmd_info,
    }

    handler = command_handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    table = build_table(RandomSource(args.seed))
    logger.debug("Running %s (seed=%r)", args.command, args.seed)
    try:
        return handler(args, table)
    except TableError as e:
        print(f"{Colors.RED}Error:{Colors.RESET} {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
