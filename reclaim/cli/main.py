# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoint for Reclaim.

Every operation is a subcommand of `reclaim`. The global options (--config,
--log-level, --seed, --workspace) are inherited by every subcommand through
argparse's parent parser mechanism.

Usage:
    reclaim init
    reclaim play --seed 7
    reclaim check 1 --config reclaim.yaml
    reclaim info
"""

import argparse
import sys

from reclaim.cli.commands import handle_check, handle_info, handle_init, handle_play
from reclaim.cli.exit_codes import USER_ERROR


def _build_global_parser() -> argparse.ArgumentParser:
    """
    Build the parent parser with global options.

    add_help=False so help text doesn't collide between the parent and the
    subcommand parsers.
    """
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration file.",
    )
    parent.add_argument(
        "--log-level",
        type=str,
        default=None,
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging verbosity level (overrides config).",
    )
    parent.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed terrain and target placement (overrides config).",
    )
    parent.add_argument(
        "--workspace",
        type=str,
        default=None,
        help="Directory holding missions/ (overrides config).",
    )
    return parent


def _register_subcommands(
    subparsers: argparse._SubParsersAction,  # type: ignore[type-arg]
    parent: argparse.ArgumentParser,
) -> None:
    """Register all subcommands with their handler functions."""
    commands = [
        ("init", "Create missions/ with the mission templates.", handle_init),
        ("play", "Play in the terminal, one command per line.", handle_play),
        ("check", "Compile and verify a single mission.", handle_check),
        ("info", "Display environment and toolchain info.", handle_info),
    ]

    for name, help_text, handler in commands:
        parser = subparsers.add_parser(name, parents=[parent], help=help_text)
        parser.set_defaults(func=handler)

    subparsers.choices["check"].add_argument(
        "mission",
        type=int,
        help="Mission id to compile and verify.",
    )


def main() -> None:
    """
    Main CLI entrypoint. This is what pyproject.toml's [project.scripts] points to.

    If no subcommand is given, we show help and exit with USER_ERROR.
    """
    parent = _build_global_parser()

    root_parser = argparse.ArgumentParser(
        prog="reclaim",
        description="Reclaim: survive the wasteland by fixing Rust firmware.",
        parents=[parent],
    )
    subparsers = root_parser.add_subparsers(dest="command")
    _register_subcommands(subparsers, parent)

    args = root_parser.parse_args()

    if not hasattr(args, "func") or args.func is None:
        root_parser.print_help()
        sys.exit(USER_ERROR)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
