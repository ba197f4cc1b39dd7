"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m airdrop_cli build <entitlements.json> --out <distribution.json> [--hasher NAME] [--json]
    python -m airdrop_cli root <entitlements.json> [--hasher NAME]
    python -m airdrop_cli prove <distribution.json> <account_id> [--json]
    python -m airdrop_cli verify <distribution.json> [--json] [--debug]
    python -m airdrop_cli verify --root 0x... --account ID --amount N --proof proof.json
    python -m airdrop_cli config --init | --show

Environment Variables:
    AIRDROP_HASHER          Default Merkle hasher (sha256, sha256-rfc6962)
    AIRDROP_LOG_LEVEL       Log level (default: INFO)
    AIRDROP_LOG_FILE        Also log to this file
    AIRDROP_OUTPUT_FORMAT   human or json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from airdrop.crypto.hashing import available_hashers
from airdrop_cli import __version__
from airdrop_cli.commands import build, prove, verify
from airdrop_cli.config import load_config, get_default_config_template


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="airdrop",
        description="Merkle airdrop CLI - commit entitlements, hand out proofs, verify claims.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./airdrop.json or ~/.config/airdrop/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build a distribution (root + proofs) from entitlements",
        description="Commit an entitlement list and write every recipient's proof.",
    )
    build_parser.add_argument(
        "entitlements",
        type=str,
        help='JSON file: [{"account_id": ..., "amount": ...}] or {"account_id": amount}',
    )
    build_parser.add_argument(
        "--out", "-o",
        type=str,
        required=True,
        help="Output path for the distribution JSON",
    )
    build_parser.add_argument(
        "--hasher",
        type=str,
        choices=available_hashers(),
        default=None,
        help="Merkle hasher (default: from config or sha256)",
    )
    build_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    build_parser.set_defaults(func=build.build_cmd)

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Print the root of an entitlement list",
    )
    root_parser.add_argument("entitlements", type=str, help="Entitlements JSON file")
    root_parser.add_argument(
        "--hasher",
        type=str,
        choices=available_hashers(),
        default=None,
        help="Merkle hasher (default: from config or sha256)",
    )
    root_parser.set_defaults(func=build.root_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Print one recipient's proof from a distribution",
    )
    prove_parser.add_argument("distribution", type=str, help="Distribution JSON file")
    prove_parser.add_argument("account_id", type=str, help="Recipient account id")
    prove_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a distribution or a single claim offline",
        description=(
            "With a distribution file: recompute the root and check every proof. "
            "Without one: check --account/--amount/--proof against --root."
        ),
    )
    verify_parser.add_argument(
        "distribution",
        type=str,
        nargs="?",
        default=None,
        help="Distribution JSON file",
    )
    verify_parser.add_argument("--root", type=str, default=None, help="Root digest (0x hex)")
    verify_parser.add_argument("--account", type=str, default=None, help="Recipient account id")
    verify_parser.add_argument("--amount", type=str, default=None, help="Claimed amount")
    verify_parser.add_argument("--proof", type=str, default=None, help="Proof JSON file")
    verify_parser.add_argument(
        "--hasher",
        type=str,
        choices=available_hashers(),
        default=None,
        help="Merkle hasher for --root (default: from config or sha256)",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Include every check in the report",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="airdrop.json",
        help="Path for config file (default: airdrop.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (AIRDROP_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        config = args.cli_config
        config_dict = {
            "hasher": config.hasher,
            "log_level": config.log_level,
            "log_file": config.log_file,
            "default_output_format": config.default_output_format,
        }
        print(json.dumps(config_dict, indent=2))
        return EXIT_SUCCESS

    print("Usage: airdrop config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    args.cli_config = config
    if hasattr(args, "json") and not args.json and config.default_output_format == "json":
        args.json = True

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
