"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m allowlist_cli root FILE [--type TYPE] [--json]
    python -m allowlist_cli proof FILE ADDRESS [--json]
    python -m allowlist_cli verify ROOT ADDRESS AMOUNT [PROOF ...] [--json]

Entries files hold either a JSON list of entries or {"type": ..., "data": [...]}.

Environment Variables:
    ALLOWLIST_ODD_NODE_POLICY   promote (default) or duplicate

Logs go to stderr at WARNING unless --log-level says otherwise.
"""

from __future__ import annotations

import argparse
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from allowlist_cli.commands import proof, root, verify
from allowlist_cli.commands.common import EXIT_RUNTIME_ERROR
from core.config.runtime import load_runtime_config
from core.schemas.entries import MerkleTreeType


def setup_logging(level: str = "WARNING") -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="allowlist",
        description="Allowlist CLI - Compute merkle roots, print and verify proofs offline.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./allowlist.json or ~/.config/allowlist/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on unexpected errors",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Compute the merkle root of an entries file",
    )
    root_parser.add_argument("file", type=str, help="Path to the JSON entries file")
    root_parser.add_argument(
        "--type", "-t",
        type=str,
        default=None,
        choices=[t.value for t in MerkleTreeType],
        help="Tree type (default: from file, else recipientAmount)",
    )
    root_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    root_parser.set_defaults(func=root.root_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Print the proof for an address",
    )
    proof_parser.add_argument("file", type=str, help="Path to the JSON entries file")
    proof_parser.add_argument("address", type=str, help="Claimant address")
    proof_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    proof_parser.set_defaults(func=proof.proof_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an address/amount proof against a root",
    )
    verify_parser.add_argument("root", type=str, help="Merkle root (0x-hex)")
    verify_parser.add_argument("address", type=str, help="Claimant address")
    verify_parser.add_argument("amount", type=str, help="Allotted amount")
    verify_parser.add_argument(
        "proof",
        type=str,
        nargs="*",
        help="Sibling hashes, leaf to root (none for a single-entry tree)",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=not found or proof invalid)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_runtime_config(args.config)
    except (OSError, ValueError, TypeError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    setup_logging(level=args.log_level or "WARNING")

    # Attach settings to args for commands to use
    args.odd_node_policy = config.merkle.odd_node_policy

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
