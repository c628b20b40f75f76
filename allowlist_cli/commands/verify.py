"""
CLI Verify Command

Check an address/amount proof against a root, offline.

Usage:
    allowlist verify 0xroot... 0xabc... 10 0xsibling1... 0xsibling2... [--json]
"""

from __future__ import annotations

from argparse import Namespace

from allowlist_cli.commands.common import EXIT_NOT_FOUND, EXIT_SUCCESS, print_json
from core.merkle.merkle_proofs import MerkleVerifier
from core.schemas.entries import MerkleTreeType


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        Exit code (2 when the proof does not check out)
    """
    entry = {"address": args.address, "amount": args.amount}
    valid = MerkleVerifier.verify_entry(
        args.root,
        MerkleTreeType.RECIPIENT_AMOUNT,
        entry,
        args.proof,
    )

    if args.json:
        print_json({
            "merkle_root": args.root,
            "address": args.address.lower(),
            "amount": args.amount,
            "valid": valid,
        })
    else:
        print(f"valid: {str(valid).lower()}")
    return EXIT_SUCCESS if valid else EXIT_NOT_FOUND
