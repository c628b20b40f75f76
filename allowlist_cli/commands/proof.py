"""
CLI Proof Command

Print the proof for an address in an address/amount entries file.

Usage:
    allowlist proof entries.json 0xabc... [--json]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace

from allowlist_cli.commands.common import (
    EXIT_NOT_FOUND,
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    load_entries_file,
    print_json,
)
from core.merkle.merkle_proofs import MerkleProver
from core.schemas.entries import MerkleTreeType, RecipientAmountEntry
from core.schemas.errors import AllowlistException

logger = logging.getLogger(__name__)


def proof_cmd(args: Namespace) -> int:
    """
    Execute the proof command.

    Returns:
        Exit code (2 when the address is not on the list)
    """
    try:
        tree_type, raw_entries = load_entries_file(args.file)
        if tree_type is MerkleTreeType.RECIPIENTS:
            print("Error: proofs by address need an address/amount entries file", file=sys.stderr)
            return EXIT_RUNTIME_ERROR
        prover = MerkleProver(tree_type, args.odd_node_policy)
        entries, tree = prover.build_tree_from_raw(raw_entries)
    except (OSError, ValueError, AllowlistException) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    query = args.address.lower()
    entry = next(
        (e for e in entries if isinstance(e, RecipientAmountEntry) and e.normalized_address == query),
        None,
    )
    if entry is None:
        logger.info(f"{query} is not in {args.file}")
        if args.json:
            print_json({"merkle_root": tree.hex_root, "address": query, "found": False})
        else:
            print(f"not found: {query}", file=sys.stderr)
        return EXIT_NOT_FOUND

    proof = prover.prove(tree, entry)
    if args.json:
        print_json({
            "merkle_root": tree.hex_root,
            "address": query,
            "amount": entry.amount,
            "proof": proof,
            "found": True,
        })
    else:
        print(f"merkle_root: {tree.hex_root}")
        print(f"address: {query}")
        print(f"amount: {entry.amount}")
        print(f"proof ({len(proof)}):")
        for sibling in proof:
            print(f"  {sibling}")
    return EXIT_SUCCESS
