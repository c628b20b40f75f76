"""
CLI Root Command

Compute the merkle root of an entries file.

Usage:
    allowlist root entries.json [--type recipients] [--json]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace

from allowlist_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    load_entries_file,
    print_json,
)
from core.merkle.merkle_proofs import MerkleProver
from core.schemas.errors import AllowlistException

logger = logging.getLogger(__name__)


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Returns:
        Exit code
    """
    try:
        tree_type, raw_entries = load_entries_file(args.file, args.type)
        entries, tree = MerkleProver(tree_type, args.odd_node_policy).build_tree_from_raw(raw_entries)
    except (OSError, ValueError, AllowlistException) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    logger.info(f"Built {tree_type.value} tree over {len(entries)} entries")

    if args.json:
        print_json({
            "type": tree_type.value,
            "merkle_root": tree.hex_root,
            "entries": len(entries),
            "depth": tree.depth,
        })
    else:
        print(tree.hex_root)
    return EXIT_SUCCESS
