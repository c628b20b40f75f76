"""
Common test fixtures shared by all modules.

Provides factory functions for allowlist data:
- Addresses and roots
- Address/amount entry lists
- Collection/tokenId/quantity entry lists
- SQLite URLs for per-test databases
"""

from pathlib import Path
from typing import Any


def make_address(n: int) -> str:
    """Deterministic lowercase address, distinct for every n."""
    return "0x" + format(n, "040x")


def make_root(n: int) -> str:
    """A 32-byte hex value that is not the root of any test tree."""
    return "0x" + format(n, "064x")


def make_allowlist_data(count: int = 5, start: int = 1, amount: int = 10) -> list[dict[str, Any]]:
    """
    Create address/amount entries.

    Args:
        count: Number of entries
        start: Number used for the first address
        amount: Amount given to every entry (as a string)
    """
    return [
        {"address": make_address(start + i), "amount": str(amount)}
        for i in range(count)
    ]


def make_recipients_data(count: int = 3, collection_n: int = 0xC0) -> list[dict[str, Any]]:
    """Create recipients entries for one collection, token ids 1..count."""
    collection = make_address(collection_n)
    return [
        {"collection": collection, "tokenId": i + 1, "quantity": i + 2}
        for i in range(count)
    ]


def sqlite_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"
