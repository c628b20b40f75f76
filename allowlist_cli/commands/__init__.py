"""
CLI command modules.
"""

from allowlist_cli.commands import proof, root, verify

__all__ = ["root", "proof", "verify"]
