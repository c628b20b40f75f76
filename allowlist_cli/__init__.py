"""
Allowlist CLI

Offline command-line tools for merkle allowlists.

Usage:
    python -m allowlist_cli root entries.json
    python -m allowlist_cli proof entries.json 0xabc...
    python -m allowlist_cli verify 0xroot... 0xabc... 10 0xsibling...
"""

__version__ = "0.1.0"
