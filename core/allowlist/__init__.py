"""
Allowlist service layer: tree creation, proofs, usage accounting and the
root consistency guard.
"""
from .guard import ensure_root_matches, roots_match
from .service import USABLE_NOT_TRACKED, AllowlistService

__all__ = [
    "AllowlistService",
    "USABLE_NOT_TRACKED",
    "ensure_root_matches",
    "roots_match",
]
