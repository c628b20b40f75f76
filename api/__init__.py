"""
Allowlist HTTP API (FastAPI)

- POST /merkle/roots - Store an allowlist
- GET /merkle/proof - Proof for an address
- POST /merkle/trees - Store a typed tree
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
