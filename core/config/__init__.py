"""
Runtime Configuration Module

Provides configuration loading and management for the allowlist service.
"""

from .runtime import (
    ApiConfig,
    DatabaseConfig,
    MerkleConfig,
    RuntimeConfig,
    load_runtime_config,
)

__all__ = [
    "RuntimeConfig",
    "DatabaseConfig",
    "MerkleConfig",
    "ApiConfig",
    "load_runtime_config",
]
