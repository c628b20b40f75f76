"""
Runtime Configuration

Central configuration for the allowlist service: storage URLs, merkle
engine policy and API settings.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from core.merkle.merkle_tree import OddNodePolicy

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./allowlist.db"


@dataclass
class DatabaseConfig:
    """Configuration for the tree store and the sync-chain mirror."""
    url: str = DEFAULT_DATABASE_URL
    sync_chain_url: Optional[str] = None  # None: share `url`
    echo: bool = False

    @property
    def resolved_sync_chain_url(self) -> str:
        return self.sync_chain_url or self.url


@dataclass
class MerkleConfig:
    """Configuration for the merkle engine."""
    odd_node_policy: OddNodePolicy = OddNodePolicy.PROMOTE

    def __post_init__(self):
        # Raises ValueError for unknown policies
        self.odd_node_policy = OddNodePolicy(self.odd_node_policy)


@dataclass
class ApiConfig:
    """Configuration for the HTTP service."""
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for the allowlist service.

    Can be loaded from:
    - Environment variables
    - JSON or YAML file
    - Programmatic construction
    """
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    merkle: MerkleConfig = field(default_factory=MerkleConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - ALLOWLIST_DATABASE_URL: Tree store URL
        - ALLOWLIST_SYNC_CHAIN_DATABASE_URL: Sync-chain mirror URL
        - ALLOWLIST_DB_ECHO: Echo SQL statements (true/false)
        - ALLOWLIST_ODD_NODE_POLICY: promote or duplicate
        - ALLOWLIST_LOG_LEVEL: Logging level name
        - ALLOWLIST_CORS_ORIGINS: Comma-separated allowed origins
        """
        overrides: dict[str, Any] = {}

        # Database settings
        if os.getenv("ALLOWLIST_DATABASE_URL"):
            overrides.setdefault("database", {})["url"] = os.getenv("ALLOWLIST_DATABASE_URL")
        if os.getenv("ALLOWLIST_SYNC_CHAIN_DATABASE_URL"):
            overrides.setdefault("database", {})["sync_chain_url"] = os.getenv(
                "ALLOWLIST_SYNC_CHAIN_DATABASE_URL"
            )
        if os.getenv("ALLOWLIST_DB_ECHO"):
            overrides.setdefault("database", {})["echo"] = (
                os.getenv("ALLOWLIST_DB_ECHO", "false").lower() == "true"
            )

        # Merkle settings
        if os.getenv("ALLOWLIST_ODD_NODE_POLICY"):
            overrides.setdefault("merkle", {})["odd_node_policy"] = (
                os.getenv("ALLOWLIST_ODD_NODE_POLICY", "").strip().lower()
            )

        # API settings
        if os.getenv("ALLOWLIST_LOG_LEVEL"):
            overrides.setdefault("api", {})["log_level"] = os.getenv("ALLOWLIST_LOG_LEVEL")
        if os.getenv("ALLOWLIST_CORS_ORIGINS"):
            overrides.setdefault("api", {})["cors_origins"] = [
                origin.strip()
                for origin in os.getenv("ALLOWLIST_CORS_ORIGINS", "").split(",")
                if origin.strip()
            ]

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_json(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        database_data = data.get("database", {})
        merkle_data = data.get("merkle", {})
        api_data = dict(data.get("api", {}))

        # Top-level log_level is accepted as a shorthand
        if "log_level" in data and "log_level" not in api_data:
            api_data["log_level"] = data["log_level"]

        database = DatabaseConfig(**database_data) if database_data else DatabaseConfig()
        merkle = MerkleConfig(**merkle_data) if merkle_data else MerkleConfig()
        api = ApiConfig(**api_data) if api_data else ApiConfig()

        return cls(
            database=database,
            merkle=merkle,
            api=api,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "database" in overrides:
            for key, value in overrides["database"].items():
                setattr(new_config.database, key, value)

        if "merkle" in overrides:
            for key, value in overrides["merkle"].items():
                setattr(new_config.merkle, key, OddNodePolicy(value) if key == "odd_node_policy" else value)

        if "api" in overrides:
            for key, value in overrides["api"].items():
                setattr(new_config.api, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "database": {
                "url": self.database.url,
                "sync_chain_url": self.database.sync_chain_url,
                "echo": self.database.echo,
            },
            "merkle": {
                "odd_node_policy": self.merkle.odd_node_policy.value,
            },
            "api": {
                "cors_origins": list(self.api.cors_origins),
                "log_level": self.api.log_level,
            },
            "extra": self.extra,
        }


def config_search_paths() -> list[Path]:
    """Config files tried in order when no explicit path is given."""
    return [
        Path.cwd() / "allowlist.json",
        Path.cwd() / ".allowlist.json",
        Path.home() / ".config" / "allowlist" / "config.json",
    ]


def load_runtime_config(path: str | Path | None = None) -> RuntimeConfig:
    """Load RuntimeConfig from a config file, then overlay environment variables.

    With an explicit path, .yaml/.yml files are read as YAML and anything
    else as JSON; a missing explicit file raises FileNotFoundError.

    Search order without a path:
      1. ./allowlist.json
      2. ./.allowlist.json
      3. ~/.config/allowlist/config.json

    Environment variables ALWAYS override config file values.
    """
    config: RuntimeConfig | None = None

    if path is not None:
        path = Path(path)
        if path.suffix.lower() in (".yaml", ".yml"):
            config = RuntimeConfig.from_yaml(path)
        else:
            config = RuntimeConfig.from_json(path)
        logger.info(f"Loaded config from {path}")
    else:
        for candidate in config_search_paths():
            if candidate.exists():
                try:
                    config = RuntimeConfig.from_json(candidate)
                    logger.info(f"Loaded config from {candidate}")
                    break
                except (OSError, json.JSONDecodeError, TypeError) as e:
                    logger.warning(f"Failed to parse {candidate}: {e}")

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()
