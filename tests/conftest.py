"""
Pytest configuration and shared fixtures for allowlist tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_address = _common.make_address
make_root = _common.make_root
make_allowlist_data = _common.make_allowlist_data
make_recipients_data = _common.make_recipients_data
sqlite_url = _common.sqlite_url

from core.allowlist import AllowlistService
from core.store import Database, SyncChainBase, SyncChainStore, TreeBase, TreeStore


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def allowlist_data():
    """Provide five address/amount entries."""
    return make_allowlist_data(5)


@pytest.fixture
def recipients_data():
    """Provide three collection/tokenId/quantity entries."""
    return make_recipients_data(3)


@pytest.fixture
async def database(tmp_path):
    """A fresh SQLite database holding both the tree and sync-chain tables."""
    db = Database(sqlite_url(tmp_path / "allowlist.db"))
    await db.create_all(TreeBase.metadata, SyncChainBase.metadata)
    yield db
    await db.dispose()


@pytest.fixture
def tree_store(database):
    return TreeStore(database.sessionmaker)


@pytest.fixture
def sync_chain(database):
    return SyncChainStore(database.sessionmaker)


@pytest.fixture
def service(tree_store, sync_chain):
    """AllowlistService over the per-test database."""
    return AllowlistService(tree_store=tree_store, sync_chain=sync_chain)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
