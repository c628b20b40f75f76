"""
API Dependencies

Service wiring and dependency injection for the API.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Request

from core.allowlist import AllowlistService
from core.config.runtime import RuntimeConfig
from core.store import Database, SyncChainBase, SyncChainStore, TreeBase, TreeStore

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Everything the routes need, built once per application."""
    config: RuntimeConfig
    tree_db: Database
    sync_chain_db: Database
    service: AllowlistService

    async def close(self) -> None:
        await self.tree_db.dispose()
        if self.sync_chain_db is not self.tree_db:
            await self.sync_chain_db.dispose()


async def build_container(config: RuntimeConfig) -> ServiceContainer:
    """
    Open the databases, create missing tables and wire the service.

    When both stores share a URL a single engine serves them.
    """
    db_config = config.database
    tree_db = Database(db_config.url, echo=db_config.echo)
    if db_config.resolved_sync_chain_url == db_config.url:
        sync_chain_db = tree_db
        await tree_db.create_all(TreeBase.metadata, SyncChainBase.metadata)
    else:
        sync_chain_db = Database(db_config.resolved_sync_chain_url, echo=db_config.echo)
        await tree_db.create_all(TreeBase.metadata)
        await sync_chain_db.create_all(SyncChainBase.metadata)

    policy = config.merkle.odd_node_policy
    service = AllowlistService(
        tree_store=TreeStore(tree_db.sessionmaker),
        sync_chain=SyncChainStore(sync_chain_db.sessionmaker),
        odd_node_policy=policy,
    )
    logger.info("Allowlist service ready (odd node policy: %s)", policy.value)
    return ServiceContainer(
        config=config,
        tree_db=tree_db,
        sync_chain_db=sync_chain_db,
        service=service,
    )


def get_service(request: Request) -> AllowlistService:
    """FastAPI dependency returning the application's AllowlistService."""
    return request.app.state.container.service
