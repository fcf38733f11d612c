"""
Process-wide service objects and their FastAPI dependencies.

The container is built once in the application lifespan and stored on
`app.state`; handlers receive the pieces they need through `Depends`, and
tests swap them with `app.dependency_overrides`.
"""

from dataclasses import dataclass

from fastapi import Depends, Request
from loguru import logger as log
from pymongo import MongoClient

from common import global_config
from src.api.errors import not_implemented
from src.db.collections_store import CollectionStore
from src.db.mongodb import close_mongo_client, create_mongo_client, get_database
from src.services.admin_api import AdminApiClient
from src.services.secrets_manager import (
    DatabaseSettings,
    SecretsManager,
    resolve_database_settings,
)
from src.services.storage import CloudFrontService, S3Service
from src.utils.logging_config import setup_logging

setup_logging()


@dataclass
class ServiceContainer:
    admin_api: AdminApiClient
    storage: S3Service
    cdn: CloudFrontService
    secrets: SecretsManager
    database_settings: DatabaseSettings | None = None
    mongo_client: MongoClient | None = None
    collection_store: CollectionStore | None = None

    def close(self) -> None:
        if self.mongo_client is not None:
            close_mongo_client(self.mongo_client)


def build_services() -> ServiceContainer:
    """Construct every upstream client once, at startup."""
    services = ServiceContainer(
        admin_api=AdminApiClient.from_config(),
        storage=S3Service.from_config(),
        cdn=CloudFrontService.from_config(),
        secrets=SecretsManager.from_config(),
    )

    if global_config.collections.write_enabled:
        services.database_settings = resolve_database_settings(services.secrets)
        services.mongo_client = create_mongo_client(services.database_settings)
        services.collection_store = CollectionStore(
            get_database(services.mongo_client, services.database_settings)
        )
        log.info(f"Collection writes enabled (database: {services.database_settings.name})")
    else:
        log.info("Collection writes disabled")

    return services


def get_services(request: Request) -> ServiceContainer:
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise RuntimeError("Services not initialized; is the app lifespan running?")
    return services


def get_admin_api(services: ServiceContainer = Depends(get_services)) -> AdminApiClient:
    return services.admin_api


def get_storage(services: ServiceContainer = Depends(get_services)) -> S3Service:
    return services.storage


def get_cdn(services: ServiceContainer = Depends(get_services)) -> CloudFrontService:
    return services.cdn


def get_collection_store(
    services: ServiceContainer = Depends(get_services),
) -> CollectionStore:
    if services.collection_store is None:
        raise not_implemented(
            "Collection updates are not available: no collection store is configured "
            "for this deployment."
        )
    return services.collection_store
