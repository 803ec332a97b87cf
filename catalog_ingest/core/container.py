"""Dependency Injection Container.

This module provides a centralized DI container using dependency-injector.
Lifecycles:
- Singleton: One instance per process (engine, HTTP client, clients)
- Factory: New instance every time (pipeline, writer)

Usage:
    # In the CLI
    from catalog_ingest.core.container import create_container, shutdown_container

    container = create_container(ingest_config=config)
    pipeline = container.ingest_pipeline()
    report = await pipeline.run()
    await shutdown_container(container)

    # In tests
    with container.infrastructure.object_store.override(fake_store):
        ...
"""

from dependency_injector import containers, providers

from catalog_ingest.config.ingest import IngestConfig
from catalog_ingest.core.config import Config, get_config
from catalog_ingest.core.config_loader import load_ingest_config
from catalog_ingest.core.database import create_engine, create_session_factory
from catalog_ingest.infrastructure.blob_storage import BlobStorageClient
from catalog_ingest.infrastructure.ffmpeg import FFmpegWrapper
from catalog_ingest.infrastructure.http_client import HTTPClient
from catalog_ingest.services.ingest.catalog import SqlCatalogStore
from catalog_ingest.services.ingest.locator import AssetLocator
from catalog_ingest.services.ingest.pipeline import IngestPipeline
from catalog_ingest.services.ingest.thumbnail import ThumbnailExtractor
from catalog_ingest.services.ingest.uploader import ObjectStoreUploader
from catalog_ingest.services.ingest.writer import CatalogWriter


class InfrastructureContainer(containers.DeclarativeContainer):
    """Infrastructure layer dependencies (database, HTTP, external tools)."""

    global_config = providers.Dependency(instance_of=Config)
    ingest_config = providers.Dependency(instance_of=IngestConfig)

    # ============================================
    # Database
    # ============================================

    db_engine = providers.Singleton(create_engine, config=global_config)

    db_session_factory = providers.Singleton(create_session_factory, engine=db_engine)

    # ============================================
    # HTTP Client
    # ============================================

    http_client = providers.Singleton(
        HTTPClient,
        timeout=global_config.provided.http_timeout,
    )

    # ============================================
    # Object Store
    # ============================================

    object_store = providers.Singleton(
        BlobStorageClient,
        http_client=http_client,
        token=global_config.provided.blob_read_write_token,
        api_url=global_config.provided.blob_api_url,
        public_base_url=global_config.provided.blob_public_base_url,
        api_version=global_config.provided.blob_api_version,
    )

    # ============================================
    # FFmpeg
    # ============================================

    ffmpeg_wrapper = providers.Singleton(
        FFmpegWrapper,
        executable=ingest_config.provided.thumbnail.executable,
    )


class ServiceContainer(containers.DeclarativeContainer):
    """Ingest service layer."""

    ingest_config = providers.Dependency(instance_of=IngestConfig)
    infrastructure = providers.DependenciesContainer()

    catalog_store = providers.Singleton(
        SqlCatalogStore,
        session_factory=infrastructure.db_session_factory,
    )

    thumbnail_extractor = providers.Singleton(
        ThumbnailExtractor,
        ffmpeg_wrapper=infrastructure.ffmpeg_wrapper,
        config=ingest_config.provided.thumbnail,
    )

    uploader = providers.Singleton(
        ObjectStoreUploader,
        store=infrastructure.object_store,
    )

    asset_locator = providers.Factory(
        AssetLocator,
        videos_root=ingest_config.provided.videos_path,
    )

    catalog_writer = providers.Factory(
        CatalogWriter,
        store=catalog_store,
        uploader=uploader,
        extractor=thumbnail_extractor,
        locator=asset_locator,
        config=ingest_config,
    )

    ingest_pipeline = providers.Factory(
        IngestPipeline,
        writer=catalog_writer,
        store=catalog_store,
        extractor=thumbnail_extractor,
        config=ingest_config,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """Root application container.

    Composes all sub-containers and provides the main entry point.
    """

    # Uses get_config() to ensure same instance across the app
    config = providers.Singleton(get_config)

    # Overridden by the CLI with the merged file + flag configuration
    ingest_config = providers.Singleton(load_ingest_config)

    infrastructure = providers.Container(
        InfrastructureContainer,
        global_config=config,
        ingest_config=ingest_config,
    )

    services = providers.Container(
        ServiceContainer,
        ingest_config=ingest_config,
        infrastructure=infrastructure,
    )

    # ============================================
    # Convenience accessors (shortcuts)
    # ============================================

    http_client = providers.Singleton(
        lambda client: client,
        client=infrastructure.http_client,
    )

    ingest_pipeline = providers.Factory(
        lambda svc: svc,
        svc=services.ingest_pipeline,
    )

    catalog_writer = providers.Factory(
        lambda svc: svc,
        svc=services.catalog_writer,
    )


def create_container(ingest_config: IngestConfig | None = None) -> ApplicationContainer:
    """Create and configure the application container.

    Args:
        ingest_config: Job configuration to use instead of the default file

    Returns:
        Configured ApplicationContainer instance
    """
    container = ApplicationContainer()
    if ingest_config is not None:
        container.ingest_config.override(providers.Object(ingest_config))
    return container


async def shutdown_container(container: ApplicationContainer) -> None:
    """Close pooled connections held by singletons.

    Args:
        container: Container whose clients were used
    """
    await container.infrastructure.http_client().close()
    await container.infrastructure.db_engine().dispose()


__all__ = [
    "ApplicationContainer",
    "InfrastructureContainer",
    "ServiceContainer",
    "create_container",
    "shutdown_container",
]
