import uvicorn

from app.api.app import create_app
from app.config.settings import Settings
from app.database.connection import close_pool, init_pool
from app.logging.logger import Log
from app.registry.registry import DocumentRegistry
from app.storage.factory import KeyValueStoreFactory
from app.storage.postgres_store import PostgresKeyValueStore


def build_registry(settings: Settings) -> DocumentRegistry:
    """Build the key-value store and the registry on top of it."""
    store = KeyValueStoreFactory.create(settings)
    if isinstance(store, PostgresKeyValueStore):
        store.ensure_schema()
    registry = DocumentRegistry(store, index_key=settings.index_key)
    if settings.reconcile_on_startup:
        report = registry.reconcile()
        Log.info(f"Startup reconcile finished (consistent={report.consistent})")
    return registry


def main() -> None:
    """Entry point: settings -> logging -> pool -> registry -> HTTP server."""
    settings = Settings()
    Log.configure(settings.log_level)
    uses_postgres = settings.storage_backend.lower() == "postgres"
    if uses_postgres:
        init_pool(settings)

    try:
        registry = build_registry(settings)
        Log.info(
            f"Serving document registry on {settings.http_host}:{settings.http_port} "
            f"({settings.storage_backend} storage)"
        )
        uvicorn.run(
            create_app(registry),
            host=settings.http_host,
            port=settings.http_port,
            log_level=settings.log_level.lower(),
        )
    finally:
        if uses_postgres:
            close_pool()


if __name__ == "__main__":
    main()
