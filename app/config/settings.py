from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "docregistry"
    db_username: str = "docregistry"
    db_password: str = "secret"

    storage_backend: str = "postgres"
    kv_table: str = "kv_store"
    index_key: str = "all_documents"

    http_host: str = "0.0.0.0"
    http_port: int = 8787

    reconcile_on_startup: bool = False
