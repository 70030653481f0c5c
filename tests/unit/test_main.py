from unittest.mock import MagicMock, patch

import pytest

from app.main import build_registry, main
from app.registry.registry import DocumentRegistry
from app.storage.memory_store import InMemoryKeyValueStore


def _settings(**overrides: object) -> MagicMock:
    fields: dict[str, object] = {
        "storage_backend": "memory",
        "kv_table": "kv_store",
        "index_key": "all_documents",
        "reconcile_on_startup": False,
        "log_level": "INFO",
        "http_host": "127.0.0.1",
        "http_port": 8787,
    }
    fields.update(overrides)
    return MagicMock(**fields)


class TestBuildRegistry:
    def test_builds_registry_over_memory_store(self) -> None:
        registry = build_registry(_settings())
        assert isinstance(registry, DocumentRegistry)
        assert registry.list_documents() == []

    def test_ensures_schema_for_postgres(self) -> None:
        with patch("app.main.PostgresKeyValueStore.ensure_schema") as mock_ensure:
            build_registry(_settings(storage_backend="postgres"))
        mock_ensure.assert_called_once()

    def test_reconciles_on_startup_when_enabled(self) -> None:
        with patch("app.main.DocumentRegistry.reconcile") as mock_reconcile:
            build_registry(_settings(reconcile_on_startup=True))
        mock_reconcile.assert_called_once()

    def test_skips_reconcile_by_default(self) -> None:
        store = InMemoryKeyValueStore()
        with (
            patch("app.main.KeyValueStoreFactory.create", return_value=store),
            patch("app.main.DocumentRegistry.reconcile") as mock_reconcile,
        ):
            build_registry(_settings())
        mock_reconcile.assert_not_called()


class TestMain:
    @patch("app.main.uvicorn.run")
    @patch("app.main.close_pool")
    @patch("app.main.init_pool")
    @patch("app.main.Settings")
    def test_memory_backend_skips_pool(
        self,
        mock_settings: MagicMock,
        mock_init: MagicMock,
        mock_close: MagicMock,
        mock_run: MagicMock,
    ) -> None:
        mock_settings.return_value = _settings()

        main()

        mock_init.assert_not_called()
        mock_close.assert_not_called()
        mock_run.assert_called_once()
        assert mock_run.call_args.kwargs["port"] == 8787

    @patch("app.main.uvicorn.run", side_effect=RuntimeError("bind failed"))
    @patch("app.main.close_pool")
    @patch("app.main.init_pool")
    @patch("app.main.build_registry")
    @patch("app.main.Settings")
    def test_postgres_pool_closed_on_failure(
        self,
        mock_settings: MagicMock,
        _mock_build: MagicMock,
        mock_init: MagicMock,
        mock_close: MagicMock,
        _mock_run: MagicMock,
    ) -> None:
        mock_settings.return_value = _settings(storage_backend="postgres")

        with pytest.raises(RuntimeError, match="bind failed"):
            main()

        mock_init.assert_called_once()
        mock_close.assert_called_once()
