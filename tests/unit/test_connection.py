from unittest.mock import MagicMock, patch

import pytest

from app.database import connection
from app.database.connection import build_conninfo, close_pool, get_connection, init_pool


class TestConnectionPool:
    def test_conninfo_from_settings(self) -> None:
        settings = MagicMock(
            db_host="db", db_port=5433, db_database="docs", db_username="u", db_password="p"
        )
        assert build_conninfo(settings) == "host=db port=5433 dbname=docs user=u password=p"

    def test_get_connection_requires_init(self) -> None:
        close_pool()
        with pytest.raises(RuntimeError, match="not initialized"):
            with get_connection():
                pass

    @patch("app.database.connection.ConnectionPool")
    def test_init_and_close(self, mock_pool_cls: MagicMock) -> None:
        settings = MagicMock(
            db_host="db", db_port=5432, db_database="d", db_username="u", db_password="p"
        )

        init_pool(settings)
        assert connection._pool is mock_pool_cls.return_value
        close_pool()

        mock_pool_cls.return_value.close.assert_called_once()
        assert connection._pool is None
