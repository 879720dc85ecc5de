from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from fundintake.config.settings import Settings
from fundintake.drafts.factory import DraftStoreFactory
from fundintake.drafts.file_store import FileDraftStore
from fundintake.drafts.memory_store import MemoryDraftStore


def _make_settings(**overrides: object) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestDraftStoreFactory:
    def test_memory(self) -> None:
        store = DraftStoreFactory.create(_make_settings(draft_store="memory"))
        assert isinstance(store, MemoryDraftStore)

    def test_file(self, tmp_path: Path) -> None:
        settings = _make_settings(draft_store="file", draft_dir=str(tmp_path))
        store = DraftStoreFactory.create(settings)

        assert isinstance(store, FileDraftStore)
        assert store.path_for("wizard").parent == tmp_path

    def test_postgres_initializes_pool_and_table(self) -> None:
        settings = _make_settings(draft_store="postgres")
        with (
            patch("fundintake.drafts.factory.init_pool") as mock_init,
            patch("fundintake.drafts.factory.PostgresDraftStore") as mock_store_cls,
        ):
            mock_store_cls.return_value = MagicMock()
            store = DraftStoreFactory.create(settings)

        mock_init.assert_called_once_with(settings)
        store.ensure_table.assert_called_once_with()

    def test_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown draft store 'redis'"):
            DraftStoreFactory.create(_make_settings(draft_store="redis"))
