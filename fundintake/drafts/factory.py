from fundintake.config.settings import Settings
from fundintake.database.connection import init_pool
from fundintake.drafts.base import BaseDraftStore
from fundintake.drafts.file_store import FileDraftStore
from fundintake.drafts.memory_store import MemoryDraftStore
from fundintake.drafts.postgres_store import PostgresDraftStore


class DraftStoreFactory:
    """Creates the configured draft store."""

    SUPPORTED_STORES = ("file", "memory", "postgres")

    @classmethod
    def create(cls, settings: Settings) -> BaseDraftStore:
        store = settings.draft_store.lower()
        if store == "memory":
            return MemoryDraftStore(quota_bytes=settings.draft_quota_bytes)
        if store == "file":
            return FileDraftStore(settings.draft_dir)
        if store == "postgres":
            init_pool(settings)
            postgres = PostgresDraftStore()
            postgres.ensure_table()
            return postgres
        raise ValueError(
            f"Unknown draft store '{store}'. Choose from: {list(cls.SUPPORTED_STORES)}"
        )
