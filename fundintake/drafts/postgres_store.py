import psycopg
from psycopg.rows import dict_row

from fundintake.database.connection import get_connection
from fundintake.drafts.base import BaseDraftStore
from fundintake.drafts.exceptions import DraftStorageError
from fundintake.drafts.models import DraftRecord
from fundintake.drafts.serializer import deserialize


class PostgresDraftStore(BaseDraftStore):
    """Database operations for the form_drafts table.

    Payloads are stored as jsonb; one row per form key, upserted on save.
    """

    def ensure_table(self) -> None:
        """Create the form_drafts table if it does not exist."""
        try:
            with get_connection() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS form_drafts (
                        form_key TEXT PRIMARY KEY,
                        payload JSONB NOT NULL,
                        saved_at TIMESTAMPTZ NOT NULL DEFAULT now()
                    )
                    """
                )
                conn.commit()
        except psycopg.Error as exc:
            raise DraftStorageError(f"Cannot create form_drafts table: {exc}") from exc

    def get(self, key: str) -> str | None:
        row = self._fetch(key)
        return None if row is None else row["payload"]

    def set(self, key: str, payload: str) -> None:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        INSERT INTO form_drafts (form_key, payload, saved_at)
                        VALUES (%s, %s::jsonb, now())
                        ON CONFLICT (form_key) DO UPDATE
                        SET payload = EXCLUDED.payload,
                            saved_at = EXCLUDED.saved_at
                        """,
                        (key, payload),
                    )
                conn.commit()
        except psycopg.Error as exc:
            raise DraftStorageError(f"Cannot save draft {key!r}: {exc}") from exc

    def remove(self, key: str) -> None:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("DELETE FROM form_drafts WHERE form_key = %s", (key,))
                conn.commit()
        except psycopg.Error as exc:
            raise DraftStorageError(f"Cannot remove draft {key!r}: {exc}") from exc

    def load(self, key: str) -> DraftRecord | None:
        row = self._fetch(key)
        if row is None:
            return None
        return DraftRecord(
            form_key=key,
            data=deserialize(row["payload"]),
            saved_at=row["saved_at"],
        )

    def _fetch(self, key: str) -> dict[str, object] | None:
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        """
                        SELECT payload::text AS payload, saved_at
                        FROM form_drafts
                        WHERE form_key = %s
                        """,
                        (key,),
                    )
                    return cur.fetchone()
        except psycopg.Error as exc:
            raise DraftStorageError(f"Cannot read draft {key!r}: {exc}") from exc
