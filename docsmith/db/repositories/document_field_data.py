import logging
from uuid import UUID
from typing import List, Optional

from psycopg2.extras import RealDictCursor, execute_batch

from docsmith.models.user_document import DocumentFieldData, DocumentFieldDataInput, FieldDataDetail

logger = logging.getLogger(__name__)


class DocumentFieldDataRepository:
    """Reads and writes document_field_data rows, one per (document, field)."""

    TABLE_NAME = "document_field_data"

    def __init__(self, conn):
        self.conn = conn

    async def create_many(self, user_document_id: UUID, entries: List[DocumentFieldDataInput]) -> int:
        if not entries:
            return 0
        with self.conn.cursor() as cur:
            execute_batch(
                cur,
                """
                INSERT INTO document_field_data (user_document_id, field_id, value)
                VALUES (%s, %s, %s)
                """,
                [(str(user_document_id), str(e.field_id), e.value or None) for e in entries],
            )
        return len(entries)

    async def create(self, user_document_id: UUID, field_id: UUID, value: Optional[str]) -> DocumentFieldData:
        with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(
                """
                INSERT INTO document_field_data (user_document_id, field_id, value)
                VALUES (%s, %s, %s)
                RETURNING *
                """,
                (str(user_document_id), str(field_id), value),
            )
            row = cur.fetchone()
        return DocumentFieldData.model_validate(dict(row))

    async def get_by_field(self, user_document_id: UUID, field_id: UUID) -> Optional[DocumentFieldData]:
        with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(
                "SELECT * FROM document_field_data WHERE user_document_id = %s AND field_id = %s",
                (str(user_document_id), str(field_id)),
            )
            row = cur.fetchone()
        return DocumentFieldData.model_validate(dict(row)) if row else None

    async def update_value(self, field_data_id: UUID, value: Optional[str]) -> DocumentFieldData:
        with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(
                """
                UPDATE document_field_data
                SET value = %s, version_number = version_number + 1, updated_at = NOW()
                WHERE id = %s
                RETURNING *
                """,
                (value, str(field_data_id)),
            )
            row = cur.fetchone()
        return DocumentFieldData.model_validate(dict(row))

    async def list_details(self, user_document_id: UUID) -> List[FieldDataDetail]:
        with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(
                """
                SELECT fd.id, fd.field_id, f.field_name, f.label, f.field_type,
                       fd.value, fd.version_number, fd.updated_at
                FROM document_field_data fd
                JOIN document_fields f ON f.id = fd.field_id
                WHERE fd.user_document_id = %s
                ORDER BY f.sort_order ASC, f.created_at ASC
                """,
                (str(user_document_id),),
            )
            rows = cur.fetchall()
        return [FieldDataDetail.model_validate(dict(r)) for r in rows]

    async def delete_by_document(self, user_document_id: UUID) -> int:
        with self.conn.cursor() as cur:
            cur.execute("DELETE FROM document_field_data WHERE user_document_id = %s", (str(user_document_id),))
            return cur.rowcount

    async def delete_by_fields(self, field_ids: List[UUID]) -> int:
        if not field_ids:
            return 0
        with self.conn.cursor() as cur:
            cur.execute(
                "DELETE FROM document_field_data WHERE field_id = ANY(%s::uuid[])",
                ([str(i) for i in field_ids],),
            )
            return cur.rowcount
