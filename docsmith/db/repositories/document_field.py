import json
import logging
from uuid import UUID
from typing import Any, Dict, List

from psycopg2.extras import RealDictCursor, execute_batch

from docsmith.models.document_type import DocumentField, DocumentFieldInput

logger = logging.getLogger(__name__)

MUTABLE_COLUMNS = (
    "label",
    "field_type",
    "is_required",
    "sort_order",
    "placeholder",
    "default_value",
    "validation",
    "options",
    "help_text",
    "section",
    "min_length",
    "max_length",
    "depends_on",
    "depends_value",
)


def field_params(document_type_id: UUID, field: DocumentFieldInput) -> Dict[str, Any]:
    """Column values for a field definition, with defaults already applied by the model."""
    data = field.model_dump(mode="json")
    params = {col: data.get(col) for col in MUTABLE_COLUMNS}
    params["options"] = json.dumps(data["options"]) if data.get("options") is not None else None
    params["field_name"] = field.field_name
    params["document_type_id"] = str(document_type_id)
    return params


class DocumentFieldRepository:
    """Reads and writes document_fields rows."""

    TABLE_NAME = "document_fields"

    def __init__(self, conn):
        self.conn = conn

    async def list_by_document_type(self, document_type_id: UUID) -> List[DocumentField]:
        with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(
                """
                SELECT * FROM document_fields
                WHERE document_type_id = %s
                ORDER BY sort_order ASC, created_at ASC
                """,
                (str(document_type_id),),
            )
            rows = cur.fetchall()
        return [DocumentField.model_validate(dict(r)) for r in rows]

    async def create_many(self, document_type_id: UUID, fields: List[DocumentFieldInput]) -> int:
        if not fields:
            return 0
        columns = ("document_type_id", "field_name") + MUTABLE_COLUMNS
        placeholders = ", ".join(f"%({col})s" for col in columns)
        with self.conn.cursor() as cur:
            execute_batch(
                cur,
                f"INSERT INTO document_fields ({', '.join(columns)}) VALUES ({placeholders})",
                [field_params(document_type_id, f) for f in fields],
            )
        return len(fields)

    async def update_many(self, document_type_id: UUID, fields: List[DocumentFieldInput]) -> int:
        """Overwrite every mutable attribute of existing fields, matched by field_name."""
        if not fields:
            return 0
        assignments = ", ".join(f"{col} = %({col})s" for col in MUTABLE_COLUMNS)
        with self.conn.cursor() as cur:
            execute_batch(
                cur,
                f"""
                UPDATE document_fields SET {assignments}, updated_at = NOW()
                WHERE document_type_id = %(document_type_id)s AND field_name = %(field_name)s
                """,
                [field_params(document_type_id, f) for f in fields],
            )
        return len(fields)

    async def delete_many(self, field_ids: List[UUID]) -> int:
        if not field_ids:
            return 0
        with self.conn.cursor() as cur:
            cur.execute(
                "DELETE FROM document_fields WHERE id = ANY(%s::uuid[])",
                ([str(i) for i in field_ids],),
            )
            return cur.rowcount

    async def delete_by_document_type(self, document_type_id: UUID) -> int:
        with self.conn.cursor() as cur:
            cur.execute("DELETE FROM document_fields WHERE document_type_id = %s", (str(document_type_id),))
            return cur.rowcount
