import logging
from uuid import UUID
from typing import Any, Dict, List, Optional

from psycopg2.extras import RealDictCursor

from docsmith.models.document_type import DocumentType, DocumentTypeSummary

logger = logging.getLogger(__name__)

UPDATABLE_COLUMNS = ("name", "slug", "description", "template_path", "is_active", "category", "icon")


class DocumentTypeRepository:
    """Reads and writes document_types rows. Never commits; see db.transaction."""

    TABLE_NAME = "document_types"

    def __init__(self, conn):
        self.conn = conn

    async def create(self, data: Dict[str, Any]) -> DocumentType:
        with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(
                """
                INSERT INTO document_types (name, slug, description, template_path, is_active, category, icon)
                VALUES (%(name)s, %(slug)s, %(description)s, %(template_path)s, %(is_active)s, %(category)s, %(icon)s)
                RETURNING *
                """,
                {
                    "name": data["name"],
                    "slug": data["slug"],
                    "description": data.get("description"),
                    "template_path": data.get("template_path"),
                    "is_active": data.get("is_active", True),
                    "category": data.get("category"),
                    "icon": data.get("icon"),
                },
            )
            row = cur.fetchone()
        return DocumentType.model_validate(dict(row))

    async def get_by_id(self, document_type_id: UUID) -> Optional[DocumentType]:
        with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute("SELECT * FROM document_types WHERE id = %s", (str(document_type_id),))
            row = cur.fetchone()
        return DocumentType.model_validate(dict(row)) if row else None

    async def find_by_name_or_slug(
        self, name: Optional[str], slug: Optional[str], exclude_id: Optional[UUID] = None
    ) -> Optional[DocumentType]:
        """First document type sharing `name` or `slug`, ignoring `exclude_id`."""
        with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(
                """
                SELECT * FROM document_types
                WHERE (name = %(name)s OR slug = %(slug)s)
                  AND (%(exclude_id)s::uuid IS NULL OR id <> %(exclude_id)s::uuid)
                ORDER BY (name = %(name)s) DESC
                LIMIT 1
                """,
                {
                    "name": name,
                    "slug": slug,
                    "exclude_id": str(exclude_id) if exclude_id else None,
                },
            )
            row = cur.fetchone()
        return DocumentType.model_validate(dict(row)) if row else None

    async def list_summaries(self, active_only: bool = True) -> List[DocumentTypeSummary]:
        query = "SELECT id, name FROM document_types"
        if active_only:
            query += " WHERE is_active = TRUE"
        query += " ORDER BY name ASC"
        with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(query)
            rows = cur.fetchall()
        return [DocumentTypeSummary.model_validate(dict(r)) for r in rows]

    async def update(self, document_type_id: UUID, data: Dict[str, Any]) -> Optional[DocumentType]:
        update_data = {k: v for k, v in data.items() if k in UPDATABLE_COLUMNS}
        assignments = [f"{col} = %({col})s" for col in update_data]
        assignments.append("updated_at = NOW()")
        update_data["id"] = str(document_type_id)
        with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(
                f"UPDATE document_types SET {', '.join(assignments)} WHERE id = %(id)s RETURNING *",
                update_data,
            )
            row = cur.fetchone()
        return DocumentType.model_validate(dict(row)) if row else None

    async def delete(self, document_type_id: UUID) -> bool:
        with self.conn.cursor() as cur:
            cur.execute("DELETE FROM document_types WHERE id = %s", (str(document_type_id),))
            return cur.rowcount > 0
