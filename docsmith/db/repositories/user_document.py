import logging
from uuid import UUID
from typing import Any, Dict, List, Optional

from psycopg2.extras import RealDictCursor

from docsmith.models.user_document import (
    DocumentTypeBrief,
    UserDocument,
    UserDocumentSummary,
)

logger = logging.getLogger(__name__)

UPDATABLE_COLUMNS = (
    "title",
    "status",
    "generated_pdf_path",
    "generated_docx_path",
    "last_generated_at",
)


class UserDocumentRepository:
    """Reads and writes user_documents rows. Every read is scoped to the owner."""

    TABLE_NAME = "user_documents"

    def __init__(self, conn):
        self.conn = conn

    async def create(self, user_id: UUID, document_type_id: UUID, title: str, status: str) -> UserDocument:
        with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(
                """
                INSERT INTO user_documents (user_id, document_type_id, title, status)
                VALUES (%s, %s, %s, %s)
                RETURNING *
                """,
                (str(user_id), str(document_type_id), title, status),
            )
            row = cur.fetchone()
        return UserDocument.model_validate(dict(row))

    async def get_owned(self, user_id: UUID, user_document_id: UUID) -> Optional[UserDocument]:
        with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(
                "SELECT * FROM user_documents WHERE id = %s AND user_id = %s",
                (str(user_document_id), str(user_id)),
            )
            row = cur.fetchone()
        return UserDocument.model_validate(dict(row)) if row else None

    async def list_owned(
        self,
        user_id: UUID,
        status: Optional[str] = None,
        document_type_id: Optional[UUID] = None,
    ) -> List[UserDocumentSummary]:
        conditions = ["d.user_id = %(user_id)s"]
        params: Dict[str, Any] = {"user_id": str(user_id)}
        if status:
            conditions.append("d.status = %(status)s")
            params["status"] = status
        if document_type_id:
            conditions.append("d.document_type_id = %(document_type_id)s")
            params["document_type_id"] = str(document_type_id)

        with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(
                f"""
                SELECT d.id, d.title, d.status, d.version, d.created_at, d.updated_at, d.last_generated_at,
                       t.id AS type_id, t.name AS type_name, t.category AS type_category, t.icon AS type_icon
                FROM user_documents d
                JOIN document_types t ON t.id = d.document_type_id
                WHERE {' AND '.join(conditions)}
                ORDER BY d.updated_at DESC
                """,
                params,
            )
            rows = cur.fetchall()

        return [
            UserDocumentSummary(
                id=r["id"],
                title=r["title"],
                status=r["status"],
                version=r["version"],
                created_at=r["created_at"],
                updated_at=r["updated_at"],
                last_generated_at=r["last_generated_at"],
                document_type=DocumentTypeBrief(
                    id=r["type_id"],
                    name=r["type_name"],
                    category=r["type_category"],
                    icon=r["type_icon"],
                ),
            )
            for r in rows
        ]

    async def update(self, user_document_id: UUID, data: Dict[str, Any]) -> Optional[UserDocument]:
        """Apply `data` and bump updated_at, even when `data` is empty."""
        update_data = {k: v for k, v in data.items() if k in UPDATABLE_COLUMNS}
        assignments = [f"{col} = %({col})s" for col in update_data]
        assignments.append("updated_at = NOW()")
        update_data["id"] = str(user_document_id)
        with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(
                f"UPDATE user_documents SET {', '.join(assignments)} WHERE id = %(id)s RETURNING *",
                update_data,
            )
            row = cur.fetchone()
        return UserDocument.model_validate(dict(row)) if row else None

    async def delete(self, user_document_id: UUID) -> bool:
        with self.conn.cursor() as cur:
            cur.execute("DELETE FROM user_documents WHERE id = %s", (str(user_document_id),))
            return cur.rowcount > 0
