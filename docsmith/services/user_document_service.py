import os
import asyncio
import time
import logging
from datetime import datetime, timezone
from uuid import UUID
from typing import List, Optional, Tuple

from docsmith.db.repositories import (
    DocumentFieldDataRepository,
    DocumentFieldRepository,
    DocumentTypeRepository,
    UserDocumentRepository,
)
from docsmith.db.transaction import transaction
from docsmith.errors import BadRequestError, NotFoundError
from docsmith.models.document_type import DocumentField, DocumentType
from docsmith.models.user_document import (
    DeletedUserDocument,
    DocumentStatus,
    DocumentTypeBrief,
    FieldOverview,
    GeneratedArtifacts,
    StatusChange,
    UserDocument,
    UserDocumentCreate,
    UserDocumentDetail,
    UserDocumentSummary,
    UserDocumentUpdate,
)
from docsmith.services.validation import validate_field_data
from docsmith.templates import get_template_module

logger = logging.getLogger(__name__)

ARTIFACTS_DIR_ENV = "ARTIFACTS_DIR"

NOT_FOUND_MESSAGE = "Document not found or you don't have permission to access it"


class UserDocumentService:
    """Service for a user's own document instances and their field values."""

    def __init__(
        self,
        conn,
        repository: Optional[UserDocumentRepository] = None,
        field_data_repository: Optional[DocumentFieldDataRepository] = None,
        document_type_repository: Optional[DocumentTypeRepository] = None,
        field_repository: Optional[DocumentFieldRepository] = None,
        renderer=None,
    ):
        self.conn = conn
        self.repository = repository or UserDocumentRepository(conn)
        self.field_data_repository = field_data_repository or DocumentFieldDataRepository(conn)
        self.document_type_repository = document_type_repository or DocumentTypeRepository(conn)
        self.field_repository = field_repository or DocumentFieldRepository(conn)
        self.renderer = renderer

    async def _get_owned(self, user_id: UUID, user_document_id: UUID) -> UserDocument:
        document = await self.repository.get_owned(user_id, user_document_id)
        if not document:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return document

    async def _get_type_with_fields(self, document_type_id: UUID) -> Tuple[DocumentType, List[DocumentField]]:
        document_type = await self.document_type_repository.get_by_id(document_type_id)
        if not document_type:
            raise NotFoundError("Document type not found")
        fields = await self.field_repository.list_by_document_type(document_type_id)
        return document_type, fields

    async def _detail(
        self,
        document: UserDocument,
        document_type: DocumentType,
        fields: Optional[List[DocumentField]] = None,
    ) -> UserDocumentDetail:
        field_data = await self.field_data_repository.list_details(document.id)
        brief = DocumentTypeBrief(
            id=document_type.id,
            name=document_type.name,
            description=document_type.description,
            category=document_type.category,
            icon=document_type.icon,
            fields=[
                FieldOverview.model_validate(f.model_dump()) for f in fields
            ] if fields is not None else None,
        )
        return UserDocumentDetail(**document.model_dump(), document_type=brief, field_data=field_data)

    async def create_user_document(self, user_id: UUID, payload: UserDocumentCreate) -> UserDocumentDetail:
        document_type, fields = await self._get_type_with_fields(payload.document_type_id)

        if payload.field_data is not None:
            validate_field_data(fields, payload.field_data, require_all=True)

        with transaction(self.conn, "CREATE_USER_DOCUMENT"):
            document = await self.repository.create(
                user_id,
                payload.document_type_id,
                payload.title,
                DocumentStatus.COMPLETED.value,
            )
            await self.field_data_repository.create_many(document.id, payload.field_data or [])

        logger.info(f"[CREATE_USER_DOCUMENT] user {user_id} created document {document.id}")
        return await self._detail(document, document_type)

    async def update_user_document(
        self, user_id: UUID, user_document_id: UUID, payload: UserDocumentUpdate
    ) -> UserDocumentDetail:
        existing = await self._get_owned(user_id, user_document_id)
        document_type, fields = await self._get_type_with_fields(existing.document_type_id)

        if payload.field_data:
            validate_field_data(fields, payload.field_data, require_all=False)

        update_data = {}
        if payload.title is not None:
            update_data["title"] = payload.title
        if payload.status is not None:
            update_data["status"] = payload.status.value

        with transaction(self.conn, "UPDATE_USER_DOCUMENT"):
            document = await self.repository.update(user_document_id, update_data)
            for entry in payload.field_data or []:
                current = await self.field_data_repository.get_by_field(user_document_id, entry.field_id)
                if current:
                    await self.field_data_repository.update_value(current.id, entry.value)
                else:
                    await self.field_data_repository.create(user_document_id, entry.field_id, entry.value)

        logger.info(f"[UPDATE_USER_DOCUMENT] user {user_id} updated document {user_document_id}")
        return await self._detail(document, document_type)

    async def update_status(self, user_id: UUID, user_document_id: UUID, status: DocumentStatus) -> StatusChange:
        await self._get_owned(user_id, user_document_id)

        with transaction(self.conn, "UPDATE_DOCUMENT_STATUS"):
            document = await self.repository.update(user_document_id, {"status": status.value})

        document_type = await self.document_type_repository.get_by_id(document.document_type_id)
        return StatusChange(
            id=document.id,
            title=document.title,
            status=document.status,
            document_type=document_type.name if document_type else "",
            updated_at=document.updated_at,
        )

    async def get_user_document(self, user_id: UUID, user_document_id: UUID) -> UserDocumentDetail:
        document = await self._get_owned(user_id, user_document_id)
        document_type, fields = await self._get_type_with_fields(document.document_type_id)
        return await self._detail(document, document_type, fields)

    async def list_user_documents(
        self,
        user_id: UUID,
        status: Optional[DocumentStatus] = None,
        document_type_id: Optional[UUID] = None,
    ) -> List[UserDocumentSummary]:
        return await self.repository.list_owned(
            user_id,
            status=status.value if status else None,
            document_type_id=document_type_id,
        )

    async def delete_user_document(self, user_id: UUID, user_document_id: UUID) -> DeletedUserDocument:
        existing = await self._get_owned(user_id, user_document_id)

        with transaction(self.conn, "DELETE_USER_DOCUMENT"):
            await self.field_data_repository.delete_by_document(user_document_id)
            await self.repository.delete(user_document_id)

        logger.info(f"[DELETE_USER_DOCUMENT] user {user_id} deleted document {user_document_id}")
        return DeletedUserDocument(id=existing.id, title=existing.title)

    async def generate_artifacts(
        self, user_id: UUID, user_document_id: UUID, theme: str = "classic"
    ) -> GeneratedArtifacts:
        """Record output paths for a document and render its PDF when possible.

        The PDF is rendered when the document type's template reference names
        a registered template and a renderer is configured. The DOCX path is
        reserved only.
        """
        document = await self._get_owned(user_id, user_document_id)
        document_type, fields = await self._get_type_with_fields(document.document_type_id)

        if not document_type.template_path:
            raise BadRequestError("No template available for this document type")

        stamp = int(time.time() * 1000)
        pdf_path = f"/documents/{user_id}/{user_document_id}_{stamp}.pdf"
        docx_path = f"/documents/{user_id}/{user_document_id}_{stamp}.docx"

        pdf_bytes = None
        module = get_template_module(document_type.template_path)
        if module and self.renderer:
            field_data = await self.field_data_repository.list_details(user_document_id)
            values = {fd.field_name: fd.value for fd in field_data}
            pdf_bytes = await self.renderer.render(module.slug, theme, values)
        elif not module:
            logger.warning(
                f"[GENERATE_DOCUMENT_FILES] template '{document_type.template_path}' is not registered; "
                "recording paths only"
            )

        # Written inside the unit of work; removed again if the commit fails.
        written = None
        try:
            with transaction(self.conn, "GENERATE_DOCUMENT_FILES"):
                updated = await self.repository.update(
                    user_document_id,
                    {
                        "generated_pdf_path": pdf_path,
                        "generated_docx_path": docx_path,
                        "last_generated_at": datetime.now(timezone.utc),
                    },
                )
                if pdf_bytes is not None:
                    written = await asyncio.to_thread(self._write_artifact, pdf_path, pdf_bytes)
        except Exception:
            if written:
                logger.warning(f"[GENERATE_DOCUMENT_FILES] removing unrecorded artifact {written}")
                await asyncio.to_thread(self._remove_artifact, written)
            raise

        return GeneratedArtifacts(
            id=updated.id,
            title=updated.title,
            pdf_path=updated.generated_pdf_path,
            docx_path=updated.generated_docx_path,
            generated_at=updated.last_generated_at,
            rendered=written is not None,
        )

    @staticmethod
    def _write_artifact(relative_path: str, content: bytes) -> str:
        root = os.environ.get(ARTIFACTS_DIR_ENV, "documents")
        target = os.path.join(root, relative_path.removeprefix("/documents/"))
        os.makedirs(os.path.dirname(target), exist_ok=True)
        with open(target, "wb") as f:
            f.write(content)
        return target

    @staticmethod
    def _remove_artifact(target: str):
        if os.path.exists(target):
            os.remove(target)
