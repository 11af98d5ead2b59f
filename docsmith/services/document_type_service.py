from uuid import UUID
import logging
from typing import List, Optional

from docsmith.db.repositories import (
    DocumentFieldDataRepository,
    DocumentFieldRepository,
    DocumentTypeRepository,
)
from docsmith.db.transaction import transaction
from docsmith.errors import ConflictError, NotFoundError, ValidationError
from docsmith.models.document_type import (
    DeletedDocumentType,
    DocumentType,
    DocumentTypeCreate,
    DocumentTypeSummary,
    DocumentTypeUpdate,
)
from docsmith.utils.slugify import slugify

# Configure logging
logger = logging.getLogger(__name__)

# Columns that cannot be cleared by sending an explicit null.
NON_NULLABLE = ("name", "slug", "is_active")


class DocumentTypeService:
    """Service for document type operations."""

    def __init__(
        self,
        conn,
        repository: Optional[DocumentTypeRepository] = None,
        field_repository: Optional[DocumentFieldRepository] = None,
        field_data_repository: Optional[DocumentFieldDataRepository] = None,
    ):
        self.conn = conn
        self.repository = repository or DocumentTypeRepository(conn)
        self.field_repository = field_repository or DocumentFieldRepository(conn)
        self.field_data_repository = field_data_repository or DocumentFieldDataRepository(conn)

    async def _check_conflict(self, name: Optional[str], slug: Optional[str], exclude_id: Optional[UUID] = None):
        existing = await self.repository.find_by_name_or_slug(name, slug, exclude_id)
        if existing:
            conflict_field = "name" if name is not None and existing.name == name else "slug"
            raise ConflictError(
                f"Document type with this {conflict_field} already exists",
                {"field": conflict_field},
            )

    async def create_document_type(self, document_type: DocumentTypeCreate) -> DocumentType:
        """Create a document type and its fields in one transaction."""
        slug = document_type.slug or slugify(document_type.name)
        if not slug:
            raise ValidationError(
                "Cannot derive a slug from this name",
                {"name": ["Name must contain at least one letter or digit"]},
            )

        await self._check_conflict(document_type.name, slug)

        data = document_type.model_dump(mode="json", exclude={"fields"})
        data["slug"] = slug

        with transaction(self.conn, "CREATE_DOCUMENT_TYPE"):
            created = await self.repository.create(data)
            await self.field_repository.create_many(created.id, document_type.fields or [])

        logger.info(f"[CREATE_DOCUMENT_TYPE] created '{created.name}' ({created.slug})")
        return await self.get_document_type(created.id)

    async def get_document_type(self, document_type_id: UUID) -> DocumentType:
        """Get a document type with its fields ordered by sort_order."""
        document_type = await self.repository.get_by_id(document_type_id)
        if not document_type:
            raise NotFoundError("Document type not found")
        fields = await self.field_repository.list_by_document_type(document_type_id)
        return document_type.model_copy(update={"fields": fields})

    async def list_document_types(self, active_only: bool = True) -> List[DocumentTypeSummary]:
        return await self.repository.list_summaries(active_only=active_only)

    async def update_document_type(self, document_type_id: UUID, document_type: DocumentTypeUpdate) -> DocumentType:
        """Update a document type, diffing its fields by field_name when a field list is given."""
        existing = await self.repository.get_by_id(document_type_id)
        if not existing:
            raise NotFoundError("Document type not found")

        update_data = document_type.model_dump(mode="json", exclude_unset=True, exclude={"fields"})
        for key in NON_NULLABLE:
            if key in update_data and update_data[key] is None:
                del update_data[key]

        new_name = update_data.get("name")
        new_slug = update_data.get("slug")
        name_changed = new_name is not None and new_name != existing.name
        slug_changed = new_slug is not None and new_slug != existing.slug
        if name_changed or slug_changed:
            await self._check_conflict(
                new_name if name_changed else None,
                new_slug if slug_changed else None,
                exclude_id=document_type_id,
            )

        with transaction(self.conn, "UPDATE_DOCUMENT_TYPE"):
            await self.repository.update(document_type_id, update_data)
            if document_type.fields is not None:
                await self._sync_fields(document_type_id, document_type)

        logger.info(f"[UPDATE_DOCUMENT_TYPE] updated {document_type_id}")
        return await self.get_document_type(document_type_id)

    async def _sync_fields(self, document_type_id: UUID, document_type: DocumentTypeUpdate):
        """Three-way diff of stored fields against the submitted list, keyed by field_name."""
        current = await self.field_repository.list_by_document_type(document_type_id)
        current_by_name = {f.field_name: f for f in current}
        submitted_names = {f.field_name for f in document_type.fields}

        to_update = [f for f in document_type.fields if f.field_name in current_by_name]
        to_create = [f for f in document_type.fields if f.field_name not in current_by_name]
        to_delete = [f.id for f in current if f.field_name not in submitted_names]

        await self.field_repository.update_many(document_type_id, to_update)
        await self.field_repository.create_many(document_type_id, to_create)
        if to_delete:
            # Values stored against removed fields go with them.
            await self.field_data_repository.delete_by_fields(to_delete)
            await self.field_repository.delete_many(to_delete)

        logger.info(
            f"[UPDATE_DOCUMENT_TYPE] fields: {len(to_create)} created, "
            f"{len(to_update)} updated, {len(to_delete)} deleted"
        )

    async def delete_document_type(self, document_type_id: UUID) -> DeletedDocumentType:
        """Delete a document type and its fields.

        Raises ReferentialError (via the unit of work) when user documents
        still reference the type.
        """
        existing = await self.repository.get_by_id(document_type_id)
        if not existing:
            raise NotFoundError("Document type not found")

        with transaction(self.conn, "DELETE_DOCUMENT_TYPE"):
            fields_deleted = await self.field_repository.delete_by_document_type(document_type_id)
            await self.repository.delete(document_type_id)

        logger.info(f"[DELETE_DOCUMENT_TYPE] deleted '{existing.name}' and {fields_deleted} fields")
        return DeletedDocumentType(id=existing.id, name=existing.name, fields_deleted=fields_deleted)
