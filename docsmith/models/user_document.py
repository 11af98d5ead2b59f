from datetime import datetime
from enum import Enum
from uuid import UUID
from typing import Optional, List, Dict

from pydantic import BaseModel, ConfigDict, Field, JsonValue

from docsmith.models.document_type import DocumentCategory, FieldType


class DocumentStatus(str, Enum):
    DRAFT = "Draft"
    PENDING = "Pending"
    COMPLETED = "Completed"
    REJECTED = "Rejected"
    ARCHIVED = "Archived"


class DocumentFieldDataInput(BaseModel):
    field_id: UUID
    value: Optional[str] = None


class UserDocumentCreate(BaseModel):
    document_type_id: UUID
    title: str = Field(..., min_length=1, max_length=255)
    field_data: Optional[List[DocumentFieldDataInput]] = None


class UserDocumentUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    status: Optional[DocumentStatus] = None
    field_data: Optional[List[DocumentFieldDataInput]] = None


class DocumentStatusUpdate(BaseModel):
    status: DocumentStatus


class GenerateRequest(BaseModel):
    theme: str = "classic"


class UserDocument(BaseModel):
    """A user_documents row."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    document_type_id: UUID
    title: str
    status: DocumentStatus
    version: int = 1
    generated_pdf_path: Optional[str] = None
    generated_docx_path: Optional[str] = None
    last_generated_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DocumentFieldData(BaseModel):
    """A document_field_data row."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_document_id: UUID
    field_id: UUID
    value: Optional[str] = None
    version_number: int = 1
    updated_at: Optional[datetime] = None


class FieldDataDetail(BaseModel):
    """Field data enriched with the metadata of the field it belongs to."""
    id: UUID
    field_id: UUID
    field_name: str
    label: str
    field_type: FieldType
    value: Optional[str] = None
    version_number: int = 1
    updated_at: Optional[datetime] = None


class FieldOverview(BaseModel):
    id: UUID
    field_name: str
    label: str
    field_type: FieldType
    is_required: bool
    sort_order: int
    options: Optional[Dict[str, JsonValue]] = None
    help_text: Optional[str] = None


class DocumentTypeBrief(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    category: Optional[DocumentCategory] = None
    icon: Optional[str] = None
    fields: Optional[List[FieldOverview]] = None


class UserDocumentDetail(UserDocument):
    document_type: DocumentTypeBrief
    field_data: List[FieldDataDetail] = []


class UserDocumentSummary(BaseModel):
    id: UUID
    title: str
    status: DocumentStatus
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_generated_at: Optional[datetime] = None
    document_type: DocumentTypeBrief


class StatusChange(BaseModel):
    id: UUID
    title: str
    status: DocumentStatus
    document_type: str
    updated_at: Optional[datetime] = None


class GeneratedArtifacts(BaseModel):
    id: UUID
    title: str
    pdf_path: Optional[str] = None
    docx_path: Optional[str] = None
    generated_at: Optional[datetime] = None
    rendered: bool = False


class DeletedUserDocument(BaseModel):
    id: UUID
    title: str
