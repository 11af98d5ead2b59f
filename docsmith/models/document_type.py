from datetime import datetime
from enum import Enum
from uuid import UUID
from typing import Optional, List, Dict

from pydantic import BaseModel, ConfigDict, Field, JsonValue, field_validator

from docsmith.utils.slugify import SLUG_PATTERN


class FieldType(str, Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    DATE = "date"
    EMAIL = "email"
    PHONE = "phone"
    SELECT = "select"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    FILE = "file"
    RICH_TEXT = "richText"
    SIGNATURE = "signature"


class DocumentCategory(str, Enum):
    PROFESSIONAL = "professional"
    LEGAL = "legal"
    PERSONAL = "personal"
    EDUCATION = "education"
    BUSINESS = "business"
    CREATIVE = "creative"
    TECHNICAL = "technical"
    MEDICAL = "medical"


class DocumentFieldInput(BaseModel):
    """A field definition as submitted when authoring a document type."""
    field_name: str = Field(..., min_length=1, max_length=100, description="Identifier, unique within the document type")
    label: str = Field(..., min_length=1, max_length=100)
    field_type: FieldType
    is_required: bool = True
    sort_order: int = Field(0, ge=0, description="Display and validation order")
    placeholder: Optional[str] = None
    default_value: Optional[str] = None
    validation: Optional[str] = Field(None, description="Rule expression, interpreted by clients only")
    options: Optional[Dict[str, JsonValue]] = Field(None, description="Structured options, e.g. select choices")
    help_text: Optional[str] = None
    section: Optional[str] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    depends_on: Optional[str] = Field(None, description="field_name of the field controlling visibility")
    depends_value: Optional[str] = None


class DocumentField(DocumentFieldInput):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    document_type_id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def _check_unique_field_names(fields):
    if fields is None:
        return fields
    seen = set()
    duplicates = []
    for field in fields:
        if field.field_name in seen:
            duplicates.append(field.field_name)
        seen.add(field.field_name)
    if duplicates:
        raise ValueError(f"Duplicate field names: {', '.join(sorted(set(duplicates)))}")
    return fields


class DocumentTypeCreate(BaseModel):
    """Model for creating a new document type."""
    name: str = Field(..., min_length=1, max_length=100, description="Document type name (e.g., 'Resignation Letter')")
    slug: Optional[str] = Field(None, max_length=120, pattern=SLUG_PATTERN, description="Derived from name when omitted")
    description: Optional[str] = None
    template_path: Optional[str] = Field(None, description="Template reference, usually a registered template slug")
    is_active: bool = True
    category: Optional[DocumentCategory] = None
    icon: Optional[str] = None
    fields: Optional[List[DocumentFieldInput]] = None

    @field_validator('fields')
    def validate_fields(cls, v):
        return _check_unique_field_names(v)


class DocumentTypeUpdate(BaseModel):
    """Model for updating an existing document type. Omitted attributes are left untouched."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    slug: Optional[str] = Field(None, max_length=120, pattern=SLUG_PATTERN)
    description: Optional[str] = None
    template_path: Optional[str] = None
    is_active: Optional[bool] = None
    category: Optional[DocumentCategory] = None
    icon: Optional[str] = None
    fields: Optional[List[DocumentFieldInput]] = None

    @field_validator('fields')
    def validate_fields(cls, v):
        return _check_unique_field_names(v)


class DocumentType(BaseModel):
    """Complete document type model including its ordered fields."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    slug: str
    description: Optional[str] = None
    template_path: Optional[str] = None
    is_active: bool = True
    category: Optional[DocumentCategory] = None
    icon: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    fields: List[DocumentField] = []


class DocumentTypeSummary(BaseModel):
    id: UUID
    name: str


class DeletedDocumentType(BaseModel):
    id: UUID
    name: str
    fields_deleted: int
