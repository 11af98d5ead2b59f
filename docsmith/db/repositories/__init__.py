from docsmith.db.repositories.document_type import DocumentTypeRepository
from docsmith.db.repositories.document_field import DocumentFieldRepository
from docsmith.db.repositories.user_document import UserDocumentRepository
from docsmith.db.repositories.document_field_data import DocumentFieldDataRepository
from docsmith.db.repositories.user import UserRepository

__all__ = [
    "DocumentTypeRepository",
    "DocumentFieldRepository",
    "UserDocumentRepository",
    "DocumentFieldDataRepository",
    "UserRepository",
]
