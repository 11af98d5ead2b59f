from .document_type import (
    # Enums
    FieldType,
    DocumentCategory,

    # Document type schemas
    DocumentFieldInput,
    DocumentField,
    DocumentTypeCreate,
    DocumentTypeUpdate,
    DocumentType,
    DocumentTypeSummary,
    DeletedDocumentType,
)
from .user_document import (
    # Enums
    DocumentStatus,

    # User document schemas
    DocumentFieldDataInput,
    UserDocumentCreate,
    UserDocumentUpdate,
    DocumentStatusUpdate,
    GenerateRequest,
    UserDocument,
    DocumentFieldData,
    FieldDataDetail,
    FieldOverview,
    DocumentTypeBrief,
    UserDocumentDetail,
    UserDocumentSummary,
    StatusChange,
    GeneratedArtifacts,
    DeletedUserDocument,
)
from .user import (
    UserCreate,
    LoginRequest,
    UserPublic,
    User,
    LoginResult,
)
from .responses import (
    ErrorResponse,
    SuccessResponse,
    ListResponse,
)
