from docsmith.api.routes.auth import router as auth_router
from docsmith.api.routes.document_types import router as document_types_router
from docsmith.api.routes.user_documents import router as user_documents_router
from docsmith.api.routes.document_templates import router as document_templates_router

# Export all routers
__all__ = ["auth_router", "document_types_router", "user_documents_router", "document_templates_router"]
