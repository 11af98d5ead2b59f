import os
import hmac

from fastapi import Depends, Header

from docsmith.db.database import get_db
from docsmith.errors import InternalError, UnauthorizedError
from docsmith.models.user import User
from docsmith.services.auth_service import AuthService
from docsmith.services.document_type_service import DocumentTypeService
from docsmith.services.render_service import RenderService
from docsmith.services.user_document_service import UserDocumentService

# API key verification for document type authoring
API_KEY_ENV = "DOCSMITH_ADMIN_API_KEY"


async def verify_api_key(x_api_key: str = Header(None, alias="X-API-Key")):
    """Verify the administrator API key."""
    expected_key = os.environ.get(API_KEY_ENV)

    if not expected_key:
        raise InternalError("API key not configured on server")

    if not x_api_key or not hmac.compare_digest(x_api_key, expected_key):
        raise UnauthorizedError("Invalid or missing API key")

    return True


def get_render_service() -> RenderService:
    return RenderService()


def get_auth_service(conn=Depends(get_db)) -> AuthService:
    return AuthService(conn)


def get_document_type_service(conn=Depends(get_db)) -> DocumentTypeService:
    return DocumentTypeService(conn)


def get_user_document_service(
    conn=Depends(get_db),
    renderer: RenderService = Depends(get_render_service),
) -> UserDocumentService:
    return UserDocumentService(conn, renderer=renderer)


async def get_current_user(
    authorization: str = Header(None),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """Resolve the caller from an `Authorization: Bearer <token>` header."""
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthorizedError("Authorization header missing or malformed")

    token = authorization[len("Bearer "):].strip()
    if not token:
        raise UnauthorizedError("Token missing")

    return await auth_service.resolve_token(token)
