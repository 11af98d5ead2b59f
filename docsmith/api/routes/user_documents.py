from uuid import UUID
from typing import Optional
import logging

from fastapi import APIRouter, Body, Depends, status

from docsmith.api.dependencies import get_current_user, get_user_document_service
from docsmith.models.responses import ListResponse, SuccessResponse
from docsmith.models.user import User
from docsmith.models.user_document import (
    DeletedUserDocument,
    DocumentStatus,
    DocumentStatusUpdate,
    GeneratedArtifacts,
    GenerateRequest,
    StatusChange,
    UserDocumentCreate,
    UserDocumentDetail,
    UserDocumentSummary,
    UserDocumentUpdate,
)
from docsmith.services.user_document_service import UserDocumentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/user-documents", tags=["User Documents"])


@router.post(
    "",
    response_model=SuccessResponse[UserDocumentDetail],
    status_code=status.HTTP_201_CREATED,
    summary="Create a document from a document type"
)
async def create_user_document(
    payload: UserDocumentCreate,
    user: User = Depends(get_current_user),
    service: UserDocumentService = Depends(get_user_document_service)
):
    document = await service.create_user_document(user.id, payload)
    return SuccessResponse(message="Document created successfully", data=document)


@router.get(
    "",
    response_model=ListResponse[UserDocumentSummary],
    summary="List the caller's documents"
)
async def list_user_documents(
    status: Optional[DocumentStatus] = None,
    document_type_id: Optional[UUID] = None,
    user: User = Depends(get_current_user),
    service: UserDocumentService = Depends(get_user_document_service)
):
    """
    Most recently updated first. Optional equality filters on status and document type.
    """
    documents = await service.list_user_documents(user.id, status=status, document_type_id=document_type_id)
    return ListResponse(count=len(documents), data=documents)


@router.get(
    "/{user_document_id}",
    response_model=SuccessResponse[UserDocumentDetail],
    summary="Get one of the caller's documents"
)
async def get_user_document(
    user_document_id: UUID,
    user: User = Depends(get_current_user),
    service: UserDocumentService = Depends(get_user_document_service)
):
    document = await service.get_user_document(user.id, user_document_id)
    return SuccessResponse(data=document)


@router.put(
    "/{user_document_id}",
    response_model=SuccessResponse[UserDocumentDetail],
    summary="Update title, status and field values"
)
async def update_user_document(
    user_document_id: UUID,
    payload: UserDocumentUpdate,
    user: User = Depends(get_current_user),
    service: UserDocumentService = Depends(get_user_document_service)
):
    document = await service.update_user_document(user.id, user_document_id, payload)
    return SuccessResponse(message="Document updated successfully", data=document)


@router.patch(
    "/{user_document_id}/status",
    response_model=SuccessResponse[StatusChange],
    summary="Change a document's status"
)
async def update_document_status(
    user_document_id: UUID,
    payload: DocumentStatusUpdate,
    user: User = Depends(get_current_user),
    service: UserDocumentService = Depends(get_user_document_service)
):
    change = await service.update_status(user.id, user_document_id, payload.status)
    return SuccessResponse(message="Document status updated successfully", data=change)


@router.delete(
    "/{user_document_id}",
    response_model=SuccessResponse[DeletedUserDocument],
    summary="Delete a document and its field values"
)
async def delete_user_document(
    user_document_id: UUID,
    user: User = Depends(get_current_user),
    service: UserDocumentService = Depends(get_user_document_service)
):
    deleted = await service.delete_user_document(user.id, user_document_id)
    return SuccessResponse(message="Document deleted successfully", data=deleted)


@router.post(
    "/{user_document_id}/generate",
    response_model=SuccessResponse[GeneratedArtifacts],
    summary="Generate document files"
)
async def generate_document_files(
    user_document_id: UUID,
    payload: Optional[GenerateRequest] = Body(None),
    user: User = Depends(get_current_user),
    service: UserDocumentService = Depends(get_user_document_service)
):
    theme = payload.theme if payload else GenerateRequest().theme
    artifacts = await service.generate_artifacts(user.id, user_document_id, theme=theme)
    return SuccessResponse(message="Document files generated successfully", data=artifacts)
