from uuid import UUID
from typing import List
import logging

from fastapi import APIRouter, Depends, status

from docsmith.api.dependencies import get_document_type_service, verify_api_key
from docsmith.models.document_type import (
    DeletedDocumentType,
    DocumentType,
    DocumentTypeCreate,
    DocumentTypeSummary,
    DocumentTypeUpdate,
)
from docsmith.models.responses import SuccessResponse
from docsmith.services.document_type_service import DocumentTypeService

# Configure logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api/v1/document-types", tags=["Document Types"])


@router.post(
    "",
    response_model=SuccessResponse[DocumentType],
    status_code=status.HTTP_201_CREATED,
    summary="Create a new document type",
    dependencies=[Depends(verify_api_key)]
)
async def create_document_type(
    document_type: DocumentTypeCreate,
    service: DocumentTypeService = Depends(get_document_type_service)
):
    """
    Create a document type together with its field definitions.
    The slug is derived from the name when not provided.
    """
    created_type = await service.create_document_type(document_type)
    return SuccessResponse(message="Document type created successfully", data=created_type)


@router.get(
    "",
    response_model=SuccessResponse[List[DocumentTypeSummary]],
    summary="List document types"
)
async def list_document_types(
    active_only: bool = True,
    service: DocumentTypeService = Depends(get_document_type_service)
):
    """
    List document types by name. Only active types unless `active_only=false`.
    """
    document_types = await service.list_document_types(active_only=active_only)
    return SuccessResponse(data=document_types)


@router.get(
    "/{document_type_id}",
    response_model=SuccessResponse[DocumentType],
    summary="Get a document type by ID"
)
async def get_document_type(
    document_type_id: UUID,
    service: DocumentTypeService = Depends(get_document_type_service)
):
    """
    Get a document type with its fields ordered by sort order.
    """
    document_type = await service.get_document_type(document_type_id)
    return SuccessResponse(data=document_type)


@router.put(
    "/{document_type_id}",
    response_model=SuccessResponse[DocumentType],
    summary="Update a document type",
    dependencies=[Depends(verify_api_key)]
)
async def update_document_type(
    document_type_id: UUID,
    document_type: DocumentTypeUpdate,
    service: DocumentTypeService = Depends(get_document_type_service)
):
    """
    Update an existing document type. When `fields` is given it replaces the
    current field list: matching names are overwritten, new names created and
    missing names deleted.
    """
    updated_type = await service.update_document_type(document_type_id, document_type)
    return SuccessResponse(message="Document type updated successfully", data=updated_type)


@router.delete(
    "/{document_type_id}",
    response_model=SuccessResponse[DeletedDocumentType],
    summary="Delete a document type",
    dependencies=[Depends(verify_api_key)]
)
async def delete_document_type(
    document_type_id: UUID,
    service: DocumentTypeService = Depends(get_document_type_service)
):
    """
    Delete a document type and its fields. Fails with 409 while user
    documents still reference it.
    """
    deleted = await service.delete_document_type(document_type_id)
    return SuccessResponse(message="Document type deleted successfully", data=deleted)
