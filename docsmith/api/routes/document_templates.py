from typing import Dict, List, Optional
import logging

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field, JsonValue

from docsmith.api.dependencies import get_render_service
from docsmith.errors import NotFoundError
from docsmith.models.responses import SuccessResponse
from docsmith.services.render_service import RenderService
from docsmith.templates import get_template_module, list_template_modules

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/document-templates", tags=["Document Templates"])


class TemplateInfo(BaseModel):
    slug: str
    title: str
    fields: List[str]
    themes: List[str]


class RenderRequest(BaseModel):
    form_data: Dict[str, JsonValue] = Field(default_factory=dict, description="Placeholder name -> value")
    theme: str = Field(..., min_length=1)


@router.get(
    "",
    response_model=SuccessResponse[List[TemplateInfo]],
    summary="List registered templates"
)
async def list_templates():
    return SuccessResponse(data=[
        TemplateInfo(slug=m.slug, title=m.title, fields=m.fields, themes=list(m.themes))
        for m in list_template_modules()
    ])


@router.get(
    "/{document_type_slug}",
    response_model=Dict[str, str],
    summary="Get the raw themed templates for a document type"
)
async def get_document_templates(document_type_slug: str):
    module = get_template_module(document_type_slug)
    if not module:
        raise NotFoundError(f"Templates for document type '{document_type_slug}' not found.")
    return module.raw_templates()


@router.post(
    "/{document_type_slug}/render",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
    summary="Render a themed template to PDF"
)
async def render_document(
    document_type_slug: str,
    payload: RenderRequest,
    renderer: RenderService = Depends(get_render_service)
):
    pdf = await renderer.render(document_type_slug, payload.theme, payload.form_data)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{document_type_slug}.pdf"'},
    )
