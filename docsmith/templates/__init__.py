"""
Document template registry.

Maps a document-type slug to its TemplateModule. The registry is built at
import time and treated as read-only afterwards.
"""
from types import MappingProxyType
from typing import List, Mapping, Optional

from docsmith.templates.base import TemplateModule, populate
from docsmith.templates import leave_application, resignation_letter

TEMPLATE_REGISTRY: Mapping[str, TemplateModule] = MappingProxyType({
    resignation_letter.module.slug: resignation_letter.module,
    leave_application.module.slug: leave_application.module,
})


def get_template_module(slug: str) -> Optional[TemplateModule]:
    return TEMPLATE_REGISTRY.get(slug)


def list_template_modules() -> List[TemplateModule]:
    return [TEMPLATE_REGISTRY[slug] for slug in sorted(TEMPLATE_REGISTRY)]


__all__ = ["TEMPLATE_REGISTRY", "TemplateModule", "get_template_module", "list_template_modules", "populate"]
