import re
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field

PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")


def populate(template: str, values: Mapping[str, str]) -> str:
    """Replace every {{name}} with values[name], or an empty string."""
    return PLACEHOLDER.sub(lambda match: values.get(match.group(1), ""), template)


class TemplateModule(BaseModel):
    """
    Declarative description of a document template.

    Binds a document-type slug to the ordered list of placeholder fields it
    expects and one raw HTML document per theme. The field list is kept in
    sync with the stored DocumentField definitions by convention only.
    """

    slug: str
    title: str
    fields: List[str]
    themes: Dict[str, str] = Field(..., description="theme name -> raw HTML with {{field}} placeholders")

    def raw_templates(self) -> Dict[str, str]:
        return dict(self.themes)

    def _values(self, field_values: Optional[Mapping[str, Any]]) -> Dict[str, str]:
        field_values = field_values or {}
        values = {}
        for name in self.fields:
            value = field_values.get(name)
            values[name] = "" if value is None else str(value)
        return values

    def generate(self, field_values: Optional[Mapping[str, Any]]) -> Dict[str, str]:
        """Populate every theme with `field_values`. Never fails on missing fields."""
        values = self._values(field_values)
        return {theme: populate(template, values) for theme, template in self.themes.items()}

    def missing_fields(self, field_values: Optional[Mapping[str, Any]]) -> List[str]:
        field_values = field_values or {}
        return [name for name in self.fields if field_values.get(name) in (None, "")]
