"""
Checks submitted field values against a document type's field definitions.

Only membership and required-field coverage are enforced here. `field_type`
and the `validation` expression are metadata for clients; no format checks
(email shape, number parsing, ...) happen on the server.
"""
from typing import Dict, List, Sequence

from docsmith.errors import ValidationError
from docsmith.models.document_type import DocumentField
from docsmith.models.user_document import DocumentFieldDataInput


def find_invalid_field_ids(
    fields: Sequence[DocumentField], entries: Sequence[DocumentFieldDataInput]
) -> List[str]:
    """Submitted field ids that do not belong to the document type, in submission order."""
    known = {field.id for field in fields}
    return [str(entry.field_id) for entry in entries if entry.field_id not in known]


def find_missing_required_fields(
    fields: Sequence[DocumentField], entries: Sequence[DocumentFieldDataInput]
) -> List[Dict[str, str]]:
    """Required fields with no submitted entry carrying a non-empty value."""
    provided = {entry.field_id for entry in entries if entry.value}
    return [
        {"id": str(field.id), "field_name": field.field_name, "label": field.label}
        for field in sorted(fields, key=lambda f: f.sort_order)
        if field.is_required and field.id not in provided
    ]


def validate_field_data(
    fields: Sequence[DocumentField],
    entries: Sequence[DocumentFieldDataInput],
    require_all: bool = True,
) -> None:
    """Raise ValidationError if `entries` do not fit `fields`.

    Unknown ids are reported first; required coverage is only checked when
    `require_all` is set (creation), not for partial updates.
    """
    invalid = find_invalid_field_ids(fields, entries)
    if invalid:
        raise ValidationError("Invalid field IDs provided", {"invalid_fields": invalid})

    if not require_all:
        return

    missing = find_missing_required_fields(fields, entries)
    if missing:
        raise ValidationError("Required fields missing values", {"missing_fields": missing})
