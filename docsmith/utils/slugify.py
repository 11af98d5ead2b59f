import re

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"

_DISALLOWED = re.compile(r"[^a-zA-Z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def slugify(text: str) -> str:
    """Turn a document type name into a URL slug.

    "NDA / Mutual!!" -> "nda-mutual"
    """
    if not isinstance(text, str):
        return ""

    slug = text.lower().strip()
    slug = _DISALLOWED.sub("", slug)
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")


def is_valid_slug(slug: str) -> bool:
    return bool(re.match(SLUG_PATTERN, slug))
