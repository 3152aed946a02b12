# app/utils/slug.py
import re
import unicodedata

_slug_invalid_re = re.compile(r"[^a-z0-9]+")


def slugify(value: str | None) -> str:
    """'Trà sữa!' -> 'tra-sua'. Returns "" when nothing usable is left."""
    if not value:
        return ""
    value = unicodedata.normalize("NFKD", str(value))
    value = "".join(ch for ch in value if not unicodedata.combining(ch))
    value = value.lower().strip()
    return _slug_invalid_re.sub("-", value).strip("-")
