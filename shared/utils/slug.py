"""
Slug helpers.

Slugs are snake_case: lowercase, punctuation stripped, runs of spaces,
dashes and underscores collapsed into a single underscore.
"""

import re
import unicodedata

_NON_WORD = re.compile(r"[^\w\s-]")
_SEPARATORS = re.compile(r"[\s_-]+")
_VALID_SLUG = re.compile(r"^[a-z0-9_]+$")


def generate_slug(text: str) -> str:
    """
    Convert text to a slug.

    Accents are folded to their ASCII base letter first, so
    "Empanadas de Carne Cortada a Cuchillo" and "Milanesa Napolitana!"
    become "empanadas_de_carne_cortada_a_cuchillo" and "milanesa_napolitana".
    """
    folded = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = _NON_WORD.sub("", folded.lower().strip())
    slug = _SEPARATORS.sub("_", slug)
    return slug.strip("_")


def is_valid_slug(slug: str) -> bool:
    """Check that a slug only uses a-z, 0-9 and underscores."""
    return bool(slug) and _VALID_SLUG.match(slug) is not None
