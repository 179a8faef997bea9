"""
URL slug generation for bilingual (Vietnamese/English) names.

  "Quán Cơm Nhà" → "quan-com-nha"
  "Đà Nẵng"      → "da-nang"
"""
import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lower-case, strip diacritics, hyphenate. Never fails; may return ""."""
    if not text:
        return ""
    lowered = text.lower()
    # NFD splits "ơ" into "o" + combining horn, etc. "đ" has no decomposition.
    decomposed = unicodedata.normalize("NFD", lowered)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    stripped = stripped.replace("đ", "d")
    return _NON_ALNUM.sub("-", stripped).strip("-")
