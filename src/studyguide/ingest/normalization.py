"""Cleanup applied to text pulled out of course documents."""
from __future__ import annotations

import re
import unicodedata

# Soft hyphens and zero-width marks left behind by PDF and slide exports are
# dropped; non-breaking spaces and tabs become plain spaces.
_CHAR_MAP = {
    **dict.fromkeys(map(ord, "\u00ad\u200b\u200c\u200d\u2060\ufeff")),
    **dict.fromkeys(map(ord, "\t\u00a0\u202f"), " "),
}
_SPACE_RUN_RE = re.compile(r" {2,}")
_BLANK_RUN_RE = re.compile(r"\n{3,}")


def normalize_course_text(text: str) -> str:
    """Tidy extracted text without losing page or slide boundaries.

    Every line is trimmed and inner runs of spaces collapse to one. Single and
    double line breaks are kept; longer runs of blank lines collapse to one
    blank line.
    """

    cleaned = unicodedata.normalize("NFC", text).translate(_CHAR_MAP)
    lines = (_SPACE_RUN_RE.sub(" ", line).strip() for line in cleaned.splitlines())
    return _BLANK_RUN_RE.sub("\n\n", "\n".join(lines)).strip()
