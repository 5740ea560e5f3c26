"""Line grammar shared by the DOCX and PDF renderers.

A guide is read one line at a time:

* an empty (or whitespace-only) line is a :class:`BlankLine`;
* a line starting with ``#`` is a :class:`Heading`; its level is the number
  of leading ``#`` and its ``prefix`` keeps the hashes plus any whitespace
  after them, so exporters can apply their own promotion rules;
* anything else is a :class:`TextLine`, shown in bold when it starts with
  ``Q:`` or ``**Q:``.

Literal ``**`` markers are removed from the displayed text of headings and
text lines. LaTeX spans are left untouched.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Union

_HEADING_RE = re.compile(r"^(#+)(\s*)(.*)$")
_QUESTION_PREFIXES = ("Q:", "**Q:")
_SECTION_PREFIXES = ("# ", "## ")


@dataclass(frozen=True, slots=True)
class Heading:
    level: int
    text: str
    prefix: str

    @property
    def is_section(self) -> bool:
        """True for ``# `` and ``## `` lines, the only ones Word promotes to headings."""

        return self.prefix in _SECTION_PREFIXES

    @property
    def line(self) -> str:
        return self.prefix + self.text


@dataclass(frozen=True, slots=True)
class TextLine:
    text: str
    bold: bool = False


@dataclass(frozen=True, slots=True)
class BlankLine:
    pass


Block = Union[Heading, TextLine, BlankLine]


def _display_text(text: str) -> str:
    return text.replace("**", "").strip()


def classify_line(line: str) -> Block:
    """Classify a single guide line."""

    stripped = line.strip()
    if not stripped:
        return BlankLine()

    match = _HEADING_RE.match(stripped)
    if match:
        hashes, space, rest = match.groups()
        return Heading(level=len(hashes), text=_display_text(rest), prefix=hashes + space[:1])

    return TextLine(text=_display_text(stripped), bold=stripped.startswith(_QUESTION_PREFIXES))


def iter_blocks(markdown: str) -> Iterator[Block]:
    for line in markdown.splitlines():
        yield classify_line(line)


def parse_guide(markdown: str) -> List[Block]:
    """Parse a whole guide into its sequence of blocks."""

    return list(iter_blocks(markdown))


__all__ = ["BlankLine", "Block", "Heading", "TextLine", "classify_line", "iter_blocks", "parse_guide"]
