"""Construction-time settings for the code window."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import partial

from ._lexer import BUILTINS, KEYWORDS, ColorTag, Segment, tokenize

_K = ColorTag.KEYWORD
_S = ColorTag.SELF
_A = ColorTag.ATTRIBUTE
_D = ColorTag.DEFAULT


def _assignment(attr: str, value: str) -> tuple[Segment, ...]:
    return (
        Segment("    ", _D),
        Segment("self", _S),
        Segment(".", _D),
        Segment(attr, _A),
        Segment(" = ", _D),
        Segment(f'"{value}"', ColorTag.STRING),
    )


# Pre-highlighted lines shown above the editable region.
STUDENT_PROLOGUE: tuple[tuple[Segment, ...], ...] = (
    (
        Segment("class ", _K),
        Segment("Student", ColorTag.TYPE_NAME),
        Segment(":", _D),
    ),
    (
        Segment("  def ", _K),
        Segment("__init__", ColorTag.CALLABLE),
        Segment("(", _D),
        Segment("self", _S),
        Segment("):", _D),
    ),
    _assignment("name", "Caleb Kilgo"),
    _assignment("university", "UAH"),
    _assignment("major", "Computer Science"),
    _assignment("focus", "Data Science"),
)


@dataclass(frozen=True)
class EditorConfig:
    max_line_length: int = 60
    indent: str = "  "
    row_height: int = 1
    prologue: tuple[tuple[Segment, ...], ...] = STUDENT_PROLOGUE
    prologue_count: int = len(STUDENT_PROLOGUE)
    keywords: frozenset[str] = KEYWORDS
    builtins: frozenset[str] = BUILTINS
    title: str = "student.py"

    def __post_init__(self) -> None:
        if self.max_line_length < 1:
            raise ValueError(f"max_line_length must be positive, got {self.max_line_length}")
        if self.row_height < 1:
            raise ValueError(f"row_height must be positive, got {self.row_height}")
        if not self.indent or self.indent.strip():
            raise ValueError(f"indent must be non-empty whitespace, got {self.indent!r}")
        if len(self.indent) > self.max_line_length:
            raise ValueError("indent is wider than max_line_length")
        if not 0 <= self.prologue_count <= len(self.prologue):
            raise ValueError(
                f"prologue_count must be between 0 and {len(self.prologue)}, "
                f"got {self.prologue_count}"
            )

    def tokenizer(self) -> Callable[[str], list[Segment]]:
        """Return ``tokenize`` bound to this config's vocabularies."""
        return partial(tokenize, keywords=self.keywords, builtins=self.builtins)
