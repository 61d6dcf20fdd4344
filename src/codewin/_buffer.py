"""Line store and key-driven edit operations for the code window."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from ._lexer import Segment, line_text, tokenize

if TYPE_CHECKING:
    from .config import EditorConfig

logger = logging.getLogger(__name__)

# Modifiers that turn a character key into a shortcut rather than text.
BLOCKING_MODIFIERS = frozenset({"ctrl", "alt", "meta", "super"})

Tokenizer = Callable[[str], list[Segment]]


@dataclass(frozen=True)
class Line:
    """A tokenized line; its raw text is recovered from the segments."""

    segments: tuple[Segment, ...] = ()

    @classmethod
    def from_segments(cls, segments: Iterable[Segment]) -> Line:
        return cls(tuple(Segment(text, tag) for text, tag in segments))

    @property
    def text(self) -> str:
        return line_text(self.segments)

    def __len__(self) -> int:
        return sum(len(seg.text) for seg in self.segments)


@dataclass(frozen=True)
class EditorState:
    """Immutable snapshot of the editor.

    Prologue lines are fixed at construction. Committed lines grow on
    :meth:`commit` and shrink on merge-up in :meth:`backspace`. Each
    operation returns a new snapshot, or ``self`` when nothing changed.
    """

    prologue: tuple[Line, ...] = ()
    committed: tuple[Line, ...] = ()
    current: str = ""
    max_line_length: int = 60
    indent: str = "  "
    tokenizer: Tokenizer = field(default=tokenize, repr=False, compare=False)

    @classmethod
    def create(cls, config: EditorConfig) -> EditorState:
        shown = config.prologue[: config.prologue_count]
        return cls(
            prologue=tuple(Line.from_segments(segs) for segs in shown),
            max_line_length=config.max_line_length,
            indent=config.indent,
            tokenizer=config.tokenizer(),
        )

    # -- Queries -----------------------------------------------------------

    @property
    def prologue_count(self) -> int:
        return len(self.prologue)

    @property
    def lines(self) -> tuple[Line, ...]:
        """Prologue and committed lines in display order."""
        return self.prologue + self.committed

    # -- Edits -------------------------------------------------------------

    def type_char(self, ch: str) -> EditorState:
        """Append one printable character if the line has room for it."""
        if len(ch) != 1 or not ch.isprintable():
            return self
        if len(self.current) >= self.max_line_length:
            return self
        return replace(self, current=self.current + ch)

    def indent_line(self) -> EditorState:
        if len(self.current) + len(self.indent) > self.max_line_length:
            return self
        return replace(self, current=self.current + self.indent)

    def commit(self) -> EditorState:
        line = Line(tuple(self.tokenizer(self.current)))
        logger.debug("commit line %d: %r", len(self.committed) + 1, self.current)
        return replace(self, committed=self.committed + (line,), current="")

    def backspace(self) -> EditorState:
        if self.current:
            return replace(self, current=self.current[:-1])
        if not self.committed:
            return self
        last = self.committed[-1]
        logger.debug("merge up line %d: %r", len(self.committed), last.text)
        return replace(self, committed=self.committed[:-1], current=last.text)

    def handle_key(
        self,
        key: str,
        character: str | None,
        modifiers: frozenset[str] = frozenset(),
    ) -> EditorState:
        """Apply one key press.

        *key* is the base key name (``"tab"``, ``"enter"``, ``"a"``),
        *character* the printable text it produced, if any. Unknown keys
        leave the state unchanged.
        """
        if key == "tab":
            return self.indent_line()
        if key == "enter":
            return self.commit()
        if key == "backspace":
            return self.backspace()
        if modifiers & BLOCKING_MODIFIERS:
            return self
        if character and len(character) == 1 and character.isprintable():
            return self.type_char(character)
        return self
