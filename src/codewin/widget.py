"""Code window widget: a small Python editor with live highlighting."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rich.text import Text
from textual import events
from textual.message import Message
from textual.widget import Widget

from ._buffer import EditorState, Line
from ._layout import estimate_rows, measure_current_height
from ._lexer import ColorTag, Segment
from .config import EditorConfig

logger = logging.getLogger(__name__)

STYLES: dict[ColorTag, str] = {
    ColorTag.KEYWORD: "medium_purple1",
    ColorTag.BUILTIN: "slate_blue1",
    ColorTag.STRING: "green3",
    ColorTag.NUMBER: "cyan",
    ColorTag.SELF: "dark_orange",
    ColorTag.ATTRIBUTE: "sky_blue1",
    ColorTag.TYPE_NAME: "khaki1",
    ColorTag.CALLABLE: "dodger_blue1",
    ColorTag.DUNDER: "dodger_blue1",
    ColorTag.DECORATOR: "gold1",
    ColorTag.COMMENT: "grey50",
    ColorTag.DEFAULT: "white",
}

_MIN_TEXT_WIDTH = 10


def split_key(key: str) -> tuple[str, frozenset[str]]:
    """Split a Textual key name like ``ctrl+a`` into ``("a", {"ctrl"})``."""
    *mods, base = key.split("+")
    return base, frozenset(mods)


def highlight(segments: tuple[Segment, ...] | list[Segment]) -> Text:
    text = Text()
    for seg in segments:
        text.append(seg.text, style=STYLES[seg.tag])
    return text


class CodeWindow(Widget, can_focus=True):
    """Editable code window.

    The prologue is drawn as-is; below it the user types lines that are
    tokenized on every keystroke. Enter commits the line, Backspace on an
    empty line pulls the previous one back up, Tab indents.
    """

    DEFAULT_CSS = """
    CodeWindow {
        height: 1fr;
        background: $surface;
        padding: 0 1;
    }
    """

    # -- Messages ----------------------------------------------------------

    @dataclass
    class LineCommitted(Message):
        text: str
        line_count: int

    # -- Init --------------------------------------------------------------

    def __init__(
        self,
        config: EditorConfig | None = None,
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self.config: EditorConfig = config or EditorConfig()
        self.state: EditorState = EditorState.create(self.config)
        self._memo_text: str | None = None
        self._memo_segments: list[Segment] = []

    # -- Helpers -----------------------------------------------------------

    def _current_segments(self) -> list[Segment]:
        """Tokenize the current line, reusing the last result for equal text."""
        if self._memo_text != self.state.current:
            self._memo_text = self.state.current
            self._memo_segments = self.state.tokenizer(self.state.current)
        return self._memo_segments

    def _gutter_width(self) -> int:
        # sized for the narrowest layout, which has the most rows
        return max(3, len(str(self.total_rows(_MIN_TEXT_WIDTH))))

    def _text_width(self, width: int) -> int:
        """Characters per row for a widget *width* cells wide."""
        return min(self.config.max_line_length, width - self._gutter_width() - 1)

    def total_rows(self, text_width: int) -> int:
        """Row count for the gutter at *text_width* characters per row."""
        measured = measure_current_height(
            self.state.current, text_width, self.config.row_height
        )
        return estimate_rows(
            self.state.prologue_count,
            self.state.committed,
            measured,
            self.config.row_height,
            text_width,
        )

    # -- Public API --------------------------------------------------------

    def get_content(self) -> str:
        """Return the user-typed text, committed lines plus the current one."""
        return "\n".join([line.text for line in self.state.committed] + [self.state.current])

    # =====================================================================
    # Rendering
    # =====================================================================

    @staticmethod
    def _split_rows(text: Text, avail: int) -> list[Text]:
        offsets = range(avail, len(text), avail)
        return list(text.divide(offsets))

    def render(self) -> Text:
        return self.render_rows(self.content_region.width, self.content_region.height)

    def render_rows(self, width: int, height: int) -> Text:
        """Draw gutter and code for a *width* x *height* content area.

        Only the last *height* rows are drawn, so the cursor stays visible.
        """
        avail = self._text_width(width)
        if height < 1 or avail < _MIN_TEXT_WIDTH:
            return Text("(too small)")

        rows: list[Text] = []
        # prologue lines always take exactly one row; overflow ends in an ellipsis
        for line in self.state.prologue:
            text = highlight(line.segments)
            text.truncate(avail, overflow="ellipsis")
            rows.append(text)
        for line in self.state.committed:
            rows.extend(self._split_rows(highlight(line.segments), avail))
        current = highlight(self._current_segments())
        current.append(" ", style="reverse")
        rows.extend(self._split_rows(current, avail))

        total = self.total_rows(avail)
        ln_width = self._gutter_width()
        first = max(0, total - height)

        result = Text(no_wrap=True)
        for i in range(first, total):
            if i > first:
                result.append("\n")
            result.append(f"{i + 1:>{ln_width}} ", style="dim")
            if i < len(rows):
                result.append_text(rows[i])
        return result

    def on_resize(self, event: events.Resize) -> None:
        # width changes re-wrap the current line, so the gutter is re-measured
        logger.debug("resized to %dx%d", event.size.width, event.size.height)
        self.refresh()

    # =====================================================================
    # Key handling
    # =====================================================================

    def on_key(self, event: events.Key) -> None:
        event.prevent_default()
        event.stop()

        committed = len(self.state.committed)
        self._apply_key(event)
        if len(self.state.committed) > committed:
            line: Line = self.state.committed[-1]
            self.post_message(self.LineCommitted(line.text, len(self.state.committed)))
        self.refresh()

    def _apply_key(self, event: events.Key) -> None:
        key, modifiers = split_key(event.key)
        self.state = self.state.handle_key(key, event.character, modifiers)
