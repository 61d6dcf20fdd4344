"""Demo application for the code window."""

from __future__ import annotations

import argparse
import logging

from textual.app import App, ComposeResult
from textual.widgets import Footer, Header

from .config import EditorConfig
from .widget import CodeWindow


class CodeWindowApp(App):
    """TUI app that wraps the CodeWindow widget."""

    CSS = """
    Screen {
        layout: vertical;
    }
    #editor {
        height: 1fr;
        border: solid $accent;
    }
    """

    BINDINGS = []
    ENABLE_COMMAND_PALETTE = False

    def __init__(self, config: EditorConfig | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.editor_config = config or EditorConfig()

    def compose(self) -> ComposeResult:
        yield Header()
        yield CodeWindow(self.editor_config, id="editor")
        yield Footer()

    def on_mount(self) -> None:
        self.title = self.editor_config.title
        self.query_one("#editor").focus()

    def on_code_window_line_committed(self, event: CodeWindow.LineCommitted) -> None:
        self.sub_title = f"{event.line_count} lines typed"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codewin",
        description="Simulated Python code window in Textual",
    )
    parser.add_argument(
        "--max-line-length",
        type=int,
        default=EditorConfig.max_line_length,
        help="maximum characters per typed line (default: %(default)s)",
    )
    parser.add_argument(
        "--no-prologue",
        action="store_true",
        default=False,
        help="start with an empty window instead of the sample class",
    )
    parser.add_argument(
        "--log-file",
        default="",
        help="write debug logs to this file",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> EditorConfig:
    kwargs = {"max_line_length": args.max_line_length}
    if args.no_prologue:
        kwargs["prologue_count"] = 0
    return EditorConfig(**kwargs)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = config_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    app = CodeWindowApp(config)
    app.run()


if __name__ == "__main__":
    main()
