"""Textual application hosting the line editor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

try:  # pragma: no cover - imported only when the TUI is run
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Input, RichLog, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use line_editor.adapters.textual.app"
    ) from exc

from line_editor.commands import CommandDispatcher, help_lines

from .controller import DocumentMirror, TextualEditorAdapter, TextualUIHooks


@dataclass
class UIState:
    document_text: str = ""
    status_text: str = ""


class LineEditorApp(App[None]):
    """Document view on top, command output below, command prompt at the bottom."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#document-view {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#output-log {
		height: 10;
		border: round $surface-lighten-1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, dispatcher: Optional[CommandDispatcher] = None) -> None:
        super().__init__()
        self._state = UIState()
        self.dispatcher = dispatcher or CommandDispatcher()
        self.adapter: TextualEditorAdapter | None = None
        self._document_widget: Static | None = None
        self._output_widget: RichLog | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="editor-area"):
            self._document_widget = Static("", id="document-view")
            yield self._document_widget
            self._output_widget = RichLog(id="output-log", wrap=True, markup=False)
            yield self._output_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Input(placeholder=self.dispatcher.context.config.prompt, id="command")
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_document=self._update_document,
            write_output=self._write_output,
            update_status=self._update_status,
            clear_output=self._clear_output,
            request_exit=self.exit,
            handle_event=self._handle_event,
        )
        self.adapter = TextualEditorAdapter(self.dispatcher, hooks)
        for line in help_lines():
            self._write_output(line)
        self.query_one("#command", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if self.adapter is None:
            return
        self.adapter.submit(event.value)
        event.input.value = ""

    def _update_document(self, mirror: DocumentMirror) -> None:
        self._state.document_text = mirror.text
        if self._document_widget:
            self._document_widget.update(mirror.text)
        marker = " [modified]" if mirror.dirty else ""
        self.sub_title = f"{mirror.line_count} line(s){marker}"

    def _write_output(self, line: str) -> None:
        if self._output_widget:
            self._output_widget.write(line)

    def _clear_output(self) -> None:
        if self._output_widget:
            self._output_widget.clear()

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name in {"document.saved", "document.loaded"} and isinstance(payload, dict):
            self._update_status(f"{name}:{payload.get('path')}")


__all__ = ["LineEditorApp", "UIState"]
