"""Textual-free controller wiring the dispatcher into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

from line_editor.commands import CommandDispatcher, CommandResult


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class DocumentMirror:
    """Host-friendly snapshot of the document for rendering."""

    text: str
    line_count: int
    version: int
    dirty: bool


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_document: Callable[[DocumentMirror], None]
    write_output: Callable[[str], None] = _noop
    update_status: Callable[[str], None] = _noop
    clear_output: Callable[[], None] = _noop
    request_exit: Callable[[], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Feeds submitted command lines to the dispatcher and renders results."""

    def __init__(self, dispatcher: CommandDispatcher, hooks: TextualUIHooks) -> None:
        self.dispatcher = dispatcher
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_document()

    def submit(self, raw: str) -> CommandResult:
        self._log_state("command ->", raw=raw)
        result = self.dispatcher.dispatch(raw)
        self._render(result)
        self._log_state(
            "result <-",
            status=result.status,
            error=result.error,
            message=result.message,
        )
        return result

    def mirror(self) -> DocumentMirror:
        document = self.dispatcher.document
        return DocumentMirror(
            text=document.text,
            line_count=document.line_count,
            version=document.version,
            dirty=document.dirty,
        )

    def _render(self, result: CommandResult) -> None:
        if result.clear_screen:
            self.hooks.clear_output()
        for line in result.output:
            self.hooks.write_output(line)
        if result.message:
            self.hooks.write_output(result.message)
        if result.status != "empty":
            self.hooks.update_status(result.message or result.status)
        self._refresh_document()
        if result.exit:
            self.hooks.request_exit()

    def _subscribe_events(self) -> None:
        bus = self.dispatcher.context.bus
        for event in (
            "command.submit",
            "command.error",
            "document.changed",
            "document.loaded",
            "document.saved",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _refresh_document(self) -> None:
        self.hooks.update_document(self.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        document = self.dispatcher.document
        return {
            "lines": document.line_count,
            "version": document.version,
            "dirty": document.dirty,
        }


__all__ = ["DocumentMirror", "TextualEditorAdapter", "TextualUIHooks"]
