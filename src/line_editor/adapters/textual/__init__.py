"""Textual host integration; the app itself lives in ``.app``."""

from .controller import DocumentMirror, TextualEditorAdapter, TextualUIHooks

__all__ = ["DocumentMirror", "TextualEditorAdapter", "TextualUIHooks"]
