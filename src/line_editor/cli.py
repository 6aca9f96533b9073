"""``line-editor`` entry point."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from typing import Optional, Sequence

from line_editor.buffer import EditorError
from line_editor.commands import CommandDispatcher
from line_editor.runtime import EditorConfig, telemetry
from line_editor.runtime.config import OVERLONG_POLICIES


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Minimal line-oriented text editor.")
    parser.add_argument(
        "--ui",
        choices=("console", "textual"),
        default="console",
        help="Front end to run (default: console)",
    )
    parser.add_argument(
        "--file",
        help="Load this file into the document before the first command",
    )
    parser.add_argument(
        "--max-line-length",
        type=int,
        default=None,
        help="Longest line accepted on load (0 for unbounded)",
    )
    parser.add_argument(
        "--overlong-lines",
        choices=OVERLONG_POLICIES,
        default=None,
        help="What to do with lines above --max-line-length",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=None,
        help="Telemetry preset to use instead of the environment defaults",
    )
    return parser


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return _build_parser().parse_args(argv)


def build_config(args: argparse.Namespace) -> EditorConfig:
    config = EditorConfig.from_env().with_overrides(overlong_lines=args.overlong_lines)
    if args.max_line_length is not None:
        config = replace(config, max_line_length=args.max_line_length or None)
    return config


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        config = build_config(args)
    except ValueError as exc:
        parser.error(str(exc))
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)

    dispatcher = CommandDispatcher(config=config)
    if args.file:
        try:
            dispatcher.document.load_from_file(args.file)
        except EditorError as exc:
            print(exc, file=sys.stderr)

    if args.ui == "textual":
        from line_editor.adapters.textual.app import LineEditorApp

        LineEditorApp(dispatcher).run()
        return 0

    from line_editor.adapters.console import ConsoleSession

    return ConsoleSession(dispatcher).run()


if __name__ == "__main__":  # pragma: no cover - manual entry
    sys.exit(main())
