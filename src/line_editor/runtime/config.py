"""Editor settings resolved from ``LINE_EDITOR_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Literal, Mapping, Optional

from .telemetry import ENV_PREFIX

OverlongPolicy = Literal["truncate", "error"]
OVERLONG_POLICIES: tuple[str, ...] = ("truncate", "error")

DEFAULT_ENCODING = "utf-8"
DEFAULT_PROMPT = "Enter command: "


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Knobs shared by the document and the front ends.

    ``max_line_length`` of ``None`` means lines of any length are loaded as-is.
    When set, ``overlong_lines`` decides whether longer lines are clipped to
    the limit or rejected with ``LineTooLongError``.
    """

    max_line_length: Optional[int] = None
    overlong_lines: OverlongPolicy = "truncate"
    encoding: str = DEFAULT_ENCODING
    prompt: str = DEFAULT_PROMPT

    def __post_init__(self) -> None:
        if self.max_line_length is not None and self.max_line_length < 1:
            raise ValueError("max_line_length must be positive or None")
        if self.overlong_lines not in OVERLONG_POLICIES:
            raise ValueError(f"Unknown overlong line policy '{self.overlong_lines}'")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        env = os.environ if environ is None else environ

        def lookup(name: str) -> Optional[str]:
            value = env.get(f"{ENV_PREFIX}{name}")
            return value.strip() if value is not None else None

        raw_limit = lookup("MAX_LINE_LENGTH")
        try:
            limit = int(raw_limit) if raw_limit else 0
        except ValueError as exc:
            raise ValueError(
                f"{ENV_PREFIX}MAX_LINE_LENGTH must be an integer, got {raw_limit!r}"
            ) from exc

        policy = (lookup("OVERLONG_LINES") or "truncate").lower()
        return cls(
            max_line_length=limit or None,
            overlong_lines=policy,  # type: ignore[arg-type]
            encoding=lookup("ENCODING") or DEFAULT_ENCODING,
            prompt=env.get(f"{ENV_PREFIX}PROMPT", DEFAULT_PROMPT),
        )

    def with_overrides(self, **changes: object) -> "EditorConfig":
        """Return a copy with the non-``None`` ``changes`` applied."""

        applied = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **applied)  # type: ignore[arg-type]


__all__ = ["EditorConfig", "OverlongPolicy", "OVERLONG_POLICIES"]
