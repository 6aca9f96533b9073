from __future__ import annotations

from pathlib import Path

import pytest

from line_editor import cli


def test_build_config_applies_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LINE_EDITOR_MAX_LINE_LENGTH", "64")

    args = cli._parse_args(["--overlong-lines", "error"])
    config = cli.build_config(args)
    assert config.max_line_length == 64
    assert config.overlong_lines == "error"

    unbounded = cli.build_config(cli._parse_args(["--max-line-length", "0"]))
    assert unbounded.max_line_length is None


def test_main_preloads_file_into_console_session(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = tmp_path / "doc.txt"
    source.write_text("alpha\nbeta\n", encoding="utf-8")
    commands = iter(["print", "exit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(commands))

    assert cli.main(["--file", str(source)]) == 0

    assert "alpha\nbeta\n" in capsys.readouterr().out


def test_main_reports_missing_preload_file(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    missing = tmp_path / "missing.txt"
    monkeypatch.setattr("builtins.input", lambda prompt="": "exit")

    assert cli.main(["--file", str(missing)]) == 0

    err = capsys.readouterr().err
    assert f"Error opening file for reading: {missing}" in err


def test_malformed_env_value_is_a_usage_error(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("LINE_EDITOR_MAX_LINE_LENGTH", "lots")

    with pytest.raises(SystemExit) as excinfo:
        cli.main([])

    assert excinfo.value.code == 2
    err = capsys.readouterr().err
    assert "error:" in err
    assert "Traceback" not in err


def test_negative_max_line_length_is_a_usage_error(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.delenv("LINE_EDITOR_MAX_LINE_LENGTH", raising=False)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--max-line-length", "-3"])

    assert excinfo.value.code == 2
    assert "error:" in capsys.readouterr().err
