"""Tests for the htmlplain CLI commands."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest
from _pytest.capture import CaptureFixture

from htmlplain.cli.main import _setup_logging, select, status, text


@pytest.fixture
def no_config(tmp_path: Path) -> Path:
    return tmp_path / "missing.json"


@pytest.fixture
def page(tmp_path: Path) -> Path:
    path = tmp_path / "page.html"
    path.write_text(
        "<header><h1>News</h1></header>"
        '<p class="lead">First <b>story</b></p><p>Second story</p>',
        encoding="utf-8",
    )
    return path


def test_text_prints_plain_text(page: Path, no_config: Path, capsys: CaptureFixture[str]) -> None:
    text(page, config=no_config)
    assert capsys.readouterr().out == "News\n\nFirst story\n\nSecond story\n"


def test_text_reads_stdin(
    no_config: Path, capsys: CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("line one<br>line two"))
    text(Path("-"), config=no_config)
    assert capsys.readouterr().out == "line one\nline two\n"


def test_text_with_selector(page: Path, no_config: Path, capsys: CaptureFixture[str]) -> None:
    text(page, selector="p", config=no_config)
    assert capsys.readouterr().out == "First story\n\nSecond story\n"


def test_text_invalid_selector_exits_2(
    page: Path, no_config: Path, capsys: CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as exc_info:
        text(page, selector="p[", config=no_config)
    assert exc_info.value.code == 2
    assert "failed to parse selector" in capsys.readouterr().err


def test_select_prints_outer_html(
    page: Path, no_config: Path, capsys: CaptureFixture[str]
) -> None:
    select(".lead", page, config=no_config)
    assert capsys.readouterr().out == '<p class="lead">First <b>story</b></p>\n'


def test_select_inner_html(page: Path, no_config: Path, capsys: CaptureFixture[str]) -> None:
    select("h1", page, inner=True, config=no_config)
    assert capsys.readouterr().out == "News\n"


def test_select_as_document(tmp_path: Path, no_config: Path, capsys: CaptureFixture[str]) -> None:
    path = tmp_path / "doc.html"
    path.write_text(
        "<!doctype html><html><head><title>T</title></head><body></body></html>",
        encoding="utf-8",
    )
    select("head title", path, document=True, inner=True, config=no_config)
    assert capsys.readouterr().out == "T\n"


def test_status_reports_defaults(no_config: Path, capsys: CaptureFixture[str]) -> None:
    status(no_config)
    out = capsys.readouterr().out
    assert "not found, using defaults" in out
    assert "Parser:    html.parser" in out
    assert "Fetch" not in out


def test_status_reads_config(tmp_path: Path, capsys: CaptureFixture[str]) -> None:
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"parser": {"name": "lxml"}}))
    status(config)
    out = capsys.readouterr().out
    assert "Parser:    lxml" in out


def test_invalid_log_level_exits_1(capsys: CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        _setup_logging("LOUD")
    assert exc_info.value.code == 1
    assert "invalid --log-level 'LOUD'" in capsys.readouterr().err
