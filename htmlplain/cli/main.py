"""
CLI entry point for htmlplain.

Commands:
  htmlplain text [PATH]          Print the plain text of a fragment or document
  htmlplain text -s CSS [PATH]   Print the plain text of each matching element
  htmlplain select CSS [PATH]    Print the HTML of each matching element
  htmlplain status               Show the effective configuration

PATH defaults to stdin ("-").
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

import cyclopts

from htmlplain.config.schema import DEFAULT_CONFIG_PATH, Settings

if TYPE_CHECKING:
    from htmlplain.adapters.soup import Document

app = cyclopts.App(name="htmlplain", help="Extract readable plain text from HTML.")


@app.command
def text(
    path: Path | None = None,
    *,
    selector: str | None = None,
    document: bool = False,
    config: Path = DEFAULT_CONFIG_PATH,
    log_level: str = "WARNING",
) -> None:
    """
    Print the plain text of HTML read from PATH (or stdin).

    With --selector, prints the text of every matching element, separated by
    a blank line.
    """
    from htmlplain.adapters.soup import SelectorError

    _setup_logging(log_level)
    settings = Settings.load(config)
    doc = _load(path, document=document, parser=settings.parser.name)

    if selector is None:
        print(doc.root_element().text())
        return

    try:
        matches = doc.select(selector)
    except SelectorError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc
    print("\n\n".join(element.text() for element in matches))


@app.command
def select(
    css_selector: str,
    path: Path | None = None,
    *,
    inner: bool = False,
    document: bool = False,
    config: Path = DEFAULT_CONFIG_PATH,
    log_level: str = "WARNING",
) -> None:
    """Print the outer (or with --inner, inner) HTML of each matching element."""
    from htmlplain.adapters.soup import SelectorError

    _setup_logging(log_level)
    settings = Settings.load(config)
    doc = _load(path, document=document, parser=settings.parser.name)

    try:
        matches = doc.select(css_selector)
    except SelectorError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc
    for element in matches:
        print(element.inner_html() if inner else element.html())


@app.command
def status(config: Path = DEFAULT_CONFIG_PATH) -> None:
    """Show the effective configuration."""
    settings = Settings.load(config)
    source = str(config) if config.exists() else f"{config} (not found, using defaults)"
    print(f"Config:    {source}")
    print(f"Parser:    {settings.parser.name}")


# ── Internal helpers ─────────────────────────────────────────────────────────


def _load(path: Path | None, *, document: bool, parser: str) -> Document:
    """
    Read markup from `path` (stdin for None or "-") and parse it.

    Args:
        path: Input file, or None/"-" for stdin.
        document: Parse as a complete document instead of a fragment.
        parser: BeautifulSoup parser name.
    """
    from htmlplain.adapters.soup import parse_document, parse_fragment

    if path is None or str(path) == "-":
        markup = sys.stdin.read()
    else:
        markup = path.read_text(encoding="utf-8")
    parse = parse_document if document else parse_fragment
    return parse(markup, parser=parser)


_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _setup_logging(level: str) -> None:
    """
    Configure loguru for command output.

    Removes the default loguru stderr handler and replaces it with one that
    uses a consistent timestamp+level format, then re-enables htmlplain's own
    messages (disabled on import).

    Args:
        level: Log level string (case-insensitive), e.g. "INFO", "DEBUG".

    Raises:
        SystemExit: If the level is not a valid log level name.
    """
    from loguru import logger

    normalised = level.upper()
    if normalised not in _VALID_LOG_LEVELS:
        valid = ", ".join(sorted(_VALID_LOG_LEVELS))
        print(f"error: invalid --log-level '{level}'. Valid values: {valid}", file=sys.stderr)
        raise SystemExit(1)

    logger.remove()  # remove loguru's built-in default handler
    logger.add(
        sys.stderr,
        level=normalised,
        format=("<green>{time:YYYY-MM-DD HH:mm:ss}</green> <level>{level:<8}</level> {message}"),
        colorize=True,
    )
    logger.enable("htmlplain")
