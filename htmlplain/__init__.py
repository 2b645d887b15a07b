"""Plain-text extraction from HTML, approximating `innerText` for simple content."""

from loguru import logger

from htmlplain.adapters.soup import (
    Document,
    Element,
    SelectorError,
    html_to_text,
    parse_document,
    parse_fragment,
)

# Silent when used as a library; the CLI re-enables it after configuring a sink.
logger.disable("htmlplain")

__all__ = [
    "Document",
    "Element",
    "SelectorError",
    "html_to_text",
    "parse_document",
    "parse_fragment",
]
