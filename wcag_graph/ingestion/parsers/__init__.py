"""Document parsers."""

from wcag_graph.ingestion.parsers.heading_parser import (
    HeadingNotFoundError,
    extract_title_html,
    extract_title_html_from_markup,
    load_document,
)

__all__ = [
    "HeadingNotFoundError",
    "extract_title_html",
    "extract_title_html_from_markup",
    "load_document",
]
