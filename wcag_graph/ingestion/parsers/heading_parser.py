"""
Heading parser.

BeautifulSoup-based helpers for loading WCAG source documents and extracting
the markup of their primary heading, used as a display label elsewhere.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Union

from bs4 import BeautifulSoup

from wcag_graph.ingestion.locator import read_source

# Runs of two or more whitespace characters
_WHITESPACE_RUN = re.compile(r"\s\s+")


class HeadingNotFoundError(ValueError):
    """Raised when a document has no h1 heading to label it with."""


def load_document(html: str) -> BeautifulSoup:
    """Parse a source document."""
    return BeautifulSoup(html, "lxml")


def extract_title_html_from_markup(html: str, source: str = "<string>") -> str:
    """
    Extract the inner markup of the first h1 element.

    Runs of whitespace are collapsed to a single space. The result keeps any
    inline markup (e.g. <code>) so it can be embedded directly in link labels.

    Args:
        html: Document markup
        source: Path or name of the document, used in error messages

    Raises:
        HeadingNotFoundError: If the document has no h1 element
    """
    heading = load_document(html).find("h1")
    if heading is None:
        raise HeadingNotFoundError(f"No h1 heading found in {source}")
    return _WHITESPACE_RUN.sub(" ", heading.decode_contents())


def extract_title_html(path: Union[str, Path]) -> str:
    """Read a document from disk and extract its h1 markup."""
    path = Path(path)
    return extract_title_html_from_markup(read_source(path), source=str(path))
