# wcag_graph/schemas/technique.py
"""
Technique catalog models.

Techniques are grouped by the technology directory they live under
(techniques/<technology>/<ID>.html). Technique ids are unique within a
technology, not globally.
"""

import re
from enum import Enum
from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict

from wcag_graph.schemas.taxonomy import GuidelineOrCriterion, PartitionError

# Everything from the first line break to the last one
_MULTILINE_TITLE_BODY = re.compile(r"\s*\n[\s\S]*\n\s*")


class Technology(str, Enum):
    """Technologies that group techniques, one per techniques/ subdirectory."""

    ARIA = "aria"
    CLIENT_SIDE_SCRIPT = "client-side-script"
    CSS = "css"
    FAILURES = "failures"
    FLASH = "flash"
    GENERAL = "general"
    HTML = "html"
    PDF = "pdf"
    SERVER_SIDE_SCRIPT = "server-side-script"
    SILVERLIGHT = "silverlight"
    SMIL = "smil"
    TEXT = "text"

    @classmethod
    def from_partition(cls, value: str) -> "Technology":
        """
        Validate a partition directory name as a technology.

        Raises:
            PartitionError: If the name is not a known technology
        """
        try:
            return cls(value)
        except ValueError:
            raise PartitionError(f"Invalid technology name: {value}") from None

    @property
    def display_title(self) -> str:
        """Heading used for this technology in the techniques table of contents."""
        return TECHNOLOGY_TITLES[self]


TECHNOLOGY_TITLES: Dict[Technology, str] = {
    Technology.ARIA: "ARIA Techniques",
    Technology.CLIENT_SIDE_SCRIPT: "Client-Side Script Techniques",
    Technology.CSS: "CSS Techniques",
    Technology.FAILURES: "Common Failures",
    Technology.FLASH: "Flash Techniques",
    Technology.GENERAL: "General Techniques",
    Technology.HTML: "HTML Techniques",
    Technology.PDF: "PDF Techniques",
    Technology.SERVER_SIDE_SCRIPT: "Server-Side Script Techniques",
    Technology.SILVERLIGHT: "Silverlight Techniques",
    Technology.SMIL: "SMIL Techniques",
    Technology.TEXT: "Plain-Text Techniques",
}


def truncate_title(title_html: str) -> str:
    """
    Shorten a multi-line technique title for use in link labels.

    The span between the first and last line break is replaced with an
    ellipsis; single-line titles are returned unchanged.

    Extracted titles have already had whitespace runs collapsed, so only
    bare line breaks (not followed by indentation) survive to be truncated.
    An indented multi-line heading arrives here as a single line.

    Example:
        >>> truncate_title("Using alt\\nattributes on\\nimg elements")
        'Using alt … img elements'
    """
    return _MULTILINE_TITLE_BODY.sub(" … ", title_html, count=1)


class Technique(BaseModel):
    """A technique document, identified by its filename stem (e.g. "G94")."""

    model_config = ConfigDict(frozen=True)

    # Letter(s)-then-number technique code; corresponds to source HTML filename
    id: str
    # Title derived from the h1 element of the technique page; may contain HTML
    title_html: str


class FlatTechnique(Technique):
    """Technique with the lookup data individual technique pages need."""

    technology: Technology
    truncated_title: str

    @classmethod
    def from_technique(cls, technique: Technique, technology: Technology) -> "FlatTechnique":
        return cls(
            id=technique.id,
            title_html=technique.title_html,
            technology=technology,
            truncated_title=truncate_title(technique.title_html),
        )

    @property
    def link_label(self) -> str:
        return f"{self.id}: {self.truncated_title}"


class AssociationType(str, Enum):
    """How an understanding document lists a technique."""

    SUFFICIENT = "Sufficient"
    ADVISORY = "Advisory"
    FAILURE = "Failure"

    @property
    def section_id(self) -> str:
        """Id of the understanding document section listing this type."""
        return self.value.lower()


class TechniqueAssociation(BaseModel):
    """A guideline or success criterion that cites a technique."""

    model_config = ConfigDict(frozen=True)

    criterion: GuidelineOrCriterion
    type: AssociationType
    # Techniques listed in the enclosing list item, when the citation is nested
    parent_ids: Tuple[str, ...] = ()
