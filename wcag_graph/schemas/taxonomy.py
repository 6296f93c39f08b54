# wcag_graph/schemas/taxonomy.py
"""
Guidelines taxonomy models.

The guidelines form a three-level tree parsed from the guidelines index
document: Principle -> Guideline -> Success Criterion. Every node is a frozen
pydantic model; ``num`` codes are positional and recomputed on every build,
so they must never be persisted or used as identifiers.
"""

from enum import Enum
from typing import Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict


class PartitionError(ValueError):
    """Raised when a document sits under a directory outside a closed enumeration."""


# ============================================================================
# ENUMS
# ============================================================================


class WcagVersion(str, Enum):
    """
    Revisions of WCAG 2, as named by the understanding/<version>/ directories.

    Values compare chronologically ("20" < "21" < "22").
    """

    WCAG20 = "20"
    WCAG21 = "21"
    WCAG22 = "22"

    @classmethod
    def from_partition(cls, value: str) -> "WcagVersion":
        """
        Validate a partition directory name as a WCAG version.

        Raises:
            PartitionError: If the name is not a known version
        """
        try:
            return cls(value)
        except ValueError:
            raise PartitionError(f"Unexpected version found: {value}") from None

    @property
    def label(self) -> str:
        """Version label used by the renderer, e.g. "WCAG21"."""
        return f"WCAG{self.value}"

    @property
    def decimal(self) -> str:
        """Dotted version number, e.g. "2.1"."""
        return ".".join(self.value)


# Principles are not versioned independently
BASE_VERSION = WcagVersion.WCAG20


class ConformanceLevel(str, Enum):
    """Conformance level declared by each success criterion."""

    A = "A"
    AA = "AA"
    AAA = "AAA"


# ============================================================================
# TREE NODES
# ============================================================================


class DocNode(BaseModel):
    """Fields shared by every taxonomy node."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    num: str
    version: WcagVersion

    @property
    def link_label(self) -> str:
        return f"{self.num}: {self.name}"


class SuccessCriterion(DocNode):
    """Leaf of the taxonomy; ``num`` is "<principle>.<guideline>.<sc>"."""

    type: Literal["SC"] = "SC"
    level: ConformanceLevel


class Guideline(DocNode):
    """Second level of the taxonomy; ``num`` is "<principle>.<guideline>"."""

    type: Literal["Guideline"] = "Guideline"
    success_criteria: Tuple[SuccessCriterion, ...] = ()


class Principle(DocNode):
    """Top level of the taxonomy; ``num`` is the 1-based principle position."""

    type: Literal["Principle"] = "Principle"
    guidelines: Tuple[Guideline, ...] = ()


TaxonomyNode = Union[Principle, Guideline, SuccessCriterion]
GuidelineOrCriterion = Union[Guideline, SuccessCriterion]
