# wcag_graph/normalization/taxonomy.py
"""
Taxonomy Builder.

Resolves the principles section of guidelines/index.html into the
Principle -> Guideline -> Success Criterion tree.

Numbering is purely positional: the order of sections in the index document
is authoritative and is never changed here.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Sequence, Union

from bs4 import Tag
from pydantic import ValidationError

from wcag_graph.ingestion.locator import read_source
from wcag_graph.ingestion.parsers import load_document
from wcag_graph.schemas.taxonomy import (
    BASE_VERSION,
    Guideline,
    GuidelineOrCriterion,
    Principle,
    SuccessCriterion,
    TaxonomyNode,
    WcagVersion,
)

logger = logging.getLogger(__name__)


class UnresolvableVersionError(ValueError):
    """Raised when a success criterion has no understanding document to date it."""


# Guidelines added by a later revision without renumbering their siblings.
# Consulted before the base-version rule.
GUIDELINE_VERSION_OVERRIDES: Mapping[str, WcagVersion] = MappingProxyType(
    {
        "input-modalities": WcagVersion.WCAG21,
    }
)


def resolve_guideline_version(guideline_id: str) -> WcagVersion:
    """Version of a guideline: its override if it has one, else the base version."""
    return GUIDELINE_VERSION_OVERRIDES.get(guideline_id, BASE_VERSION)


def resolve_success_criterion_version(
    criterion_id: str,
    versions: Mapping[str, Union[WcagVersion, str]],
) -> WcagVersion:
    """
    Look up the version a success criterion was introduced in.

    Raises:
        UnresolvableVersionError: If the id is missing or maps to an unknown version
    """
    resolved = versions.get(criterion_id)
    if resolved is None:
        raise UnresolvableVersionError(
            f"Unresolvable version for success criterion '{criterion_id}': "
            "no understanding document found"
        )
    try:
        return WcagVersion(resolved)
    except ValueError:
        raise UnresolvableVersionError(
            f"Unresolvable version for success criterion '{criterion_id}': {resolved}"
        ) from None


def _node_id(el: Tag) -> str:
    node_id = el.get("id")
    if not node_id:
        classes = " ".join(el.get("class", []))
        raise ValueError(f"Section '{classes}' in the guidelines index has no id attribute")
    return str(node_id)


def _child_text(el: Tag, selector: str) -> str:
    child = el.select_one(selector)
    return child.get_text().strip() if child is not None else ""


def build_principles(
    index_html: str,
    versions: Mapping[str, Union[WcagVersion, str]],
) -> List[Principle]:
    """
    Parse the guidelines index document into the principles tree.

    Args:
        index_html: Markup of guidelines/index.html
        versions: Basename -> version mapping from the version membership index

    Returns:
        Principles in document order, each with nested guidelines and
        success criteria

    Raises:
        UnresolvableVersionError: If a success criterion cannot be dated
        ValueError: If a section lacks an id, ids are not unique or a
            success criterion has an invalid conformance level
    """
    soup = load_document(index_html)

    principles: List[Principle] = []
    for i, principle_el in enumerate(soup.select(".principle"), start=1):
        guidelines: List[Guideline] = []
        for j, guideline_el in enumerate(principle_el.select(".guideline"), start=1):
            success_criteria: List[SuccessCriterion] = []
            for k, sc_el in enumerate(guideline_el.select(".sc"), start=1):
                sc_id = _node_id(sc_el)
                level = _child_text(sc_el, "p.conformance-level")
                version = resolve_success_criterion_version(sc_id, versions)
                try:
                    criterion = SuccessCriterion(
                        id=sc_id,
                        name=_child_text(sc_el, "h4"),
                        num=f"{i}.{j}.{k}",
                        level=level,
                        version=version,
                    )
                except ValidationError as e:
                    raise ValueError(
                        f"Invalid success criterion '{sc_id}' in the guidelines index "
                        f"(conformance level {level!r}): {e}"
                    ) from e
                success_criteria.append(criterion)

            guideline_id = _node_id(guideline_el)
            guidelines.append(
                Guideline(
                    id=guideline_id,
                    name=_child_text(guideline_el, "h3"),
                    num=f"{i}.{j}",
                    version=resolve_guideline_version(guideline_id),
                    success_criteria=tuple(success_criteria),
                )
            )

        principles.append(
            Principle(
                id=_node_id(principle_el),
                name=_child_text(principle_el, "h2"),
                num=f"{i}",
                version=BASE_VERSION,
                guidelines=tuple(guidelines),
            )
        )

    _assert_unique_ids(principles)
    logger.info(
        f"Resolved {len(principles)} principles, "
        f"{sum(len(p.guidelines) for p in principles)} guidelines, "
        f"{sum(1 for _ in iter_success_criteria(principles))} success criteria"
    )
    return principles


def get_principles(
    index_path: Union[str, Path],
    versions: Mapping[str, Union[WcagVersion, str]],
) -> List[Principle]:
    """Read guidelines/index.html from disk and build the principles tree."""
    index_path = Path(index_path)
    if not index_path.exists():
        raise FileNotFoundError(f"Guidelines index not found: {index_path}")
    return build_principles(read_source(index_path), versions)


def iter_nodes(principles: Sequence[Principle]) -> Iterator[TaxonomyNode]:
    """Walk the tree depth-first in document order."""
    for principle in principles:
        yield principle
        for guideline in principle.guidelines:
            yield guideline
            yield from guideline.success_criteria


def iter_success_criteria(principles: Sequence[Principle]) -> Iterator[SuccessCriterion]:
    for principle in principles:
        for guideline in principle.guidelines:
            yield from guideline.success_criteria


def _assert_unique_ids(principles: Sequence[Principle]) -> None:
    seen: Dict[str, str] = {}
    for node in iter_nodes(principles):
        location = f"{node.type} {node.num}"
        if node.id in seen:
            raise ValueError(
                f"Duplicate id '{node.id}' in the guidelines index "
                f"({seen[node.id]} and {location})"
            )
        seen[node.id] = location


def get_flat_guidelines(principles: Sequence[Principle]) -> Mapping[str, GuidelineOrCriterion]:
    """
    Flatten guidelines and success criteria into a read-only id lookup.

    Keys follow document order.
    """
    flat: Dict[str, GuidelineOrCriterion] = {}
    for principle in principles:
        for guideline in principle.guidelines:
            flat[guideline.id] = guideline
            for criterion in guideline.success_criteria:
                flat[criterion.id] = criterion
    return MappingProxyType(flat)

