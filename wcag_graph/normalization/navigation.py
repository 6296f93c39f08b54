"""
Understanding page navigation.

Every principle, guideline and success criterion page links to its previous
and next sibling and to its parent. Links follow document order.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Sequence

from wcag_graph.schemas.taxonomy import Principle, TaxonomyNode


@dataclass(frozen=True)
class NavLinks:
    """Navigation targets for one understanding page."""

    previous: Optional[TaxonomyNode] = None
    next: Optional[TaxonomyNode] = None
    parent: Optional[TaxonomyNode] = None


def _link_siblings(
    nav: Dict[str, NavLinks],
    siblings: Sequence[TaxonomyNode],
    parent: Optional[TaxonomyNode],
) -> None:
    for index, node in enumerate(siblings):
        nav[node.id] = NavLinks(
            previous=siblings[index - 1] if index > 0 else None,
            next=siblings[index + 1] if index + 1 < len(siblings) else None,
            parent=parent,
        )


def generate_understanding_nav_map(principles: Sequence[Principle]) -> Mapping[str, NavLinks]:
    """
    Build a read-only id -> NavLinks map for the whole taxonomy.

    Principles have no parent; the first and last sibling at each level have
    no previous and next link respectively.
    """
    nav: Dict[str, NavLinks] = {}
    _link_siblings(nav, principles, None)
    for principle in principles:
        _link_siblings(nav, principle.guidelines, principle)
        for guideline in principle.guidelines:
            _link_siblings(nav, guideline.success_criteria, guideline)
    return MappingProxyType(nav)
