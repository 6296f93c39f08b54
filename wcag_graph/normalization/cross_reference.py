# wcag_graph/normalization/cross_reference.py
"""
Cross-Reference Resolver.

Combines the flattened taxonomy, the technique catalog and the ACT rule
mapping into the lookups the renderer reads by id:

- flat_guidelines / flat_techniques: id -> node
- criterion_rules / technique_rules: id -> applicable ACT rules
- technique_associations: technique id -> guidelines and success criteria citing it

Citations that cannot be resolved are logged with the citing document and
dropped; they never abort the build.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import PurePosixPath
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Mapping, Sequence, Tuple, Union

from bs4 import Tag

from wcag_graph.ingestion.parsers import load_document
from wcag_graph.ingestion.techniques import get_flat_techniques
from wcag_graph.monitoring.logging import with_context
from wcag_graph.normalization.taxonomy import get_flat_guidelines
from wcag_graph.schemas.act_rule import ActRule
from wcag_graph.schemas.taxonomy import GuidelineOrCriterion, Principle
from wcag_graph.schemas.technique import (
    AssociationType,
    FlatTechnique,
    Technique,
    TechniqueAssociation,
    Technology,
)

logger = logging.getLogger(__name__)

# Matches links such as "../Techniques/html/H37" or "/techniques/general/G94.html#main"
_TECHNIQUE_HREF = re.compile(
    r"(?:^|/)techniques/(?:[\w-]+/)?([A-Za-z]+\d+)(?:\.html)?/?(?:[#?].*)?$",
    re.IGNORECASE,
)

# (citing document, markup)
UnderstandingDocument = Tuple[str, str]


@dataclass(frozen=True)
class UnresolvedCitation:
    """A reference that could not be found in the flattened maps."""

    citing: str
    kind: str
    id: str


def _as_id_list(ids: Union[str, Iterable[str]]) -> List[str]:
    id_list = [ids] if isinstance(ids, str) else list(ids)
    for ref in id_list:
        if not isinstance(ref, str):
            raise TypeError(f"Invalid id {ref!r}; expected a string")
    return id_list


def _technique_ids_in(item: Tag) -> List[str]:
    """Technique ids linked directly from a list item, excluding nested items."""
    ids: List[str] = []
    for a in item.find_all("a", href=True):
        if a.find_parent("li") is not item:
            continue
        match = _TECHNIQUE_HREF.search(a["href"])
        if match and match.group(1) not in ids:
            ids.append(match.group(1))
    return ids


class CrossReferenceResolver:
    """
    Resolves references between taxonomy nodes, techniques and ACT rules.

    All lookups are computed once at construction and exposed as read-only
    mappings. The rule mapping is injected so the resolver can be exercised
    with a fabricated table.
    """

    def __init__(
        self,
        principles: Sequence[Principle],
        techniques: Mapping[Technology, Sequence[Technique]],
        act_rules: Sequence[ActRule] = (),
        understanding_documents: Sequence[UnderstandingDocument] = (),
    ):
        """
        Initialize the resolver.

        Args:
            principles: Full taxonomy tree
            techniques: Technique catalog keyed by technology
            act_rules: ACT rule records from the rule mapping
            understanding_documents: (path, markup) pairs scanned for technique citations
        """
        self.principles: Tuple[Principle, ...] = tuple(principles)
        self.act_rules: Tuple[ActRule, ...] = tuple(act_rules)
        self._unresolved: List[UnresolvedCitation] = []

        self.flat_guidelines: Mapping[str, GuidelineOrCriterion] = get_flat_guidelines(
            self.principles
        )
        self.flat_techniques: Mapping[str, FlatTechnique] = get_flat_techniques(techniques)

        self.criterion_rules = self._index_rules(
            self.flat_guidelines,
            ActRule.applies_to_criterion,
            lambda rule: rule.success_criteria,
            "success criterion",
        )
        self.technique_rules = self._index_rules(
            self.flat_techniques,
            ActRule.applies_to_technique,
            lambda rule: rule.wcag_techniques,
            "technique",
        )
        self.technique_associations = self._build_technique_associations(
            understanding_documents
        )

        # Citation failures found while building; later resolve_* calls only log
        self.unresolved: Tuple[UnresolvedCitation, ...] = tuple(self._unresolved)

    # ========================================================================
    # DIAGNOSTICS
    # ========================================================================

    def _report_unresolved(self, citing: str, kind: str, ref: str, record: bool = True) -> None:
        if record:
            self._unresolved.append(UnresolvedCitation(citing=citing, kind=kind, id=ref))
        with_context(logger, document=citing).warning(
            f"{citing}: skipping unresolvable {kind} id {ref}"
        )

    # ========================================================================
    # ACT RULES
    # ========================================================================

    def _index_rules(
        self,
        keys: Iterable[str],
        applies: Callable[[ActRule, str], bool],
        cited_ids: Callable[[ActRule], Sequence[str]],
        kind: str,
    ) -> Mapping[str, Tuple[ActRule, ...]]:
        known = list(keys)
        known_ids = set(known)
        for rule in self.act_rules:
            for ref in dict.fromkeys(cited_ids(rule)):
                if ref not in known_ids:
                    self._report_unresolved(f"act-mapping:{rule.id}", kind, ref)
        return MappingProxyType(
            {key: tuple(rule for rule in self.act_rules if applies(rule, key)) for key in known}
        )

    def rules_for_criterion(self, criterion_id: str) -> Tuple[ActRule, ...]:
        """ACT rules testing a guideline or success criterion."""
        return self.criterion_rules.get(criterion_id, ())

    def rules_for_technique(self, technique_id: str) -> Tuple[ActRule, ...]:
        """ACT rules testing a technique."""
        return self.technique_rules.get(technique_id, ())

    # ========================================================================
    # TECHNIQUE ASSOCIATIONS
    # ========================================================================

    def _build_technique_associations(
        self, documents: Sequence[UnderstandingDocument]
    ) -> Mapping[str, Tuple[TechniqueAssociation, ...]]:
        """
        Collect the techniques each understanding document lists.

        Technique links inside the sufficient, advisory and failure sections
        become associations; a link nested in another technique's list item
        records that technique as its parent.
        """
        associations: Dict[str, List[TechniqueAssociation]] = {
            technique_id: [] for technique_id in self.flat_techniques
        }

        for path, html in documents:
            criterion = self.flat_guidelines.get(PurePosixPath(path).stem)
            if criterion is None:
                logger.debug(f"{path}: not a guideline or success criterion, skipping")
                continue

            soup = load_document(html)
            for association_type in AssociationType:
                for section in soup.select(f"section#{association_type.section_id}"):
                    for item in section.select("li"):
                        parent_item = item.find_parent("li")
                        parent_ids = (
                            tuple(
                                ref
                                for ref in _technique_ids_in(parent_item)
                                if ref in self.flat_techniques
                            )
                            if parent_item is not None
                            else ()
                        )
                        for ref in _technique_ids_in(item):
                            if ref not in self.flat_techniques:
                                self._report_unresolved(path, "technique", ref)
                                continue
                            association = TechniqueAssociation(
                                criterion=criterion,
                                type=association_type,
                                parent_ids=parent_ids,
                            )
                            if association not in associations[ref]:
                                associations[ref].append(association)

        return MappingProxyType({key: tuple(value) for key, value in associations.items()})

    def associations_for_technique(self, technique_id: str) -> Tuple[TechniqueAssociation, ...]:
        return self.technique_associations.get(technique_id, ())

    # ========================================================================
    # CITATIONS
    # ========================================================================

    def resolve_techniques(
        self, ids: Union[str, Iterable[str]], citing: str
    ) -> List[FlatTechnique]:
        """
        Resolve technique ids cited by a document, in citation order.

        Unknown ids are logged against ``citing`` and left out.
        """
        resolved: List[FlatTechnique] = []
        for ref in _as_id_list(ids):
            technique = self.flat_techniques.get(ref)
            if technique is None:
                self._report_unresolved(citing, "technique", ref, record=False)
                continue
            resolved.append(technique)
        return resolved

    def resolve_guidelines(
        self, ids: Union[str, Iterable[str]], citing: str
    ) -> List[GuidelineOrCriterion]:
        """
        Resolve guideline or success criterion ids cited by a document.

        Unknown ids are logged against ``citing`` and left out.
        """
        resolved: List[GuidelineOrCriterion] = []
        for ref in _as_id_list(ids):
            node = self.flat_guidelines.get(ref)
            if node is None:
                self._report_unresolved(citing, "guideline", ref, record=False)
                continue
            resolved.append(node)
        return resolved

    def technique_link_labels(self, ids: Union[str, Iterable[str]], citing: str) -> List[str]:
        """Labels for technique links, e.g. "G94: Providing short text alternative ..."."""
        return [technique.link_label for technique in self.resolve_techniques(ids, citing)]

    def guideline_link_labels(self, ids: Union[str, Iterable[str]], citing: str) -> List[str]:
        """Labels for understanding links, e.g. "1.1.1: Non-text Content"."""
        return [node.link_label for node in self.resolve_guidelines(ids, citing)]
