"""
Technique Catalog Builder.

Builds the per-technology technique lists from techniques/<technology>/<ID>.html,
labelling each technique with the h1 markup of its page.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Sequence, Union

from wcag_graph.ingestion.locator import DEFAULT_PATTERN, locate_documents, read_documents
from wcag_graph.ingestion.parsers import extract_title_html_from_markup
from wcag_graph.schemas.technique import FlatTechnique, Technique, Technology

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D")


def technique_sort_key(technique: Technique) -> int:
    """
    Numeric suffix of a technique id, e.g. "G10" -> 10.

    Ids without digits sort first.
    """
    digits = _NON_DIGITS.sub("", technique.id)
    return int(digits) if digits else 0


def sort_techniques(techniques: Sequence[Technique]) -> List[Technique]:
    """Order techniques by numeric suffix; ties keep their discovery order."""
    return sorted(techniques, key=technique_sort_key)


def get_techniques_by_technology(
    techniques_root: Union[str, Path],
    parallelism: int = 8,
    pattern: str = DEFAULT_PATTERN,
) -> Dict[Technology, List[Technique]]:
    """
    Map every technology to its ordered list of techniques.

    Technologies without documents map to an empty list.

    Raises:
        PartitionError: If a techniques subdirectory is not a known technology
        HeadingNotFoundError: If a technique page has no h1 (names the page)
    """
    documents = locate_documents(techniques_root, Technology, pattern)
    contents = read_documents(techniques_root, documents, parallelism=parallelism)

    techniques: Dict[Technology, List[Technique]] = {technology: [] for technology in Technology}
    for document, html in zip(documents, contents):
        techniques[document.partition].append(
            Technique(
                id=document.slug,
                title_html=extract_title_html_from_markup(
                    html, source=f"techniques/{document.path}"
                ),
            )
        )

    for technology in Technology:
        techniques[technology] = sort_techniques(techniques[technology])

    logger.info(
        f"Catalogued {len(documents)} techniques across "
        f"{sum(1 for t in techniques.values() if t)} technologies"
    )
    return techniques


def get_flat_techniques(
    techniques: Mapping[Technology, Sequence[Technique]],
) -> Mapping[str, FlatTechnique]:
    """
    Flatten the catalog into a read-only id -> technique lookup.

    Ids are only unique within a technology; if two technologies share an
    id, the later technology wins and the collision is logged.
    """
    flat: Dict[str, FlatTechnique] = {}
    for technology in Technology:
        for technique in techniques.get(technology, ()):
            previous = flat.get(technique.id)
            if previous is not None:
                logger.warning(
                    f"Technique id '{technique.id}' exists in both "
                    f"{previous.technology.value} and {technology.value}; "
                    f"using {technology.value}"
                )
            flat[technique.id] = FlatTechnique.from_technique(technique, technology)
    return MappingProxyType(flat)
