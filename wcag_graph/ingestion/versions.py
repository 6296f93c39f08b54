"""
Version Membership Index.

Every understanding document lives under understanding/<version>/, which
records the WCAG revision that introduced its guideline or success criterion.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Mapping, Sequence, Union

from wcag_graph.ingestion.locator import DEFAULT_PATTERN, locate_documents
from wcag_graph.schemas.taxonomy import WcagVersion

logger = logging.getLogger(__name__)


def get_guidelines_versions(
    understanding_root: Union[str, Path],
    pattern: str = DEFAULT_PATTERN,
) -> Dict[WcagVersion, List[str]]:
    """
    Map each WCAG version to the sorted basenames found under it.

    Every version is present as a key, even when its directory is empty.

    Example:
        >>> get_guidelines_versions("understanding")[WcagVersion.WCAG22]
        ['dragging-movements', 'focus-appearance', ...]
    """
    versions: Dict[WcagVersion, List[str]] = {version: [] for version in WcagVersion}
    for document in locate_documents(understanding_root, WcagVersion, pattern):
        versions[document.partition].append(document.slug)

    for basenames in versions.values():
        basenames.sort()
    return versions


def invert_guidelines_versions(
    versions: Mapping[WcagVersion, Sequence[str]],
) -> Dict[str, WcagVersion]:
    """
    Map each basename to the version it appears under.

    Versions are scanned chronologically and a later version overwrites an
    earlier one; every such collision is logged.
    """
    inverted: Dict[str, WcagVersion] = {}
    for version in sorted(versions):
        for basename in versions[version]:
            previous = inverted.get(basename)
            if previous is not None and previous != version:
                logger.warning(
                    f"Basename '{basename}' appears under both {previous.label} "
                    f"and {version.label}; using {version.label}"
                )
            inverted[basename] = version
    return inverted


def get_inverted_guidelines_versions(
    understanding_root: Union[str, Path],
    pattern: str = DEFAULT_PATTERN,
) -> Dict[str, WcagVersion]:
    """Like get_guidelines_versions, but mapping each basename to its version."""
    return invert_guidelines_versions(get_guidelines_versions(understanding_root, pattern))
