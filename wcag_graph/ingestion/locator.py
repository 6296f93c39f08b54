"""
Document Locator.

Enumerates source documents laid out as ``<partition>/<file>`` under a corpus
root, validating each partition directory against a closed enumeration
(Technology for techniques, WcagVersion for understanding documents).
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Dict, List, Sequence, Type, Union

from wcag_graph.schemas.taxonomy import WcagVersion
from wcag_graph.schemas.technique import Technology

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "*/*.html"

Partition = Union[WcagVersion, Technology]


@dataclass(frozen=True)
class LocatedDocument:
    """A discovered source document."""

    partition: Partition
    # Relative POSIX path under the corpus root, e.g. "css/C7.html"
    path: str
    # Filename without extension, e.g. "C7"
    slug: str


def read_source(path: Union[str, Path]) -> str:
    """
    Read a UTF-8 source document.

    Raises:
        ValueError: If the file is not valid UTF-8 (names the file)
    """
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ValueError(f"Cannot decode {path} as UTF-8: {e}") from e


def locate_documents(
    root: Union[str, Path],
    partition_type: Type[Partition],
    pattern: str = DEFAULT_PATTERN,
) -> List[LocatedDocument]:
    """
    Find documents matching a two-segment glob under ``root``.

    Args:
        root: Corpus directory (e.g. <source>/techniques)
        partition_type: Enumeration the first path segment must belong to
        pattern: Glob relative to ``root``; must yield <partition>/<file> paths

    Returns:
        Located documents sorted by relative path

    Raises:
        NotADirectoryError: If ``root`` does not exist
        PartitionError: If a document sits under an unrecognized partition
    """
    root_path = Path(root)
    if not root_path.is_dir():
        raise NotADirectoryError(f"Corpus directory not found: {root_path}")

    documents: List[LocatedDocument] = []
    for path in sorted(root_path.glob(pattern)):
        if not path.is_file():
            continue
        relative = path.relative_to(root_path).as_posix()
        segments = relative.split("/")
        if len(segments) != 2:
            raise ValueError(f"Expected <partition>/<file> path, got: {relative}")

        partition_name, filename = segments
        documents.append(
            LocatedDocument(
                partition=partition_type.from_partition(partition_name),
                path=relative,
                slug=PurePosixPath(filename).stem,
            )
        )

    logger.debug(f"Located {len(documents)} documents under {root_path}")
    return documents


def read_documents(
    root: Union[str, Path],
    documents: Sequence[LocatedDocument],
    parallelism: int = 8,
) -> List[str]:
    """
    Read document contents, returning them in the order of ``documents``.

    Reads are dispatched on a thread pool; parsing stays with the caller.
    """
    root_path = Path(root)

    def _one(document: LocatedDocument) -> str:
        return read_source(root_path / document.path)

    if parallelism <= 1 or len(documents) <= 1:
        return [_one(d) for d in documents]

    contents: Dict[int, str] = {}
    with ThreadPoolExecutor(max_workers=int(parallelism)) as ex:
        futs = {ex.submit(_one, d): i for i, d in enumerate(documents)}
        for fut in as_completed(futs):
            contents[futs[fut]] = fut.result()
    # keep stable by restoring discovery order
    return [contents[i] for i in range(len(documents))]
