"""
Graph Orchestrator.

Runs every stage of a documentation graph build in dependency order and
returns the finished, read-only DocumentGraph the renderer consumes:

    versions -> principles -> techniques -> ACT rules -> understanding docs
             -> cross-references -> navigation

Any fatal error aborts the whole build; there are no partial results.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from wcag_graph.configs.config import Config
from wcag_graph.configs.settings import Settings, get_settings
from wcag_graph.ingestion.act_mapping import load_act_rules
from wcag_graph.ingestion.locator import locate_documents, read_documents
from wcag_graph.ingestion.techniques import get_techniques_by_technology
from wcag_graph.ingestion.versions import get_inverted_guidelines_versions
from wcag_graph.monitoring.logging import LoggingOptions, setup_build_logger, with_context
from wcag_graph.normalization.cross_reference import CrossReferenceResolver, UnresolvedCitation
from wcag_graph.normalization.navigation import NavLinks, generate_understanding_nav_map
from wcag_graph.normalization.taxonomy import get_principles
from wcag_graph.schemas.act_rule import ActRule
from wcag_graph.schemas.taxonomy import GuidelineOrCriterion, Principle, WcagVersion
from wcag_graph.schemas.technique import (
    TECHNOLOGY_TITLES,
    FlatTechnique,
    Technique,
    TechniqueAssociation,
    Technology,
)

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


class BuildStatus(str, Enum):
    """Status of a graph build."""

    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class BuildResult:
    """Outcome and statistics of a graph build."""

    build_id: str
    status: BuildStatus = BuildStatus.PENDING
    started_at: datetime = field(default_factory=_utc_now)
    ended_at: Optional[datetime] = None
    stage: Optional[str] = None
    counts: Dict[str, int] = field(default_factory=dict)
    unresolved_citations: List[UnresolvedCitation] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def duration_seconds(self) -> float:
        """Calculate build duration."""
        if self.ended_at is None:
            return 0.0
        return (self.ended_at - self.started_at).total_seconds()


@dataclass(frozen=True)
class DocumentGraph:
    """Everything the renderer reads, keyed the way templates look it up."""

    version: WcagVersion
    technologies: Tuple[Technology, ...]
    technology_titles: Mapping[Technology, str]
    techniques: Mapping[Technology, Tuple[Technique, ...]]
    principles: Tuple[Principle, ...]
    flat_guidelines: Mapping[str, GuidelineOrCriterion]
    flat_techniques: Mapping[str, FlatTechnique]
    technique_associations: Mapping[str, Tuple[TechniqueAssociation, ...]]
    criterion_rules: Mapping[str, Tuple[ActRule, ...]]
    technique_rules: Mapping[str, Tuple[ActRule, ...]]
    understanding_nav: Mapping[str, NavLinks]
    resolver: CrossReferenceResolver
    result: BuildResult

    @property
    def version_decimal(self) -> str:
        return self.version.decimal


class GraphBuilder:
    """
    Builds the document graph from a WCAG source tree.

    Responsibilities:
    - Locate and read the guidelines and techniques corpora
    - Resolve the taxonomy, technique catalog and cross-references
    - Track build status, timings and diagnostics
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        act_rules: Optional[Sequence[ActRule]] = None,
    ):
        """
        Initialize the builder.

        Args:
            settings: Build settings; defaults to the environment settings
            act_rules: Rule mapping to use instead of guidelines/act-mapping.json
        """
        self.settings = settings or get_settings()
        self.source_root = Path(self.settings.SOURCE_ROOT)
        self._act_rules = tuple(act_rules) if act_rules is not None else None
        self.last_result: Optional[BuildResult] = None

    def build(self) -> DocumentGraph:
        """
        Run a full build.

        Raises:
            Whatever fatal error aborted the build (configuration, structural
            or extraction errors); it is logged with the failing stage first.
        """
        result = BuildResult(build_id=uuid.uuid4().hex[:12], status=BuildStatus.RUNNING)
        self.last_result = result
        log = with_context(logger, build_id=result.build_id)
        log.info(
            f"Building WCAG {self.settings.version_decimal} document graph "
            f"from {self.source_root}"
        )

        try:
            graph = self._run(result)
        except Exception as e:
            result.status = BuildStatus.FAILED
            result.ended_at = _utc_now()
            result.error = str(e)
            with_context(logger, build_id=result.build_id, stage=result.stage).error(
                f"Build failed: {e}"
            )
            raise

        log.info(
            f"Build finished in {result.duration_seconds:.2f}s: "
            + ", ".join(f"{k}={v}" for k, v in result.counts.items())
            + f", unresolved citations={len(result.unresolved_citations)}"
        )
        return graph

    def _enter(self, result: BuildResult, stage: str) -> None:
        result.stage = stage
        with_context(logger, build_id=result.build_id, stage=stage).debug(f"Starting {stage}")

    def _run(self, result: BuildResult) -> DocumentGraph:
        pattern = Config.get_discovery_pattern()
        parallelism = self.settings.READ_PARALLELISM
        understanding_root = Config.get_corpus_path(self.source_root, "guidelines")
        techniques_root = Config.get_corpus_path(self.source_root, "techniques")

        self._enter(result, "versions")
        versions = get_inverted_guidelines_versions(understanding_root, pattern)

        self._enter(result, "taxonomy")
        principles = get_principles(
            Config.get_document_path(self.source_root, "index"), versions
        )

        self._enter(result, "techniques")
        techniques = get_techniques_by_technology(techniques_root, parallelism, pattern)

        self._enter(result, "act_rules")
        act_rules = (
            self._act_rules
            if self._act_rules is not None
            else load_act_rules(Config.get_document_path(self.source_root, "act_mapping"))
        )

        self._enter(result, "understanding")
        understanding_docs = locate_documents(understanding_root, WcagVersion, pattern)
        contents = read_documents(understanding_root, understanding_docs, parallelism)

        self._enter(result, "cross_references")
        resolver = CrossReferenceResolver(
            principles,
            techniques,
            act_rules,
            [
                (f"understanding/{doc.path}", html)
                for doc, html in zip(understanding_docs, contents)
            ],
        )

        self._enter(result, "navigation")
        understanding_nav = generate_understanding_nav_map(principles)

        result.counts = {
            "principles": len(principles),
            "guidelines_and_criteria": len(resolver.flat_guidelines),
            "techniques": len(resolver.flat_techniques),
            "act_rules": len(act_rules),
            "understanding_documents": len(understanding_docs),
        }
        result.unresolved_citations = list(resolver.unresolved)
        result.status = BuildStatus.SUCCESS
        result.stage = None
        result.ended_at = _utc_now()

        return DocumentGraph(
            version=self.settings.WCAG_VERSION,
            technologies=tuple(Technology),
            technology_titles=MappingProxyType(dict(TECHNOLOGY_TITLES)),
            techniques=MappingProxyType(
                {technology: tuple(items) for technology, items in techniques.items()}
            ),
            principles=tuple(principles),
            flat_guidelines=resolver.flat_guidelines,
            flat_techniques=resolver.flat_techniques,
            technique_associations=resolver.technique_associations,
            criterion_rules=resolver.criterion_rules,
            technique_rules=resolver.technique_rules,
            understanding_nav=understanding_nav,
            resolver=resolver,
            result=result,
        )


def build_document_graph(
    source_root: Optional[Path] = None,
    act_rules: Optional[Sequence[ActRule]] = None,
) -> DocumentGraph:
    """
    Build the graph for a source tree with default settings.

    Also configures the package logger from LOG_LEVEL and LOG_JSON.

    Usage:
        graph = build_document_graph(Path("wcag"))
        graph.flat_guidelines["non-text-content"].num  # "1.1.1"
    """
    settings = get_settings()
    if source_root is not None:
        settings = settings.model_copy(update={"SOURCE_ROOT": Path(source_root)})
    setup_build_logger(LoggingOptions(level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON))
    return GraphBuilder(settings, act_rules=act_rules).build()
