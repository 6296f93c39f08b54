"""
Unit tests for the version membership index.
"""

import logging

import pytest

from tests._fixtures.wcag_tree import write_file
from wcag_graph.ingestion.versions import (
    get_guidelines_versions,
    get_inverted_guidelines_versions,
    invert_guidelines_versions,
)
from wcag_graph.schemas.taxonomy import PartitionError, WcagVersion


@pytest.fixture
def understanding_root(source_root):
    return source_root / "understanding"


class TestGetGuidelinesVersions:
    """Tests for get_guidelines_versions."""

    def test_basenames_sorted_per_version(self, understanding_root):
        """Each version lists its basenames lexicographically."""
        versions = get_guidelines_versions(understanding_root)
        assert versions[WcagVersion.WCAG21] == [
            "input-modalities",
            "orientation",
            "pointer-gestures",
        ]
        assert versions[WcagVersion.WCAG22] == ["dragging-movements"]

    def test_every_version_present(self, tmp_path):
        """Versions without documents map to an empty list."""
        root = tmp_path / "understanding"
        write_file(root, "20/keyboard.html", "<h1>Keyboard</h1>")
        versions = get_guidelines_versions(root)
        assert versions == {
            WcagVersion.WCAG20: ["keyboard"],
            WcagVersion.WCAG21: [],
            WcagVersion.WCAG22: [],
        }

    def test_unknown_version_directory(self, understanding_root):
        """Misplaced version directories abort the build."""
        write_file(understanding_root, "19/old.html", "<h1>Old</h1>")
        with pytest.raises(PartitionError):
            get_guidelines_versions(understanding_root)


class TestInvertedVersions:
    """Tests for the inverted identifier -> version mapping."""

    def test_inverts(self, understanding_root):
        """Each basename maps to the version it was found under."""
        inverted = get_inverted_guidelines_versions(understanding_root)
        assert inverted["non-text-content"] is WcagVersion.WCAG20
        assert inverted["orientation"] is WcagVersion.WCAG21
        assert inverted["dragging-movements"] is WcagVersion.WCAG22

    def test_rebuild_is_identical(self, understanding_root):
        """Rebuilding over unchanged sources yields the same mapping."""
        assert get_inverted_guidelines_versions(understanding_root) == (
            get_inverted_guidelines_versions(understanding_root)
        )

    def test_collision_later_version_wins_and_is_logged(self, caplog):
        """Duplicate basenames resolve to the later version with a warning."""
        versions = {
            WcagVersion.WCAG22: ["focus-visible"],
            WcagVersion.WCAG20: ["focus-visible", "keyboard"],
            WcagVersion.WCAG21: [],
        }
        with caplog.at_level(logging.WARNING, logger="wcag_graph"):
            inverted = invert_guidelines_versions(versions)

        assert inverted == {
            "focus-visible": WcagVersion.WCAG22,
            "keyboard": WcagVersion.WCAG20,
        }
        assert "focus-visible" in caplog.text
        assert "WCAG20" in caplog.text and "WCAG22" in caplog.text

    def test_no_collision_no_warning(self, understanding_root, caplog):
        """Clean trees produce no diagnostics."""
        with caplog.at_level(logging.WARNING, logger="wcag_graph"):
            get_inverted_guidelines_versions(understanding_root)
        assert caplog.records == []
