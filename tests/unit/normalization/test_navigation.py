"""
Unit tests for understanding page navigation.
"""

import pytest

from tests._fixtures.wcag_tree import INDEX_HTML
from wcag_graph.normalization.navigation import NavLinks, generate_understanding_nav_map
from wcag_graph.normalization.taxonomy import build_principles, iter_nodes

VERSIONS = {
    "non-text-content": "20",
    "info-and-relationships": "20",
    "orientation": "21",
    "keyboard": "20",
    "pointer-gestures": "21",
    "dragging-movements": "22",
}


@pytest.fixture
def principles():
    return build_principles(INDEX_HTML, VERSIONS)


@pytest.fixture
def nav(principles):
    return generate_understanding_nav_map(principles)


def _ids(links: NavLinks):
    return tuple(node.id if node else None for node in (links.previous, links.next, links.parent))


class TestUnderstandingNav:
    """Tests for previous/next/parent links."""

    def test_every_node_has_links(self, principles, nav):
        assert set(nav) == {node.id for node in iter_nodes(principles)}

    def test_principles(self, nav):
        """Principles link to each other and have no parent."""
        assert _ids(nav["perceivable"]) == (None, "operable", None)
        assert _ids(nav["operable"]) == ("perceivable", None, None)

    def test_guidelines(self, nav):
        """Guidelines link within their principle only."""
        assert _ids(nav["text-alternatives"]) == (None, "adaptable", "perceivable")
        assert _ids(nav["adaptable"]) == ("text-alternatives", None, "perceivable")
        assert _ids(nav["keyboard-accessible"]) == (None, "input-modalities", "operable")

    def test_success_criteria(self, nav):
        assert _ids(nav["info-and-relationships"]) == (None, "orientation", "adaptable")
        assert _ids(nav["orientation"]) == ("info-and-relationships", None, "adaptable")
        assert _ids(nav["non-text-content"]) == (None, None, "text-alternatives")

    def test_links_are_nodes(self, nav):
        assert nav["orientation"].parent.num == "1.2"
        assert nav["dragging-movements"].previous.name == "Pointer Gestures"

    def test_deterministic(self, principles):
        assert dict(generate_understanding_nav_map(principles)) == dict(
            generate_understanding_nav_map(principles)
        )

    def test_read_only(self, nav):
        with pytest.raises(TypeError):
            nav["keyboard"] = NavLinks()

    def test_empty_taxonomy(self):
        assert dict(generate_understanding_nav_map([])) == {}
