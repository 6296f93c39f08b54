"""
Shared pytest fixtures for the WCAG documentation graph test suite.

Provides a small but complete WCAG source tree written to a temporary
directory: guidelines index, understanding documents per version, technique
documents per technology and an ACT rule mapping.
"""

import logging

import pytest

from tests._fixtures.wcag_tree import build_source_tree
from wcag_graph.configs.settings import Settings
from wcag_graph.monitoring.logging import ROOT_LOGGER_NAME


@pytest.fixture
def create_source_tree(tmp_path):
    """
    Return a function that writes a WCAG source tree with sensible defaults.

    Factory fixture; the index document, understanding layout, techniques and
    ACT mapping can all be overridden via keyword arguments.

    Example:
        root = create_source_tree(techniques={"css": {"C7": "Using CSS ..."}})
    """

    def _create_source_tree(**kwargs):
        return build_source_tree(tmp_path / "wcag", **kwargs)

    return _create_source_tree


@pytest.fixture
def source_root(create_source_tree):
    """Return the default WCAG source tree."""
    return create_source_tree()


@pytest.fixture
def build_settings(source_root):
    """Return Settings pointing at the default source tree."""
    return Settings(SOURCE_ROOT=source_root, READ_PARALLELISM=4)


@pytest.fixture
def restore_package_logger():
    """Undo setup_build_logger so later tests can capture records with caplog."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    level = logger.level
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)
    logger.propagate = True
