"""
WCAG documentation graph engine.

Turns the WCAG source tree (guidelines index, understanding documents,
technique documents and the ACT rule mapping) into the normalized,
versioned and cross-linked structures the publication renderer reads.

Key Components:
- ingestion: document discovery, heading extraction, version index, technique catalog
- normalization: taxonomy tree, cross-reference resolution, navigation
- schemas: pydantic models for taxonomy nodes, techniques and ACT rules
"""

__version__ = "0.1.0"
