"""
Ingestion layer for the WCAG documentation graph.

This package discovers and reads source documents from the WCAG source tree.

Key Components:
- locate_documents: classifies <partition>/<file> documents by directory
- extract_title_html: reads the primary heading of a document
- get_inverted_guidelines_versions: maps each understanding document to its WCAG version
- get_techniques_by_technology: builds the per-technology technique catalog
- GraphBuilder: runs every stage and returns the finished DocumentGraph
"""
