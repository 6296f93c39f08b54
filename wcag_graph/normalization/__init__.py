"""
Normalization of parsed sources into the document graph.

This package contains:
- taxonomy.py: Principle/Guideline/Success Criterion tree and its flattened lookup
- cross_reference.py: technique <-> guideline associations, ACT rule filters, citations
- navigation.py: previous/next/parent links for understanding pages
"""
