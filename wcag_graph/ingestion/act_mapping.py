"""
ACT rule mapping loader.

Reads guidelines/act-mapping.json, the externally maintained table declaring
which success criteria and techniques each ACT rule tests.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple, Union

from pydantic import ValidationError

from wcag_graph.ingestion.locator import read_source
from wcag_graph.schemas.act_rule import ActMapping, ActRule

logger = logging.getLogger(__name__)


def parse_act_rules(payload: str, source: str = "<string>") -> Tuple[ActRule, ...]:
    """
    Parse the JSON text of an ACT mapping.

    Raises:
        ValueError: If the payload does not match the mapping schema
    """
    try:
        mapping = ActMapping.model_validate_json(payload)
    except ValidationError as e:
        raise ValueError(f"Invalid ACT mapping in {source}: {e}") from e
    return mapping.act_rules


def load_act_rules(path: Union[str, Path]) -> Tuple[ActRule, ...]:
    """Load the ACT rule records from disk."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"ACT mapping not found: {path}")

    rules = parse_act_rules(read_source(path), source=str(path))
    logger.info(f"Loaded {len(rules)} ACT rules from {path.name}")
    return rules
