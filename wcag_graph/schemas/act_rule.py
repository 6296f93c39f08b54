# wcag_graph/schemas/act_rule.py
"""
ACT rule mapping models (guidelines/act-mapping.json).

Each record names the success criteria and techniques an ACT rule tests.
"""

from typing import Any, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ActRule(BaseModel):
    """A single ACT rule record."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str
    title: str
    permalink: str = ""
    success_criteria: Tuple[str, ...] = Field(default=(), alias="successCriteria")
    wcag_techniques: Tuple[str, ...] = Field(default=(), alias="wcagTechniques")
    proposed: bool = False
    deprecated: bool = False

    @model_validator(mode="before")
    @classmethod
    def _derive_id(cls, data: Any) -> Any:
        """
        Fill in ``id`` from the permalink when the record has none.

        Example:
            "/standards-guidelines/act/rules/09o5cg/proposed/" -> "09o5cg"
        """
        if isinstance(data, dict) and not data.get("id"):
            segments = [
                s for s in str(data.get("permalink", "")).split("/") if s and s != "proposed"
            ]
            if not segments:
                raise ValueError(
                    f"ACT rule '{data.get('title', '?')}' has neither an id nor a permalink"
                )
            data = {**data, "id": segments[-1]}
        return data

    def applies_to_criterion(self, criterion_id: str) -> bool:
        return criterion_id in self.success_criteria

    def applies_to_technique(self, technique_id: str) -> bool:
        return technique_id in self.wcag_techniques


class ActMapping(BaseModel):
    """Root object of act-mapping.json."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    act_rules: Tuple[ActRule, ...] = Field(default=(), alias="act-rules")
