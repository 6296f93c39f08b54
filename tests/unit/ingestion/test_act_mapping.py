"""
Unit tests for the ACT mapping loader.
"""

import json

import pytest

from tests._fixtures.wcag_tree import write_file
from wcag_graph.ingestion.act_mapping import load_act_rules, parse_act_rules


class TestLoadActRules:
    """Tests for load_act_rules and parse_act_rules."""

    def test_loads_fixture_mapping(self, source_root):
        """Records are read in file order with derived ids."""
        rules = load_act_rules(source_root / "guidelines" / "act-mapping.json")
        assert [rule.id for rule in rules] == ["23a2a8", "b33eff"]
        assert rules[1].proposed is True

    def test_missing_file(self, tmp_path):
        """A missing mapping is reported with its path."""
        with pytest.raises(FileNotFoundError, match="act-mapping.json"):
            load_act_rules(tmp_path / "act-mapping.json")

    def test_invalid_payload(self, tmp_path):
        """Records that break the schema are rejected with the source name."""
        path = write_file(
            tmp_path,
            "act-mapping.json",
            json.dumps({"act-rules": [{"title": "Rule", "successCriteria": "not-a-list"}]}),
        )
        with pytest.raises(ValueError, match="act-mapping.json"):
            load_act_rules(path)

    def test_parse_ignores_unknown_fields(self):
        """Extra keys in records are tolerated."""
        payload = json.dumps(
            {"act-rules": [{"title": "Rule", "permalink": "/r/abc/", "frameworks": ["x"]}]}
        )
        assert parse_act_rules(payload)[0].id == "abc"
