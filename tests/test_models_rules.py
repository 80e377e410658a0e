"""Unit tests for rename rules and the rule set."""

import dataclasses

import pytest

from imgrename.core import (
    ConfigurationError,
    InvalidRule,
    RenameRule,
    RuleSet,
    validate_max_name_length,
)
from imgrename.core.models_rules import RULE_FIELDS


class TestRenameRule:
    """Tests for RenameRule."""

    def test_defaults(self):
        rule = RenameRule(find="_final")

        assert rule.replace == ""
        assert rule.case_sensitive is True
        assert rule.only_when_name_too_long is False
        assert rule.id

    def test_ids_are_unique(self):
        assert RenameRule(find="a").id != RenameRule(find="a").id

    @pytest.mark.parametrize("find", ["", None, 3])
    def test_rejects_bad_find(self, find):
        with pytest.raises(InvalidRule):
            RenameRule(find=find)

    def test_rejects_non_string_replace(self):
        with pytest.raises(InvalidRule):
            RenameRule(find="a", replace=None)

    def test_invalid_rule_is_value_error(self):
        with pytest.raises(ValueError):
            RenameRule(find="")

    def test_is_immutable(self):
        rule = RenameRule(find="a")

        with pytest.raises(dataclasses.FrozenInstanceError):
            rule.find = "b"

    def test_to_dict_has_persisted_fields(self):
        rule = RenameRule(find="Pack", replace="Box", case_sensitive=False, id="r1")

        data = rule.to_dict()

        assert tuple(data) == RULE_FIELDS
        assert data == {
            "id": "r1",
            "find": "Pack",
            "replace": "Box",
            "case_sensitive": False,
            "only_when_name_too_long": False,
        }

    def test_from_dict_restores_rule(self):
        rule = RenameRule(find="x", replace="y", only_when_name_too_long=True)

        assert RenameRule.from_dict(rule.to_dict()) == rule

    def test_from_dict_fills_optional_fields(self):
        rule = RenameRule.from_dict({"id": "r1", "find": "x"})

        assert rule.replace == ""
        assert rule.case_sensitive is True

    @pytest.mark.parametrize("data", [{"find": "x"}, {"id": "r1"}, {"id": "r1", "find": ""}])
    def test_from_dict_rejects_malformed(self, data):
        with pytest.raises(InvalidRule):
            RenameRule.from_dict(data)

    @pytest.mark.parametrize("flags", [
        {"case_sensitive": "false"},
        {"case_sensitive": "true"},
        {"case_sensitive": None},
        {"only_when_name_too_long": 1},
        {"only_when_name_too_long": "yes"},
    ])
    def test_from_dict_rejects_non_bool_flags(self, flags):
        with pytest.raises(InvalidRule, match="true or false"):
            RenameRule.from_dict({"id": "r1", "find": "a", **flags})

    def test_describe(self):
        plain = RenameRule(find="a", replace="b")
        flagged = RenameRule(find="a", case_sensitive=False, only_when_name_too_long=True)

        assert plain.describe() == '"a" -> "b"'
        assert "case-insensitive" in flagged.describe()
        assert "only when too long" in flagged.describe()


class TestValidateMaxNameLength:
    """Tests for validate_max_name_length."""

    @pytest.mark.parametrize("value, expected", [(1, 1), (50, 50), ("30", 30), (" 12 ", 12)])
    def test_accepts_positive_integers(self, value, expected):
        assert validate_max_name_length(value) == expected

    @pytest.mark.parametrize("value", [0, -5, "0", "abc", "", "3.5", True, None])
    def test_rejects_invalid(self, value):
        with pytest.raises(ConfigurationError):
            validate_max_name_length(value)


class TestRuleSet:
    """Tests for RuleSet."""

    @pytest.fixture
    def rules(self):
        return RuleSet([
            RenameRule(find="a", id="r1"),
            RenameRule(find="b", id="r2"),
            RenameRule(find="c", id="r3"),
        ])

    @staticmethod
    def ids(rule_set):
        return [r.id for r in rule_set]

    def test_keeps_insertion_order(self, rules):
        assert self.ids(rules) == ["r1", "r2", "r3"]
        assert len(rules) == 3
        assert rules[1].find == "b"

    def test_add_appends_and_bumps_revision(self, rules):
        before = rules.revision

        rules.add(RenameRule(find="d", id="r4"))

        assert self.ids(rules) == ["r1", "r2", "r3", "r4"]
        assert rules.revision == before + 1

    def test_add_at_index(self, rules):
        rules.add(RenameRule(find="z", id="r0"), index=0)

        assert self.ids(rules) == ["r0", "r1", "r2", "r3"]

    def test_add_duplicate_id_rejected(self, rules):
        before = rules.revision

        with pytest.raises(InvalidRule):
            rules.add(RenameRule(find="x", id="r1"))
        assert rules.revision == before
        assert len(rules) == 3

    def test_remove(self, rules):
        removed = rules.remove("r2")

        assert removed.find == "b"
        assert self.ids(rules) == ["r1", "r3"]

    def test_remove_unknown_id(self, rules):
        with pytest.raises(InvalidRule):
            rules.remove("missing")

    def test_move(self, rules):
        rules.move("r3", 0)

        assert self.ids(rules) == ["r3", "r1", "r2"]

    def test_move_out_of_range(self, rules):
        with pytest.raises(InvalidRule):
            rules.move("r1", 3)
        assert self.ids(rules) == ["r1", "r2", "r3"]

    def test_update_keeps_id_and_position(self, rules):
        edited = rules.update("r2", find="bb", case_sensitive=False)

        assert edited.id == "r2"
        assert rules[1] is edited
        assert rules[1].find == "bb"
        assert rules[1].case_sensitive is False

    def test_update_rejects_empty_find(self, rules):
        with pytest.raises(InvalidRule):
            rules.update("r1", find="")
        assert rules[0].find == "a"

    def test_update_rejects_id_change(self, rules):
        with pytest.raises(InvalidRule):
            rules.update("r1", id="other")

    def test_update_rejects_unknown_field(self, rules):
        with pytest.raises(InvalidRule):
            rules.update("r1", colour="red")

    def test_every_mutation_bumps_revision(self, rules):
        revisions = [rules.revision]
        rules.update("r1", replace="x")
        revisions.append(rules.revision)
        rules.move("r1", 2)
        revisions.append(rules.revision)
        rules.remove("r2")
        revisions.append(rules.revision)
        rules.clear()
        revisions.append(rules.revision)

        assert revisions == sorted(set(revisions))
        assert len(rules) == 0

    def test_snapshot_is_detached(self, rules):
        snap = rules.snapshot()

        rules.clear()

        assert isinstance(snap, tuple)
        assert [r.id for r in snap] == ["r1", "r2", "r3"]

