"""Tests for translating raw queries into query trees."""

import re

import pytest

from match_engine.config.settings import Settings
from match_engine.exceptions import QueryError
from match_engine.models.domain import Combinator, CombinatorKind, Leaf, Modifiers, Operator
from match_engine.query.normalizer import compile_regex, normalize_query


def test_scalar_is_implicit_eq():
    assert normalize_query({"title": "Amsterdam"}) == [
        Leaf(("title",), Operator.EQ, "Amsterdam", Modifiers())
    ]


def test_operator_mapping_with_modifiers():
    [leaf] = normalize_query({"title": {"_sim": "Amsterdam", "w": 2, "b": True}})
    assert leaf.operator is Operator.SIM
    assert leaf.modifiers.weight == 2
    assert leaf.modifiers.binary is True


def test_several_operators_share_modifiers():
    parts = normalize_query({"population": {"_gte": 10, "_lt": 20, "w": 3}})
    assert [p.operator for p in parts] == [Operator.GTE, Operator.LT]
    assert all(p.modifiers.weight == 3 for p in parts)


def test_dotted_and_nested_fields():
    dotted = normalize_query({"location.city": "Amsterdam"})
    nested = normalize_query({"location": {"city": "Amsterdam"}})
    assert dotted == nested
    assert dotted[0].field == ("location", "city")


def test_list_syntax():
    parts = normalize_query([("title", "Amsterdam"), ("key", [("_in", ["a", "b"]), ("w", 2)])])
    assert parts[0] == Leaf(("title",), Operator.EQ, "Amsterdam", Modifiers())
    assert parts[1].operator is Operator.IN
    assert parts[1].modifiers.weight == 2


def test_list_syntax_modifier_first():
    [leaf] = normalize_query([("title", [("w", 2), ("_eq", "A")])])
    assert leaf.operator is Operator.EQ
    assert leaf.operand == "A"
    assert leaf.modifiers.weight == 2


def test_list_syntax_path_sequence():
    [leaf] = normalize_query([(["a", "b"], 1)])
    assert leaf.field == ("a", "b")


def test_list_operand_is_eq_value():
    [leaf] = normalize_query({"tags": ["a", "b"]})
    assert leaf.operator is Operator.EQ
    assert leaf.operand == ["a", "b"]


def test_combinators():
    [node] = normalize_query({"_or": [{"title": "A"}, {"title": "B", "key": "K"}]})
    assert isinstance(node, Combinator)
    assert node.kind is CombinatorKind.OR
    assert isinstance(node.children[0], Leaf)
    assert node.children[1].kind is CombinatorKind.AND
    assert len(node.children[1].children) == 2


def test_combinator_requires_sequence():
    with pytest.raises(QueryError):
        normalize_query({"_not": {"title": "Amsterdam"}})


def test_combinator_token_at_leaf_position_is_kept():
    [leaf] = normalize_query({"title": {"_and": []}})
    assert leaf.operator == "_and"


def test_unknown_operator_is_kept():
    [leaf] = normalize_query({"title": {"_near": "x"}})
    assert leaf.operator == "_near"


def test_unknown_modifier_rejected():
    with pytest.raises(QueryError):
        normalize_query({"title": {"_eq": "x", "weight_factor": 2}})


def test_bad_modifier_type_rejected():
    with pytest.raises(QueryError):
        normalize_query({"title": {"_eq": "x", "w": "heavy"}})


def test_missing_operator_rejected():
    with pytest.raises(QueryError):
        normalize_query([("title", {"w": 2})])


def test_malformed_pair_rejected():
    with pytest.raises(QueryError):
        normalize_query([("title", "a", "b")])


def test_invalid_query_type():
    with pytest.raises(QueryError):
        normalize_query("title:Amsterdam")


def test_regex_compiled_with_match_group():
    [leaf] = normalize_query({"title": {"_regex": "Amster"}})
    assert isinstance(leaf.operand, re.Pattern)
    assert "match" in leaf.operand.groupindex


def test_inverse_regex_keeps_literal():
    [leaf] = normalize_query({"title": {"_regex": "Amsterdam", "inverse": True}})
    assert leaf.operand == "Amsterdam"
    assert leaf.modifiers.inverse is True


def test_invalid_regex():
    with pytest.raises(QueryError):
        normalize_query({"title": {"_regex": "(unclosed"}})


def test_compile_regex_keeps_flags():
    pattern = compile_regex(re.compile("amster", re.IGNORECASE))
    assert pattern.flags & re.IGNORECASE
    assert pattern.search("AMSTERDAM").group("match") == "AMSTER"


def test_explicit_match_group_is_not_wrapped():
    [leaf] = normalize_query({"addr": {"_regex": r"(?P<match>\d+) (?P<street>\w+)"}})
    assert leaf.operand.pattern == r"(?P<match>\d+) (?P<street>\w+)"


def test_internal_operator_token_is_kept_as_string():
    [leaf] = normalize_query({"title": {"_regex_inverse": "x"}})
    assert leaf.operator == "_regex_inverse"
    assert not isinstance(leaf.operator, Operator)


def test_threshold_defaults_from_settings():
    settings = Settings(default_max_distance=5_000, default_max_time=60)
    [leaf] = normalize_query({"location": {"_geo": [52.0, 4.0]}}, settings)
    assert leaf.modifiers.max_distance == 5_000
    assert leaf.modifiers.max_time == 60
    [explicit] = normalize_query({"location": {"_geo": [52.0, 4.0], "max_distance": 10}}, settings)
    assert explicit.modifiers.max_distance == 10


def test_nodes_pass_through():
    leaf = Leaf(("title",), Operator.EQ, "Amsterdam")
    assert normalize_query(leaf) == [leaf]
    assert normalize_query([leaf]) == [leaf]
