"""Tests for ruml.signatures."""

from __future__ import annotations

import pytest

from ruml.signatures import canonical_type, decompose, dependency_tokens, has_dependencies


def test_decompose_matches_known_examples() -> None:
    assert decompose("String") == {"String"}
    assert decompose("HashSet<String>") == {"HashSet", "String"}
    assert decompose("HashMap<Id,String>") == {"HashMap", "Id", "String"}
    assert decompose("HashMap<Id, String>") == {"HashMap", "Id", "String"}


def test_decompose_is_deterministic() -> None:
    type_str = "Outer<Inner<A,B>,C>"
    assert decompose(type_str) == decompose(type_str)
    assert dependency_tokens(type_str) == dependency_tokens(type_str)


def test_nested_generics_flatten_to_siblings() -> None:
    assert dependency_tokens("Outer<Inner<A,B>,C>") == ["Outer", "Inner", "A", "B", "C"]
    assert dependency_tokens("Map<Id,List<String>>") == ["Map", "Id", "List", "String"]


def test_dependency_tokens_keep_first_occurrence_order_and_drop_empty_fragments() -> None:
    assert dependency_tokens("Vec<Vec<u8>>") == ["Vec", "Vec", "u8"]
    assert dependency_tokens("<>,") == []


@pytest.mark.parametrize(
    ("type_str", "expected"),
    [
        ("String", False),
        ("Profile", False),
        ("&'astr", False),
        ("Vec<Profile>", True),
        ("(u32,u32)", True),
        ("Box<dyn Fn()>", True),
    ],
)
def test_has_dependencies(type_str: str, expected: bool) -> None:
    assert has_dependencies(type_str) is expected


def test_canonical_type_strips_all_whitespace() -> None:
    assert canonical_type("HashMap < Id , String >") == "HashMap<Id,String>"
    assert canonical_type("&'a  str") == "&'astr"
    assert canonical_type("Option<\n    Profile,\n>") == "Option<Profile,>"
