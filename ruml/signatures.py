"""Lexical decomposition of type expressions into referenced identifiers.

Type strings are split on generic and argument delimiters without tracking
nesting, so ``Outer<Inner<A,B>,C>`` yields ``Outer, Inner, A, B, C`` as flat
siblings. No semantic resolution happens here.
"""

from __future__ import annotations

import re
from typing import FrozenSet, List

_DELIMITERS = frozenset(",<>")
_SPLIT_PATTERN = re.compile(r"[,<>]")


def canonical_type(text: str) -> str:
    """Return ``text`` with every whitespace character removed."""
    return "".join(text.split())


def has_dependencies(type_str: str) -> bool:
    """Return True when the type string is compound or generic."""
    return any(char in _DELIMITERS for char in type_str)


def dependency_tokens(type_str: str) -> List[str]:
    """Return referenced identifiers in first-occurrence order."""
    tokens: List[str] = []
    for fragment in _SPLIT_PATTERN.split(type_str):
        token = canonical_type(fragment)
        if token:
            tokens.append(token)
    return tokens


def decompose(type_str: str) -> FrozenSet[str]:
    """Return the set of identifiers referenced by ``type_str``."""
    return frozenset(dependency_tokens(type_str))


__all__ = ["canonical_type", "decompose", "dependency_tokens", "has_dependencies"]
