"""Entity construction from parsed compilation units."""

from __future__ import annotations

import re
from typing import Dict, List, Union

from .logging import get_logger
from .models import (
    CompilationUnit,
    Entity,
    EntityKind,
    EnumDecl,
    FieldDecl,
    ImplDecl,
    MethodDecl,
    ParamDecl,
    Skipped,
    StructDecl,
)
from .signatures import canonical_type, dependency_tokens, has_dependencies

_IDENTIFIER = re.compile(r"^(?:r#)?[A-Za-z_][A-Za-z0-9_]*$")
_MUT_PREFIX = re.compile(r"^mut\s+")

Outcome = Union[Entity, Skipped]


def _is_identifier(text: str) -> bool:
    return text != "_" and bool(_IDENTIFIER.match(text))


def make_dependencies(type_str: str) -> Entity:
    """Build the synthetic child listing the tokens referenced by ``type_str``."""
    tokens = [Entity.new_field("", token) for token in dependency_tokens(type_str)]
    return Entity.new_struct(type_str, tokens)


def build_field(decl: FieldDecl) -> Entity:
    """Field rule: canonical type plus an optional dependency listing."""
    type_str = canonical_type(decl.type_expression)
    members: List[Entity] = []
    if has_dependencies(type_str):
        members.append(make_dependencies(type_str))
    return Entity.new_field(decl.name, type_str, members, decl.visibility)


def build_parameter(decl: ParamDecl) -> Outcome:
    if decl.is_receiver:
        return Skipped("receiver", decl.binding_pattern)
    # `mut name` still binds a plain identifier.
    pattern = _MUT_PREFIX.sub("", decl.binding_pattern.strip())
    if not _is_identifier(pattern):
        return Skipped("non-identifier binding", pattern)
    return Entity.new_parameter(pattern, canonical_type(decl.type_expression))


def build_struct(decl: StructDecl) -> Outcome:
    if decl.shape == "tuple":
        return Skipped("tuple struct", decl.name)
    fields = [build_field(field) for field in decl.fields]
    return Entity.new_struct(decl.name, fields, decl.visibility)


def resolve_impl_target(decl: ImplDecl) -> Union[str, Skipped]:
    """Return the plain type name an impl block attaches to."""
    if decl.is_trait_impl:
        return Skipped("trait impl", decl.target_type_path)
    target = canonical_type(decl.target_type_path)
    if not _is_identifier(target):
        return Skipped("qualified or generic impl target", target)
    return target


class EntityBuilder:
    """Builds the entity model for one compilation unit.

    Structs are discovered first and registered by name; inherent impl
    blocks are then folded into the struct they target. Unsupported shapes
    never raise. Each one is recorded in :attr:`skipped` and logged at debug
    level, and extraction carries on with the rest of the unit.
    """

    def __init__(self, *, include_enums: bool = False) -> None:
        self.include_enums = include_enums
        self.skipped: List[Skipped] = []
        self.logger = get_logger("builder")

    def build(self, unit: CompilationUnit) -> List[Entity]:
        self.skipped = []
        table = self._discover_types(unit)
        self._attach_methods(unit, table)
        self.logger.debug(
            "Built %d entities from %s (%d declarations skipped)",
            len(table),
            unit.path or "<memory>",
            len(self.skipped),
        )
        return list(table.values())

    def build_method(self, decl: MethodDecl) -> Entity:
        """Method rule: one parameter entity per typed, identifier-bound argument."""
        parameters: List[Entity] = []
        for param in decl.parameters:
            outcome = build_parameter(param)
            if isinstance(outcome, Skipped):
                if outcome.reason != "receiver":
                    self._skip(outcome)
                continue
            parameters.append(outcome)
        return Entity.new_method(decl.name, parameters, decl.visibility)

    def _discover_types(self, unit: CompilationUnit) -> Dict[str, Entity]:
        table: Dict[str, Entity] = {}
        for decl in unit.declarations:
            if isinstance(decl, StructDecl):
                outcome = build_struct(decl)
            elif isinstance(decl, EnumDecl):
                if not self.include_enums:
                    self._skip(Skipped("enum", decl.name))
                    continue
                outcome = Entity.new_enum(decl.name, decl.visibility)
            else:
                continue

            if isinstance(outcome, Skipped):
                self._skip(outcome)
                continue
            if outcome.display_name in table:
                self._skip(Skipped("duplicate type name", outcome.display_name))
                continue
            table[outcome.display_name] = outcome
        return table

    def _attach_methods(self, unit: CompilationUnit, table: Dict[str, Entity]) -> None:
        for decl in unit.declarations:
            if not isinstance(decl, ImplDecl):
                continue
            target = resolve_impl_target(decl)
            if isinstance(target, Skipped):
                self._skip(target)
                continue
            owner = table.get(target)
            if owner is None or owner.kind is not EntityKind.STRUCT:
                self._skip(Skipped("impl for undeclared struct", target))
                continue
            owner.members.extend(self.build_method(method) for method in decl.methods)

    def _skip(self, outcome: Skipped) -> None:
        self.skipped.append(outcome)
        self.logger.debug("Skipping %s: %s", outcome.reason, outcome.subject)


def build_entities(unit: CompilationUnit, *, include_enums: bool = False) -> List[Entity]:
    """Return the entity list for ``unit``."""
    return EntityBuilder(include_enums=include_enums).build(unit)


__all__ = [
    "EntityBuilder",
    "build_entities",
    "build_field",
    "build_parameter",
    "build_struct",
    "make_dependencies",
    "resolve_impl_target",
]
