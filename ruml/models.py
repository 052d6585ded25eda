"""Core data models shared across ruml components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class Visibility(str, Enum):
    """Declared visibility of a type or member."""

    PUBLIC = "public"
    PRIVATE = "private"


class EntityKind(str, Enum):
    """Role an entity plays in the model."""

    STRUCT = "struct"
    ENUM = "enum"
    FIELD = "field"
    METHOD = "method"
    PARAMETER = "parameter"


# Declarations handed over by a language front end.


@dataclass
class FieldDecl:
    """Named field of a struct declaration."""

    name: str
    type_expression: str
    visibility: Visibility = Visibility.PRIVATE


@dataclass
class StructDecl:
    """Top-level struct declaration.

    ``shape`` is ``"named"`` for brace-delimited fields, ``"tuple"`` for
    positional fields and ``"unit"`` for field-less structs. Only named
    structs carry ``fields``.
    """

    name: str
    visibility: Visibility = Visibility.PRIVATE
    fields: List[FieldDecl] = field(default_factory=list)
    shape: str = "named"


@dataclass
class ParamDecl:
    """Argument of an associated function."""

    binding_pattern: str
    type_expression: str = ""
    is_receiver: bool = False


@dataclass
class MethodDecl:
    """Associated function declared inside an impl block."""

    name: str
    visibility: Visibility = Visibility.PRIVATE
    parameters: List[ParamDecl] = field(default_factory=list)


@dataclass
class ImplDecl:
    """Implementation block targeting a type."""

    target_type_path: str
    is_trait_impl: bool = False
    methods: List[MethodDecl] = field(default_factory=list)


@dataclass
class EnumDecl:
    """Top-level enum declaration; variants are not modelled."""

    name: str
    visibility: Visibility = Visibility.PRIVATE


@dataclass
class OtherDecl:
    """Any declaration the builder has no use for."""

    kind: str


Declaration = Union[StructDecl, ImplDecl, EnumDecl, OtherDecl]


@dataclass
class CompilationUnit:
    """Top-level declarations of one source file, in source order."""

    path: Optional[str]
    declarations: List[Declaration] = field(default_factory=list)


# Normalized entity model.


@dataclass
class Entity:
    """Recursive node describing a declared type or one of its members.

    ``name`` holds the member identifier for fields, methods and parameters
    and is empty for structs and enums. ``display_name`` is the type name for
    structs and enums, the canonical type expression for fields and
    parameters, and the method name for methods.
    """

    kind: EntityKind
    display_name: str
    members: List["Entity"] = field(default_factory=list)
    visibility: Visibility = Visibility.PRIVATE
    name: str = ""

    @classmethod
    def new_struct(
        cls,
        display_name: str,
        members: Optional[List["Entity"]] = None,
        visibility: Visibility = Visibility.PRIVATE,
    ) -> "Entity":
        return cls(EntityKind.STRUCT, display_name, list(members or []), visibility)

    @classmethod
    def new_enum(cls, display_name: str, visibility: Visibility = Visibility.PRIVATE) -> "Entity":
        return cls(EntityKind.ENUM, display_name, [], visibility)

    @classmethod
    def new_field(
        cls,
        name: str,
        type_name: str,
        members: Optional[List["Entity"]] = None,
        visibility: Visibility = Visibility.PRIVATE,
    ) -> "Entity":
        return cls(EntityKind.FIELD, type_name, list(members or []), visibility, name)

    @classmethod
    def new_method(
        cls,
        name: str,
        parameters: Optional[List["Entity"]] = None,
        visibility: Visibility = Visibility.PRIVATE,
    ) -> "Entity":
        return cls(EntityKind.METHOD, name, list(parameters or []), visibility, name)

    @classmethod
    def new_parameter(cls, name: str, type_name: str) -> "Entity":
        return cls(EntityKind.PARAMETER, type_name, [], Visibility.PRIVATE, name)

    @property
    def is_member(self) -> bool:
        """True for children rendered as their own line inside a block."""
        return self.kind in (EntityKind.FIELD, EntityKind.METHOD)


@dataclass
class Skipped:
    """Outcome of a construction rule that declined its input."""

    reason: str
    subject: str = ""


__all__ = [
    "CompilationUnit",
    "Declaration",
    "Entity",
    "EntityKind",
    "EnumDecl",
    "FieldDecl",
    "ImplDecl",
    "MethodDecl",
    "OtherDecl",
    "ParamDecl",
    "Skipped",
    "StructDecl",
    "Visibility",
]
