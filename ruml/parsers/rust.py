"""Tree-sitter powered Rust front end."""

from __future__ import annotations

from typing import Iterator, List, Optional

import tree_sitter
import tree_sitter_rust

from .base import SourceParseError, SourceParser
from ..logging import get_logger
from ..models import (
    CompilationUnit,
    Declaration,
    EnumDecl,
    FieldDecl,
    ImplDecl,
    MethodDecl,
    OtherDecl,
    ParamDecl,
    StructDecl,
    Visibility,
)

_RUST_LANGUAGE = tree_sitter.Language(tree_sitter_rust.language())

# Trivia that never counts as a declaration.
_NON_DECLARATIONS = {"line_comment", "block_comment", "attribute_item", "inner_attribute_item"}


class RustParser(SourceParser):
    """Maps top-level Rust items onto the declaration model."""

    suffixes = (".rs",)

    def __init__(self) -> None:
        self._parser = tree_sitter.Parser(_RUST_LANGUAGE)
        self.logger = get_logger("parsers.rust")

    def parse_source(self, source_text: str, file_path: str | None = None) -> CompilationUnit:
        source = source_text.encode("utf-8")
        tree = self._parser.parse(source)
        root = tree.root_node
        if root.has_error:
            node = _first_error(root)
            row, column = node.start_point
            raise SourceParseError(
                file_path or "<memory>",
                f"syntax error near {_text(node, source)[:40]!r}",
                (row + 1, column + 1),
            )

        declarations = list(self._declarations(root, source))
        self.logger.debug(
            "Parsed %d top-level declarations from %s", len(declarations), file_path or "<memory>"
        )
        return CompilationUnit(path=file_path, declarations=declarations)

    def _declarations(self, root: tree_sitter.Node, source: bytes) -> Iterator[Declaration]:
        for child in root.named_children:
            if child.type in _NON_DECLARATIONS:
                continue
            if child.type == "struct_item":
                yield self._struct(child, source)
            elif child.type == "enum_item":
                yield EnumDecl(
                    name=_field_text(child, "name", source),
                    visibility=_visibility(child),
                )
            elif child.type == "impl_item":
                yield self._impl(child, source)
            else:
                yield OtherDecl(kind=child.type)

    def _struct(self, node: tree_sitter.Node, source: bytes) -> StructDecl:
        name = _field_text(node, "name", source)
        body = node.child_by_field_name("body")
        if body is None:
            return StructDecl(name=name, visibility=_visibility(node), shape="unit")
        if body.type == "ordered_field_declaration_list":
            return StructDecl(name=name, visibility=_visibility(node), shape="tuple")

        fields: List[FieldDecl] = []
        for child in body.named_children:
            if child.type != "field_declaration":
                continue
            fields.append(
                FieldDecl(
                    name=_field_text(child, "name", source),
                    type_expression=_field_text(child, "type", source),
                    visibility=_visibility(child),
                )
            )
        return StructDecl(name=name, visibility=_visibility(node), fields=fields, shape="named")

    def _impl(self, node: tree_sitter.Node, source: bytes) -> ImplDecl:
        methods: List[MethodDecl] = []
        body = node.child_by_field_name("body")
        if body is not None:
            for child in body.named_children:
                if child.type == "function_item":
                    methods.append(self._method(child, source))
        return ImplDecl(
            target_type_path=_field_text(node, "type", source),
            is_trait_impl=node.child_by_field_name("trait") is not None,
            methods=methods,
        )

    def _method(self, node: tree_sitter.Node, source: bytes) -> MethodDecl:
        parameters: List[ParamDecl] = []
        params_node = node.child_by_field_name("parameters")
        if params_node is not None:
            for child in params_node.named_children:
                param = _parameter(child, source)
                if param is not None:
                    parameters.append(param)
        return MethodDecl(
            name=_field_text(node, "name", source),
            visibility=_visibility(node),
            parameters=parameters,
        )


def _parameter(node: tree_sitter.Node, source: bytes) -> Optional[ParamDecl]:
    if node.type == "self_parameter":
        return ParamDecl(binding_pattern=_text(node, source), is_receiver=True)
    if node.type != "parameter":
        return None
    pattern = _field_text(node, "pattern", source)
    # `self: Box<Self>` parses as a typed parameter bound to `self`.
    return ParamDecl(
        binding_pattern=pattern,
        type_expression=_field_text(node, "type", source),
        is_receiver=pattern == "self",
    )


def _visibility(node: tree_sitter.Node) -> Visibility:
    for child in node.children:
        if child.type == "visibility_modifier":
            return Visibility.PUBLIC
    return Visibility.PRIVATE


def _first_error(node: tree_sitter.Node) -> tree_sitter.Node:
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            return _first_error(child)
    return node


def _text(node: tree_sitter.Node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _field_text(node: tree_sitter.Node, field_name: str, source: bytes) -> str:
    child = node.child_by_field_name(field_name)
    return _text(child, source) if child is not None else ""


__all__ = ["RustParser"]
