"""PlantUML class diagram renderer."""

from __future__ import annotations

from typing import FrozenSet, List, Sequence

from .base import Renderer
from ..models import Entity, EntityKind, Visibility
from ..signatures import decompose

_START = "@startuml"
_END = "@enduml"
_INDENT = "    "


class PlantUmlRenderer(Renderer):
    """Renders class blocks followed by dependency edges.

    Every top-level entity becomes a ``class`` (or ``enum``) block listing its
    fields and methods. A member whose type tokens mention another top-level
    entity produces a ``"Owner" <-- "Type"`` edge.
    """

    name = "plantuml"

    def __init__(self, *, visibility_markers: bool = False) -> None:
        self.visibility_markers = visibility_markers

    def render(self, entities: Sequence[Entity]) -> str:
        blocks = "\n\n".join(self.render_block(entity) for entity in entities)
        known = frozenset(entity.display_name for entity in entities)
        edges = "\n\n".join(self.render_dependencies(entity, known) for entity in entities)
        return f"{_START}\n\n{blocks}\n{edges}\n{_END}"

    def render_block(self, entity: Entity) -> str:
        keyword = "enum" if entity.kind is EntityKind.ENUM else "class"
        lines = [f'{keyword} "{entity.display_name}" {{\n']
        if entity.kind is EntityKind.STRUCT:
            lines.extend(self.render_member(member) for member in entity.members if member.is_member)
        lines.append("}")
        return "".join(lines)

    def render_member(self, member: Entity) -> str:
        marker = self._marker(member.visibility)
        if member.kind is EntityKind.METHOD:
            parameters = ", ".join(
                f"{param.name}: {param.display_name}"
                for param in member.members
                if param.kind is EntityKind.PARAMETER
            )
            return f"{_INDENT}{marker} {member.name}({parameters})\n"
        return f"{_INDENT}{marker} {member.name}: {member.display_name}\n"

    def render_dependencies(self, entity: Entity, known: FrozenSet[str]) -> str:
        edges: List[str] = []
        for member in entity.members:
            if not member.is_member:
                continue
            # Nested generic arguments hang off the full type string.
            for child in member.members:
                if child.kind is EntityKind.STRUCT:
                    edges.append(self.render_dependencies(child, known))
            if decompose(member.display_name) & known:
                edges.append(f'"{entity.display_name}" <-- "{member.display_name}"\n')
        return "".join(edges)

    def _marker(self, visibility: Visibility) -> str:
        if self.visibility_markers and visibility is Visibility.PRIVATE:
            return "-"
        return "+"


def render_plantuml(entities: Sequence[Entity]) -> str:
    """Render ``entities`` with the default PlantUML settings."""
    return PlantUmlRenderer().render(entities)


__all__ = ["PlantUmlRenderer", "render_plantuml"]
