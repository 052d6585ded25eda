"""Generate PlantUML class diagrams from Rust sources."""

__version__ = "0.1.0"

from .builder import EntityBuilder, build_entities
from .models import Entity, EntityKind, Visibility
from .renderers import render_plantuml

__all__ = [
    "Entity",
    "EntityBuilder",
    "EntityKind",
    "Visibility",
    "__version__",
    "build_entities",
    "render_plantuml",
]
