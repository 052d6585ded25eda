"""Base classes for diagram renderers."""

from abc import ABC, abstractmethod
from typing import Sequence

from ..models import Entity


class Renderer(ABC):
    """Contract for renderers that turn the entity model into diagram text."""

    name: str = ""

    @abstractmethod
    def render(self, entities: Sequence[Entity]) -> str:
        """Return the diagram description for ``entities`` without mutating them."""
