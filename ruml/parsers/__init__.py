"""Language front ends producing compilation units."""

from .base import SourceParseError, SourceParser
from .rust import RustParser

__all__ = ["RustParser", "SourceParseError", "SourceParser"]
