"""Base interface for language front ends.

A front end turns source text into a :class:`~ruml.models.CompilationUnit`.
Reading the file is shared here; the syntax-to-declaration mapping is left to
each language.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Tuple

from ..models import CompilationUnit


class SourceParseError(RuntimeError):
    """Raised when a source file cannot be parsed."""

    def __init__(self, path: str, message: str, position: Tuple[int, int] | None = None) -> None:
        self.path = path
        self.position = position
        location = f"{path}:{position[0]}:{position[1]}" if position else path
        super().__init__(f"Unable to parse {location}: {message}")


class SourceParser(ABC):
    """Contract for parsers that extract top-level declarations."""

    #: File suffixes (lower case, with dot) handled by this parser.
    suffixes: Tuple[str, ...] = ()

    @abstractmethod
    def parse_source(self, source_text: str, file_path: str | None = None) -> CompilationUnit:
        """Parse ``source_text`` into a compilation unit.

        Raises:
            SourceParseError: the text is not valid source for this language.
        """

    def parse_file(self, file_path: str | Path) -> CompilationUnit:
        """Read and parse one source file.

        Raises:
            FileNotFoundError: the file does not exist.
            SourceParseError: the file is not valid source.
        """
        path = Path(file_path)
        try:
            source_text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise SourceParseError(str(path), f"not valid UTF-8 ({exc.reason})") from exc
        return self.parse_source(source_text, str(path))

    def handles(self, path: Path) -> bool:
        """Return True when ``path`` carries one of :attr:`suffixes`."""
        return path.suffix.lower() in self.suffixes
