"""Pipeline orchestration: scan, parse, build, render."""

from __future__ import annotations

from pathlib import Path
from typing import List

from .builder import EntityBuilder
from .config import RumlConfig, load_config
from .logging import get_logger
from .models import Entity
from .parsers import RustParser, SourceParser
from .renderers import Renderer, get_renderer
from .source_scanner import SourceScanner


class DiagramPipeline:
    """Turns an input file or directory into one diagram description.

    Entities from every scanned file are concatenated in scan order before a
    single render pass, so dependency edges resolve across files of the same
    run. Without an explicit ``config`` each run loads ``.ruml.yml`` for its
    own input, so one pipeline can be reused across crates.
    """

    def __init__(
        self,
        config: RumlConfig | None = None,
        scanner: SourceScanner | None = None,
        parser: SourceParser | None = None,
        renderer: Renderer | None = None,
    ) -> None:
        self.config = config
        self._scanner = scanner
        self.parser = parser or RustParser()
        self._renderer = renderer
        self.logger = get_logger("pipeline")

    def run(self, source: str | Path) -> str:
        """Return the rendered diagram for ``source``."""
        config = self._resolve_config(source)
        entities = self._collect(source, config)
        renderer = self._renderer or get_renderer(
            config.output_type, visibility_markers=config.visibility_markers
        )
        self.logger.info("Rendering %d entities as %s", len(entities), renderer.name or config.output_type)
        return renderer.render(entities)

    def collect_entities(self, source: str | Path) -> List[Entity]:
        """Parse every source file under ``source`` and return the combined entities."""
        return self._collect(source, self._resolve_config(source))

    def _collect(self, source: str | Path, config: RumlConfig) -> List[Entity]:
        scanner = self._scanner or SourceScanner(
            suffixes=self.parser.suffixes,
            exclude_paths=config.exclude_paths,
            read_config_file=False,
        )
        builder = EntityBuilder(include_enums=config.include_enums)

        entities: List[Entity] = []
        for path in scanner.scan(source):
            self.logger.debug("Parsing %s", path)
            unit = self.parser.parse_file(path)
            entities.extend(builder.build(unit))
        return entities

    def _resolve_config(self, source: str | Path) -> RumlConfig:
        if self.config is not None:
            return self.config
        return load_config(Path(source))


def generate_diagram(source: str | Path, config: RumlConfig | None = None) -> str:
    """Render the diagram for ``source`` with default collaborators."""
    return DiagramPipeline(config=config).run(source)


__all__ = ["DiagramPipeline", "generate_diagram"]
