"""Diagram renderer implementations and lookup utilities."""

from __future__ import annotations

import inspect
from importlib import metadata
from typing import Any, Callable, Dict, Iterable, List

from .base import Renderer
from .plantuml import PlantUmlRenderer, render_plantuml

_ENTRY_POINT_GROUP = "ruml.renderers"

DEFAULT_OUTPUT_TYPE = "plantuml"

_BUILTIN_FACTORIES: Dict[str, Callable[..., Renderer]] = {
    "plantuml": PlantUmlRenderer,
}


class UnknownOutputTypeError(ValueError):
    """Raised when no renderer is registered for an output type."""


def available_output_types() -> List[str]:
    """Return registered output type names, built-ins first."""
    names = list(_BUILTIN_FACTORIES)
    for entry in _iter_entry_points():
        key = entry.name.lower()
        if key not in names:
            names.append(key)
    return names


def get_renderer(output_type: str | None = None, **options: object) -> Renderer:
    """Instantiate the renderer registered under ``output_type``.

    Names are case-insensitive, so ``PlantUml`` selects the built-in
    PlantUML renderer. ``options`` are forwarded to the renderer factory,
    minus any keyword its signature does not accept, so plugin renderers
    may ignore options such as ``visibility_markers``.
    """
    key = (output_type or DEFAULT_OUTPUT_TYPE).lower()
    factory = _BUILTIN_FACTORIES.get(key)
    if factory is None:
        for entry in _iter_entry_points():
            if entry.name.lower() != key:
                continue
            try:
                factory = entry.load()
            except Exception as exc:  # pragma: no cover - defensive guard
                raise RuntimeError(f"Failed to load renderer entry point '{entry.name}': {exc}") from exc
            break
    if factory is None:
        known = ", ".join(available_output_types())
        raise UnknownOutputTypeError(f"Unknown output type '{output_type}' (available: {known})")

    instance = factory(**_accepted_options(factory, options))
    if not isinstance(instance, Renderer):
        raise TypeError(f"Renderer factory for '{key}' did not return a Renderer instance")
    return instance


def _accepted_options(factory: Callable[..., Renderer], options: Dict[str, Any]) -> Dict[str, Any]:
    try:
        parameters = inspect.signature(factory).parameters.values()
    except (TypeError, ValueError):
        return dict(options)
    if any(param.kind is inspect.Parameter.VAR_KEYWORD for param in parameters):
        return dict(options)
    names = {
        param.name
        for param in parameters
        if param.kind in (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY)
    }
    return {key: value for key, value in options.items() if key in names}


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    try:
        entry_points = metadata.entry_points()
    except Exception:  # pragma: no cover - defensive guard
        return []

    if hasattr(entry_points, "select"):
        return entry_points.select(group=_ENTRY_POINT_GROUP)  # type: ignore[return-value]

    return entry_points.get(_ENTRY_POINT_GROUP, [])  # type: ignore[return-value]


__all__ = [
    "DEFAULT_OUTPUT_TYPE",
    "PlantUmlRenderer",
    "Renderer",
    "UnknownOutputTypeError",
    "available_output_types",
    "get_renderer",
    "render_plantuml",
]
