"""Marker registration."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from marker_tracker.core.config import MarkerConfig
from marker_tracker.core.exceptions import PatternLoadError
from marker_tracker.core.logging import get_logger
from marker_tracker.core.types import MarkerDefinition

logger = get_logger(__name__)


class MarkerRegistry:
    """Ordered collection of registered markers.

    Registration order fixes each marker's slot for the lifetime of the run,
    so slots are always dense ``0..len(registry) - 1``.
    """

    def __init__(self) -> None:
        self._markers: list[MarkerDefinition] = []

    def __len__(self) -> int:
        return len(self._markers)

    def __iter__(self) -> Iterator[MarkerDefinition]:
        return iter(self._markers)

    def __getitem__(self, slot: int) -> MarkerDefinition:
        return self._markers[slot]

    @property
    def markers(self) -> tuple[MarkerDefinition, ...]:
        """Registered markers in slot order."""
        return tuple(self._markers)

    def register(self, pattern: Any, width: float, name: str, model: str) -> MarkerDefinition:
        """Register a marker and assign it the next slot.

        Args:
            pattern: Pattern handle understood by the detector
            width: Physical marker width in world units
            name: Marker name
            model: Name of the attached virtual object

        Returns:
            The new marker definition

        Raises:
            PatternLoadError: If the pattern is missing, already registered
                or the width is not positive
        """
        if pattern is None:
            raise PatternLoadError(f"No pattern given for marker '{name}'")

        if width <= 0:
            raise PatternLoadError(f"Marker '{name}' has invalid width {width}")

        if any(m.pattern == pattern for m in self._markers):
            raise PatternLoadError(f"Pattern {pattern!r} is already registered")

        marker = MarkerDefinition(
            slot=len(self._markers),
            pattern=pattern,
            width=width,
            name=name,
            model=model,
        )
        self._markers.append(marker)
        logger.info("Registered marker %d: %s (width %.3f)", marker.slot, marker.label, width)

        return marker

    @classmethod
    def from_config(cls, configs: Iterable[MarkerConfig]) -> MarkerRegistry:
        """Build a registry from marker settings, in the given order."""
        registry = cls()
        for config in configs:
            registry.register(config.pattern, config.width_m, config.name, config.model)
        return registry
