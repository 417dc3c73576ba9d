"""Scene update commands issued by the tracker.

The tracker never touches scene objects directly; it describes each side
effect as a command and hands the list to whatever renderer is attached.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

import numpy as np

from marker_tracker.core.types import Transform


@dataclass(frozen=True, slots=True)
class ApplyTransform:
    """Move a marker's object to a new smoothed transform and show it."""

    slot: int
    transform: Transform


@dataclass(frozen=True, slots=True)
class SetInvisible:
    """Hide a marker's object."""

    slot: int


RenderCommand = ApplyTransform | SetInvisible


class SceneRenderer(Protocol):
    """External scene that displays the virtual objects."""

    def apply_transform(self, slot: int, transform: Transform) -> None: ...

    def set_invisible(self, slot: int) -> None: ...


def dispatch(commands: Iterable[RenderCommand], renderer: SceneRenderer) -> None:
    """Send commands to a renderer in order."""
    for command in commands:
        if isinstance(command, ApplyTransform):
            renderer.apply_transform(command.slot, command.transform)
        else:
            renderer.set_invisible(command.slot)


@dataclass
class SceneState:
    """In-memory renderer recording each object's latest transform and visibility.

    Attributes:
        transforms: Latest transform per slot
        visible: Visibility per slot
    """

    transforms: dict[int, Transform] = field(default_factory=dict)
    visible: dict[int, bool] = field(default_factory=dict)

    def apply_transform(self, slot: int, transform: Transform) -> None:
        self.transforms[slot] = np.array(transform, dtype=np.float64)
        self.visible[slot] = True

    def set_invisible(self, slot: int) -> None:
        self.visible[slot] = False

    def is_visible(self, slot: int) -> bool:
        """Check if a slot's object is currently shown."""
        return self.visible.get(slot, False)
