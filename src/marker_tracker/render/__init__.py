"""Render commands and the renderer hook."""

from marker_tracker.render.commands import (
    ApplyTransform,
    RenderCommand,
    SceneRenderer,
    SceneState,
    SetInvisible,
    dispatch,
)

__all__ = [
    "ApplyTransform",
    "SetInvisible",
    "RenderCommand",
    "SceneRenderer",
    "SceneState",
    "dispatch",
]
