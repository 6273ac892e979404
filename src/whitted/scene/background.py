"""Background colors for rays that escape the scene.

The background is a function of the escaping ray rather than a constant,
which allows procedural skies. Both implementations are pure: they never
fail and never depend on previous calls.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from whitted.core.ray import Color, Vec3, as_vec3, dot, normalize


@runtime_checkable
class Background(Protocol):
    def color(self, origin: Vec3, direction: Vec3) -> Color:
        """Return the color seen along a ray that hits nothing."""
        ...


class SolidBackground:
    """The same color in every direction."""

    def __init__(self, color: Sequence[float] = (0.0, 0.0, 0.0)) -> None:
        self.value = as_vec3(color)

    def color(self, origin: Vec3, direction: Vec3) -> Color:
        return self.value.copy()

    def __repr__(self) -> str:
        return f"SolidBackground({self.value.tolist()})"


class GradientBackground:
    """Sky gradient blended by how far the ray points along ``up``.

    Rays pointing straight up see ``zenith``; horizontal and downward rays
    see ``horizon``.

    Attributes:
        horizon: Color at and below the horizon.
        zenith: Color straight up.
        up: The world up direction.
    """

    def __init__(
        self,
        horizon: Sequence[float] = (1.0, 1.0, 1.0),
        zenith: Sequence[float] = (0.5, 0.7, 1.0),
        up: Sequence[float] = (0.0, 1.0, 0.0),
    ) -> None:
        self.horizon = as_vec3(horizon)
        self.zenith = as_vec3(zenith)
        self.up = normalize(as_vec3(up))

    def color(self, origin: Vec3, direction: Vec3) -> Color:
        t = max(0.0, dot(normalize(direction), self.up))
        return (1.0 - t) * self.horizon + t * self.zenith

    def __repr__(self) -> str:
        return (
            f"GradientBackground(horizon={self.horizon.tolist()}, "
            f"zenith={self.zenith.tolist()}, up={self.up.tolist()})"
        )
