"""Point light source."""

from __future__ import annotations

from dataclasses import dataclass

from whitted.core.ray import Color, Vec3, as_vec3


@dataclass(eq=False)
class Light:
    """A point light.

    Attributes:
        position: Location of the light in world space.
        color: RGB intensity of the light.
    """

    position: Vec3
    color: Color = (1.0, 1.0, 1.0)

    def __post_init__(self) -> None:
        self.position = as_vec3(self.position)
        self.color = as_vec3(self.color)
