"""Phong surface material with mirror reflection and transparency.

A single material model covers every surface in the Whitted integrator:

    color = diffuse * ambient
          + sum over lights of  (n . l) * diffuse        (diffuse)
                               (r . v)^exponent * specular  (specular)
          + reflection_factor * traced mirror color
    blended with the transmitted color by opacity.

The integrator only ever reads these properties through the Shadable
accessors, so other material kinds can be added by providing the same
attributes.

Reference values:
    opacity: 1 = fully opaque, 0 = fully transparent
    reflection_factor: 0 = no mirror, 1 = perfect mirror
    refraction_index: Air=1.0, Water=1.33, Glass=1.5, Diamond=2.4

Opacity and reflection factor are not clamped; out-of-range
values flow into the shading sums as given.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from whitted.core.ray import Color, as_vec3

from .texture import Texture


@runtime_checkable
class Shadable(Protocol):
    """Material queries consumed by the shader."""

    specular: Color
    specular_exponent: float
    reflection_factor: float
    refraction_index: float
    opacity: float

    def diffuse(self, texture_coordinate: tuple[float, float]) -> Color:
        """Return the diffuse color at a texture coordinate."""
        ...


@dataclass(eq=False)
class Material:
    """Phong material properties.

    Attributes:
        diffuse_color: Diffuse reflectance used when no texture is set.
        specular: Specular highlight color.
        specular_exponent: Phong shininess exponent (>= 0).
        reflection_factor: Weight of the traced mirror reflection.
        refraction_index: Index of refraction of the material (> 0).
        opacity: How much of the surface's own color shows (vs. transmitted).
        texture: Optional texture replacing diffuse_color.
    """

    diffuse_color: Color
    specular: Color = (0.0, 0.0, 0.0)
    specular_exponent: float = 1.0
    reflection_factor: float = 0.0
    refraction_index: float = 1.0
    opacity: float = 1.0
    texture: Texture | None = None

    def __post_init__(self) -> None:
        self.diffuse_color = as_vec3(self.diffuse_color)
        self.specular = as_vec3(self.specular)
        self.specular_exponent = float(self.specular_exponent)
        self.reflection_factor = float(self.reflection_factor)
        self.refraction_index = float(self.refraction_index)
        self.opacity = float(self.opacity)

        if self.specular_exponent < 0.0:
            raise ValueError(
                f"Specular exponent must be non-negative, got {self.specular_exponent}"
            )
        if self.refraction_index <= 0.0:
            raise ValueError(f"Refraction index must be positive, got {self.refraction_index}")

    def diffuse(self, texture_coordinate: tuple[float, float]) -> Color:
        """Diffuse color at the coordinate (texture lookup if textured)."""
        if self.texture is not None:
            u, v = texture_coordinate
            return self.texture.sample(u, v)
        return self.diffuse_color.copy()


# =============================================================================
# Presets
# =============================================================================


def matte(color: Sequence[float]) -> Material:
    """Pure diffuse surface with no highlight."""
    return Material(diffuse_color=color)


def plastic(
    color: Sequence[float],
    specular: Sequence[float] = (0.5, 0.5, 0.5),
    exponent: float = 32.0,
) -> Material:
    """Diffuse surface with a white Phong highlight."""
    return Material(diffuse_color=color, specular=specular, specular_exponent=exponent)


def mirror(
    tint: Sequence[float] = (0.05, 0.05, 0.05),
    reflection_factor: float = 0.9,
) -> Material:
    """Mostly reflective surface with a faint diffuse tint."""
    return Material(
        diffuse_color=tint,
        specular=(0.8, 0.8, 0.8),
        specular_exponent=128.0,
        reflection_factor=reflection_factor,
    )


def glass(
    refraction_index: float = 1.5,
    opacity: float = 0.1,
    tint: Sequence[float] = (0.9, 0.9, 0.9),
) -> Material:
    """Transparent refracting material."""
    return Material(
        diffuse_color=tint,
        specular=(0.9, 0.9, 0.9),
        specular_exponent=96.0,
        reflection_factor=0.1,
        refraction_index=refraction_index,
        opacity=opacity,
    )
