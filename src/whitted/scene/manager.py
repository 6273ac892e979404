"""Scene container coordinating primitives, materials and lights.

This module provides the Scene class consumed by the integrator. It keeps
a unified material_id space, the ordered object and light lists, the
ambient light and the background, plus a dictionary round trip so scenes
can be stored as JSON.

The Scene maintains:
- A material table indexed by sequential material ids
- Objects in insertion order (the order used for nearest-hit tie breaks)
- Lights in insertion order (the order lights are shaded in)
- High-level methods for adding objects with validated material ids
- Scene serialization/configuration support

Example:
    >>> from whitted.scene.manager import Scene
    >>> from whitted.materials import matte
    >>> scene = Scene(ambient=(0.1, 0.1, 0.1))
    >>> mat_id = scene.add_material(matte((0.8, 0.3, 0.3)))
    >>> scene.add_sphere(center=(0, 0, -1), radius=0.5, material_id=mat_id)
    0
    >>> scene.add_light(position=(5, 5, 5))
    0
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from whitted.core.ray import Color, Vec3, as_vec3
from whitted.geometry import Box, Intersectable, Quad, Sphere
from whitted.materials import CheckerTexture, ImageTexture, Material

from .background import Background, GradientBackground, SolidBackground
from .light import Light

logger = logging.getLogger(__name__)


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        materials: List of material configurations.
        objects: List of object configurations (each with a "type" key).
        lights: List of light configurations.
        ambient: Ambient light color.
        background: Background configuration (with a "type" key).
    """

    materials: list[dict[str, Any]] = field(default_factory=list)
    objects: list[dict[str, Any]] = field(default_factory=list)
    lights: list[dict[str, Any]] = field(default_factory=list)
    ambient: list[float] = field(default_factory=lambda: [0.1, 0.1, 0.1])
    background: dict[str, Any] = field(
        default_factory=lambda: {"type": "solid", "color": [0.0, 0.0, 0.0]}
    )


class Scene:
    """Everything the ray tracing core needs to know about a scene.

    The integrator reads the scene only; it never adds, removes or mutates
    anything while tracing.

    Attributes:
        materials: Registered materials; a material's id is its index.
        objects: Intersectable primitives in traversal order.
        lights: Point lights in shading order.
        ambient: Ambient light color.
        background: Background evaluated for rays that escape.
    """

    def __init__(
        self,
        ambient: Sequence[float] = (0.1, 0.1, 0.1),
        background: Background | None = None,
    ) -> None:
        self.materials: list[Material] = []
        self.objects: list[Intersectable] = []
        self.lights: list[Light] = []
        self.ambient: Color = as_vec3(ambient)
        self.background: Background = background if background is not None else SolidBackground()

    def clear(self) -> None:
        """Remove all materials, objects and lights.

        Ambient light and background are kept.
        """
        self.materials.clear()
        self.objects.clear()
        self.lights.clear()

    # =========================================================================
    # Material Management
    # =========================================================================

    def add_material(self, material: Material) -> int:
        """Register a material and return its material id."""
        material_id = len(self.materials)
        self.materials.append(material)
        logger.debug("Added material %d: %r", material_id, material)
        return material_id

    def get_material(self, material_id: int) -> Material:
        """Look up a material by id.

        Raises:
            ValueError: If no material has this id.
        """
        if not 0 <= material_id < len(self.materials):
            raise ValueError(f"Invalid material_id: {material_id}")
        return self.materials[material_id]

    def get_material_count(self) -> int:
        return len(self.materials)

    # =========================================================================
    # Primitive Management
    # =========================================================================

    def add_object(self, obj: Intersectable) -> int:
        """Add any intersectable object to the scene.

        Returns:
            The index of the added object.

        Raises:
            ValueError: If the object's material_id is not registered.
        """
        if not 0 <= obj.material_id < len(self.materials):
            raise ValueError(f"Invalid material_id: {obj.material_id}")
        self.objects.append(obj)
        logger.debug("Added object %d: %r", len(self.objects) - 1, obj)
        return len(self.objects) - 1

    def add_sphere(
        self,
        center: Sequence[float],
        radius: float,
        material_id: int,
    ) -> int:
        """Add a sphere and return its object index."""
        return self.add_object(Sphere(center=center, radius=radius, material_id=material_id))

    def add_quad(
        self,
        corner: Sequence[float],
        edge_u: Sequence[float],
        edge_v: Sequence[float],
        material_id: int,
    ) -> int:
        """Add a quad (normal = u x v) and return its object index."""
        return self.add_object(
            Quad(corner=corner, edge_u=edge_u, edge_v=edge_v, material_id=material_id)
        )

    def add_box(
        self,
        min_corner: Sequence[float],
        max_corner: Sequence[float],
        material_id: int,
    ) -> int:
        """Add an axis-aligned box and return its object index."""
        return self.add_object(
            Box(min_corner=min_corner, max_corner=max_corner, material_id=material_id)
        )

    def get_object_count(self) -> int:
        return len(self.objects)

    def get_object(self, index: int) -> Intersectable:
        return self.objects[index]

    # =========================================================================
    # Lights and Environment
    # =========================================================================

    def add_light(
        self,
        position: Sequence[float],
        color: Sequence[float] = (1.0, 1.0, 1.0),
    ) -> int:
        """Add a point light and return its index."""
        self.lights.append(Light(position=position, color=color))
        return len(self.lights) - 1

    def get_light_count(self) -> int:
        return len(self.lights)

    def get_light(self, index: int) -> Light:
        return self.lights[index]

    def background_color(self, origin: Vec3, direction: Vec3) -> Color:
        """Color seen along a ray that escapes the scene."""
        return self.background.color(origin, direction)

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object.

        Raises:
            ValueError: If the scene holds an object, texture or background
                type that has no configuration form.
        """
        config = SceneConfig(
            ambient=self.ambient.tolist(),
            background=_background_to_config(self.background),
        )

        for material in self.materials:
            mat_config: dict[str, Any] = {
                "diffuse": material.diffuse_color.tolist(),
                "specular": material.specular.tolist(),
                "specular_exponent": material.specular_exponent,
                "reflection_factor": material.reflection_factor,
                "refraction_index": material.refraction_index,
                "opacity": material.opacity,
            }
            if material.texture is not None:
                mat_config["texture"] = _texture_to_config(material.texture)
            config.materials.append(mat_config)

        for obj in self.objects:
            config.objects.append(_object_to_config(obj))

        for light in self.lights:
            config.lights.append(
                {"position": light.position.tolist(), "color": light.color.tolist()}
            )

        return config

    def from_config(self, config: SceneConfig) -> None:
        """Load a scene from a configuration object.

        Clears the current scene and loads the configuration.

        Raises:
            ValueError: If the configuration contains invalid data.
        """
        self.clear()
        self.ambient = as_vec3(config.ambient)
        self.background = _background_from_config(config.background)

        # Load materials first (needed for primitives)
        for mat_config in config.materials:
            texture_config = mat_config.get("texture")
            self.add_material(
                Material(
                    diffuse_color=mat_config.get("diffuse", [0.5, 0.5, 0.5]),
                    specular=mat_config.get("specular", [0.0, 0.0, 0.0]),
                    specular_exponent=mat_config.get("specular_exponent", 1.0),
                    reflection_factor=mat_config.get("reflection_factor", 0.0),
                    refraction_index=mat_config.get("refraction_index", 1.0),
                    opacity=mat_config.get("opacity", 1.0),
                    texture=(
                        _texture_from_config(texture_config)
                        if texture_config is not None
                        else None
                    ),
                )
            )

        for obj_config in config.objects:
            obj_type = obj_config.get("type", "").lower()
            material_id = obj_config.get("material_id", 0)
            if obj_type == "sphere":
                self.add_sphere(
                    obj_config.get("center", [0, 0, 0]),
                    obj_config.get("radius", 1.0),
                    material_id,
                )
            elif obj_type == "quad":
                self.add_quad(
                    obj_config.get("corner", [0, 0, 0]),
                    obj_config.get("edge_u", [1, 0, 0]),
                    obj_config.get("edge_v", [0, 1, 0]),
                    material_id,
                )
            elif obj_type == "box":
                self.add_box(
                    obj_config.get("min_corner", [-1, -1, -1]),
                    obj_config.get("max_corner", [1, 1, 1]),
                    material_id,
                )
            else:
                raise ValueError(f"Unknown object type: {obj_type}")

        for light_config in config.lights:
            self.add_light(
                light_config.get("position", [0, 0, 0]),
                light_config.get("color", [1.0, 1.0, 1.0]),
            )

        logger.info(
            "Loaded scene: %d materials, %d objects, %d lights",
            len(self.materials),
            len(self.objects),
            len(self.lights),
        )

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        config = self.to_config()
        return {
            "materials": config.materials,
            "objects": config.objects,
            "lights": config.lights,
            "ambient": config.ambient,
            "background": config.background,
        }

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary produced by to_dict()."""
        defaults = SceneConfig()
        config = SceneConfig(
            materials=data.get("materials", []),
            objects=data.get("objects", []),
            lights=data.get("lights", []),
            ambient=data.get("ambient", defaults.ambient),
            background=data.get("background", defaults.background),
        )
        self.from_config(config)


# =============================================================================
# Configuration helpers
# =============================================================================


def _object_to_config(obj: Intersectable) -> dict[str, Any]:
    if isinstance(obj, Sphere):
        return {
            "type": "sphere",
            "center": obj.center.tolist(),
            "radius": obj.radius,
            "material_id": obj.material_id,
        }
    if isinstance(obj, Quad):
        return {
            "type": "quad",
            "corner": obj.corner.tolist(),
            "edge_u": obj.edge_u.tolist(),
            "edge_v": obj.edge_v.tolist(),
            "material_id": obj.material_id,
        }
    if isinstance(obj, Box):
        return {
            "type": "box",
            "min_corner": obj.min_corner.tolist(),
            "max_corner": obj.max_corner.tolist(),
            "material_id": obj.material_id,
        }
    raise ValueError(f"Cannot serialize object of type {type(obj).__name__}")


def _texture_to_config(texture: object) -> dict[str, Any]:
    if isinstance(texture, CheckerTexture):
        return {
            "type": "checker",
            "even": texture.even.tolist(),
            "odd": texture.odd.tolist(),
            "squares": texture.squares,
        }
    if isinstance(texture, ImageTexture) and texture.source is not None:
        return {"type": "image", "path": texture.source}
    raise ValueError(f"Cannot serialize texture {texture!r}")


def _texture_from_config(config: dict[str, Any]) -> CheckerTexture | ImageTexture:
    tex_type = config.get("type", "").lower()
    if tex_type == "checker":
        return CheckerTexture(
            config.get("even", [1.0, 1.0, 1.0]),
            config.get("odd", [0.0, 0.0, 0.0]),
            config.get("squares", 8),
        )
    if tex_type == "image":
        return ImageTexture.from_file(config["path"])
    raise ValueError(f"Unknown texture type: {tex_type}")


def _background_to_config(background: Background) -> dict[str, Any]:
    if isinstance(background, SolidBackground):
        return {"type": "solid", "color": background.value.tolist()}
    if isinstance(background, GradientBackground):
        return {
            "type": "gradient",
            "horizon": background.horizon.tolist(),
            "zenith": background.zenith.tolist(),
            "up": background.up.tolist(),
        }
    raise ValueError(f"Cannot serialize background {background!r}")


def _background_from_config(config: dict[str, Any]) -> Background:
    bg_type = config.get("type", "solid").lower()
    if bg_type == "solid":
        return SolidBackground(config.get("color", [0.0, 0.0, 0.0]))
    if bg_type == "gradient":
        return GradientBackground(
            config.get("horizon", [1.0, 1.0, 1.0]),
            config.get("zenith", [0.5, 0.7, 1.0]),
            config.get("up", [0.0, 1.0, 0.0]),
        )
    raise ValueError(f"Unknown background type: {bg_type}")
