"""Whitted-style recursive ray tracing integrator.

This module computes the color seen along a single ray. It finds the
nearest surface the ray strikes, evaluates a Phong lighting model there,
and recursively traces mirror-reflected and refracted rays, composing
everything into one unclamped color.

Three procedures cooperate through plain recursion:

    find_nearest   closest object along a ray (linear scan of the scene)
    shadow_factor  summed opacity of objects between a point and a light
    shade          local lighting plus transmitted and reflected sub-rays

and trace_ray ties them together.

Recursion policy:
    - Every secondary ray (transmission or mirror reflection) is traced one
      level deeper than the ray that produced the hit, so both effects share
      a single budget of ``max_depth`` nested levels.
    - A call made at the depth limit does no work and returns the
      ``fallback`` color handed down by its caller. The shader passes the
      color it has accumulated so far, so a truncated branch repeats the
      parent's partial color instead of some unrelated earlier result.
      No module-level state is read or written.

Example:
    >>> from whitted.core.integrator import trace_ray
    >>> from whitted.core.ray import vec3
    >>> from whitted.scene.demo import create_demo_scene
    >>> scene, camera = create_demo_scene()
    >>> color = trace_ray(scene, vec3(0, 1, 5), vec3(0, 0, -1))
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from whitted.core.ray import (
    Color,
    Vec3,
    as_vec3,
    black,
    dot,
    length,
    normalize,
    reflect,
    snell,
)

if TYPE_CHECKING:
    from whitted.geometry.surface import Intersectable
    from whitted.materials.material import Shadable
    from whitted.scene.manager import Scene

# =============================================================================
# Tracing Constants
# =============================================================================

# Maximum number of nested trace levels
MAX_DEPTH = 6

# Hits closer than this are the surface the ray just left
HIT_EPSILON = 1e-5

# Occluders closer than this to the shaded point are ignored
SHADOW_EPSILON = 0.1

# Refraction index of the medium between objects
AIR_REFRACTION_INDEX = 1.00029

# Distance reported when nothing is hit
NO_HIT = math.inf


@dataclass(frozen=True)
class TraceSettings:
    """Tunable parameters of the integrator.

    Attributes:
        max_depth: Maximum number of nested trace levels.
        hit_epsilon: Minimum accepted distance for a nearest-hit candidate.
        shadow_epsilon: Minimum distance for an object to count as occluder.
        air_refraction_index: Index of the medium surrounding all objects.
        clamp_shadow: Clamp summed occluder opacity to [0, 1] before
            attenuating. When False, overlapping occluders can push the
            diffuse and specular terms negative.
        use_light_color: Multiply diffuse and specular terms by the light's
            color. When False every light contributes as pure white.
    """

    max_depth: int = MAX_DEPTH
    hit_epsilon: float = HIT_EPSILON
    shadow_epsilon: float = SHADOW_EPSILON
    air_refraction_index: float = AIR_REFRACTION_INDEX
    clamp_shadow: bool = True
    use_light_color: bool = False

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.hit_epsilon <= 0.0:
            raise ValueError(f"hit_epsilon must be positive, got {self.hit_epsilon}")
        if self.shadow_epsilon <= 0.0:
            raise ValueError(f"shadow_epsilon must be positive, got {self.shadow_epsilon}")
        if self.air_refraction_index <= 0.0:
            raise ValueError(
                f"air_refraction_index must be positive, got {self.air_refraction_index}"
            )


DEFAULT_SETTINGS = TraceSettings()


@dataclass(frozen=True, eq=False)
class Intersection:
    """The closest hit found along a ray.

    Attributes:
        distance: Ray parameter of the hit (in units of the ray direction).
        surface: The object that was hit.
    """

    distance: float
    surface: Intersectable


# =============================================================================
# Nearest-Intersection Finder
# =============================================================================


def find_nearest(
    scene: Scene,
    origin: Vec3,
    direction: Vec3,
    settings: TraceSettings = DEFAULT_SETTINGS,
) -> Intersection | None:
    """Find the closest object hit by a ray.

    Every object is queried in scene order. Distances not greater than
    ``settings.hit_epsilon`` are rejected so a ray leaving a surface does
    not immediately hit that surface again. On equal distances the first
    object in scene order wins.

    Args:
        scene: The scene to search.
        origin: The ray origin.
        direction: The ray direction.
        settings: Integrator parameters.

    Returns:
        The nearest Intersection, or None if no object qualifies.
    """
    closest = NO_HIT
    nearest = None

    for obj in scene.objects:
        distance = obj.intersect(origin, direction)
        if settings.hit_epsilon < distance < closest:
            closest = distance
            nearest = obj

    if nearest is None:
        return None
    return Intersection(distance=closest, surface=nearest)


# =============================================================================
# Shadow/Attenuation Evaluator
# =============================================================================


def shadow_factor(
    scene: Scene,
    point: Vec3,
    direction_to_light: Vec3,
    light_position: Vec3,
    settings: TraceSettings = DEFAULT_SETTINGS,
) -> float:
    """Sum the opacity of every object between a point and a light.

    An object counts when its hit distance along ``direction_to_light``
    lies strictly between ``settings.shadow_epsilon`` and the distance to
    the light. All objects are checked; the sum is not clamped, so several
    overlapping occluders can exceed 1.

    Args:
        scene: The scene to search.
        point: The shaded point.
        direction_to_light: Unit direction from the point toward the light.
        light_position: Position of the light.
        settings: Integrator parameters.

    Returns:
        The accumulated opacity (>= 0 for in-range opacities).
    """
    max_distance = length(light_position - point)
    opacity = 0.0

    for obj in scene.objects:
        distance = obj.intersect(point, direction_to_light)
        if settings.shadow_epsilon < distance < max_distance:
            opacity += scene.get_material(obj.material_id).opacity

    return opacity


# =============================================================================
# Shader
# =============================================================================


def _visibility(occlusion: float, settings: TraceSettings) -> float:
    """Fraction of a light that reaches the point."""
    if settings.clamp_shadow:
        occlusion = min(max(occlusion, 0.0), 1.0)
    return 1.0 - occlusion


def _trace_transmission(
    scene: Scene,
    incoming: Vec3,
    surface: Intersectable,
    point: Vec3,
    material: Shadable,
    depth: int,
    settings: TraceSettings,
    fallback: Color,
) -> Color:
    """Trace the ray that passes through a transparent object.

    The incoming ray is refracted into the object at ``point``, followed to
    where it leaves, refracted back into the surrounding medium and traced
    from the exit point.
    """
    air = settings.air_refraction_index
    inner = snell(incoming, normalize(surface.normal_at(point)), air, material.refraction_index)
    exit_point = surface.interior_exit_point(point, inner)
    exit_normal = normalize(surface.normal_at(exit_point))
    outgoing = snell(inner, exit_normal, material.refraction_index, air)
    return trace_ray(scene, exit_point, outgoing, depth, settings, fallback=fallback)


def shade(
    scene: Scene,
    eye: Vec3,
    incoming: Vec3,
    surface: Intersectable,
    point: Vec3,
    normal: Vec3,
    depth: int,
    settings: TraceSettings = DEFAULT_SETTINGS,
) -> Color:
    """Compute the color at a confirmed hit.

    The result starts from the ambient term and then, for each light in
    index order:

    1. blends in the transmitted color (transparent materials only):
       ``color = opacity * color + (1 - opacity) * transmitted``
    2. measures how much of the light is blocked (shadow_factor)
    3. adds the diffuse term ``(n . l) * opacity * diffuse`` when n . l > 0
    4. adds the specular term ``(r . v)^exponent * specular`` when r . v > 0,
       where r is the light direction mirrored about the normal; this term
       is not scaled by opacity
    5. adds ``reflection_factor`` times the traced mirror ray

    Diffuse and specular are attenuated by the light's visibility. The
    transmitted color does not depend on the light, so it is traced once and
    reused for every light.

    Args:
        scene: The scene being rendered.
        eye: Origin of the ray that produced the hit.
        incoming: Direction of the ray that produced the hit.
        surface: The object that was hit.
        point: The hit point.
        normal: Unit surface normal at the hit point, facing the eye.
        depth: Recursion level of the hit; sub-rays are traced at this level.
        settings: Integrator parameters.

    Returns:
        The unclamped color at the hit.
    """
    material = scene.get_material(surface.material_id)
    diffuse = material.diffuse(surface.texture_coordinate_at(point))
    specular = material.specular
    exponent = material.specular_exponent
    reflection_factor = material.reflection_factor
    opacity = material.opacity

    color = diffuse * scene.ambient
    to_eye = normalize(eye - point)
    transmitted = None

    for light in scene.lights:
        to_light = normalize(light.position - point)

        if opacity < 1.0:
            if transmitted is None:
                transmitted = _trace_transmission(
                    scene, incoming, surface, point, material, depth, settings, color
                )
            color = opacity * color + (1.0 - opacity) * transmitted

        visibility = _visibility(
            shadow_factor(scene, point, to_light, light.position, settings), settings
        )
        intensity = light.color if settings.use_light_color else 1.0

        if opacity > 0.0:
            cos_theta = dot(normal, to_light)
            if cos_theta > 0.0:
                color = color + (cos_theta * opacity * visibility) * intensity * diffuse

        highlight = dot(reflect(-to_light, normal), to_eye)
        if highlight > 0.0:
            color = color + (highlight**exponent * visibility) * intensity * specular

        if reflection_factor > 0.0:
            mirrored = reflect(-to_eye, normal)
            reflected = trace_ray(scene, point, mirrored, depth, settings, fallback=color)
            color = color + reflection_factor * reflected

    return color


# =============================================================================
# Entry Point
# =============================================================================


def trace_ray(
    scene: Scene,
    origin: Vec3,
    direction: Vec3,
    depth: int = 0,
    settings: TraceSettings = DEFAULT_SETTINGS,
    fallback: Color | None = None,
) -> Color:
    """Trace a ray through the scene and return the color it sees.

    Args:
        scene: The scene to render.
        origin: The ray origin.
        direction: The ray direction (need not be normalized).
        depth: Current recursion level; 0 for primary (camera) rays.
        settings: Integrator parameters.
        fallback: Color returned when ``depth`` has reached
            ``settings.max_depth``. Defaults to black.

    Returns:
        The background color when nothing is hit, otherwise the shaded color
        at the nearest hit. Values are not clamped. The hit is shaded with
        its normal turned toward the ray origin, so quads light the same from
        either side.
    """
    if depth >= settings.max_depth:
        return black() if fallback is None else np.array(fallback, dtype=np.float64)

    origin = as_vec3(origin)
    direction = as_vec3(direction)
    depth += 1

    hit = find_nearest(scene, origin, direction, settings)
    if hit is None:
        return scene.background_color(origin, direction)

    point = origin + hit.distance * direction
    normal = normalize(hit.surface.normal_at(point))
    # Shading normal faces the side the ray came from
    if dot(normal, direction) > 0.0:
        normal = -normal
    return shade(scene, origin, direction, hit.surface, point, normal, depth, settings)
