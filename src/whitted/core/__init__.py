"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    ray: Vector utilities (reflection, Snell refraction)
    integrator: Recursive Whitted integrator (trace_ray, find_nearest,
        shadow_factor, shade)
    render: Per-pixel driver producing a whole image

The integrator evaluates ambient, diffuse and specular lighting with
shadow attenuation at each hit and recursively traces mirror and refracted
rays up to a fixed depth.
"""

from .integrator import (
    AIR_REFRACTION_INDEX,
    DEFAULT_SETTINGS,
    HIT_EPSILON,
    MAX_DEPTH,
    NO_HIT,
    SHADOW_EPSILON,
    Intersection,
    TraceSettings,
    find_nearest,
    shade,
    shadow_factor,
    trace_ray,
)
from .ray import (
    Color,
    Vec3,
    as_vec3,
    black,
    cross,
    dot,
    length,
    normalize,
    reflect,
    snell,
    vec3,
)

# Note: render is NOT imported here; it pulls in Taichi through the camera.
# Import it directly from whitted.core.render when needed.

__all__ = [
    # Vectors
    "Vec3",
    "Color",
    "vec3",
    "as_vec3",
    "black",
    "length",
    "normalize",
    "dot",
    "cross",
    "reflect",
    "snell",
    # Integrator
    "TraceSettings",
    "DEFAULT_SETTINGS",
    "Intersection",
    "MAX_DEPTH",
    "HIT_EPSILON",
    "SHADOW_EPSILON",
    "AIR_REFRACTION_INDEX",
    "NO_HIT",
    "trace_ray",
    "find_nearest",
    "shadow_factor",
    "shade",
]
