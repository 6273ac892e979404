"""Pinhole camera model for perspective projection ray generation.

This module implements a pinhole camera that generates the primary rays of
an image. The camera supports:
- Look-at positioning (lookfrom, lookat, vup)
- Vertical field of view specification
- Arbitrary aspect ratios

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

The per-pixel directions for a whole image are computed in one Taichi
kernel; the recursive tracing of each ray then happens in Python.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.camera.pinhole import PinholeCamera, generate_primary_rays
    >>>
    >>> camera = PinholeCamera(
    ...     lookfrom=(0.0, 0.0, 3.0),
    ...     lookat=(0.0, 0.0, 0.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=60.0,
    ...     aspect_ratio=16.0/9.0
    ... )
    >>> origin, directions = generate_primary_rays(camera, 320, 180)
    >>> directions.shape
    (180, 320, 3)
"""

import math
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class PinholeCamera:
    """Configuration for a pinhole (perspective) camera.

    A pinhole camera produces perfect perspective projection with no
    depth of field effects.

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction vector for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in degrees (typically 40-90).
        aspect_ratio: Width divided by height of the output image.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float]
    vfov: float
    aspect_ratio: float


@dataclass
class Viewport:
    """Camera basis and image plane, derived from a PinholeCamera.

    Attributes:
        origin: Camera position.
        u: Right direction.
        v: Up direction.
        w: Backward direction (opposite the view direction).
        horizontal: Full width of the image plane.
        vertical: Full height of the image plane.
        lower_left: Lower-left corner of the image plane.
    """

    origin: npt.NDArray[np.float64]
    u: npt.NDArray[np.float64]
    v: npt.NDArray[np.float64]
    w: npt.NDArray[np.float64]
    horizontal: npt.NDArray[np.float64]
    vertical: npt.NDArray[np.float64]
    lower_left: npt.NDArray[np.float64]


# =============================================================================
# Camera Setup (Python-side, once per camera configuration)
# =============================================================================


def compute_viewport(camera: PinholeCamera) -> Viewport:
    """Compute the camera's orthonormal basis and image plane.

    The image plane sits at unit distance in front of the camera. Ray
    directions are obtained by interpolating across it.

    Raises:
        ValueError: If the camera has a non-positive field of view or
            aspect ratio, or if lookfrom == lookat, or vup is parallel to
            the view direction.
    """
    if not 0.0 < camera.vfov < 180.0:
        raise ValueError(f"vfov must be in (0, 180) degrees, got {camera.vfov}")
    if camera.aspect_ratio <= 0.0:
        raise ValueError(f"aspect_ratio must be positive, got {camera.aspect_ratio}")

    # Convert FOV from degrees to radians
    theta = math.radians(camera.vfov)
    h = math.tan(theta / 2.0)

    # Viewport dimensions at unit distance
    viewport_height = 2.0 * h
    viewport_width = camera.aspect_ratio * viewport_height

    lookfrom = np.array(camera.lookfrom, dtype=np.float64)
    lookat = np.array(camera.lookat, dtype=np.float64)
    vup = np.array(camera.vup, dtype=np.float64)

    # w points from lookat toward lookfrom (backward)
    w = lookfrom - lookat
    w_norm = np.linalg.norm(w)
    if w_norm == 0.0:
        raise ValueError("Camera lookfrom and lookat must differ")
    w = w / w_norm

    # u points right (perpendicular to w and vup)
    u = np.cross(vup, w)
    u_norm = np.linalg.norm(u)
    if u_norm < 1e-12:
        raise ValueError("Camera vup must not be parallel to the view direction")
    u = u / u_norm

    # v points up in the camera's frame
    v = np.cross(w, u)

    horizontal = viewport_width * u
    vertical = viewport_height * v

    # Origin - w (move forward) - horizontal/2 (left) - vertical/2 (down)
    lower_left = lookfrom - w - horizontal / 2.0 - vertical / 2.0

    return Viewport(
        origin=lookfrom,
        u=u,
        v=v,
        w=w,
        horizontal=horizontal,
        vertical=vertical,
        lower_left=lower_left,
    )


# =============================================================================
# Ray Generation (Taichi kernel)
# =============================================================================


@ti.kernel
def _fill_directions(
    directions: ti.types.ndarray(dtype=tm.vec3, ndim=2),
    frame: ti.types.ndarray(dtype=tm.vec3, ndim=1),
):
    """Write the unit direction through every pixel center.

    frame holds [origin, lower_left, horizontal, vertical]. Row 0 of the
    output is the top of the image.
    """
    height = directions.shape[0]
    width = directions.shape[1]
    origin = frame[0]
    lower_left = frame[1]
    horizontal = frame[2]
    vertical = frame[3]
    for j, i in ti.ndrange(height, width):
        u = (ti.cast(i, ti.f32) + 0.5) / ti.cast(width, ti.f32)
        v = 1.0 - (ti.cast(j, ti.f32) + 0.5) / ti.cast(height, ti.f32)
        point_on_viewport = lower_left + u * horizontal + v * vertical
        directions[j, i] = tm.normalize(point_on_viewport - origin)


def generate_primary_rays(
    camera: PinholeCamera,
    width: int,
    height: int,
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """Generate one primary ray per pixel center.

    Requires an initialized Taichi runtime (``ti.init``).

    Args:
        camera: Camera configuration.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        Tuple of (origin, directions) where origin is the camera position and
        directions is a float64 array of shape (height, width, 3) holding unit
        vectors, row 0 being the top of the image.

    Raises:
        ValueError: If width or height is not positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")

    viewport = compute_viewport(camera)
    frame = np.stack(
        [viewport.origin, viewport.lower_left, viewport.horizontal, viewport.vertical]
    ).astype(np.float32)
    directions = np.zeros((height, width, 3), dtype=np.float32)

    _fill_directions(directions, frame)

    return viewport.origin.copy(), directions.astype(np.float64)


def get_camera_info(camera: PinholeCamera) -> dict[str, tuple[float, float, float]]:
    """Get camera vectors as plain tuples for debugging.

    Returns:
        Dictionary with origin, u, v, w, horizontal, vertical, lower_left.
    """
    viewport = compute_viewport(camera)
    return {
        name: tuple(float(c) for c in getattr(viewport, name))
        for name in ("origin", "u", "v", "w", "horizontal", "vertical", "lower_left")
    }
