"""Image renderer driving the Whitted integrator over every pixel.

This module provides a thin wrapper around trace_ray() that:
- Generates one primary ray per pixel through the camera
- Traces each ray with the recursive integrator
- Reports progress per image row (callback or generator)
- Keeps the linear (unclamped) result and converts it for output

Rows are traced one after another on the calling thread; there is no tiling.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from whitted.core.render import Renderer
    >>> from whitted.scene.demo import create_demo_scene
    >>>
    >>> scene, camera = create_demo_scene()
    >>> renderer = Renderer(320, 240)
    >>> renderer.render(scene, camera)
    >>> image = renderer.get_image_numpy(gamma=2.2)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Generator
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from whitted.camera.pinhole import PinholeCamera, generate_primary_rays
from whitted.core.integrator import DEFAULT_SETTINGS, TraceSettings, trace_ray

if TYPE_CHECKING:
    from whitted.scene.manager import Scene

logger = logging.getLogger(__name__)

# Callback receives (rows_completed, total_rows)
ProgressCallback = Callable[[int, int], None]


class Renderer:
    """Renders a scene into a linear float image.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        settings: Integrator parameters used for every primary ray.
    """

    def __init__(
        self,
        width: int,
        height: int,
        settings: TraceSettings = DEFAULT_SETTINGS,
    ) -> None:
        """Initialize the renderer.

        Raises:
            ValueError: If width or height is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self.settings = settings
        self._image = np.zeros((height, width, 3), dtype=np.float64)
        self._rows_done = 0

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def is_complete(self) -> bool:
        """True once every row has been traced."""
        return self._rows_done == self._height

    def reset(self) -> None:
        """Clear the image so the next render starts fresh."""
        self._image.fill(0.0)
        self._rows_done = 0

    def render_rows(
        self,
        scene: Scene,
        camera: PinholeCamera,
    ) -> Generator[tuple[int, int], None, None]:
        """Render the image row by row, yielding progress after each row.

        Useful for UIs that want to show partial results or stop early.

        Yields:
            Tuple of (rows_completed, total_rows).

        Raises:
            RuntimeError: If the scene holds objects but no materials.
        """
        if scene.get_object_count() and not scene.get_material_count():
            raise RuntimeError(
                f"Scene has {scene.get_object_count()} objects but no materials"
            )

        expected_aspect = self._width / self._height
        if abs(camera.aspect_ratio - expected_aspect) > 1e-3:
            logger.warning(
                "Camera aspect ratio %.4f does not match image %dx%d (%.4f)",
                camera.aspect_ratio,
                self._width,
                self._height,
                expected_aspect,
            )

        self.reset()
        origin, directions = generate_primary_rays(camera, self._width, self._height)

        for j in range(self._height):
            for i in range(self._width):
                self._image[j, i] = trace_ray(
                    scene, origin, directions[j, i], 0, self.settings
                )
            self._rows_done = j + 1
            yield (self._rows_done, self._height)

        self.sanitize()

    def render(
        self,
        scene: Scene,
        camera: PinholeCamera,
        callback: ProgressCallback | None = None,
    ) -> npt.NDArray[np.float64]:
        """Render the whole image.

        Args:
            scene: The scene to render.
            camera: The camera producing the primary rays.
            callback: Optional function called after each row with
                (rows_completed, total_rows).

        Returns:
            The linear image of shape (height, width, 3).
        """
        start = time.perf_counter()
        for done, total in self.render_rows(scene, camera):
            if callback is not None:
                callback(done, total)
        logger.info(
            "Rendered %dx%d in %.2fs", self._width, self._height, time.perf_counter() - start
        )
        return self.get_linear_image()

    def sanitize(self) -> int:
        """Replace NaN and infinite components with zero.

        Returns:
            The number of components that were replaced.
        """
        bad = ~np.isfinite(self._image)
        count = int(np.count_nonzero(bad))
        if count:
            logger.warning("Replaced %d non-finite color components", count)
            self._image[bad] = 0.0
        return count

    def get_linear_image(self) -> npt.NDArray[np.float64]:
        """Copy of the unclamped image, shape (height, width, 3)."""
        return self._image.copy()

    def get_image_numpy(self, gamma: float = 1.0) -> npt.NDArray[np.float32]:
        """Get the rendered image clamped to [0, 1].

        Args:
            gamma: Gamma correction value. Default 1.0 (linear).
                Use 2.2 for sRGB display.

        Returns:
            NumPy array of shape (height, width, 3) with dtype float32.
        """
        image = np.clip(self._image, 0.0, 1.0)

        if gamma != 1.0:
            image = np.power(image, 1.0 / gamma)

        return image.astype(np.float32)

    def get_image_uint8(self, gamma: float = 2.2) -> npt.NDArray[np.uint8]:
        """Get the rendered image as an 8-bit array (gamma corrected)."""
        image = self.get_image_numpy(gamma=gamma)
        return (image * 255).astype(np.uint8)

    def __repr__(self) -> str:
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"rows_done={self._rows_done})"
        )
