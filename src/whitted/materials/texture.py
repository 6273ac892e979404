"""Textures that vary a material's diffuse color over a surface.

A texture maps the (u, v) coordinate reported by a primitive to an RGB
color. Coordinates outside [0, 1] wrap around, so large quads tile their
texture instead of smearing its border pixels.

Example:
    >>> from whitted.materials.texture import CheckerTexture
    >>> checker = CheckerTexture((0.9, 0.9, 0.9), (0.1, 0.1, 0.1), squares=8)
    >>> checker.sample(0.01, 0.01)
    array([0.9, 0.9, 0.9])
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from whitted.core.ray import Color, as_vec3

logger = logging.getLogger(__name__)


@runtime_checkable
class Texture(Protocol):
    """Anything that can be sampled at a texture coordinate."""

    def sample(self, u: float, v: float) -> Color:
        """Return the RGB color at coordinate (u, v)."""
        ...


class CheckerTexture:
    """Procedural two-color checkerboard.

    Attributes:
        even: Color of squares whose index sum is even.
        odd: Color of the remaining squares.
        squares: Number of squares along each texture axis.
    """

    def __init__(
        self,
        even: Sequence[float],
        odd: Sequence[float],
        squares: int = 8,
    ) -> None:
        if squares <= 0:
            raise ValueError(f"squares must be positive, got {squares}")
        self.even = as_vec3(even)
        self.odd = as_vec3(odd)
        self.squares = int(squares)

    def sample(self, u: float, v: float) -> Color:
        parity = math.floor(u * self.squares) + math.floor(v * self.squares)
        return (self.even if parity % 2 == 0 else self.odd).copy()

    def __repr__(self) -> str:
        return (
            f"CheckerTexture(even={self.even.tolist()}, odd={self.odd.tolist()}, "
            f"squares={self.squares})"
        )


class ImageTexture:
    """Bitmap texture sampled with wrapped nearest-neighbour lookup.

    The image is stored as a float64 array of shape (H, W, 3) in [0, 1].
    Row 0 is the top of the image and v = 0 maps to the top row.

    Attributes:
        pixels: The texture data.
        source: Path the texture was loaded from, if any.
    """

    def __init__(
        self,
        pixels: npt.NDArray[np.floating] | npt.NDArray[np.uint8],
        source: str | None = None,
    ) -> None:
        data = np.asarray(pixels)
        if data.ndim != 3 or data.shape[2] != 3 or data.shape[0] == 0 or data.shape[1] == 0:
            raise ValueError(f"Texture must have shape (H, W, 3), got {data.shape}")
        if data.dtype == np.uint8:
            data = data.astype(np.float64) / 255.0
        self.pixels = data.astype(np.float64)
        self.source = source

    @classmethod
    def from_file(cls, filepath: str | Path) -> ImageTexture:
        """Load an image file through Pillow.

        Any Pillow-readable format works; the image is converted to RGB.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        path = Path(filepath)
        with PILImage.open(path) as image:
            pixels = np.asarray(image.convert("RGB"), dtype=np.uint8)
        logger.debug("Loaded texture %s (%dx%d)", path, pixels.shape[1], pixels.shape[0])
        return cls(pixels, source=str(path))

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def sample(self, u: float, v: float) -> Color:
        x = int(math.floor((u % 1.0) * self.width)) % self.width
        y = int(math.floor((v % 1.0) * self.height)) % self.height
        return self.pixels[y, x].copy()

    def __repr__(self) -> str:
        return f"ImageTexture({self.width}x{self.height}, source={self.source!r})"
