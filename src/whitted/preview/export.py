"""Image export utilities for rendered images.

Supported formats:
    - PNG (8-bit sRGB via Pillow); any other Pillow format chosen by the
      file extension works the same way

Example:
    >>> from whitted.preview.export import save_png
    >>> save_png(renderer.get_linear_image(), "demo.png", tone_map="reinhard")
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from whitted.preview.display import FloatImage, ToneMapMethod, process_image_for_display

logger = logging.getLogger(__name__)


def image_to_uint8(
    image: FloatImage,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to 8-bit after tone mapping and gamma.

    Returns:
        Array of shape (H, W, 3) with dtype uint8.
    """
    processed = process_image_for_display(
        image, tone_map=tone_map, gamma=gamma, exposure=exposure
    )
    return np.round(processed * 255.0).astype(np.uint8)


def save_png(
    image: FloatImage,
    filepath: str | Path,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> Path:
    """Save a linear image to disk.

    Args:
        image: Linear image array of shape (H, W, 3).
        filepath: Output path; the extension selects the format.
        tone_map: Tone mapping method ("none", "reinhard", or "exposure").
        gamma: Gamma correction value (default 2.2 for sRGB).
        exposure: Exposure value for exposure tone mapping.

    Returns:
        The path written.
    """
    path = Path(filepath)
    image_uint8 = image_to_uint8(image, tone_map=tone_map, gamma=gamma, exposure=exposure)
    PILImage.fromarray(image_uint8).save(path)
    logger.info("Saved %dx%d image to %s", image_uint8.shape[1], image_uint8.shape[0], path)
    return path


def compute_rmse(image_a: FloatImage, image_b: FloatImage) -> float:
    """Root mean squared error between two images (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(f"Image shapes must match: {image_a.shape} vs {image_b.shape}")

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
