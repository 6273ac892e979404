"""Display pipeline for rendered images.

The integrator returns unclamped linear colors: highlights and stacked
mirror contributions routinely exceed 1. This module maps such images to
the displayable [0, 1] range and optionally shows them with Matplotlib.

Pipeline:
    1. Tone mapping (optional): "none", "reinhard" or "exposure"
    2. Gamma encoding (2.2 approximates sRGB)
    3. Final clamp to [0, 1]

Example:
    >>> from whitted.preview.display import process_image_for_display
    >>> display = process_image_for_display(renderer.get_linear_image(), tone_map="reinhard")
"""

from __future__ import annotations

from typing import Literal

import numpy as np
import numpy.typing as npt

# Type alias for tone mapping options
ToneMapMethod = Literal["none", "reinhard", "exposure"]

FloatImage = npt.NDArray[np.floating]


def tone_map_reinhard(image: FloatImage) -> npt.NDArray[np.float32]:
    """Compress HDR values with the Reinhard operator c / (1 + c).

    Negative components (possible with unclamped shadows) are treated as 0.
    """
    positive = np.maximum(image, 0.0)
    return (positive / (1.0 + positive)).astype(np.float32)


def tone_map_exposure(image: FloatImage, exposure: float = 1.0) -> npt.NDArray[np.float32]:
    """Exposure tone mapping 1 - exp(-c * exposure).

    Higher exposure values brighten the image.
    """
    positive = np.maximum(image, 0.0)
    return (1.0 - np.exp(-positive * exposure)).astype(np.float32)


def apply_gamma(image: FloatImage, gamma: float = 2.2) -> npt.NDArray[np.float32]:
    """Gamma-encode an image already in [0, 1].

    Values are clamped first so negative inputs cannot produce NaN.
    """
    if gamma <= 0.0:
        raise ValueError(f"gamma must be positive, got {gamma}")
    clamped = np.clip(image, 0.0, 1.0)
    if gamma == 1.0:
        return clamped.astype(np.float32)
    return np.power(clamped, 1.0 / gamma).astype(np.float32)


def process_image_for_display(
    image: FloatImage,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Run the full display pipeline on a linear image.

    Args:
        image: Linear image array of shape (H, W, 3).
        tone_map: Tone mapping method ("none", "reinhard", or "exposure").
        gamma: Gamma value (2.2 for sRGB, 1.0 to keep linear).
        exposure: Exposure for the "exposure" tone mapper.

    Returns:
        Float32 image in [0, 1].

    Raises:
        ValueError: For an unknown tone mapping method.
    """
    if tone_map == "reinhard":
        result = tone_map_reinhard(image)
    elif tone_map == "exposure":
        result = tone_map_exposure(image, exposure)
    elif tone_map == "none":
        result = np.asarray(image, dtype=np.float32)
    else:
        raise ValueError(f"Unknown tone mapping method: {tone_map}")

    return np.clip(apply_gamma(result, gamma), 0.0, 1.0)


def show_preview(
    image: FloatImage,
    *,
    tone_map: ToneMapMethod = "none",
    gamma: float = 2.2,
    exposure: float = 1.0,
    title: str = "Whitted ray tracer",
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Show a linear image in a Matplotlib window.

    Matplotlib is imported lazily; install the ``preview`` extra to use it.
    """
    import matplotlib.pyplot as plt

    display_image = process_image_for_display(
        image, tone_map=tone_map, gamma=gamma, exposure=exposure
    )

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(display_image)
    ax.axis("off")
    ax.set_title(title if tone_map == "none" else f"{title} ({tone_map})")

    plt.tight_layout()
    plt.show(block=block)
