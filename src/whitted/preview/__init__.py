"""Preview module for output and visualization.

Components:
    display: Tone mapping, gamma and an optional Matplotlib window
    export: PNG export and image comparison

Rendered colors are unclamped; this is the only place they are squeezed
into [0, 1].

Example:
    >>> from whitted.preview import save_png, show_preview
    >>> image = renderer.render(scene, camera)
    >>> show_preview(image, tone_map="reinhard")
    >>> save_png(image, "output.png", gamma=2.2)
"""

from whitted.preview.display import (
    ToneMapMethod,
    apply_gamma,
    process_image_for_display,
    show_preview,
    tone_map_exposure,
    tone_map_reinhard,
)
from whitted.preview.export import compute_rmse, image_to_uint8, save_png

__all__ = [
    # Display functions
    "show_preview",
    # Tone mapping
    "tone_map_reinhard",
    "tone_map_exposure",
    "apply_gamma",
    "process_image_for_display",
    "ToneMapMethod",
    # Export functions
    "save_png",
    "image_to_uint8",
    "compute_rmse",
]
