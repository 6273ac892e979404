"""Camera module for view and ray generation.

Components:
    pinhole: Simple pinhole (perspective) camera model

Camera responsibilities:
    - Transform pixel positions to world-space primary rays
    - Support look-at positioning with up vector

Ray generation uses normalized image coordinates:
    u in [0, 1]: left to right across image
    v in [0, 1]: bottom to top across image
and returns the rays in image order (row 0 at the top).
"""

from .pinhole import (
    PinholeCamera,
    Viewport,
    compute_viewport,
    generate_primary_rays,
    get_camera_info,
)

__all__ = [
    "PinholeCamera",
    "Viewport",
    "compute_viewport",
    "generate_primary_rays",
    "get_camera_info",
]
