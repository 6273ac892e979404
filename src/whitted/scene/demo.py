"""Demo scene in the style of Whitted's original ray traced images.

The scene consists of:
- A checkerboard floor (textured quad)
- A mirror sphere on the left
- A glass sphere in front on the right
- A red plastic box in the back
- Two point lights
- A sky gradient background

The coordinate system has Y up; the camera sits at positive Z looking
toward -Z.

Example:
    >>> from whitted.scene.demo import create_demo_scene
    >>> scene, camera = create_demo_scene()
    >>> scene.get_object_count()
    4
"""

from __future__ import annotations

from dataclasses import dataclass

from whitted.camera.pinhole import PinholeCamera
from whitted.materials import CheckerTexture, Material, glass, mirror, plastic

from .background import GradientBackground
from .manager import Scene

# =============================================================================
# Demo Scene Parameters
# =============================================================================


@dataclass
class DemoSceneParams:
    """Parameters for customizing the demo scene.

    Attributes:
        key_light_color: RGB color of the main light.
        fill_light_color: RGB color of the secondary light.
        ambient: Ambient light color.
        glass_index: Refraction index of the glass sphere.
        checker_squares: Number of checker squares along each floor axis.
        aspect_ratio: Aspect ratio of the returned camera.
    """

    key_light_color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    fill_light_color: tuple[float, float, float] = (0.6, 0.6, 0.6)
    ambient: tuple[float, float, float] = (0.15, 0.15, 0.15)
    glass_index: float = 1.5
    checker_squares: int = 10
    aspect_ratio: float = 4.0 / 3.0


# =============================================================================
# Demo Scene Constants
# =============================================================================

FLOOR_CORNER = (-4.0, 0.0, 2.0)
FLOOR_EDGE_U = (8.0, 0.0, 0.0)
FLOOR_EDGE_V = (0.0, 0.0, -10.0)  # u x v points up
FLOOR_EVEN_COLOR = (0.9, 0.9, 0.2)
FLOOR_ODD_COLOR = (0.8, 0.1, 0.1)

MIRROR_SPHERE_CENTER = (-1.2, 1.0, -3.0)
MIRROR_SPHERE_RADIUS = 1.0

GLASS_SPHERE_CENTER = (1.2, 0.8, -1.5)
GLASS_SPHERE_RADIUS = 0.8

BOX_MIN = (1.8, 0.0, -5.5)
BOX_MAX = (3.0, 1.2, -4.3)
BOX_COLOR = (0.7, 0.15, 0.1)

KEY_LIGHT_POSITION = (-4.0, 6.0, 4.0)
FILL_LIGHT_POSITION = (5.0, 4.0, 2.0)

SKY_HORIZON = (0.85, 0.9, 1.0)
SKY_ZENITH = (0.3, 0.5, 0.9)


def create_demo_scene(
    params: DemoSceneParams | None = None,
) -> tuple[Scene, PinholeCamera]:
    """Create the demo scene and a camera framing it.

    Args:
        params: Optional DemoSceneParams; defaults to DemoSceneParams().

    Returns:
        A tuple of (Scene, PinholeCamera).
    """
    if params is None:
        params = DemoSceneParams()

    scene = Scene(
        ambient=params.ambient,
        background=GradientBackground(horizon=SKY_HORIZON, zenith=SKY_ZENITH),
    )

    # Materials
    floor_mat = scene.add_material(
        Material(
            diffuse_color=FLOOR_EVEN_COLOR,
            specular=(0.2, 0.2, 0.2),
            specular_exponent=16.0,
            reflection_factor=0.15,
            texture=CheckerTexture(
                FLOOR_EVEN_COLOR, FLOOR_ODD_COLOR, squares=params.checker_squares
            ),
        )
    )
    mirror_mat = scene.add_material(mirror())
    glass_mat = scene.add_material(glass(refraction_index=params.glass_index))
    box_mat = scene.add_material(plastic(BOX_COLOR))

    # Objects
    scene.add_quad(FLOOR_CORNER, FLOOR_EDGE_U, FLOOR_EDGE_V, floor_mat)
    scene.add_sphere(MIRROR_SPHERE_CENTER, MIRROR_SPHERE_RADIUS, mirror_mat)
    scene.add_sphere(GLASS_SPHERE_CENTER, GLASS_SPHERE_RADIUS, glass_mat)
    scene.add_box(BOX_MIN, BOX_MAX, box_mat)

    # Lights
    scene.add_light(KEY_LIGHT_POSITION, params.key_light_color)
    scene.add_light(FILL_LIGHT_POSITION, params.fill_light_color)

    camera = PinholeCamera(
        lookfrom=(0.0, 2.0, 5.0),
        lookat=(0.0, 0.8, -2.0),
        vup=(0.0, 1.0, 0.0),
        vfov=50.0,
        aspect_ratio=params.aspect_ratio,
    )

    return scene, camera
