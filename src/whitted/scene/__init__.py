"""Scene module for scene management.

This module holds everything the integrator queries about a scene:

Components:
    manager: Scene container (materials, objects, lights, ambient,
        background) with dictionary serialization
    light: Point light source
    background: Solid and gradient backgrounds for escaping rays
    demo: Ready-made demo scene with a matching camera

Scene data is read-only during tracing:
    - Objects are traversed linearly in insertion order
    - Lights are shaded in insertion order
    - Material ids index the material table
"""

from .background import Background, GradientBackground, SolidBackground
from .demo import DemoSceneParams, create_demo_scene
from .light import Light
from .manager import Scene, SceneConfig

__all__ = [
    # Manager module
    "Scene",
    "SceneConfig",
    # Lights and backgrounds
    "Light",
    "Background",
    "SolidBackground",
    "GradientBackground",
    # Demo scene
    "DemoSceneParams",
    "create_demo_scene",
]
