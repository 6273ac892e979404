"""Whitted-style recursive ray tracer.

Subpackages:
    core: Vector math, the recursive integrator and the image renderer
    geometry: Sphere, quad and box primitives
    materials: Phong-Whitted materials and textures
    scene: Scene container, lights, backgrounds and a demo scene
    camera: Pinhole camera with Taichi primary ray generation
    preview: Tone mapping, PNG export and Matplotlib preview
"""

__version__ = "0.1.0"
