"""Materials module for surface appearance.

Components:
    material: Phong material (diffuse, specular, mirror, transparency)
    texture: Checkerboard and bitmap textures for the diffuse color

Each material provides the accessors read by the shader:
    - diffuse(texture_coordinate): Diffuse color at a surface point
    - specular / specular_exponent: Phong highlight
    - reflection_factor: Weight of the traced mirror ray
    - refraction_index / opacity: Transparency and Snell refraction
"""

from .material import Material, Shadable, glass, matte, mirror, plastic
from .texture import CheckerTexture, ImageTexture, Texture

__all__ = [
    # Material
    "Material",
    "Shadable",
    "matte",
    "plastic",
    "mirror",
    "glass",
    # Textures
    "Texture",
    "CheckerTexture",
    "ImageTexture",
]
