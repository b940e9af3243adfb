# wren/graphics/resources/__init__.py
from wren.graphics.resources.geometry import Geometry
from wren.graphics.resources.material import Material, ShaderMaterial, Uniform
from wren.graphics.resources.texture import Texture

__all__ = [
    "Geometry",
    "Material",
    "ShaderMaterial",
    "Texture",
    "Uniform",
]
