# wren/graphics/resources/material.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from wren.graphics.resources.texture import Texture
from wren.tracking.capabilities import Disposable, MaterialLike


@dataclass
class Uniform:
    """Shader uniform slot; value may be a scalar, a Texture or a list of Textures."""

    value: Any = None


class Material(Disposable, MaterialLike):
    """
    Standard surface description.

    Texture slots:
        - map: base color
        - normal_map (optional)
        - orm_map: occlusion/roughness/metalness packed rgb
    """

    def __init__(
        self,
        name: str = "",
        *,
        color: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0),
        roughness: float = 0.5,
        metallic: float = 0.0,
        map: Optional[Texture] = None,
        normal_map: Optional[Texture] = None,
        orm_map: Optional[Texture] = None,
        transparent: bool = False,
    ) -> None:
        self.name = name
        self.color = color
        self.roughness = roughness
        self.metallic = metallic
        self.map = map
        self.normal_map = normal_map
        self.orm_map = orm_map
        self.transparent = transparent
        self.released = False

    def properties(self) -> Mapping[str, Any]:
        return {k: v for k, v in vars(self).items() if not k.startswith("_")}

    def release(self) -> None:
        # Textures are separate resources and are released on their own.
        self.released = True


class ShaderMaterial(Material):
    """Material driven by user shaders and a name -> Uniform mapping."""

    def __init__(
        self,
        vertex_shader: str,
        fragment_shader: str,
        uniforms: Optional[Dict[str, Uniform]] = None,
        name: str = "",
    ) -> None:
        super().__init__(name)
        self.vertex_shader = vertex_shader
        self.fragment_shader = fragment_shader
        self.uniforms: Dict[str, Uniform] = uniforms or {}

    def set_uniform(self, name: str, value: Any) -> None:
        if name in self.uniforms:
            self.uniforms[name].value = value
        else:
            self.uniforms[name] = Uniform(value)

    def get_uniform(self, name: str) -> Any:
        uniform = self.uniforms.get(name)
        return uniform.value if uniform is not None else None

