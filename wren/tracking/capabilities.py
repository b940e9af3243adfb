# wren/tracking/capabilities.py
from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Flag, auto
from typing import Any, Iterable, Mapping, Optional

import moderngl


class Capability(Flag):
    NONE = 0
    DISPOSABLE = auto()
    COMPOSITE = auto()
    MATERIAL = auto()
    TEXTURE = auto()


class Disposable(ABC):
    """Anything owning memory that must be freed with an explicit release()."""

    @abstractmethod
    def release(self) -> None:
        pass


class TextureLike(Disposable):
    """Marker for image resources that materials and uniforms reference."""


class Composite(ABC):
    """
    Scene-graph element: an ordered list of children, zero-or-one geometry,
    one-or-many materials, and a parent that it can be detached from.
    """

    @property
    @abstractmethod
    def children(self) -> Iterable[Any]:
        pass

    @property
    @abstractmethod
    def parent(self) -> Optional[Composite]:
        pass

    @abstractmethod
    def remove(self, child: Any) -> None:
        pass

    geometry: Any = None
    material: Any = None


class MaterialLike(ABC):
    """Property bag that may reference textures directly or through uniforms."""

    @abstractmethod
    def properties(self) -> Mapping[str, Any]:
        pass

    uniforms: Optional[Mapping[str, Any]] = None


# Raw GPU objects created straight from a moderngl.Context.
for _gl_type in (
    moderngl.Buffer,
    moderngl.VertexArray,
    moderngl.Program,
    moderngl.Framebuffer,
    moderngl.Renderbuffer,
    moderngl.Sampler,
    moderngl.Query,
    moderngl.ComputeShader,
):
    Disposable.register(_gl_type)

for _gl_type in (
    moderngl.Texture,
    moderngl.Texture3D,
    moderngl.TextureArray,
    moderngl.TextureCube,
):
    TextureLike.register(_gl_type)


def classify(value: Any) -> Capability:
    """Return every capability the value exposes."""
    caps = Capability.NONE
    if isinstance(value, Disposable):
        caps |= Capability.DISPOSABLE
    if isinstance(value, TextureLike):
        caps |= Capability.TEXTURE
    if isinstance(value, Composite):
        caps |= Capability.COMPOSITE
    if isinstance(value, MaterialLike):
        caps |= Capability.MATERIAL
    return caps


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))
