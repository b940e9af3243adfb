# wren/graphics/resources/texture.py
from __future__ import annotations

from typing import Optional

import moderngl

from wren.assets.types import TextureData
from wren.tracking.capabilities import TextureLike


class Texture(TextureLike):
    """
    Image data plus, once uploaded, the moderngl.Texture holding it.
    """

    def __init__(self, data: TextureData, label: str = "") -> None:
        self.data = data
        self.label = label
        self.width = data.width
        self.height = data.height
        self.handle: Optional[moderngl.Texture] = None
        self.released = False

    @property
    def uploaded(self) -> bool:
        return self.handle is not None

    def upload(self, ctx: moderngl.Context) -> None:
        if self.released:
            raise RuntimeError(f"Texture '{self.label}' was already released")
        if self.uploaded:
            return

        self.handle = ctx.texture(
            size=(self.data.width, self.data.height),
            components=self.data.components,
            data=self.data.data,
        )

        # Default Settings (can be overridden by Material)
        self.handle.filter = (moderngl.LINEAR_MIPMAP_LINEAR, moderngl.LINEAR)
        self.handle.build_mipmaps()
        self.handle.anisotropy = 16.0

    def use(self, location: int = 0) -> None:
        if self.handle is None:
            raise RuntimeError(f"Texture '{self.label}' is not uploaded")
        self.handle.use(location)

    def release(self) -> None:
        if self.released:
            return
        self.released = True

        if self.handle is not None:
            self.handle.release()
            self.handle = None

    def __repr__(self) -> str:
        return f"Texture(label={self.label!r}, size={self.width}x{self.height})"
