# wren/graphics/resources/geometry.py
from __future__ import annotations

from typing import Optional, Tuple

import moderngl
import numpy as np

from wren.assets.types import MeshData
from wren.tracking.capabilities import Disposable


class Geometry(Disposable):
    """
    CPU vertex data plus, once uploaded, the GPU resources for it:
    VBO and IBO (optional).
    """

    def __init__(self, data: MeshData, label: str = "") -> None:
        self.data = data
        self.label = label
        self.vertex_count = len(data.vertices) // data.vertex_layout.stride_bytes
        self.index_count = data.index_count

        self.vbo: Optional[moderngl.Buffer] = None
        self.ibo: Optional[moderngl.Buffer] = None
        self.released = False

    @property
    def uploaded(self) -> bool:
        return self.vbo is not None

    def upload(self, ctx: moderngl.Context) -> None:
        if self.released:
            raise RuntimeError(f"Geometry '{self.label}' was already released")
        if self.uploaded:
            return

        self.vbo = ctx.buffer(self.data.vertices)
        self.ibo = ctx.buffer(self.data.indices) if self.data.indices else None

    def bounding_box(self) -> Tuple[np.ndarray, np.ndarray]:
        """Min and max corner of the vertex positions."""
        floats = np.frombuffer(self.data.vertices, dtype=np.float32)
        stride = self.data.vertex_layout.stride_bytes // 4
        positions = floats.reshape(-1, stride)[:, :3]
        return positions.min(axis=0), positions.max(axis=0)

    def release(self) -> None:
        if self.released:
            return
        self.released = True

        if self.vbo is not None:
            self.vbo.release()
            self.vbo = None
        if self.ibo is not None:
            self.ibo.release()
            self.ibo = None
