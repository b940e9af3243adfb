from dataclasses import dataclass

import pytest

from wren.assets.types import MeshData, TextureData, VertexLayout
from wren.graphics.resources import Geometry, Texture
from wren.scene import Node
from wren.tracking import Composite, Disposable, TextureLike


class Counted(Disposable):
    """Disposable that records how often it was released."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.release_count = 0

    def release(self) -> None:
        self.release_count += 1


@dataclass
class Helper:
    """Neither disposable, composite nor material."""

    label: str


def make_texture(label: str = "tex", size: int = 2) -> Texture:
    data = TextureData(
        data=bytes(size * size * 4), width=size, height=size, components=4
    )
    return Texture(data, label=label)


def make_geometry(label: str = "geo") -> Geometry:
    layout = VertexLayout(
        attributes=["in_pos", "in_normal", "in_uv"],
        format="3f 3f 2f",
        stride_bytes=32,
    )
    data = MeshData(
        vertices=bytes(3 * 32),
        vertex_layout=layout,
        aabb=((0.0, 0.0, 0.0), (0.0, 0.0, 0.0)),
    )
    return Geometry(data, label=label)


@pytest.fixture
def texture():
    return make_texture()


@pytest.fixture
def geometry():
    return make_geometry()


class CountedTexture(TextureLike):
    """Texture stand-in that records how often it was released."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.release_count = 0

    def release(self) -> None:
        self.release_count += 1


class CountedNode(Node, Disposable):
    """Composite node that also owns something to release."""

    def __init__(self, name: str = "") -> None:
        super().__init__(name)
        self.release_count = 0

    def release(self) -> None:
        self.release_count += 1


class LooseNode(Composite):
    """Composite with unchecked wiring, so reference cycles can be built."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._children = []
        self._parent = None

    @property
    def children(self):
        return self._children

    @property
    def parent(self):
        return self._parent

    def link(self, child: "LooseNode") -> None:
        self._children.append(child)
        child._parent = self

    def remove(self, child) -> None:
        self._children = [c for c in self._children if c is not child]
        if child._parent is self:
            child._parent = None
