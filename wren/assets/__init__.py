# wren/assets/__init__.py
from wren.assets.types import (
    MaterialData,
    MeshData,
    ObjData,
    ObjPart,
    TextureData,
    VertexLayout,
)
from wren.assets.loader import LoadResult, ModelLoader

__all__ = [
    "ModelLoader",
    "LoadResult",
    "MeshData",
    "MaterialData",
    "ObjData",
    "ObjPart",
    "TextureData",
    "VertexLayout",
]
