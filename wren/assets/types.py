# wren/assets/types.py
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

Color = Tuple[float, float, float]


@dataclass(frozen=True)
class VertexLayout:
    """Describes vertex attributes for VAO creation."""

    attributes: List[str]  # e.g. ["in_pos", "in_normal", "in_uv"]
    format: str  # moderngl buffer format string e.g. "3f 3f 2f"
    stride_bytes: int  # e.g. 32


@dataclass(frozen=True)
class MeshData:
    """Raw mesh data loaded from disk, ready for GPU upload."""

    vertices: bytes
    vertex_layout: VertexLayout
    aabb: Tuple[Tuple[float, float, float], Tuple[float, float, float]]
    indices: Optional[bytes] = None
    index_count: int = 0


@dataclass(frozen=True)
class TextureData:
    """Raw texture data and metadata."""

    data: bytes
    width: int
    height: int
    components: int  # always 4 (RGBA) from the importer


@dataclass(frozen=True)
class MaterialData:
    """One `newmtl` block of a Wavefront MTL library."""

    name: str
    diffuse: Color = (0.8, 0.8, 0.8)
    opacity: float = 1.0
    shininess: float = 0.0
    diffuse_map: Optional[str] = None
    normal_map: Optional[str] = None


@dataclass(frozen=True)
class ObjPart:
    """Triangles of one OBJ object/group drawn with a single material."""

    name: str
    material: Optional[str]
    mesh: MeshData


@dataclass(frozen=True)
class ObjData:
    parts: List[ObjPart]
    material_libs: List[str] = field(default_factory=list)
