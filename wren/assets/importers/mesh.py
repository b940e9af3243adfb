# wren/assets/importers/mesh.py
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np

from wren.assets.importers.base import AssetImporter
from wren.assets.types import MeshData, ObjData, ObjPart, VertexLayout

VERTEX_FORMAT = "<3f 3f 2f"
LAYOUT = VertexLayout(
    attributes=["in_pos", "in_normal", "in_uv"],
    format="3f 3f 2f",
    stride_bytes=struct.calcsize("<3f3f2f"),
)


@dataclass
class _PartBuilder:
    name: str
    material: Optional[str]
    vertices: List[bytes] = field(default_factory=list)
    positions: List[Tuple[float, float, float]] = field(default_factory=list)

    def build(self) -> ObjPart:
        points = np.asarray(self.positions, dtype=np.float32)
        lo = tuple(float(x) for x in points.min(axis=0))
        hi = tuple(float(x) for x in points.max(axis=0))

        mesh = MeshData(
            vertices=b"".join(self.vertices),
            vertex_layout=LAYOUT,
            aabb=(lo, hi),
            indices=None,
        )
        return ObjPart(name=self.name, material=self.material, mesh=mesh)


class ObjImporter(AssetImporter):
    """
    Wavefront OBJ reader. Every `o`/`g` statement and every `usemtl` switch
    starts a new part; polygons are fan-triangulated.
    """

    extensions = (".obj",)

    def import_file(self, path: Path) -> ObjData:
        positions: List[Tuple[float, float, float]] = []
        normals: List[Tuple[float, float, float]] = []
        uvs: List[Tuple[float, float]] = []
        material_libs: List[str] = []

        parts: List[ObjPart] = []
        current = _PartBuilder(name=Path(path).stem, material=None)

        def flush(name: str, material: Optional[str]) -> _PartBuilder:
            if current.vertices:
                parts.append(current.build())
                return _PartBuilder(name=name, material=material)
            current.name = name
            current.material = material
            return current

        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue

                tokens = line.split()
                tag = tokens[0]

                if tag == "v":
                    px, py, pz = map(float, tokens[1:4])
                    positions.append((px, py, pz))

                elif tag == "vn":
                    nx, ny, nz = map(float, tokens[1:4])
                    normals.append((nx, ny, nz))

                elif tag == "vt":
                    u, v = map(float, tokens[1:3])
                    uvs.append((u, v))

                elif tag in ("o", "g"):
                    name = " ".join(tokens[1:]) or current.name
                    current = flush(name, current.material)

                elif tag == "usemtl":
                    material = " ".join(tokens[1:]) or None
                    if material != current.material:
                        current = flush(current.name, material)

                elif tag == "mtllib":
                    material_libs.extend(tokens[1:])

                elif tag == "f":
                    if len(tokens) < 4:
                        raise ValueError(
                            f"Face with fewer than 3 vertices in {path}: {line}"
                        )

                    corners = [
                        self._parse_face_vertex(
                            vert, len(positions), len(uvs), len(normals)
                        )
                        for vert in tokens[1:]
                    ]

                    for i in range(1, len(corners) - 1):
                        for v_idx, vt_idx, vn_idx in (
                            corners[0],
                            corners[i],
                            corners[i + 1],
                        ):
                            try:
                                px, py, pz = positions[v_idx]
                                nx, ny, nz = (
                                    normals[vn_idx]
                                    if vn_idx is not None
                                    else (0.0, 1.0, 0.0)
                                )
                                u, v = (
                                    uvs[vt_idx] if vt_idx is not None else (0.0, 0.0)
                                )
                            except IndexError:
                                raise ValueError(
                                    f"Face references a missing vertex in {path}: {line}"
                                )

                            current.positions.append((px, py, pz))
                            current.vertices.append(
                                struct.pack(
                                    VERTEX_FORMAT, px, py, pz, nx, ny, nz, u, v
                                )
                            )

        if current.vertices:
            parts.append(current.build())

        if not parts:
            raise ValueError(f"No geometry found in OBJ: {path}")

        return ObjData(parts=parts, material_libs=material_libs)

    def _parse_index(self, val: str, count: int) -> int | None:
        if not val:
            return None
        idx = int(val)
        # OBJ indices are 1-based; negative ones count back from the end.
        resolved = idx - 1 if idx > 0 else count + idx
        if idx == 0 or resolved < 0:
            raise ValueError(f"Index {idx} out of range (have {count})")
        return resolved

    def _parse_face_vertex(
        self, token: str, n_pos: int, n_uv: int, n_norm: int
    ) -> Tuple[int, int | None, int | None]:
        parts = token.split("/")
        v = self._parse_index(parts[0], n_pos)
        vt = (
            self._parse_index(parts[1], n_uv)
            if len(parts) > 1 and parts[1]
            else None
        )
        vn = (
            self._parse_index(parts[2], n_norm)
            if len(parts) > 2 and parts[2]
            else None
        )

        if v is None:
            raise ValueError(f"Invalid vertex index in token: {token}")

        return v, vt, vn
