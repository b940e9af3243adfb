# wren/assets/importers/material.py
from pathlib import Path
from typing import Dict, Optional

from wren.assets.importers.base import AssetImporter
from wren.assets.types import MaterialData

_NORMAL_MAP_TAGS = ("map_Bump", "map_bump", "bump", "norm")


class MtlImporter(AssetImporter):
    """Reads a Wavefront MTL library into MaterialData keyed by name."""

    extensions = (".mtl",)

    def import_file(self, path: Path) -> Dict[str, MaterialData]:
        materials: Dict[str, MaterialData] = {}
        current: Optional[dict] = None

        def finish() -> None:
            if current is not None:
                materials[current["name"]] = MaterialData(**current)

        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue

                tag, _, rest = line.partition(" ")
                rest = rest.strip()

                if tag == "newmtl":
                    finish()
                    current = {"name": rest}
                    continue

                if current is None:
                    raise ValueError(f"'{tag}' before any newmtl in {path}")

                if tag == "Kd":
                    r, g, b = map(float, rest.split()[:3])
                    current["diffuse"] = (r, g, b)
                elif tag == "d":
                    current["opacity"] = float(rest)
                elif tag == "Tr":
                    current["opacity"] = 1.0 - float(rest)
                elif tag == "Ns":
                    current["shininess"] = float(rest)
                elif tag == "map_Kd":
                    current["diffuse_map"] = _map_path(rest)
                elif tag in _NORMAL_MAP_TAGS:
                    current["normal_map"] = _map_path(rest)

        finish()
        return materials


def _map_path(rest: str) -> str:
    # Texture options (-bm 1.0, -clamp on, ...) precede the file name.
    return rest.split()[-1]
