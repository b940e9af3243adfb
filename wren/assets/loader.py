# wren/assets/loader.py
from __future__ import annotations

import asyncio
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from wren.assets.importers.material import MtlImporter
from wren.assets.importers.mesh import ObjImporter
from wren.assets.importers.texture import TextureImporter
from wren.assets.types import MaterialData, ObjData
from wren.errors import AssetLoadError
from wren.graphics.resources import Geometry, Material, Texture
from wren.scene import Group, Mesh
from wren.settings import LoaderSettings

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """What a model load resolves to. ``root`` is the only part the tracker needs."""

    root: Group
    path: str
    materials: Dict[str, Material] = field(default_factory=dict)
    textures: Dict[str, Texture] = field(default_factory=dict)


class ModelLoader:
    """
    Loads models on background threads. Every load builds fresh resources;
    nothing is cached between loads, so each result can be disposed on its
    own.
    """

    def __init__(
        self, asset_root: Path, settings: Optional[LoaderSettings] = None
    ) -> None:
        self.root = asset_root
        self.settings = settings or LoaderSettings()

        self._executor = ThreadPoolExecutor(
            max_workers=self.settings.max_workers,
            thread_name_prefix="AssetWorker",
        )

        self._model_importers: Dict[str, ObjImporter] = {
            ext: importer
            for importer in (ObjImporter(),)
            for ext in importer.extensions
        }
        self._mtl = MtlImporter()
        self._textures = TextureImporter(flip_y=self.settings.flip_textures)

    def load(self, path: str) -> Future[LoadResult]:
        """
        Non-blocking load request. The future raises AssetLoadError on failure.
        """
        return self._executor.submit(self._worker_load, path)

    async def load_async(self, path: str) -> LoadResult:
        return await asyncio.wrap_future(self.load(path))

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _worker_load(self, path: str) -> LoadResult:
        """
        Load asset on background thread.
        """
        full_path = self.root / path
        ext = full_path.suffix.lower()
        importer = self._model_importers.get(ext)
        if importer is None:
            raise AssetLoadError(path, f"no importer for '{ext}'")

        try:
            data = importer.import_file(full_path)
        except (OSError, ValueError) as e:
            raise AssetLoadError(path, str(e)) from e

        return self._build(path, full_path, data)

    def _build(self, path: str, full_path: Path, data: ObjData) -> LoadResult:
        result = LoadResult(root=Group(name=full_path.stem), path=path)

        material_data: Dict[str, MaterialData] = {}
        for lib in data.material_libs:
            try:
                material_data.update(self._mtl.import_file(full_path.parent / lib))
            except (OSError, ValueError) as e:
                logger.warning("Skipping material library %s: %s", lib, e)

        for part in data.parts:
            key = part.material or ""
            material = result.materials.get(key)
            if material is None:
                material = self._make_material(
                    full_path.parent, material_data.get(key), key, result
                )
                result.materials[key] = material

            mesh = Mesh(
                geometry=Geometry(part.mesh, label=part.name),
                material=material,
                name=part.name,
            )
            result.root.add(mesh)

        logger.debug(
            "Built %s: %d mesh(es), %d material(s), %d texture(s)",
            path,
            len(result.root.children),
            len(result.materials),
            len(result.textures),
        )
        return result

    def _make_material(
        self,
        base_dir: Path,
        data: Optional[MaterialData],
        name: str,
        result: LoadResult,
    ) -> Material:
        if data is None:
            return Material(name=name or "default")

        r, g, b = data.diffuse
        return Material(
            name=data.name,
            color=(r, g, b, data.opacity),
            roughness=_roughness_from_shininess(data.shininess),
            map=self._texture(base_dir, data.diffuse_map, result),
            normal_map=self._texture(base_dir, data.normal_map, result),
            transparent=data.opacity < 1.0,
        )

    def _texture(
        self, base_dir: Path, rel: Optional[str], result: LoadResult
    ) -> Optional[Texture]:
        if rel is None:
            return None
        if rel in result.textures:
            return result.textures[rel]
        if Path(rel).suffix.lower() not in self._textures.extensions:
            logger.warning("Skipping texture %s: unsupported format", rel)
            return None

        try:
            tex_data = self._textures.import_file(base_dir / rel)
        except OSError as e:
            logger.warning("Skipping texture %s: %s", rel, e)
            return None

        texture = Texture(tex_data, label=rel)
        result.textures[rel] = texture
        return texture


def _roughness_from_shininess(ns: float) -> float:
    # MTL Ns spans 0..1000; map it onto a perceptual roughness.
    ns = min(max(ns, 0.0), 1000.0)
    return 1.0 - (ns / 1000.0) ** 0.5
