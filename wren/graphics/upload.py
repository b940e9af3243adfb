# wren/graphics/upload.py
from __future__ import annotations

from typing import Iterator

import moderngl

from wren.graphics.resources import Geometry, Material, Texture
from wren.scene import Mesh, Node


def _textures_of(material: Material) -> Iterator[Texture]:
    for value in material.properties().values():
        if isinstance(value, Texture):
            yield value

    for uniform in (material.uniforms or {}).values():
        values = uniform.value if isinstance(uniform.value, (list, tuple)) else [uniform.value]
        for value in values:
            if isinstance(value, Texture):
                yield value


def upload_tree(root: Node, ctx: moderngl.Context) -> int:
    """
    Push every geometry and texture under ``root`` to the GPU.
    Must run on the thread that owns ``ctx``. Returns the upload count.
    """
    count = 0
    for node in root.traverse():
        if not isinstance(node, Mesh):
            continue

        if isinstance(node.geometry, Geometry) and not node.geometry.uploaded:
            node.geometry.upload(ctx)
            count += 1

        for material in node.materials:
            if not isinstance(material, Material):
                continue
            for texture in _textures_of(material):
                if not texture.uploaded:
                    texture.upload(ctx)
                    count += 1
    return count
