# wren/tracking/walker.py
from __future__ import annotations

from typing import Any, Callable, Dict, List

from wren.tracking.capabilities import Capability, classify, is_sequence

Sink = Callable[[Any], None]


class ResourceGraphWalker:
    """
    Discovers every trackable resource reachable from a value and hands
    each one to ``sink``.

    Each object identity is expanded at most once per walk, so shared
    materials and reference cycles are visited a single time. The sink may
    still see an identity again on a later walk and must deduplicate.
    """

    def __init__(self, sink: Sink) -> None:
        self._sink = sink

    def walk(self, value: Any) -> Any:
        if value is None:
            return value

        stack: List[Any] = [value]
        # id -> object; holding the object keeps its id from being reused
        seen: Dict[int, Any] = {}

        while stack:
            item = stack.pop()
            if item is None or id(item) in seen:
                continue
            seen[id(item)] = item

            if is_sequence(item):
                stack.extend(item)
                continue

            caps = classify(item)
            if caps & (Capability.DISPOSABLE | Capability.COMPOSITE):
                self._sink(item)

            if caps & Capability.COMPOSITE:
                stack.append(item.geometry)
                stack.append(item.material)
                stack.append(list(item.children))
            elif caps & Capability.MATERIAL:
                stack.extend(self._material_refs(item))

        return value

    @staticmethod
    def _material_refs(material: Any) -> List[Any]:
        refs = [
            prop
            for prop in material.properties().values()
            if classify(prop) & Capability.TEXTURE
        ]

        for uniform in (material.uniforms or {}).values():
            uniform_value = getattr(uniform, "value", None)
            if is_sequence(uniform_value) or (
                classify(uniform_value) & Capability.TEXTURE
            ):
                refs.append(uniform_value)

        return refs
