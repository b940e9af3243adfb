# wren/tracking/__init__.py
from wren.tracking.capabilities import (
    Capability,
    Composite,
    Disposable,
    MaterialLike,
    TextureLike,
    classify,
)
from wren.tracking.tracker import ResourceTracker
from wren.tracking.walker import ResourceGraphWalker

__all__ = [
    "ResourceTracker",
    "ResourceGraphWalker",
    "Capability",
    "Composite",
    "Disposable",
    "MaterialLike",
    "TextureLike",
    "classify",
]
