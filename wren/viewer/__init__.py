# wren/viewer/__init__.py
from wren.viewer.cycle import AssetCycle, CycleState

__all__ = [
    "AssetCycle",
    "CycleState",
]
