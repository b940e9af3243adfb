# wren/scene/__init__.py
from wren.scene.node import Group, Mesh, Node, Scene

__all__ = [
    "Node",
    "Group",
    "Mesh",
    "Scene",
]
