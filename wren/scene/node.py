# wren/scene/node.py
from __future__ import annotations

import weakref
from typing import Any, Callable, Iterator, List, Optional, Sequence, Union

from wren.tracking.capabilities import Composite


class Node(Composite):
    """
    Scene-graph element.

    A node owns its children (forward edge). The parent link is a weak
    reference so a child never keeps its parent alive.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._children: List[Node] = []
        self._parent: Optional[weakref.ref[Node]] = None

    @property
    def children(self) -> List[Node]:
        return self._children

    @property
    def parent(self) -> Optional[Node]:
        return self._parent() if self._parent is not None else None

    def add(self, *nodes: Node) -> Node:
        """Attach nodes as children, detaching them from any previous parent."""
        for node in nodes:
            if node is self or node.is_ancestor_of(self):
                raise ValueError(
                    f"Node '{node.name}' cannot be a child of its own descendant"
                )

            current = node.parent
            if current is not None:
                current.remove(node)

            node._parent = weakref.ref(self)
            self._children.append(node)
        return self

    def remove(self, *nodes: Node) -> Node:
        """Detach children. Nodes that are not children are ignored."""
        for node in nodes:
            for i, child in enumerate(self._children):
                if child is node:
                    del self._children[i]
                    node._parent = None
                    break
        return self

    def is_ancestor_of(self, other: Node) -> bool:
        ancestor = other.parent
        while ancestor is not None:
            if ancestor is self:
                return True
            ancestor = ancestor.parent
        return False

    def remove_from_parent(self) -> None:
        parent = self.parent
        if parent is not None:
            parent.remove(self)

    def traverse(self) -> Iterator[Node]:
        """Depth-first, pre-order walk over this node and its descendants."""
        stack: List[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node._children))

    def find(self, predicate: Callable[[Node], bool]) -> Optional[Node]:
        for node in self.traverse():
            if predicate(node):
                return node
        return None

    def find_by_name(self, name: str) -> Optional[Node]:
        return self.find(lambda node: node.name == name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, children={len(self._children)})"


class Group(Node):
    """Node with no renderable payload, used to gather children."""


class Mesh(Node):
    """Renderable node: one geometry drawn with one or more materials."""

    def __init__(
        self,
        geometry: Any = None,
        material: Union[Any, Sequence[Any], None] = None,
        name: str = "",
    ) -> None:
        super().__init__(name)
        self.geometry = geometry
        self.material = material

    @property
    def materials(self) -> List[Any]:
        if self.material is None:
            return []
        if isinstance(self.material, (list, tuple)):
            return list(self.material)
        return [self.material]


class Scene(Group):
    """Root container the display attaches loaded models to."""

    def __init__(self, name: str = "Scene") -> None:
        super().__init__(name)
