# wren/tracking/tracker.py
from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Tuple, TypeVar

from wren.errors import ResourceReleaseError
from wren.tracking.capabilities import Capability, classify
from wren.tracking.walker import ResourceGraphWalker

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResourceTracker:
    """
    Owns every GPU/CPU resource discovered from the roots passed to track()
    and releases them together with dispose_all().

    Resources are keyed by identity: two textures with identical contents
    are tracked separately, one texture shared by two materials is tracked
    once. One tracker per loaded asset; do not share between assets.
    """

    def __init__(self) -> None:
        self._resources: Dict[int, Any] = {}
        self._walker = ResourceGraphWalker(self._add)

    def _add(self, resource: Any) -> None:
        self._resources.setdefault(id(resource), resource)

    def track(self, resource: T) -> T:
        """Register ``resource`` and everything reachable from it. Returns it unchanged."""
        before = len(self._resources)
        self._walker.walk(resource)
        logger.debug(
            "Tracked %d new resource(s) from %s",
            len(self._resources) - before,
            type(resource).__name__,
        )
        return resource

    def untrack(self, resource: Any) -> None:
        """Stop owning ``resource`` without releasing it."""
        if resource in self:
            del self._resources[id(resource)]

    def dispose_all(self) -> None:
        """
        Detach tracked nodes from their parents and release every tracked
        resource exactly once, then forget them all.
        """
        if not self._resources:
            return

        resources = list(self._resources.values())
        self._resources.clear()

        failures: List[Tuple[Any, BaseException]] = []
        released = 0

        for resource in resources:
            caps = classify(resource)

            if caps & Capability.COMPOSITE:
                try:
                    parent = resource.parent
                    if parent is not None:
                        parent.remove(resource)
                except Exception as e:
                    logger.exception(
                        "Failed to detach %s", type(resource).__name__
                    )
                    failures.append((resource, e))

            if caps & Capability.DISPOSABLE:
                try:
                    resource.release()
                    released += 1
                except Exception as e:
                    logger.exception(
                        "Failed to release %s", type(resource).__name__
                    )
                    failures.append((resource, e))

        logger.debug(
            "Disposed %d resource(s), released %d", len(resources), released
        )

        if failures:
            raise ResourceReleaseError(failures)

    def __len__(self) -> int:
        return len(self._resources)

    def __contains__(self, resource: Any) -> bool:
        key = id(resource)
        return key in self._resources and self._resources[key] is resource

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._resources.values()))

    def __enter__(self) -> ResourceTracker:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose_all()
