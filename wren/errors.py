# wren/errors.py
from typing import Any, List, Tuple


class WrenError(Exception):
    """Base class for errors raised by wren."""


class AssetLoadError(WrenError):
    """A model or one of its dependencies could not be loaded."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to load {path}: {reason}")
        self.path = path
        self.reason = reason


class ResourceReleaseError(WrenError):
    """
    One or more detach or release() calls failed during bulk disposal.
    Every other resource was still released.
    """

    def __init__(self, failures: List[Tuple[Any, BaseException]]) -> None:
        names = ", ".join(type(res).__name__ for res, _ in failures)
        super().__init__(f"{len(failures)} resource(s) failed to dispose: {names}")
        self.failures = failures
