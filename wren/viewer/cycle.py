# wren/viewer/cycle.py
from __future__ import annotations

import asyncio
import logging
from enum import StrEnum
from typing import Callable, List, Optional, Protocol

import moderngl

from wren.assets.loader import LoadResult
from wren.errors import ResourceReleaseError
from wren.graphics.upload import upload_tree
from wren.scene import Scene
from wren.settings import CycleSettings
from wren.tracking import ResourceTracker

logger = logging.getLogger(__name__)


class CycleState(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    ATTACHED = "attached"
    DISPLAYED = "displayed"
    DISPOSED = "disposed"


class AsyncLoader(Protocol):
    async def load_async(self, path: str) -> LoadResult: ...


StateListener = Callable[[CycleState, str], None]


class AssetCycle:
    """
    Loads each asset in turn, shows it for a while, then disposes it:

        IDLE -> LOADING -> ATTACHED -> DISPLAYED -> DISPOSED -> IDLE

    Runs until max_cycles passes over the asset list, stop() is called, or
    the task is cancelled. The asset on screen when the loop ends is always
    disposed before run() returns or raises.
    """

    def __init__(
        self,
        scene: Scene,
        loader: AsyncLoader,
        settings: CycleSettings,
        ctx: Optional[moderngl.Context] = None,
    ) -> None:
        self.scene = scene
        self.loader = loader
        self.settings = settings
        self.ctx = ctx

        self.state = CycleState.IDLE
        self.cycles_completed = 0
        self._listeners: List[StateListener] = []
        self._stop_requested = False
        self._tracker: Optional[ResourceTracker] = None

    def add_listener(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def stop(self) -> None:
        """Finish the current asset, then leave run()."""
        self._stop_requested = True

    @property
    def tracker(self) -> Optional[ResourceTracker]:
        """Tracker of the asset currently loaded, if any."""
        return self._tracker

    def _set_state(self, state: CycleState, asset: str) -> None:
        self.state = state
        logger.info("%s: %s", state.value, asset)
        for listener in self._listeners:
            listener(state, asset)

    async def run(self) -> None:
        self._stop_requested = False
        max_cycles = self.settings.max_cycles

        while max_cycles is None or self.cycles_completed < max_cycles:
            for asset in self.settings.assets:
                if self._stop_requested:
                    return
                await self.run_once(asset)
            self.cycles_completed += 1

    def _dispose(
        self, tracker: ResourceTracker, asset: str, unwinding: bool = False
    ) -> None:
        try:
            tracker.dispose_all()
        except ResourceReleaseError:
            if not unwinding:
                raise
            logger.exception("Release failed while unwinding %s", asset)
        finally:
            self._tracker = None
            self._set_state(CycleState.DISPOSED, asset)

    async def run_once(self, asset: str) -> None:
        tracker = ResourceTracker()
        self._tracker = tracker

        try:
            self._set_state(CycleState.LOADING, asset)
            try:
                result = await self.loader.load_async(asset)
            except Exception:
                logger.exception("Load failed: %s", asset)
                raise

            root = tracker.track(result.root)
            if self.ctx is not None:
                upload_tree(root, self.ctx)
            self.scene.add(root)
            self._set_state(CycleState.ATTACHED, asset)

            self._set_state(CycleState.DISPLAYED, asset)
            await asyncio.sleep(self.settings.display_seconds)
        except BaseException:
            # Keep the original error; release failures are only logged.
            self._dispose(tracker, asset, unwinding=True)
            raise
        self._dispose(tracker, asset)

        await asyncio.sleep(self.settings.pause_seconds)
        self._set_state(CycleState.IDLE, asset)
