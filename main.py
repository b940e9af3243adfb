"""
Resource tracking demo.

Loads each model given on the command line, keeps it attached to a scene
for a couple of seconds, then releases every GPU resource it created and
moves on to the next one. Loops until interrupted.

Usage:
    python main.py path/to/a.obj path/to/b.obj ...

Environment:
    - WREN_LOG_LEVEL: DEBUG, INFO (default), WARNING, ...
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from pathlib import Path

import moderngl

from wren.assets import ModelLoader
from wren.scene import Scene
from wren.settings import CycleSettings, LoaderSettings
from wren.viewer import AssetCycle


def configure_logging() -> None:
    level = os.getenv("WREN_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )


async def run(paths: list[str]) -> None:
    # Headless: the context only exists so uploads and releases are real.
    ctx = moderngl.create_standalone_context()
    loader = ModelLoader(asset_root=Path("."), settings=LoaderSettings())
    scene = Scene()

    cycle = AssetCycle(
        scene,
        loader,
        CycleSettings(assets=tuple(paths)),
        ctx=ctx,
    )

    try:
        await cycle.run()
    finally:
        loader.shutdown(wait=False)
        ctx.release()


def main() -> None:
    """Main entrypoint for the load/display/dispose demo."""
    configure_logging()

    paths = sys.argv[1:]
    if not paths:
        print(__doc__)
        sys.exit(1)

    try:
        asyncio.run(run(paths))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
