# wren/assets/importers/base.py
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, ClassVar, Tuple


class AssetImporter(ABC):
    # Lower-case file suffixes this importer accepts.
    extensions: ClassVar[Tuple[str, ...]] = ()

    @abstractmethod
    def import_file(self, path: Path) -> Any:
        """
        Parse one file into plain data. Runs on loader worker threads, so it
        must not touch a GL context or shared state.
        """
        pass
