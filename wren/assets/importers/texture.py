# wren/assets/importers/texture.py
from pathlib import Path

from PIL import Image

from wren.assets.importers.base import AssetImporter
from wren.assets.types import TextureData


class TextureImporter(AssetImporter):
    extensions = (".png", ".jpg", ".jpeg", ".bmp", ".tga")

    def __init__(self, flip_y: bool = True) -> None:
        # OpenGL samples with the origin at the bottom-left.
        self.flip_y = flip_y

    def import_file(self, path: Path) -> TextureData:
        with Image.open(path) as img:
            converted = img.convert("RGBA")
            if self.flip_y:
                converted = converted.transpose(Image.Transpose.FLIP_TOP_BOTTOM)

            width, height = converted.size
            data = converted.tobytes()

        return TextureData(data=data, width=width, height=height, components=4)
