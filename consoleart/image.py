"""Common image model: pixels, metadata and the base image class."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path


class ImageError(Exception):
    """Raised when an image cannot be read, decoded or written."""


@dataclass
class Pixel:
    """An 8-bit RGBA colour."""

    red: int = 0
    green: int = 0
    blue: int = 0
    alpha: int = 255


@dataclass
class PixelHDR:
    """A floating-point RGBA colour."""

    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0
    alpha: float = 1.0


class FileState(enum.Enum):
    NOT_LOADED = enum.auto()
    VALID_IMAGE_FILE = enum.auto()


class ImageType(enum.Enum):
    PNG = "png"
    JPG = "jpg"
    TGA = "tga"
    GIF = "gif"
    HDR = "hdr"
    PCX = "pcx"
    DCX = "dcx"
    PPM = "ppm"


@dataclass
class ImageInfo:
    """Dimensions and layout facts about an image."""

    name: str = ""
    width: int = 0
    height: int = 0
    channels: int = 0
    bits: int = 0
    file_type: int = 0
    planar: bool = False
    multipage: bool = False
    animated: bool = False
    hdr: bool = False
    palette: bool = False
    pixel_byte_order: str = "RGBA"


class Image:
    """An image held as bytes; by default pixels are interleaved channel by channel."""

    def __init__(self, filepath: str | Path, image_type: ImageType) -> None:
        self.filepath = str(filepath)
        self.image_type = image_type
        self.info = ImageInfo(name=self.filename())
        self.pixel_data = bytearray()
        self.file_state = FileState.NOT_LOADED
        self.message = ""

    def filename(self) -> str:
        """The last component of the image's path."""
        return Path(self.filepath).name

    def is_loaded(self) -> bool:
        return self.file_state is FileState.VALID_IMAGE_FILE

    def _error(self, message: str) -> ImageError:
        self.message = message
        return ImageError(message)

    def _offset(self, x: int, y: int) -> int:
        return self.info.channels * (y * self.info.width + x)

    def get_pixel(self, x: int, y: int) -> Pixel:
        i = self._offset(x, y)
        data = self.pixel_data
        if self.info.channels == 4:
            return Pixel(data[i], data[i + 1], data[i + 2], data[i + 3])
        return Pixel(data[i], data[i + 1], data[i + 2])

    def set_pixel(self, x: int, y: int, pixel: Pixel) -> None:
        i = self._offset(x, y)
        self.pixel_data[i] = pixel.red
        self.pixel_data[i + 1] = pixel.green
        self.pixel_data[i + 2] = pixel.blue
        if self.info.channels == 4:
            self.pixel_data[i + 3] = pixel.alpha

    def save(self) -> None:
        """Write the image to its path; formats without a writer raise ImageError."""
        raise self._error(f"Saving {self.image_type.name} images is not supported")