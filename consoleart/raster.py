"""PNG, JPEG and TGA images held as interleaved 8-bit channels."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from PIL import Image as PILImage

from consoleart.image import FileState, Image, ImageError, ImageType, Pixel

_MODES = {1: "L", 2: "LA", 3: "RGB", 4: "RGBA"}
_CHANNELS = {mode: channels for channels, mode in _MODES.items()}


def _native(picture: PILImage.Image) -> PILImage.Image:
    """Bring a decoded picture to one of the 1 to 4 channel 8-bit layouts."""
    if picture.mode in _CHANNELS:
        return picture
    if picture.mode == "1":
        return picture.convert("L")
    has_alpha = "A" in picture.getbands() or "transparency" in picture.info
    return picture.convert("RGBA" if has_alpha else "RGB")


def _load(image: Image, failure: str) -> None:
    """Decode the file at ``image.filepath`` into ``image``'s pixel buffer."""
    try:
        with PILImage.open(image.filepath) as opened:
            picture = _native(opened)
            picture.load()
            width, height = picture.size
            channels = _CHANNELS[picture.mode]
            data = picture.tobytes()
    except (OSError, ValueError) as exc:
        raise image._error(failure) from exc
    image.info.width = width
    image.info.height = height
    image.info.channels = channels
    image.info.bits = channels * 8
    image.pixel_data = bytearray(data)
    image.file_state = FileState.VALID_IMAGE_FILE


def _save(image: Image, fmt: str, drop_alpha: bool = False, **options: Any) -> None:
    mode = _MODES.get(image.info.channels)
    if mode is None:
        raise image._error(f"Cannot save an image with {image.info.channels} channels")
    try:
        picture = PILImage.frombytes(
            mode, (image.info.width, image.info.height), bytes(image.pixel_data)
        )
        if drop_alpha and mode in ("LA", "RGBA"):
            picture = picture.convert(mode[:-1])
        picture.save(image.filepath, format=fmt, **options)
    except (OSError, ValueError) as exc:
        raise image._error(f"Saving of {image.filepath} failed") from exc


def _blank(cls: type, filepath: str | Path, image_type: ImageType, width: int, height: int, channels: int) -> Any:
    image = cls.__new__(cls)
    Image.__init__(image, filepath, image_type)
    image.info.width = width
    image.info.height = height
    image.info.channels = channels
    image.info.bits = channels * 8
    image.pixel_data = bytearray(width * height * channels)
    image.file_state = FileState.VALID_IMAGE_FILE
    return image


class ImagePNG(Image):
    """A PNG image with interleaved channels."""

    def __init__(self, filepath: str | Path) -> None:
        super().__init__(filepath, ImageType.PNG)
        _load(self, f"Loading of {self.filepath} failed")

    @classmethod
    def create(cls, filepath: str | Path, width: int, height: int, channels: int = 4) -> "ImagePNG":
        """A new zero-filled image of the given size, not yet written anywhere."""
        image = _blank(cls, filepath, ImageType.PNG, width, height, channels)
        image.info.name = image.filepath
        if channels == 4:
            image.info.bits = 32
        elif channels == 3:
            image.info.bits = 24
        else:
            image.message = "Only 24 and 32 bit images are supported-"
        return image

    def get_pixel(self, x: int, y: int) -> Pixel:
        """The pixel at ``(x, y)``; alpha is 255 without an alpha channel."""
        return super().get_pixel(x, y)

    def set_pixel(self, x: int, y: int, pixel: Pixel) -> None:
        """Store ``pixel`` at ``(x, y)``; alpha only when the image has it."""
        super().set_pixel(x, y, pixel)

    def save(self) -> None:
        _save(self, "PNG")


class ImageJPG(Image):
    """A JPEG image with interleaved channels and bounds-checked pixel access."""

    def __init__(self, filepath: str | Path) -> None:
        super().__init__(filepath, ImageType.JPG)
        _load(self, "Image loading failed.")

    @classmethod
    def create(cls, filepath: str | Path, width: int, height: int, channels: int = 3) -> "ImageJPG":
        """A new zero-filled image of the given size, not yet written anywhere."""
        return _blank(cls, filepath, ImageType.JPG, width, height, channels)

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.info.width and 0 <= y < self.info.height

    def get_pixel(self, x: int, y: int) -> Pixel:
        """The pixel at ``(x, y)``; opaque black outside the image."""
        if not self._inside(x, y):
            return Pixel(0, 0, 0, 255)
        return super().get_pixel(x, y)

    def set_pixel(self, x: int, y: int, pixel: Pixel) -> None:
        """Store ``pixel`` at ``(x, y)``; positions outside the image are ignored."""
        if self._inside(x, y):
            super().set_pixel(x, y, pixel)

    def save(self) -> None:
        _save(self, "JPEG", drop_alpha=True, quality=100)


class ImageTGA(Image):
    """A Targa image with interleaved channels."""

    def __init__(self, filepath: str | Path) -> None:
        super().__init__(filepath, ImageType.TGA)
        _load(self, f"Loading of {self.filepath} failed")

    def get_pixel(self, x: int, y: int) -> Pixel:
        """The pixel at ``(x, y)``; alpha is 255 without an alpha channel."""
        return super().get_pixel(x, y)

    def set_pixel(self, x: int, y: int, pixel: Pixel) -> None:
        """Store ``pixel`` at ``(x, y)``; alpha only when the image has it."""
        super().set_pixel(x, y, pixel)

    def save(self) -> None:
        _save(self, "TGA")