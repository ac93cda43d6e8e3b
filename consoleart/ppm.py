"""Plain-text PPM images."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from consoleart.image import FileState, Image, ImageError, ImageType, Pixel

_PPM_FILE_TYPE = 806


@dataclass
class HeaderPPM:
    format: str = "P3"
    width: int = 0
    height: int = 0
    max_color_val: int = 255


def _is_number(token: str) -> bool:
    return token.isascii() and token.isdigit()


def parse_ppm(text: str) -> tuple[HeaderPPM, bytearray]:
    """Parse PPM text into its header and RGB bytes."""
    lines = text.splitlines()
    magic = lines[0].strip() if lines else ""
    if magic not in ("P3", "P6"):
        raise ImageError("Not a PPM file")
    header = HeaderPPM()
    dimensions = lines[1].split() if len(lines) > 1 else []
    if not dimensions or not _is_number(dimensions[0]):
        raise ImageError("Missing width info")
    header.width = int(dimensions[0])
    if len(dimensions) < 2 or not _is_number(dimensions[1]):
        raise ImageError("Missing height info")
    header.height = int(dimensions[1])
    colour = lines[2].strip() if len(lines) > 2 else ""
    if not _is_number(colour):
        raise ImageError("Missing color info")
    header.max_color_val = int(colour)

    pixel_data = bytearray(header.width * header.height * 3)
    tokens = (token for line in lines[3:] for token in line.split())
    for index, token in enumerate(tokens):
        if index >= len(pixel_data):
            raise ImageError("More color values than pixels")
        try:
            pixel_data[index] = int(token) & 0xFF
        except ValueError as exc:
            raise ImageError(f"Invalid color value: {token}") from exc
    return header, pixel_data


class ImagePPM(Image):
    """An RGB image stored as ASCII PPM text."""

    def __init__(self, filepath: str | Path) -> None:
        super().__init__(filepath, ImageType.PPM)
        self.header = HeaderPPM()
        try:
            text = Path(self.filepath).read_text(encoding="latin-1")
        except OSError as exc:
            raise self._error(f"Unable to open file: {self.info.name}") from exc
        try:
            self.header, self.pixel_data = parse_ppm(text)
        except ImageError as exc:
            raise self._error(f"{exc}: {self.info.name}") from exc
        self._sync_info()
        self.file_state = FileState.VALID_IMAGE_FILE

    @classmethod
    def blank(cls, filepath: str | Path, width: int, height: int) -> "ImagePPM":
        """A new white image of the given size, not yet written anywhere."""
        image = cls.__new__(cls)
        Image.__init__(image, filepath, ImageType.PPM)
        image.header = HeaderPPM(width=width, height=height)
        image.pixel_data = bytearray(b"\xff" * (width * height * 3))
        image._sync_info()
        return image

    def _sync_info(self) -> None:
        self.info.width = self.header.width
        self.info.height = self.header.height
        self.info.channels = 3
        self.info.bits = 24
        self.info.file_type = _PPM_FILE_TYPE

    def _index(self, x: int, y: int) -> int:
        return 3 * (y * self.header.width + x)

    def get_pixel(self, x: int, y: int) -> Pixel:
        i = self._index(x, y)
        data = self.pixel_data
        return Pixel(data[i], data[i + 1], data[i + 2])

    def set_pixel(self, x: int, y: int, pixel: Pixel) -> None:
        i = self._index(x, y)
        self.pixel_data[i] = pixel.red
        self.pixel_data[i + 1] = pixel.green
        self.pixel_data[i + 2] = pixel.blue

    def virtual_artist_legacy(self) -> None:
        """Paint the 255x255 coordinate pattern and save it."""
        self.header.width = 255
        self.header.height = 255
        self.pixel_data = bytearray(255 * 255 * 3)
        self._sync_info()
        for y in range(self.header.height):
            for x in range(self.header.width):
                self.set_pixel(x, y, Pixel(x % 256, y % 256, (x * y) % 256))
        self.save()

    def save(self) -> None:
        header = self.header
        lines = [header.format, f"{header.width} {header.height}", str(header.max_color_val)]
        for y in range(header.height):
            pixels = (self.get_pixel(x, y) for x in range(header.width))
            lines.append(" ".join(f"{p.red} {p.green} {p.blue}" for p in pixels))
        Path(self.filepath).write_text("\n".join(lines) + "\n", encoding="ascii")