"""PCX images: 24-bit planar true colour and 8-bit VGA palette files."""

from __future__ import annotations

import itertools
import struct
from dataclasses import dataclass, field, fields, replace
from pathlib import Path

from consoleart.image import FileState, Image, ImageError, ImageInfo, ImageType, Pixel

_HEADER = struct.Struct("<4B6H48s2B4H54s")
HEADER_SIZE = _HEADER.size
MANUFACTURER = 0x0A
_VGA_MARKER = 0x0C
_PALETTE_BYTES = 768


@dataclass
class HeaderPCX:
    """The fixed 128-byte PCX file header."""

    file_type: int = MANUFACTURER
    version: int = 5
    encoding: int = 1
    bits_per_pixel: int = 8
    x_min: int = 0
    y_min: int = 0
    x_max: int = 0
    y_max: int = 0
    h_dpi: int = 0
    v_dpi: int = 0
    ega_palette: bytes = bytes(48)
    reserved: int = 0
    num_of_color_planes: int = 3
    bytes_per_line: int = 0
    palette_type: int = 0
    h_screen_size: int = 0
    v_screen_size: int = 0
    padding: bytes = bytes(54)

    @classmethod
    def unpack(cls, data: bytes) -> "HeaderPCX":
        if len(data) < HEADER_SIZE:
            raise ImageError("Truncated PCX header")
        return cls(*_HEADER.unpack_from(data))

    def pack(self) -> bytes:
        return _HEADER.pack(*(getattr(self, f.name) for f in fields(self)))

    def is_vga(self) -> bool:
        """True for a version 5, single plane image with a 256-colour palette."""
        return self.version == 5 and self.num_of_color_planes == 1 and self.bits_per_pixel > 4

    @property
    def width(self) -> int:
        return self.x_max - self.x_min + 1

    @property
    def height(self) -> int:
        return self.y_max - self.y_min + 1


@dataclass
class PagePCX:
    """One decoded PCX picture: header, metadata, planar pixels and palette."""

    header: HeaderPCX
    info: ImageInfo = field(default_factory=ImageInfo)
    pixel_data: bytearray = field(default_factory=bytearray)
    palette: list[tuple[int, int, int]] | None = None


def decode_rle(data: bytes) -> bytearray:
    """Expand PCX run-length encoded bytes."""
    out = bytearray()
    stream = iter(data)
    for byte in stream:
        if byte >> 6 != 3:
            out.append(byte)
            continue
        value = next(stream, None)
        if value is None:
            break
        out.extend(bytes([value]) * (byte & 0x3F))
    return out


def encode_rle(pixel_data: bytes) -> bytes:
    """Run-length encode bytes the PCX way; only bytes of 0xC0 and above form runs."""
    out = bytearray()
    for value, group in itertools.groupby(bytes(pixel_data)):
        run = sum(1 for _ in group)
        if value >> 6 != 3:
            out.extend(bytes([value]) * run)
            continue
        full, rest = divmod(run, 63)
        out.extend(bytes([0xFF, value]) * full)
        if rest:
            out.extend((0xC0 | rest, value))
    return bytes(out)


def _check_header(header: HeaderPCX) -> None:
    if header.file_type != MANUFACTURER:
        raise ImageError("Unrecognized format")
    if header.num_of_color_planes != 3 and header.bits_per_pixel == 8 and not header.is_vga():
        raise ImageError("This reader works only with 24-bit and 32-bit true color and VGA images")
    if header.version != 5:
        raise ImageError("Outdated versions are not supported")


def _read_vga_palette(data: bytes, end: int) -> list[tuple[int, int, int]]:
    marker = end - _PALETTE_BYTES - 1
    if marker < 0 or data[marker] != _VGA_MARKER:
        raise ImageError("Error during palette loading")
    table = data[marker + 1:end]
    if len(table) < _PALETTE_BYTES:
        raise ImageError("Error during palette loading")
    return [tuple(table[i:i + 3]) for i in range(0, _PALETTE_BYTES, 3)]


def _vga_to_planar(indices: bytes, page: PagePCX) -> bytearray:
    width, height = page.info.width, page.info.height
    if len(indices) < width * height:
        raise ImageError("Not enough image data")
    palette = page.palette or []
    planar = bytearray(width * height * 3)
    for y in range(height):
        colours = [palette[i] for i in indices[y * width:(y + 1) * width]]
        base = y * 3 * width
        for plane in range(3):
            start = base + plane * width
            planar[start:start + width] = bytes(colour[plane] for colour in colours)
    return planar


def read_pcx(data: bytes, start: int = 0, end: int | None = None) -> PagePCX:
    """Decode the PCX picture stored in ``data[start:end]``."""
    if end is None:
        end = len(data)
    header = HeaderPCX.unpack(data[start:start + HEADER_SIZE])
    info = ImageInfo(
        width=header.width,
        height=header.height,
        file_type=header.file_type,
        bits=header.num_of_color_planes * 8,
        planar=True,
    )
    _check_header(header)
    page = PagePCX(header=header, info=info)
    body_start = start + HEADER_SIZE
    planes = header.num_of_color_planes
    if planes == 1:
        info.palette = True
        if not header.is_vga():
            raise ImageError("Error during palette loading")
        page.palette = _read_vga_palette(data, end)
        body = data[body_start:end - _PALETTE_BYTES - 1]
        indices = decode_rle(body) if header.encoding == 1 else bytes(body[:info.width * info.height])
        page.pixel_data = _vga_to_planar(indices, page)
        header.num_of_color_planes = 3
        info.bits = 24
    elif planes in (3, 4):
        if header.encoding == 0:
            raise ImageError("Uncompressed image data are not supported for 24 and 32 bit images")
        page.pixel_data = decode_rle(data[body_start:end])
    else:
        raise ImageError("Unexpected number of color planes")
    return page


def write_pcx(page: PagePCX) -> bytes:
    """Encode a true-colour page as PCX bytes."""
    if page.header.num_of_color_planes not in (3, 4):
        raise ImageError("Unexpected number of color planes")
    return page.header.pack() + encode_rle(page.pixel_data)


class ImagePCX(Image):
    """A PCX file held with planar rows: all reds, then greens, then blues."""

    def __init__(self, filepath: str | Path) -> None:
        super().__init__(filepath, ImageType.PCX)
        self.info.planar = True
        self._header = HeaderPCX()
        self.palette: list[tuple[int, int, int]] | None = None
        try:
            data = Path(self.filepath).read_bytes()
        except OSError as exc:
            raise self._error(f"Unable to open file: {self.info.name}") from exc
        try:
            page = read_pcx(data)
        except ImageError as exc:
            raise self._error(str(exc)) from exc
        name = self.info.name
        self._header = page.header
        self.info = page.info
        self.info.name = name
        self.pixel_data = page.pixel_data
        self.palette = page.palette
        self.file_state = FileState.VALID_IMAGE_FILE

    @property
    def header(self) -> HeaderPCX:
        return self._header

    def get_pixel(self, x: int, y: int) -> Pixel:
        header = self._header
        line = header.bytes_per_line
        i = y * line * header.num_of_color_planes + x
        pixel = Pixel()
        if header.num_of_color_planes in (3, 4):
            data = self.pixel_data
            pixel.red = data[i]
            pixel.green = data[i + line]
            pixel.blue = data[i + 2 * line]
            if header.num_of_color_planes == 4:
                pixel.alpha = data[i + 3 * line]
        return pixel

    def set_pixel(self, x: int, y: int, pixel: Pixel) -> None:
        width = self.info.width
        i = y * 3 * width + x
        planes = self._header.num_of_color_planes
        if planes not in (3, 4):
            return
        if planes == 4:
            self.pixel_data[i + 3 * width] = pixel.alpha
        self.pixel_data[i] = pixel.red
        self.pixel_data[i + width] = pixel.green
        self.pixel_data[i + 2 * width] = pixel.blue

    def to_page(self) -> PagePCX:
        return PagePCX(
            header=replace(self._header),
            info=replace(self.info),
            pixel_data=bytearray(self.pixel_data),
            palette=self.palette,
        )

    def save(self) -> None:
        try:
            encoded = write_pcx(self.to_page())
        except ImageError as exc:
            raise self._error(str(exc)) from exc
        Path(self.filepath).write_bytes(encoded)