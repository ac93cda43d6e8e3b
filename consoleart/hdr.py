"""Radiance RGBE (.hdr) images with floating-point pixels."""

from __future__ import annotations

import itertools
import math
from pathlib import Path
from typing import Sequence

from consoleart.image import FileState, Image, ImageError, ImageType, Pixel, PixelHDR

_MAGICS = ("#?RADIANCE", "#?RGBE")
_FORMAT = "FORMAT=32-bit_rle_rgbe"
_MAX_RUN = 127
_MAX_LITERAL = 128
_GAMMA = 1.0 / 2.0


def _read_line(data: bytes, pos: int) -> tuple[str, int]:
    end = data.find(b"\n", pos)
    if end < 0:
        raise ImageError("Truncated HDR header")
    return data[pos:end].decode("latin-1"), end + 1


def _flat(data: bytes, pos: int, size: int) -> bytearray:
    chunk = data[pos:pos + size]
    if len(chunk) < size:
        raise ImageError("Truncated HDR data")
    return bytearray(chunk)


def _decode_component(data: bytes, pos: int, width: int) -> tuple[bytearray, int]:
    component = bytearray()
    while len(component) < width:
        if pos >= len(data):
            raise ImageError("Truncated HDR data")
        count = data[pos]
        pos += 1
        left = width - len(component)
        if count > 128:
            count -= 128
            if count > left:
                raise ImageError("Bad RLE data in HDR")
            if pos >= len(data):
                raise ImageError("Truncated HDR data")
            component.extend(bytes([data[pos]]) * count)
            pos += 1
        else:
            if count == 0 or count > left:
                raise ImageError("Bad RLE data in HDR")
            chunk = data[pos:pos + count]
            if len(chunk) < count:
                raise ImageError("Truncated HDR data")
            component += chunk
            pos += count
    return component, pos


def _decode_pixels(data: bytes, pos: int, width: int, height: int) -> bytearray:
    total = width * height * 4
    if width < 8 or width >= 32768:
        return _flat(data, pos, total)
    out = bytearray()
    for _ in range(height):
        head = data[pos:pos + 4]
        if len(head) < 4:
            raise ImageError("Truncated HDR data")
        if head[0] != 2 or head[1] != 2 or head[2] & 0x80:
            # Not run-length encoded: the rest of the image is flat RGBE.
            out += _flat(data, pos, total - len(out))
            return out
        if (head[2] << 8 | head[3]) != width:
            raise ImageError("Invalid decoded scanline length")
        pos += 4
        row = bytearray(width * 4)
        for channel in range(4):
            component, pos = _decode_component(data, pos, width)
            row[channel::4] = component
        out += row
    return out


def _rgbe_to_floats(rgbe: bytes) -> list[float]:
    values: list[float] = []
    for red, green, blue, exponent in zip(*[iter(rgbe)] * 4):
        if exponent:
            scale = math.ldexp(1.0, exponent - (128 + 8))
            values.extend((red * scale, green * scale, blue * scale))
        else:
            values.extend((0.0, 0.0, 0.0))
    return values


def read_radiance(data: bytes) -> tuple[int, int, int, list[float]]:
    """Decode a Radiance file into ``(width, height, channels, values)``."""
    line, pos = _read_line(data, 0)
    if line not in _MAGICS:
        raise ImageError("Not a Radiance HDR file")
    valid = False
    while True:
        line, pos = _read_line(data, pos)
        if not line:
            break
        if line == _FORMAT:
            valid = True
    if not valid:
        raise ImageError("Unsupported HDR format")
    line, pos = _read_line(data, pos)
    tokens = line.split()
    if len(tokens) != 4 or tokens[0] != "-Y" or tokens[2] != "+X":
        raise ImageError("Unsupported HDR data layout")
    try:
        height, width = int(tokens[1]), int(tokens[3])
    except ValueError as exc:
        raise ImageError("Unsupported HDR data layout") from exc
    if width <= 0 or height <= 0:
        raise ImageError("Invalid HDR dimensions")
    rgbe = _decode_pixels(data, pos, width, height)
    return width, height, 3, _rgbe_to_floats(rgbe)


def _to_rgbe(red: float, green: float, blue: float) -> bytes:
    highest = max(red, green, blue)
    if highest < 1e-32:
        return bytes(4)
    mantissa, exponent = math.frexp(highest)
    if not 0 <= exponent + 128 <= 255:
        raise ImageError(f"Value {highest} cannot be stored in RGBE")
    scale = mantissa * 256.0 / highest
    return bytes((
        int(max(red, 0.0) * scale),
        int(max(green, 0.0) * scale),
        int(max(blue, 0.0) * scale),
        exponent + 128,
    ))


def _encode_component(component: bytes) -> bytes:
    out = bytearray()
    literal = bytearray()

    def flush() -> None:
        for start in range(0, len(literal), _MAX_LITERAL):
            chunk = literal[start:start + _MAX_LITERAL]
            out.append(len(chunk))
            out.extend(chunk)
        literal.clear()

    for value, group in itertools.groupby(component):
        run = sum(1 for _ in group)
        if run < 3:
            literal.extend(bytes([value]) * run)
            continue
        flush()
        full, rest = divmod(run, _MAX_RUN)
        out.extend(bytes((128 + _MAX_RUN, value)) * full)
        if rest >= 3:
            out.extend((128 + rest, value))
        else:
            literal.extend(bytes([value]) * rest)
    flush()
    return bytes(out)


def write_radiance(width: int, height: int, channels: int, values: Sequence[float]) -> bytes:
    """Encode float pixels as a run-length compressed Radiance file."""
    if channels not in (1, 2, 3, 4):
        raise ImageError(f"Unsupported channel count: {channels}")
    if width <= 0 or height <= 0:
        raise ImageError("Invalid HDR dimensions")
    if len(values) != width * height * channels:
        raise ImageError("Pixel value count does not match the image size")
    header = f"#?RADIANCE\n{_FORMAT}\n\n-Y {height} +X {width}\n".encode("ascii")
    out = bytearray(header)
    row_size = width * channels
    for row_start in range(0, len(values), row_size):
        row = values[row_start:row_start + row_size]
        pixels = [row[i:i + channels] for i in range(0, row_size, channels)]
        rgbe = b"".join(
            _to_rgbe(p[0], p[0], p[0]) if channels < 3 else _to_rgbe(p[0], p[1], p[2])
            for p in pixels
        )
        if width < 8 or width >= 32768:
            out += rgbe
            continue
        out += bytes((2, 2, width >> 8, width & 0xFF))
        for channel in range(4):
            out += _encode_component(rgbe[channel::4])
    return bytes(out)


class ImageHDR(Image):
    """A Radiance image kept as floats, with an optional gamma-corrected 8-bit copy."""

    def __init__(self, filepath: str | Path, convert: bool = False) -> None:
        super().__init__(filepath, ImageType.HDR)
        self.pixel_data_hdr: list[float] = []
        try:
            data = Path(self.filepath).read_bytes()
        except OSError as exc:
            raise self._error("Image loading failed.") from exc
        try:
            width, height, channels, values = read_radiance(data)
        except ImageError as exc:
            raise self._error(f"Image loading failed: {exc}") from exc
        self.info.width = width
        self.info.height = height
        self.info.channels = channels
        self.info.bits = channels * 8
        self.info.hdr = True
        self.pixel_data_hdr = values
        self.file_state = FileState.VALID_IMAGE_FILE
        if convert:
            self.convert_to_8bit()

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.info.width and 0 <= y < self.info.height

    def _index(self, x: int, y: int) -> int:
        return (y * self.info.width + x) * self.info.channels

    def get_pixel_hdr(self, x: int, y: int) -> PixelHDR:
        """The float pixel at ``(x, y)``; a default pixel outside the image."""
        if not self._inside(x, y):
            return PixelHDR()
        i = self._index(x, y)
        data = self.pixel_data_hdr
        channels = self.info.channels
        return PixelHDR(
            data[i],
            data[i + 1],
            data[i + 2] if channels > 2 else 0.0,
            data[i + 3] if channels > 3 else 1.0,
        )

    def set_pixel_hdr(self, x: int, y: int, pixel: PixelHDR) -> None:
        """Store a float pixel; positions outside the image are ignored."""
        if not self._inside(x, y):
            return
        i = self._index(x, y)
        channels = self.info.channels
        self.pixel_data_hdr[i] = pixel.red
        self.pixel_data_hdr[i + 1] = pixel.green
        if channels > 2:
            self.pixel_data_hdr[i + 2] = pixel.blue
        if channels > 3:
            self.pixel_data_hdr[i + 3] = pixel.alpha

    def convert_to_8bit(self) -> None:
        """Fill the 8-bit buffer from the floats, clamped to [0, 1] and gamma corrected."""
        if not self.pixel_data_hdr:
            return
        self.pixel_data = bytearray(
            int(math.pow(min(max(value, 0.0), 1.0), _GAMMA) * 255.0)
            for value in self.pixel_data_hdr
        )

    def convert_from_8bit(self) -> None:
        """Fill the float buffer from the 8-bit one, scaled to [0, 1]."""
        if not self.pixel_data:
            return
        self.pixel_data_hdr = [value / 255.0 for value in self.pixel_data]

    def get_pixel(self, x: int, y: int) -> Pixel:
        """The 8-bit pixel at ``(x, y)``; a default pixel outside the image."""
        if not self._inside(x, y):
            return Pixel()
        i = self._index(x, y)
        data = self.pixel_data
        channels = self.info.channels
        return Pixel(
            data[i],
            data[i + 1],
            data[i + 2] if channels > 2 else 0,
            data[i + 3] if channels > 3 else 255,
        )

    def set_pixel(self, x: int, y: int, pixel: Pixel) -> None:
        """Store an 8-bit pixel; positions outside the image are ignored."""
        if not self._inside(x, y):
            return
        i = self._index(x, y)
        channels = self.info.channels
        self.pixel_data[i] = pixel.red
        self.pixel_data[i + 1] = pixel.green
        if channels > 2:
            self.pixel_data[i + 2] = pixel.blue
        if channels > 3:
            self.pixel_data[i + 3] = pixel.alpha

    def save(self) -> None:
        if not self.pixel_data_hdr:
            raise self._error("No HDR pixel data to save")
        try:
            encoded = write_radiance(
                self.info.width, self.info.height, self.info.channels, self.pixel_data_hdr
            )
        except ImageError as exc:
            raise self._error(str(exc)) from exc
        try:
            Path(self.filepath).write_bytes(encoded)
        except OSError as exc:
            raise self._error(f"Unable to write {self.filepath}") from exc