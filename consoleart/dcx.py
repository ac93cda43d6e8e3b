"""DCX images: a table of offsets followed by several PCX pages."""

from __future__ import annotations

import itertools
import struct
from dataclasses import replace
from pathlib import Path
from typing import Iterable

from consoleart.image import FileState, Image, ImageError, ImageType, Pixel
from consoleart.pcx import HeaderPCX, PagePCX, read_pcx, write_pcx

MAGIC = 0x3ADE68B1
_U32 = struct.Struct("<I")


def read_dcx(data: bytes) -> list[PagePCX]:
    """Decode every readable PCX page of a DCX file; unreadable pages are skipped."""
    if len(data) < _U32.size or _U32.unpack_from(data)[0] != MAGIC:
        raise ImageError("Not a DCX file")
    table = data[_U32.size:]
    offsets: list[int] = []
    for (offset,) in _U32.iter_unpack(table[:len(table) - len(table) % _U32.size]):
        if offset == 0:
            break
        offsets.append(offset)
    else:
        raise ImageError("Malformed DCX offset table")
    if not offsets:
        raise ImageError("DCX file holds no PCX pages")
    pages = []
    for start, end in zip(offsets, offsets[1:] + [len(data)]):
        try:
            page = read_pcx(data, start, end)
        except ImageError:
            continue
        page.info.multipage = True
        pages.append(page)
    return pages


def write_dcx(pages: Iterable[PagePCX]) -> bytes:
    """Encode pages as a DCX file."""
    bodies = [write_pcx(page) for page in pages]
    if not bodies:
        raise ImageError("No pages to write")
    table_end = _U32.size * (len(bodies) + 2)
    offsets = itertools.accumulate((len(body) for body in bodies[:-1]), initial=table_end)
    table = b"".join(_U32.pack(offset) for offset in offsets)
    return _U32.pack(MAGIC) + table + _U32.pack(0) + b"".join(bodies)


class ImageDCX(Image):
    """A multipage PCX container; one page at a time is selected for pixel access."""

    def __init__(self, filepath: str | Path, pages: Iterable[PagePCX] | None = None) -> None:
        super().__init__(filepath, ImageType.DCX)
        self.info.multipage = True
        self.info.planar = True
        self._pages: list[PagePCX] = []
        self._selected = 0
        self._header = HeaderPCX()
        if pages is None:
            self._load()
        else:
            self._pages = list(pages)
            self.select_page(0)

    def _load(self) -> None:
        try:
            data = Path(self.filepath).read_bytes()
        except OSError as exc:
            raise self._error(f"Unable to open file: {self.info.name}") from exc
        try:
            pages = read_dcx(data)
        except ImageError as exc:
            raise self._error(str(exc)) from exc
        name = self.filename()
        for page in pages:
            page.info.name = name
        self._pages = pages
        self.select_page(0)
        self.file_state = FileState.VALID_IMAGE_FILE

    def get_pixel(self, x: int, y: int) -> Pixel:
        header = self._header
        width = self.info.width
        i = y * header.bytes_per_line * header.num_of_color_planes + x
        pixel = Pixel()
        if header.num_of_color_planes in (3, 4):
            data = self.pixel_data
            pixel.red = data[i]
            pixel.green = data[i + header.bytes_per_line]
            pixel.blue = data[i + 2 * width]
            if header.num_of_color_planes == 4:
                pixel.alpha = data[i + 3 * width]
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

    def add_page(self, page: PagePCX) -> None:
        self._pages.append(page)

    def select_page(self, index: int) -> None:
        """Make page ``index`` current; an index outside the pages is ignored."""
        if 0 <= index < len(self._pages):
            page = self._pages[index]
            self._selected = index
            self.pixel_data = bytearray(page.pixel_data)
            self.info = replace(page.info)
            self._header = page.header

    def selected_page_index(self) -> int:
        return self._selected

    def selected_page(self) -> PagePCX:
        return self._pages[self._selected]

    def page_count(self) -> int:
        return len(self._pages)

    def save(self) -> None:
        try:
            encoded = write_dcx(self._pages)
        except ImageError as exc:
            raise self._error(str(exc)) from exc
        Path(self.filepath).write_bytes(encoded)