"""GIF images, possibly animated, held as RGBA frames."""

from __future__ import annotations

import io
from pathlib import Path

from PIL import Image as PILImage
from PIL import ImageSequence

from consoleart.image import FileState, Image, ImageError, ImageType, Pixel

_DEFAULT_DELAY = 100


class ImageGIF(Image):
    """A GIF decoded into one RGBA buffer per frame; one frame is selected at a time."""

    def __init__(self, filepath: str | Path) -> None:
        super().__init__(filepath, ImageType.GIF)
        self._frames: list[bytes] = []
        self._delays: list[int] = []
        self._selected = 0
        try:
            data = Path(self.filepath).read_bytes()
        except OSError as exc:
            raise self._error("Failed to open file.") from exc
        try:
            with PILImage.open(io.BytesIO(data)) as picture:
                if picture.format != "GIF":
                    raise ImageError("not GIF")
                width, height = picture.size
                for frame in ImageSequence.Iterator(picture):
                    self._frames.append(frame.convert("RGBA").tobytes())
                    self._delays.append(int(frame.info.get("duration", _DEFAULT_DELAY)))
        except ImageError as exc:
            raise self._error(str(exc)) from exc
        except (OSError, ValueError, EOFError) as exc:
            raise self._error("Failed to decode GIF.") from exc
        if not self._frames:
            raise self._error("GIF holds no frames.")
        self.info.width = width
        self.info.height = height
        self.info.bits = 32
        self.info.channels = 4
        self.info.pixel_byte_order = "RGBA"
        if len(self._frames) > 1:
            self.info.animated = True
            self.info.multipage = True
        self.pixel_data = bytearray(self._frames[0])
        self.file_state = FileState.VALID_IMAGE_FILE
        self.message = "GIF loaded successfully"

    def get_pixel(self, x: int, y: int) -> Pixel:
        """The RGBA pixel at ``(x, y)`` of the selected frame."""
        i = (y * self.info.width + x) * self.info.channels
        data = self.pixel_data
        return Pixel(data[i], data[i + 1], data[i + 2], data[i + 3])

    def set_pixel(self, x: int, y: int, pixel: Pixel) -> None:
        """Change the working copy of the selected frame; stored frames stay as loaded."""
        i = (y * self.info.width + x) * self.info.channels
        self.pixel_data[i:i + 4] = bytes((pixel.red, pixel.green, pixel.blue, pixel.alpha))

    def save(self) -> None:
        raise self._error("Saving GIF images is not supported")

    def frame(self, index: int) -> bytes:
        """RGBA bytes of frame ``index`` as loaded."""
        return self._frames[index]

    def select_page(self, index: int) -> None:
        """Make frame ``index`` current; an index outside the frames is ignored."""
        if 0 <= index < len(self._frames):
            self.pixel_data = bytearray(self._frames[index])
            self._selected = index

    def selected_page_index(self) -> int:
        return self._selected

    def frame_delay(self, index: int) -> int:
        """Display time of frame ``index`` in milliseconds."""
        return self._delays[index]

    def page_count(self) -> int:
        return len(self._frames)

    def split_into_pngs(self, directory: str | Path | None = None) -> list[Path]:
        """Write every frame as ``<index>-<name>.png`` and return the written paths."""
        target = Path(directory) if directory is not None else Path.cwd()
        name = self.filename()[:-4] + ".png"
        size = (self.info.width, self.info.height)
        written = []
        for index, data in enumerate(self._frames):
            path = target / f"{index}-{name}"
            try:
                PILImage.frombytes("RGBA", size, data).save(path, format="PNG")
            except (OSError, ValueError) as exc:
                raise self._error(f"Unable to write {path}") from exc
            written.append(path)
        return written