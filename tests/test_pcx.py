import pytest

from consoleart.image import ImageError, Pixel
from consoleart.pcx import (
    HEADER_SIZE,
    HeaderPCX,
    ImagePCX,
    decode_rle,
    encode_rle,
    read_pcx,
    write_pcx,
)


def _truecolor_bytes(rows, **overrides):
    width, height = len(rows[0]), len(rows)
    header = HeaderPCX(
        x_max=width - 1, y_max=height - 1, bytes_per_line=width, num_of_color_planes=3
    )
    for key, value in overrides.items():
        setattr(header, key, value)
    planar = bytearray()
    for row in rows:
        for plane in range(3):
            planar += bytes(p[plane] for p in row)
    return header.pack() + encode_rle(planar)


ROWS = [
    [(10, 20, 30), (200, 201, 255)],
    [(0, 1, 2), (192, 192, 192)],
]


def _vga_bytes():
    header = HeaderPCX(
        x_max=1, y_max=0, bytes_per_line=2, num_of_color_planes=1, bits_per_pixel=8
    )
    palette = bytearray(768)
    palette[0:6] = bytes([10, 20, 30, 40, 50, 60])
    return header.pack() + encode_rle(bytes([0, 1])) + b"\x0c" + bytes(palette)


def test_header_round_trip_and_size():
    header = HeaderPCX(x_max=9, y_max=4, bytes_per_line=10)
    packed = header.pack()
    assert len(packed) == HEADER_SIZE == 128
    assert packed[0] == 0x0A
    assert HeaderPCX.unpack(packed) == header


def test_header_truncated_raises():
    with pytest.raises(ImageError):
        HeaderPCX.unpack(b"\x0a\x05")


def test_is_vga():
    assert HeaderPCX(num_of_color_planes=1, bits_per_pixel=8).is_vga()
    assert not HeaderPCX(num_of_color_planes=3, bits_per_pixel=8).is_vga()
    assert not HeaderPCX(version=3, num_of_color_planes=1, bits_per_pixel=8).is_vga()


def test_decode_rle_expands_runs():
    assert decode_rle(bytes([0xC3, 0x07, 0x05])) == bytes([7, 7, 7, 5])


def test_encode_rle_runs_only_high_bytes():
    assert encode_rle(bytes([0xC5, 0xC5, 0xC5, 0x01])) == bytes([0xC3, 0xC5, 0x01])
    assert encode_rle(bytes([4, 4])) == bytes([4, 4])


@pytest.mark.parametrize(
    "data",
    [b"", bytes(range(256)), bytes([0xFF] * 200), bytes([0xC0, 1, 0xC0, 0xC0]) * 30],
)
def test_rle_round_trip(data):
    assert decode_rle(encode_rle(data)) == data


def test_read_pcx_truecolor():
    page = read_pcx(_truecolor_bytes(ROWS))
    assert page.info.width == 2
    assert page.info.height == 2
    assert page.info.bits == 24
    assert bytes(page.pixel_data[0:6]) == bytes([10, 200, 20, 201, 30, 255])


def test_image_pcx_loads_pixels(tmp_path):
    path = tmp_path / "pic.pcx"
    path.write_bytes(_truecolor_bytes(ROWS))
    img = ImagePCX(path)
    assert img.is_loaded()
    assert img.info.name == "pic.pcx"
    for y, row in enumerate(ROWS):
        for x, (r, g, b) in enumerate(row):
            assert img.get_pixel(x, y) == Pixel(r, g, b)


def test_image_pcx_save_round_trip(tmp_path):
    path = tmp_path / "pic.pcx"
    path.write_bytes(_truecolor_bytes(ROWS))
    img = ImagePCX(path)
    img.set_pixel(1, 1, Pixel(5, 6, 7))
    img.save()
    again = ImagePCX(path)
    assert again.get_pixel(1, 1) == Pixel(5, 6, 7)
    assert again.get_pixel(0, 0) == Pixel(10, 20, 30)
    assert again.header == img.header


def test_vga_palette_image(tmp_path):
    page = read_pcx(_vga_bytes())
    assert page.info.palette is True
    assert page.header.num_of_color_planes == 3
    assert page.palette[1] == (40, 50, 60)
    path = tmp_path / "vga.pcx"
    path.write_bytes(_vga_bytes())
    img = ImagePCX(path)
    assert img.get_pixel(0, 0) == Pixel(10, 20, 30)
    assert img.get_pixel(1, 0) == Pixel(40, 50, 60)


def test_vga_without_palette_marker():
    data = bytearray(_vga_bytes())
    data[-769] = 0
    with pytest.raises(ImageError, match="palette"):
        read_pcx(bytes(data))


def test_unrecognized_manufacturer():
    with pytest.raises(ImageError, match="Unrecognized format"):
        read_pcx(_truecolor_bytes(ROWS, file_type=0x0B))


def test_outdated_version():
    with pytest.raises(ImageError, match="Outdated"):
        read_pcx(_truecolor_bytes(ROWS, version=3))


def test_uncompressed_truecolor_rejected():
    with pytest.raises(ImageError, match="Uncompressed"):
        read_pcx(_truecolor_bytes(ROWS, encoding=0))


def test_missing_file_raises(tmp_path):
    with pytest.raises(ImageError, match="Unable to open file"):
        ImagePCX(tmp_path / "absent.pcx")


def test_to_page_and_write_round_trip():
    page = read_pcx(_truecolor_bytes(ROWS))
    again = read_pcx(write_pcx(page))
    assert again.pixel_data == page.pixel_data
    assert again.header == page.header


def test_write_pcx_rejects_palette_planes():
    page = read_pcx(_truecolor_bytes(ROWS))
    page.header.num_of_color_planes = 1
    with pytest.raises(ImageError):
        write_pcx(page)