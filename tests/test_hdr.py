import pytest

from consoleart.hdr import ImageHDR, read_radiance, write_radiance
from consoleart.image import ImageError, Pixel, PixelHDR

SMALL = [
    1.0, 0.5, 0.25,
    0.0, 0.0, 0.0,
    2.0, 4.0, 8.0,
    0.125, 0.0, 0.0625,
]


def _wide_values():
    first = [1.0, 0.5, 0.25] * 8
    second = [v for i in range(8) for v in ((2.0, 4.0, 8.0) if i % 2 else (0.125, 0.0, 0.0625))]
    return first + second


@pytest.fixture
def hdr_file(tmp_path):
    path = tmp_path / "small.hdr"
    path.write_bytes(write_radiance(2, 2, 3, SMALL))
    return path


def test_header_starts_with_radiance_magic():
    data = write_radiance(2, 2, 3, SMALL)
    assert data.startswith(b"#?RADIANCE\n")
    assert b"FORMAT=32-bit_rle_rgbe\n\n-Y 2 +X 2\n" in data


def test_flat_round_trip():
    width, height, channels, values = read_radiance(write_radiance(2, 2, 3, SMALL))
    assert (width, height, channels) == (2, 2, 3)
    assert values == SMALL


def test_rle_round_trip():
    values = _wide_values()
    width, height, channels, decoded = read_radiance(write_radiance(8, 2, 3, values))
    assert (width, height, channels) == (8, 2, 3)
    assert decoded == values


def test_rle_compresses_uniform_rows():
    values = [1.0, 0.5, 0.25] * (16 * 4)
    data = write_radiance(16, 4, 3, values)
    header = write_radiance(2, 2, 3, SMALL).split(b"-Y")[0]
    assert len(data) < len(header) + 32 + 16 * 4 * 4
    assert read_radiance(data)[3] == values


def test_single_channel_becomes_grey():
    _, _, channels, values = read_radiance(write_radiance(2, 1, 1, [0.5, 1.0]))
    assert channels == 3
    assert values == [0.5, 0.5, 0.5, 1.0, 1.0, 1.0]


def test_value_count_mismatch_raises():
    with pytest.raises(ImageError):
        write_radiance(2, 2, 3, SMALL[:-1])


def test_bad_magic_raises():
    with pytest.raises(ImageError, match="Not a Radiance"):
        read_radiance(b"P3\n2 2\n255\n")


def test_missing_format_raises():
    with pytest.raises(ImageError):
        read_radiance(b"#?RADIANCE\n\n-Y 1 +X 1\n\x00\x00\x00\x00")


def test_truncated_rle_data_raises():
    data = write_radiance(8, 2, 3, _wide_values())
    with pytest.raises(ImageError):
        read_radiance(data[:-5])


def test_truncated_flat_data_raises():
    data = write_radiance(2, 2, 3, SMALL)
    with pytest.raises(ImageError):
        read_radiance(data[:-1])


def test_image_loads_float_pixels(hdr_file):
    image = ImageHDR(hdr_file)
    assert image.is_loaded()
    assert image.info.hdr
    assert (image.info.width, image.info.height, image.info.channels) == (2, 2, 3)
    assert image.get_pixel_hdr(0, 0) == PixelHDR(1.0, 0.5, 0.25, 1.0)
    assert image.get_pixel_hdr(1, 1) == PixelHDR(0.125, 0.0, 0.0625, 1.0)


def test_image_out_of_bounds_is_default(hdr_file):
    image = ImageHDR(hdr_file, convert=True)
    assert image.get_pixel_hdr(2, 0) == PixelHDR()
    assert image.get_pixel(-1, 0) == Pixel()


def test_convert_to_8bit(hdr_file):
    image = ImageHDR(hdr_file, convert=True)
    assert len(image.pixel_data) == len(image.pixel_data_hdr)
    pixel = image.get_pixel(0, 0)
    assert pixel.red == 255
    assert pixel.blue < pixel.green < pixel.red
    assert image.get_pixel(1, 0) == Pixel(0, 0, 0, 255)
    assert image.get_pixel(0, 1).red == 255


def test_without_convert_has_no_8bit_data(hdr_file):
    image = ImageHDR(hdr_file)
    assert len(image.pixel_data) == 0


def test_convert_from_8bit(hdr_file):
    image = ImageHDR(hdr_file, convert=True)
    image.set_pixel(1, 0, Pixel(255, 0, 255))
    image.convert_from_8bit()
    assert image.get_pixel_hdr(1, 0) == PixelHDR(1.0, 0.0, 1.0, 1.0)


def test_set_pixel_hdr_and_save_round_trip(hdr_file):
    image = ImageHDR(hdr_file)
    image.set_pixel_hdr(1, 0, PixelHDR(0.5, 0.25, 0.125))
    image.set_pixel_hdr(9, 9, PixelHDR(1.0, 1.0, 1.0))
    image.save()
    reloaded = ImageHDR(hdr_file)
    assert reloaded.get_pixel_hdr(1, 0) == PixelHDR(0.5, 0.25, 0.125, 1.0)
    assert reloaded.pixel_data_hdr == image.pixel_data_hdr


def test_save_without_data_raises(hdr_file):
    image = ImageHDR(hdr_file)
    image.pixel_data_hdr = []
    with pytest.raises(ImageError):
        image.save()


def test_missing_file_raises(tmp_path):
    with pytest.raises(ImageError, match="Image loading failed."):
        ImageHDR(tmp_path / "missing.hdr")