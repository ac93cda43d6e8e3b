import pytest

from consoleart.image import ImageError, Pixel
from consoleart.ppm import HeaderPPM, ImagePPM, parse_ppm

SAMPLE = "P3\n2 2\n255\n1 2 3 4 5 6\n7 8 9 10 11 12\n"


def test_parse_ppm():
    header, data = parse_ppm(SAMPLE)
    assert header == HeaderPPM(format="P3", width=2, height=2, max_color_val=255)
    assert bytes(data) == bytes(range(1, 13))


def test_parse_short_data_is_zero_filled():
    header, data = parse_ppm("P3\n2 1\n255\n9 9 9\n")
    assert len(data) == header.width * header.height * 3
    assert bytes(data[3:]) == bytes(3)


@pytest.mark.parametrize(
    "text, message",
    [
        ("P5\n2 2\n255\n", "Not a PPM"),
        ("", "Not a PPM"),
        ("P3\nx 2\n255\n", "width"),
        ("P3\n2 y\n255\n", "height"),
        ("P3\n2\n255\n", "height"),
        ("P3\n2 2\nmax\n", "color"),
    ],
)
def test_parse_errors(text, message):
    with pytest.raises(ImageError, match=message):
        parse_ppm(text)


def test_parse_bad_value():
    with pytest.raises(ImageError):
        parse_ppm("P3\n1 1\n255\n1 two 3\n")


def test_parse_too_many_values():
    with pytest.raises(ImageError):
        parse_ppm("P3\n1 1\n255\n1 2 3 4\n")


def test_load_from_file(tmp_path):
    path = tmp_path / "pic.ppm"
    path.write_text(SAMPLE)
    img = ImagePPM(path)
    assert img.is_loaded()
    assert img.info.file_type == 806
    assert (img.info.width, img.info.height) == (2, 2)
    assert img.get_pixel(1, 0) == Pixel(4, 5, 6)
    assert img.get_pixel(0, 1) == Pixel(7, 8, 9)


def test_save_round_trip(tmp_path):
    path = tmp_path / "pic.ppm"
    path.write_text(SAMPLE)
    img = ImagePPM(path)
    img.set_pixel(1, 1, Pixel(200, 100, 50))
    img.save()
    text = path.read_text()
    assert text.startswith("P3\n2 2\n255\n")
    again = ImagePPM(path)
    assert again.get_pixel(1, 1) == Pixel(200, 100, 50)
    assert again.pixel_data[:9] == img.pixel_data[:9]


def test_save_load_preserves_original_text(tmp_path):
    path = tmp_path / "pic.ppm"
    path.write_text(SAMPLE)
    ImagePPM(path).save()
    assert path.read_text() == SAMPLE


def test_blank_is_white(tmp_path):
    img = ImagePPM.blank(tmp_path / "new.ppm", 3, 2)
    assert (img.info.width, img.info.height) == (3, 2)
    assert all(img.get_pixel(x, y) == Pixel(255, 255, 255) for x in range(3) for y in range(2))


def test_blank_save_and_load(tmp_path):
    path = tmp_path / "new.ppm"
    img = ImagePPM.blank(path, 2, 2)
    img.set_pixel(0, 0, Pixel(1, 2, 3))
    img.save()
    again = ImagePPM(path)
    assert again.pixel_data == img.pixel_data


def test_virtual_artist_legacy(tmp_path):
    path = tmp_path / "art.ppm"
    img = ImagePPM.blank(path, 1, 1)
    img.virtual_artist_legacy()
    again = ImagePPM(path)
    assert (again.info.width, again.info.height) == (255, 255)
    assert again.get_pixel(3, 5) == Pixel(3, 5, 15)
    assert again.pixel_data == img.pixel_data


def test_missing_file(tmp_path):
    with pytest.raises(ImageError, match="Unable to open file"):
        ImagePPM(tmp_path / "absent.ppm")