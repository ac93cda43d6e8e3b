# consoleart

A small library for reading, editing and writing raster images in several
formats, plus a few numeric helpers.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install .[test]
pytest
```

## Images

Every image class derives from `consoleart.image.Image`. An image keeps its
path in `filepath`, its dimensions and layout in `info` (an `ImageInfo` with
`width`, `height`, `channels`, `bits` and flags such as `planar`,
`multipage`, `animated`, `hdr`), and its bytes in `pixel_data`. Every image
offers `get_pixel(x, y)`, `set_pixel(x, y, pixel)`, `save()`,
`is_loaded()` and `filename()`. A pixel is a `consoleart.image.Pixel` with
`red`, `green`, `blue` and `alpha` (alpha defaults to 255).

Opening a file that cannot be read or decoded raises
`consoleart.image.ImageError`; so does a failed `save()`. The message is also
kept in the image's `message` attribute.

| Module              | Contents                                                                 |
|---------------------|--------------------------------------------------------------------------|
| `consoleart.pcx`    | `ImagePCX`, `HeaderPCX`, `PagePCX`, `read_pcx`, `write_pcx`, `decode_rle`, `encode_rle` |
| `consoleart.dcx`    | `ImageDCX`, `read_dcx`, `write_dcx`                                      |
| `consoleart.ppm`    | `ImagePPM`, `HeaderPPM`, `parse_ppm`                                     |
| `consoleart.raster` | `ImagePNG`, `ImageJPG`, `ImageTGA` (read and written through Pillow)     |
| `consoleart.gif`    | `ImageGIF`                                                               |
| `consoleart.hdr`    | `ImageHDR`, `read_radiance`, `write_radiance`                            |

Example: invert a PNG in place.

```python
from consoleart.image import ImageError, Pixel
from consoleart.raster import ImagePNG

try:
    img = ImagePNG("picture.png")
except ImageError as exc:
    print(exc)
else:
    for y in range(img.info.height):
        for x in range(img.info.width):
            p = img.get_pixel(x, y)
            img.set_pixel(x, y, Pixel(255 - p.red, 255 - p.green, 255 - p.blue, p.alpha))
    img.save()
```

`ImagePNG.create(path, width, height, channels)` and
`ImageJPG.create(...)` make a new zero-filled image; `ImagePPM.blank(path,
width, height)` makes a white one. `ImageJPG` returns opaque black for
positions outside the image and ignores writes there; `ImageHDR` does the
same with default pixels.

### Format notes

- **PCX**: reads version 5, run-length encoded 24- and 32-bit planar images,
  and 8-bit images with a 256-colour VGA palette, which are turned into
  24-bit planar data. Writing covers true-colour pages only.
- **DCX**: a table of offsets followed by PCX pages. Pages that cannot be
  decoded are skipped. `page_count()`, `select_page(index)`,
  `selected_page_index()`, `selected_page()` and `add_page(page)` work on
  the pages; `ImageDCX(path, pages)` builds a container from `PagePCX`
  objects, and `save()` writes all pages.
- **PPM**: the header must start with `P3` or `P6`, and the colour values
  are read as whitespace-separated text. Images are written as ASCII `P3`.
  `virtual_artist_legacy()` paints a 255×255 coordinate pattern and saves it.
- **GIF**: every frame is decoded to RGBA. `page_count()`,
  `select_page(index)`, `frame(index)`, `frame_delay(index)` (milliseconds)
  and `split_into_pngs(directory)`, which writes `<index>-<name>.png` for
  each frame and returns the paths.
- **HDR**: Radiance RGBE files, flat or run-length encoded, in the
  `-Y height +X width` layout. Float pixels live in `pixel_data_hdr` and are
  reached with `get_pixel_hdr` / `set_pixel_hdr`. `ImageHDR(path,
  convert=True)` or `convert_to_8bit()` fills `pixel_data` clamped to
  [0, 1] with a gamma of 1/2; `convert_from_8bit()` goes the other way.
  `save()` writes run-length encoded RGBE.

## Helpers

- `consoleart.statistic.Statistic`: `mean`, `median` (sorts the stored
  data), `variance` and `variance_welford` (population, or sample with
  `sample=True`), `standardize`, `mode` (all most frequent values, ascending)
  and `calculate_statistics`, which returns labelled `(label, value)` pairs.
- `consoleart.output`: `format_results(data, precision)` renders pairs one
  per line followed by a blank line; `print_results(data, stream,
  precision)` writes that text to a stream, standard output by default.
- `consoleart.real_number.RealNumber`: a wrapped float that mixes with ints
  and floats in arithmetic and comparison. Unary `+` gives the absolute
  value, `%` gives the `math.fmod` remainder as a float, `str()` shows ten
  decimals, and `value`, `integer_part` and `decimal_part` are properties.
- `consoleart.delegate.Delegate`: a multicast callable. Add functions with
  `+=`, remove them with `-=`; calling it runs them all and returns the last
  result (it raises `RuntimeError` when empty), and `invocation_list(arg)`
  returns every result.
- `consoleart.about.about_library()`: a version banner.

## What it does not do

- There is no command-line program; the package is used from Python code.
- Saving GIF images is not supported: `ImageGIF.save()` raises `ImageError`.
- It does not draw images in a terminal and has no coloured console output,
  menus or input prompts.