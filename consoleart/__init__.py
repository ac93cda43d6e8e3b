"""Image readers and writers (PCX, DCX, PPM, PNG, JPEG, TGA, GIF, Radiance HDR) with small numeric helpers."""

__version__ = "7.0"