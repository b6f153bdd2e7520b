"""
Various constants for psd_raster
"""

from enum import IntEnum


class ColorMode(IntEnum):
    """
    Color mode.
    """

    BITMAP = 0
    GRAYSCALE = 1
    INDEXED = 2
    RGB = 3
    CMYK = 4
    MULTICHANNEL = 7
    DUOTONE = 8
    LAB = 9

    @staticmethod
    def channels(value: "ColorMode") -> int:
        return {
            ColorMode.BITMAP: 1,
            ColorMode.GRAYSCALE: 1,
            ColorMode.INDEXED: 1,
            ColorMode.RGB: 3,
            ColorMode.CMYK: 4,
            ColorMode.MULTICHANNEL: 3,
            ColorMode.DUOTONE: 1,
            ColorMode.LAB: 3,
        }[value]


class Compression(IntEnum):
    """
    Compression modes.

    Compression. 0 = Raw Data, 1 = RLE compressed, 2 = ZIP without prediction,
    3 = ZIP with prediction.
    """

    RAW = 0
    RLE = 1
    ZIP = 2
    ZIP_WITH_PREDICTION = 3


class Resource(IntEnum):
    """
    Image resource keys understood by the decoder. Any other key is skipped.
    """

    RESOLUTION_INFO = 1005
    TRANSPARENCY_INDEX = 1047


class PixelFormat(IntEnum):
    """
    Pixel layout of a decoded raster. The value is the number of bytes per
    pixel; bytes are stored in B, G, R[, A] order.
    """

    RGB24 = 3
    RGBA32 = 4

    @property
    def bytes_per_pixel(self) -> int:
        return int(self.value)

    @property
    def has_alpha(self) -> bool:
        return self is PixelFormat.RGBA32

    @property
    def pil_mode(self) -> str:
        return "RGBA" if self.has_alpha else "RGB"
