"""
psd-raster: decode the merged image of Adobe Photoshop PSD files.

Basic usage::

    import psd_raster

    raster = psd_raster.load('example.psd')
    raster.topil().save('output.png')

Architecture:

- :py:mod:`psd_raster.psd`: Low-level binary structure parsing
- :py:mod:`psd_raster.compression`: Channel data decompression (RLE)
- :py:mod:`psd_raster.api`: Color reconstruction, output raster and the
  :py:class:`PSDImage` entry point
"""

from psd_raster.api.psd_image import PSDImage, load
from psd_raster.api.raster import Raster
from psd_raster.constants import ColorMode, Compression, PixelFormat
from psd_raster.exceptions import (
    InvalidRLEData,
    PSDDecodeError,
    TruncatedInput,
    UnsupportedCompression,
    UnsupportedFormat,
)
from psd_raster.version import __version__

__all__ = [
    "ColorMode",
    "Compression",
    "InvalidRLEData",
    "PSDDecodeError",
    "PSDImage",
    "PixelFormat",
    "Raster",
    "TruncatedInput",
    "UnsupportedCompression",
    "UnsupportedFormat",
    "__version__",
    "load",
]
