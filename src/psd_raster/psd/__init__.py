"""
Low-level API that translates binary data to Python structure.

All the data structure in this subpackage inherits from
:py:class:`psd_raster.psd.base.BaseElement`.
"""

from .document import PSD as PSD
from .header import FileHeader as FileHeader
from .image_data import ImageData as ImageData
from .image_resources import ImageResources as ImageResources

__all__ = [
    "PSD",
    "FileHeader",
    "ImageData",
    "ImageResources",
]
