"""
High-level API: the :py:class:`~psd_raster.api.psd_image.PSDImage` entry
point, color reconstruction and the output raster.
"""

from .psd_image import PSDImage, load
from .raster import Raster, RasterWriter

__all__ = ["PSDImage", "Raster", "RasterWriter", "load"]
