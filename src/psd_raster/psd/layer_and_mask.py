"""
Layer and mask information section.

The decoder reads the merged image only, so the layer records, the global
layer mask and the additional layer information stored in this section are
skipped without interpretation.
"""

import logging
from typing import Any, TypeVar

from attrs import define

from psd_raster.psd.base import BaseElement
from psd_raster.psd.bin_utils import Cursor

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="LayerAndMaskInformation")


@define(repr=True)
class LayerAndMaskInformation(BaseElement):
    """
    Layer and mask information section.

    .. py:attribute:: length

        Declared byte length of the skipped section.
    """

    length: int = 0

    @classmethod
    def read(cls: type[T], reader: Cursor, **kwargs: Any) -> T:
        start_pos = reader.tell()
        length = reader.read_int32()
        logger.debug(
            "skipping layer and mask info, len=%d, offset=%d" % (length, start_pos)
        )
        reader.skip(length)
        return cls(length)
