"""
Image resources section structure. Image resources store non-pixel data
associated with the image.

Only two resources matter for decoding::

    Resource.RESOLUTION_INFO: 1005
    Resource.TRANSPARENCY_INDEX: 1047

Every other block is skipped by its declared length.

Example::

    from psd_raster.constants import Resource

    index = psd.image_resources.get_data(Resource.TRANSPARENCY_INDEX, -1)
"""

import logging
from typing import Any, Optional, TypeVar

from attrs import define, field

from psd_raster.constants import Resource
from psd_raster.exceptions import UnsupportedFormat
from psd_raster.psd.base import BaseElement
from psd_raster.psd.bin_utils import Cursor, pad
from psd_raster.registry import new_registry

logger = logging.getLogger(__name__)

T_ImageResources = TypeVar("T_ImageResources", bound="ImageResources")

TYPES, register = new_registry(attribute="key")

SIGNATURE = b"8BIM"

#: Resolution assumed when the file has no ResolutionInfo block.
DEFAULT_DPI = 72


@register(Resource.RESOLUTION_INFO)
@define(repr=False)
class ResolutionInfo(BaseElement):
    """
    Resolution info structure. Only the integer parts of the fixed-point
    resolutions are kept.

    .. py:attribute:: horizontal
    .. py:attribute:: vertical
    """

    horizontal: int = DEFAULT_DPI
    vertical: int = DEFAULT_DPI

    @classmethod
    def read(cls, reader: Cursor, **kwargs: Any) -> "ResolutionInfo":
        horizontal = reader.read_int16()
        reader.skip(6)
        vertical = reader.read_int16()
        reader.skip(6)
        return cls(horizontal, vertical)

    def __repr__(self) -> str:
        return "ResolutionInfo(horizontal=%d, vertical=%d)" % (
            self.horizontal,
            self.vertical,
        )


@register(Resource.TRANSPARENCY_INDEX)
@define(repr=False)
class TransparencyIndex(BaseElement):
    """
    Index of the transparent color table entry of an indexed image.
    """

    value: int = -1

    @classmethod
    def read(cls, reader: Cursor, **kwargs: Any) -> "TransparencyIndex":
        return cls(reader.read_int16())

    def __repr__(self) -> str:
        return "TransparencyIndex(%d)" % self.value


@define(repr=False)
class ImageResources(BaseElement):
    """
    Image resources section of the PSD file. Holds the decoded resources by
    :py:class:`~psd_raster.constants.Resource` key.
    """

    items: dict = field(factory=dict)

    @classmethod
    def read(
        cls: type[T_ImageResources], reader: Cursor, **kwargs: Any
    ) -> T_ImageResources:
        length = reader.read_int32()
        start_pos = reader.tell()
        end_pos = start_pos + length
        logger.debug(
            "reading image resources, len=%d, offset=%d" % (length, start_pos)
        )
        items = {}
        while reader.tell() < end_pos:
            key, data = cls._read_block(reader)
            if data is not None:
                items[key] = data
        if reader.tell() > end_pos:
            logger.warning(
                "Image resources overrun: current pos=%d, expected=%d"
                % (reader.tell(), end_pos)
            )
        reader.seek(end_pos)
        return cls(items)

    @staticmethod
    def _read_block(reader: Cursor) -> tuple[int, Optional[BaseElement]]:
        signature = reader.read_bytes(4)
        if signature != SIGNATURE:
            raise UnsupportedFormat(
                "Invalid image resource signature %r at offset %d"
                % (signature, reader.tell() - 4)
            )
        key = reader.read_int16()

        # Name. An odd, non-zero length byte is followed by the real length.
        name_length = reader.read_byte()
        if name_length > 0:
            if name_length % 2 != 0:
                name_length = reader.read_byte()
            reader.skip(name_length)
        reader.skip(1)

        data_length = pad(reader.read_int32(), 2)
        data_start = reader.tell()
        kind = TYPES.get(key)
        if kind is None:
            logger.debug("skipping image resource %d, len=%d" % (key, data_length))
            data = None
        else:
            data = kind.read(reader)
            logger.debug("read image resource %r" % (data,))
        reader.seek(data_start + data_length)
        return key, data

    def __contains__(self, key: Any) -> bool:
        return key in self.items

    def __repr__(self) -> str:
        return "ImageResources(%r)" % (list(self.items.values()),)

    def get_data(self, key: Any, default: Any = None) -> Any:
        """
        Get data from the image resources.

        Shortcut for the following::

            if key in image_resources:
                value = image_resources.items[key]
        """
        return self.items.get(key, default)

    @property
    def dpi(self) -> tuple[int, int]:
        """Horizontal and vertical resolution in pixels per inch."""
        info = self.get_data(Resource.RESOLUTION_INFO, ResolutionInfo())
        return info.horizontal, info.vertical

    @property
    def transparency_index(self) -> int:
        """Transparent color table entry, or -1 when there is none."""
        data = self.get_data(Resource.TRANSPARENCY_INDEX)
        return -1 if data is None else data.value
