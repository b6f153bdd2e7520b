"""
PSD document structure module.

This module contains the :py:class:`PSD` record that the decode pipeline
fills section by section.
"""

import logging
from typing import Any, BinaryIO, TypeVar

from attrs import define, field

from .base import BaseElement
from .bin_utils import Cursor
from .color_mode_data import ColorModeData
from .header import FileHeader
from .image_data import ImageData
from .image_resources import ImageResources
from .layer_and_mask import LayerAndMaskInformation

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="PSD")


@define(repr=False)
class PSD(BaseElement):
    """
    Low-level PSD file structure that resembles the specification_.

    .. _specification: https://www.adobe.com/devnet-apps/photoshop/fileformatashtml/

    Example::

        from psd_raster.psd import PSD

        with open(input_file, 'rb') as f:
            psd = PSD.open(f)

    .. py:attribute:: header

        See :py:class:`.FileHeader`.

    .. py:attribute:: color_mode_data

        See :py:class:`.ColorModeData`.

    .. py:attribute:: image_resources

        See :py:class:`.ImageResources`.

    .. py:attribute:: layer_and_mask_information

        See :py:class:`.LayerAndMaskInformation`.

    .. py:attribute:: image_data

        See :py:class:`.ImageData`.
    """

    header: FileHeader = field(factory=FileHeader)
    color_mode_data: ColorModeData = field(factory=ColorModeData)
    image_resources: ImageResources = field(factory=ImageResources)
    layer_and_mask_information: LayerAndMaskInformation = field(
        factory=LayerAndMaskInformation
    )
    image_data: ImageData = field(factory=ImageData)

    @classmethod
    def read(cls: type[T], reader: Cursor, **kwargs: Any) -> T:
        header = FileHeader.read(reader)
        logger.debug("read %s" % header)
        return cls(
            header,
            ColorModeData.read(reader),
            ImageResources.read(reader),
            LayerAndMaskInformation.read(reader),
            ImageData.read(reader, header),
        )

    @classmethod
    def open(cls: type[T], fp: BinaryIO, **kwargs: Any) -> T:
        """Read from a binary stream, starting at offset 0 when seekable."""
        if fp.seekable():
            fp.seek(0)
        return cls.read(Cursor(fp), **kwargs)

    def __repr__(self) -> str:
        return "PSD(header=%r, image_resources=%r, image_data=%r)" % (
            self.header,
            self.image_resources,
            self.image_data,
        )
