"""
Base data structures intended for inheritance.

All the section records in :py:mod:`psd_raster.psd` inherit from
:py:class:`BaseElement` and get attrs_ decoration to have data fields.

.. _attrs: https://www.attrs.org/en/stable/index.html
"""

import logging
from typing import Any, TypeVar

from psd_raster.psd.bin_utils import BytesLike, Cursor

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="BaseElement")


class BaseElement:
    """
    Base element of the PSD file sections.

    .. py:classmethod:: read(cls, reader)

        Read the element from a :py:class:`~psd_raster.psd.bin_utils.Cursor`.

    .. py:classmethod:: frombytes(self, data, *args, **kwargs)

        Read the element from bytes.
    """

    @classmethod
    def read(cls: type[T], reader: Cursor, **kwargs: Any) -> T:
        raise NotImplementedError()

    @classmethod
    def frombytes(cls: type[T], data: BytesLike, *args: Any, **kwargs: Any) -> T:
        return cls.read(Cursor.frombytes(data), *args, **kwargs)
