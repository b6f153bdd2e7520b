import numpy as np
import pytest

from psd_raster.exceptions import TruncatedInput, UnsupportedFormat
from psd_raster.psd.bin_utils import Cursor
from psd_raster.psd.color_mode_data import ColorModeData

from ..utils import make_length_block, make_palette


def test_color_mode_data_empty() -> None:
    reader = Cursor.frombytes(b"\x00\x00\x00\x00rest")
    data = ColorModeData.read(reader)
    assert data.value == b""
    assert reader.tell() == 4


def test_color_mode_data_palette() -> None:
    palette = make_palette()
    data = ColorModeData.frombytes(make_length_block(palette))
    assert data.value == palette
    assert data.lookup(0) == (0, 255, 0)
    assert data.lookup(10) == (10, 245, 5)
    assert data.lookup(255) == (255, 0, 127)

    bands = data.bands()
    assert bands.shape == (256, 3)
    np.testing.assert_array_equal(bands[10], [10, 245, 5])


def test_color_mode_data_truncated() -> None:
    with pytest.raises(TruncatedInput):
        ColorModeData.frombytes(b"\x00\x00\x03\x00" + bytes(10))


def test_color_mode_data_short_palette() -> None:
    data = ColorModeData(b"\x00" * 12)
    with pytest.raises(UnsupportedFormat):
        data.bands()
    with pytest.raises(UnsupportedFormat):
        data.lookup(0)
