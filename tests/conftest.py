"""Pytest configuration for psd-raster tests."""

import io
from typing import Callable

import pytest


@pytest.fixture
def stream() -> Callable[[bytes], io.BytesIO]:
    """Wrap bytes in a binary stream."""

    def factory(data: bytes) -> io.BytesIO:
        return io.BytesIO(data)

    return factory
