"""
Exceptions raised while decoding PSD files.

Every failure is fatal for the decode call; nothing is retried or partially
recovered.
"""


class PSDDecodeError(Exception):
    """Base class of all decoding errors."""


class UnsupportedFormat(PSDDecodeError, ValueError):
    """
    The stream is not a decodable PSD file: bad signature or version, or an
    unsupported depth, color mode, channel count or size.
    """


class UnsupportedCompression(PSDDecodeError, ValueError):
    """The image data uses a compression method the decoder cannot handle."""


class TruncatedInput(PSDDecodeError, EOFError):
    """The stream ended before an expected number of bytes could be read."""


class InvalidRLEData(PSDDecodeError, ValueError):
    """A PackBits run overflows the expected channel size."""
