"""
Color reconstruction.

Turns the decompressed channel planes of a PSD file into R, G, B, A values
in [0, 255]. Each supported color mode has a :py:class:`Reconstructor`
registered in :py:data:`RECONSTRUCTORS`::

    from psd_raster.api.color import get_reconstructor

    reconstructor = get_reconstructor(
        psd.header, psd.color_mode_data, psd.image_resources
    )
    rgba = reconstructor.convert(psd.image_data.channels)  # (pixels, 4)

Sample values are normalized to 8 bits first, see :py:func:`sample_channel`.
"""

import logging
from typing import Any, Optional, Sequence, Union

import numpy as np

from psd_raster.constants import ColorMode
from psd_raster.exceptions import UnsupportedFormat
from psd_raster.psd.bin_utils import BytesLike, bytes_to_float32, bytes_to_uint
from psd_raster.psd.color_mode_data import PALETTE_SIZE, ColorModeData
from psd_raster.psd.header import FileHeader
from psd_raster.psd.image_resources import ImageResources
from psd_raster.registry import new_registry

logger = logging.getLogger(__name__)

RECONSTRUCTORS, register = new_registry(attribute="color_mode")

#: Gamma applied to 32-bit float samples.
FLOAT_GAMMA = 0.45470693

#: (2**16 - 1) / (2**8 - 1), maps 16-bit samples onto 8 bits.
UINT16_DIVISOR = 257.0

#: D65 reference white.
WHITE_X, WHITE_Y, WHITE_Z = 0.95047, 1.0, 1.08883

LAB_DELTA = 6.0 / 29.0

XYZ_TO_SRGB = (
    (3.2404542, -1.5371385, -0.4985314),
    (-0.9692660, 1.8760108, 0.0415560),
    (0.0556434, -0.2040259, 1.0572252),
)

Number = Union[int, float, np.ndarray]


def sample_channel(data: BytesLike, index: int, depth: int) -> int:
    """
    Sample of pixel ``index`` in the channel ``data``, scaled to [0, 255].

    :param data: decompressed channel bytes.
    :param index: pixel index.
    :param depth: bits per sample, 8, 16 or 32.
    """
    if depth == 8:
        return data[index]
    elif depth == 16:
        return round(bytes_to_uint(data, index * 2, 2) / UINT16_DIVISOR)
    elif depth == 32:
        value = bytes_to_float32(data, index * 4)
        if not value > 0.0:  # Negative, zero or NaN.
            return 0
        scaled = 255 * value**FLOAT_GAMMA
        return 255 if scaled >= 255 else round(scaled)
    raise UnsupportedFormat("Unsupported depth: %d" % depth)


def sample_planes(channels: Sequence[BytesLike], depth: int) -> np.ndarray:
    """
    Vectorized :py:func:`sample_channel` over whole channels.

    :return: int array of shape ``(len(channels), pixels)``.
    """
    return np.stack([_sample_plane(data, depth) for data in channels])


def _sample_plane(data: BytesLike, depth: int) -> np.ndarray:
    if depth == 8:
        return np.frombuffer(data, ">u1").astype(np.int32)
    elif depth == 16:
        plane = np.frombuffer(data, ">u2") / UINT16_DIVISOR
        return np.rint(plane).astype(np.int32)
    elif depth == 32:
        plane = np.frombuffer(data, ">f4").astype(np.float64)
        plane = np.where(plane > 0.0, plane, 0.0)  # Also drops NaN.
        with np.errstate(over="ignore"):
            plane = np.rint(255 * plane**FLOAT_GAMMA)
        return np.minimum(plane, 255).astype(np.int32)
    raise UnsupportedFormat("Unsupported depth: %d" % depth)


def _pack(values: tuple[np.ndarray, ...]) -> Any:
    if all(np.ndim(value) == 0 for value in values):
        return tuple(int(value) for value in values)
    return values


def cmyk_to_rgb(c: Number, m: Number, y: Number, k: Number) -> Any:
    """
    Convert ink fractions in [0, 1] to RGB in [0, 255].

    Accepts scalars, returning a tuple of ints, or NumPy arrays, returning a
    tuple of int arrays. Results are truncated, not clipped.

    >>> cmyk_to_rgb(0, 0, 0, 0)
    (255, 255, 255)
    >>> cmyk_to_rgb(0, 0, 0, 1)
    (0, 0, 0)
    """
    c, m, y, k = (np.asarray(value, dtype=np.float64) for value in (c, m, y, k))
    return _pack(
        tuple(np.trunc(255 * (1 - ink) * (1 - k)).astype(np.int64) for ink in (c, m, y))
    )


def _lab_f_inverse(t: np.ndarray) -> np.ndarray:
    return np.where(
        t > LAB_DELTA,
        t * t * t,
        3 * LAB_DELTA * LAB_DELTA * (t - 4.0 / 29.0),
    )


def _srgb_gamma(linear: np.ndarray) -> np.ndarray:
    encoded = 1.055 * np.power(np.maximum(linear, 0.0), 1 / 2.4) - 0.055
    return np.where(linear <= 0.0031308, 12.92 * linear, encoded)


def lab_to_rgb(l: Number, a: Number, b: Number) -> Any:
    """
    Convert CIELAB (D65) to sRGB in [0, 255].

    ``l`` is in [0, 100], ``a`` and ``b`` in [-128, 127]. Accepts scalars or
    NumPy arrays like :py:func:`cmyk_to_rgb`.

    >>> lab_to_rgb(0, 0, 0)
    (0, 0, 0)
    """
    l, a, b = (np.asarray(value, dtype=np.float64) for value in (l, a, b))

    fy = (l + 16) / 116.0
    fx = fy + a / 500.0
    fz = fy - b / 200.0

    x = WHITE_X * _lab_f_inverse(fx)
    y = WHITE_Y * _lab_f_inverse(fy)
    z = WHITE_Z * _lab_f_inverse(fz)

    rgb = []
    for row in XYZ_TO_SRGB:
        linear = x * row[0] + y * row[1] + z * row[2]
        value = np.trunc(_srgb_gamma(linear) * 256)
        rgb.append(np.clip(value, 0, 255).astype(np.int64))
    return _pack(tuple(rgb))


class Reconstructor:
    """
    Converts sampled channel planes of one color mode to RGBA.

    Subclasses register themselves for their color modes and set
    :py:attr:`alpha_channel`, the channel index holding alpha when the image
    has enough channels.
    """

    color_mode: ColorMode
    alpha_channel: Optional[int] = None

    def __init__(
        self,
        header: FileHeader,
        color_mode_data: Optional[ColorModeData] = None,
        image_resources: Optional[ImageResources] = None,
    ):
        expected = ColorMode.channels(header.color_mode)
        if header.channels < expected:
            raise UnsupportedFormat(
                "%s needs %d channels, got %d"
                % (header.color_mode.name, expected, header.channels)
            )
        self.header = header
        self.color_mode_data = color_mode_data or ColorModeData()
        self.image_resources = image_resources or ImageResources()

    @property
    def has_alpha(self) -> bool:
        return (
            self.alpha_channel is not None
            and self.header.channels > self.alpha_channel
        )

    def sample(self, channels: Sequence[BytesLike]) -> np.ndarray:
        return sample_planes(channels, self.header.depth)

    def convert(self, channels: Sequence[BytesLike]) -> np.ndarray:
        """
        Convert decompressed channels to a ``(pixels, 4)`` uint8 RGBA array.
        """
        logger.debug(
            "reconstructing %s, channels=%d, depth=%d, alpha=%s"
            % (
                self.header.color_mode.name,
                len(channels),
                self.header.depth,
                self.has_alpha,
            )
        )
        return self.reconstruct(self.sample(channels))

    def reconstruct(self, planes: np.ndarray) -> np.ndarray:
        """
        Convert a ``(channels, pixels)`` array of samples to ``(pixels, 4)``.
        """
        r, g, b = self._rgb(planes)
        return self._rgba(r, g, b, self._alpha(planes))

    def reconstruct_pixel(self, samples: Sequence[int]) -> tuple[int, int, int, int]:
        """
        Scalar form of :py:meth:`reconstruct` for the samples of one pixel.
        """
        planes = np.asarray(samples, dtype=np.int64).reshape((-1, 1))
        r, g, b, a = self.reconstruct(planes)[0]
        return int(r), int(g), int(b), int(a)

    def _rgb(self, planes: np.ndarray) -> tuple[Any, Any, Any]:
        raise NotImplementedError()

    def _alpha(self, planes: np.ndarray) -> np.ndarray:
        if self.has_alpha:
            return planes[self.alpha_channel]
        return np.full(planes.shape[1], 255)

    @staticmethod
    def _rgba(r: Any, g: Any, b: Any, a: Any) -> np.ndarray:
        rgba = np.stack(np.broadcast_arrays(r, g, b, a), axis=1)
        return np.clip(rgba, 0, 255).astype(np.uint8)


@register(ColorMode.GRAYSCALE, ColorMode.DUOTONE)
class GrayscaleReconstructor(Reconstructor):
    """Duotone is decoded as its grayscale approximation."""

    alpha_channel = 1

    def _rgb(self, planes: np.ndarray) -> tuple[Any, Any, Any]:
        return planes[0], planes[0], planes[0]


@register(ColorMode.INDEXED)
class IndexedReconstructor(Reconstructor):
    """
    Looks up channel 0 in the color table. Pixels whose color equals the
    transparent entry get alpha 0.
    """

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.palette = self.color_mode_data.bands()
        self.transparency_index = self.image_resources.transparency_index
        if self.has_alpha and not 0 <= self.transparency_index < PALETTE_SIZE:
            raise UnsupportedFormat(
                "Invalid transparency index %d" % self.transparency_index
            )

    @property
    def has_alpha(self) -> bool:
        return self.image_resources.transparency_index != -1

    def sample(self, channels: Sequence[BytesLike]) -> np.ndarray:
        # Indices are raw bytes whatever the depth.
        return np.frombuffer(channels[0], np.uint8, count=self.header.pixel_count)[
            np.newaxis
        ]

    def reconstruct(self, planes: np.ndarray) -> np.ndarray:
        colors = self.palette[planes[0].astype(np.intp)]
        if self.has_alpha:
            transparent = self.palette[self.transparency_index]
            alpha = np.where((colors == transparent).all(axis=1), 0, 255)
        else:
            alpha = np.full(len(colors), 255)
        return self._rgba(colors[:, 0], colors[:, 1], colors[:, 2], alpha)


@register(ColorMode.RGB)
class RGBReconstructor(Reconstructor):
    alpha_channel = 3

    def _rgb(self, planes: np.ndarray) -> tuple[Any, Any, Any]:
        return planes[0], planes[1], planes[2]


@register(ColorMode.CMYK)
class CMYKReconstructor(Reconstructor):
    """
    Samples store 255 for no ink, so ink is ``1 - sample / 255``.
    """

    alpha_channel = 4

    def _rgb(self, planes: np.ndarray) -> tuple[Any, Any, Any]:
        c, m, y, k = (1.0 - planes[index] / 255.0 for index in range(4))
        return cmyk_to_rgb(c, m, y, k)


@register(ColorMode.MULTICHANNEL)
class MultichannelReconstructor(Reconstructor):
    """
    The first channels are read as cyan, magenta, yellow and, when present,
    black inks.
    """

    alpha_channel = 4

    def _rgb(self, planes: np.ndarray) -> tuple[Any, Any, Any]:
        c, m, y = (1.0 - planes[index] / 255.0 for index in range(3))
        k = 1.0 - planes[3] / 255.0 if len(planes) >= 4 else 0.0
        return cmyk_to_rgb(c, m, y, k)


@register(ColorMode.LAB)
class LabReconstructor(Reconstructor):
    alpha_channel = 3

    def _rgb(self, planes: np.ndarray) -> tuple[Any, Any, Any]:
        l = planes[0] / 255.0 * 100.0
        a = planes[1] - 128.0
        b = planes[2] - 128.0
        return lab_to_rgb(l, a, b)


def get_reconstructor(
    header: FileHeader,
    color_mode_data: Optional[ColorModeData] = None,
    image_resources: Optional[ImageResources] = None,
) -> Reconstructor:
    """
    Returns the :py:class:`Reconstructor` for the color mode of ``header``.
    """
    kind = RECONSTRUCTORS.get(header.color_mode)
    if kind is None:
        raise UnsupportedFormat("Unsupported color mode %s" % header.color_mode.name)
    return kind(header, color_mode_data, image_resources)
