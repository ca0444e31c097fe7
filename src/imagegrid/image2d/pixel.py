"""Pixel contract and the stock pixel families.

A pixel is a fixed number of channels ("subpixels") of one numpy dtype.
Instances either own a small channel array or wrap a live 1-D view into
an image buffer, in which case writing a channel writes the image.
"""

from __future__ import annotations

import functools
import logging
from enum import Enum
from typing import Any, Callable, ClassVar, Iterable, Iterator, Sequence

import numpy as np

from imagegrid.image2d.ops import apply_binary

logger = logging.getLogger(__name__)


class PixelType(Enum):
    """Channel layout of a stock pixel family."""

    LUMA = "luma"
    LUMA_A = "luma_a"
    RGB = "rgb"
    RGBA = "rgba"


class BitDepth(Enum):
    """Bit depth of an image."""

    EIGHT = 8
    SIXTEEN = 16


_BIT_DEPTHS = {
    np.dtype(np.uint8): BitDepth.EIGHT,
    np.dtype(np.uint16): BitDepth.SIXTEEN,
}


class Pixel:
    """Base class for the values stored in an image.

    Subclasses fix ``N_CHANNELS``; ``SUBPIXEL`` is the numpy dtype of each
    channel and can be re-specialised with :meth:`with_subpixel`.

    ``from_slice`` and ``set_to_slice`` trust the caller to pass at least
    ``N_CHANNELS`` values.  A shorter slice fails with ``IndexError``;
    extra values are ignored.
    """

    N_CHANNELS: ClassVar[int] = 0
    SUBPIXEL: ClassVar[np.dtype] = np.dtype(np.uint8)
    KIND: ClassVar[PixelType | None] = None

    __slots__ = ("data",)

    def __init__(self, channels: Iterable[Any] | Any = None) -> None:
        if channels is None:
            self.data = np.zeros(self.N_CHANNELS, dtype=self.SUBPIXEL)
            return
        data = np.array(channels, dtype=self.SUBPIXEL)
        if data.ndim == 0 and self.N_CHANNELS == 1:
            data = data.reshape(1)
        if data.shape != (self.N_CHANNELS,):
            raise ValueError(
                f"{type(self).__name__} takes {self.N_CHANNELS} channels, got shape {data.shape}"
            )
        self.data = data

    @classmethod
    def _wrap(cls, view: np.ndarray) -> Pixel:
        """Wrap a channel view without copying it."""
        pixel = object.__new__(cls)
        pixel.data = view
        return pixel

    # -- Construction -------------------------------------------------------

    @classmethod
    def from_slice(cls, s: Sequence[Any]) -> Pixel:
        """Build a pixel from the first ``N_CHANNELS`` items of *s*."""
        return cls([s[i] for i in range(cls.N_CHANNELS)])

    @classmethod
    def zero(cls) -> Pixel:
        return cls()

    @classmethod
    def family(cls) -> type[Pixel]:
        """The pixel family this type was specialised from (itself if not specialised)."""
        return cls.__dict__.get("_family", cls)

    @classmethod
    def with_subpixel(cls, dtype: Any) -> type[Pixel]:
        """Return this pixel family with channels of *dtype*."""
        return _specialise(cls.family(), np.dtype(dtype))

    @classmethod
    def image_type(cls) -> tuple[PixelType, BitDepth]:
        """Describe the pixel type as ``(PixelType, BitDepth)``."""
        depth = _BIT_DEPTHS.get(cls.SUBPIXEL)
        if cls.KIND is None or depth is None:
            raise ValueError(f"{cls.__name__} has no standard image type")
        return cls.KIND, depth

    # -- Channel access -----------------------------------------------------

    def channels(self) -> np.ndarray:
        return self.data

    def channels_mut(self) -> np.ndarray:
        if not self.data.flags.writeable:
            raise ValueError(f"{self!r} is read-only")
        return self.data

    def set_to_slice(self, s: Sequence[Any]) -> None:
        """Overwrite the channels from the first ``N_CHANNELS`` items of *s*."""
        values = [s[i] for i in range(self.N_CHANNELS)]
        self.channels_mut()[:] = values

    def map(self, f: Callable[[Any], Any]) -> Pixel:
        return type(self)([f(c) for c in self.data])

    def sum(self) -> Any:
        """Fold the channels with ``+``, starting from zero."""
        return self.SUBPIXEL.type(np.add.reduce(self.data, dtype=self.SUBPIXEL))

    def is_zero(self) -> bool:
        return not self.data.any()

    def copy(self) -> Pixel:
        return type(self)(self.data)

    __copy__ = copy

    def __len__(self) -> int:
        return self.N_CHANNELS

    def __iter__(self) -> Iterator[Any]:
        return iter(self.data)

    def __getitem__(self, index: int) -> Any:
        return self.data[index]

    def __setitem__(self, index: int, value: Any) -> None:
        self.channels_mut()[index] = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pixel):
            return NotImplemented
        return type(other) is type(self) and np.array_equal(self.data, other.data)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.data.tolist()})"

    # -- Arithmetic ---------------------------------------------------------

    def _binary(self, other: object, op: str) -> Pixel:
        if type(other) is not type(self):
            return NotImplemented
        return type(self)._wrap(apply_binary(op, self.data, other.data))  # type: ignore[attr-defined]

    def __add__(self, other: object) -> Pixel:
        return self._binary(other, "add")

    def __sub__(self, other: object) -> Pixel:
        return self._binary(other, "sub")

    def __mul__(self, other: object) -> Pixel:
        return self._binary(other, "mul")

    def __truediv__(self, other: object) -> Pixel:
        return self._binary(other, "div")

    def __mod__(self, other: object) -> Pixel:
        return self._binary(other, "rem")


@functools.lru_cache(maxsize=None)
def _specialise(family: type[Pixel], dtype: np.dtype) -> type[Pixel]:
    if family.SUBPIXEL == dtype:
        return family
    logger.debug("Specialising %s for %s subpixels", family.__name__, dtype.name)
    return type(
        f"{family.__name__}[{dtype.name}]",
        (family,),
        {"SUBPIXEL": dtype, "_family": family, "__slots__": ()},
    )


class Luma(Pixel):
    """Single-channel intensity."""

    N_CHANNELS = 1
    KIND = PixelType.LUMA
    __slots__ = ()


class LumaA(Pixel):
    """Intensity with alpha."""

    N_CHANNELS = 2
    KIND = PixelType.LUMA_A
    __slots__ = ()


class Rgb(Pixel):
    N_CHANNELS = 3
    KIND = PixelType.RGB
    __slots__ = ()


class RgbA(Pixel):
    N_CHANNELS = 4
    KIND = PixelType.RGBA
    __slots__ = ()
