"""Image sampling — decoded pixels to a fixed S×S RGB analysis grid.

Decoding encoded bytes is the only step in the engine that touches external
data. Everything downstream works on the immutable SampledImage.
"""

from __future__ import annotations

import base64
import binascii
import io
from dataclasses import dataclass
from typing import Protocol

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from lithoscope.engine.errors import ImageDecodeError


class PixelSource(Protocol):
    """Anything that can hand the sampler an H×W(×C) uint8 pixel array."""

    def read_pixels(self) -> NDArray[np.uint8]: ...


@dataclass(frozen=True)
class ArrayPixelSource:
    """Pixels already in memory (synthetic grids, platform-decoded frames)."""

    pixels: NDArray[np.uint8]

    def read_pixels(self) -> NDArray[np.uint8]:
        return self.pixels


@dataclass(frozen=True)
class EncodedImageSource:
    """PNG/JPEG/etc. bytes, decoded with Pillow on demand."""

    data: bytes

    def read_pixels(self) -> NDArray[np.uint8]:
        return decode_image(self.data)


@dataclass(frozen=True)
class SampledImage:
    """Read-only S×S×3 uint8 grid produced once per analysis."""

    pixels: NDArray[np.uint8]

    def __post_init__(self) -> None:
        self.pixels.setflags(write=False)

    @property
    def size(self) -> int:
        return int(self.pixels.shape[0])

    def rgb(self, x: int, y: int) -> tuple[int, int, int]:
        r, g, b = self.pixels[y, x]
        return (int(r), int(g), int(b))


def decode_image(data: bytes) -> NDArray[np.uint8]:
    """Decode encoded image bytes into an H×W×3 uint8 array."""
    if not data:
        raise ImageDecodeError("empty image payload")
    try:
        with Image.open(io.BytesIO(data)) as img:
            rgb = img.convert("RGB")
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageDecodeError(f"cannot decode image: {e}") from e
    return np.asarray(rgb, dtype=np.uint8)


def decode_base64_image(payload: str) -> NDArray[np.uint8]:
    """Decode a base64 string (optionally a ``data:`` URL) into pixels."""
    if payload.startswith("data:"):
        _, _, payload = payload.partition(",")
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeError(f"invalid base64 image payload: {e}") from e
    return decode_image(data)


def _as_rgb(pixels: NDArray) -> NDArray[np.uint8]:
    arr = np.asarray(pixels)
    if arr.ndim == 2:
        arr = np.stack([arr, arr, arr], axis=-1)
    if arr.ndim != 3 or arr.shape[2] not in (1, 3, 4):
        raise ImageDecodeError(f"unsupported pixel array shape {arr.shape}")
    # Channels are 8-bit; other depths would wrap or truncate silently
    if arr.dtype != np.uint8:
        raise ImageDecodeError(f"expected uint8 pixels, got {arr.dtype}")
    if arr.shape[2] == 1:
        arr = np.repeat(arr, 3, axis=2)
    # Alpha is dropped, not composited
    return np.ascontiguousarray(arr[:, :, :3])


def sample_image(pixels: NDArray, size: int = 128) -> SampledImage:
    """Box-filter resample an arbitrary image to ``size``×``size`` RGB."""
    if pixels is None:
        raise ImageDecodeError("no pixel data")
    arr = np.asarray(pixels)
    if arr.size == 0 or arr.ndim < 2 or arr.shape[0] == 0 or arr.shape[1] == 0:
        raise ImageDecodeError(f"zero-sized image {arr.shape}")

    rgb = _as_rgb(arr)
    if rgb.shape[:2] != (size, size):
        resized = Image.fromarray(rgb).resize(
            (size, size), resample=Image.Resampling.BOX
        )
        rgb = np.asarray(resized, dtype=np.uint8)

    return SampledImage(pixels=rgb.copy())
