"""Shared test fixtures — synthetic specimen images."""

from __future__ import annotations

import base64
import io

import numpy as np
import pytest
from PIL import Image

SIZE = 128


def solid(rgb: tuple[int, int, int], size: int = SIZE) -> np.ndarray:
    img = np.empty((size, size, 3), dtype=np.uint8)
    img[:, :] = rgb
    return img


def checkerboard(size: int = SIZE) -> np.ndarray:
    """Black/white 1-pixel squares."""
    yy, xx = np.indices((size, size))
    plane = ((xx + yy) % 2 * 255).astype(np.uint8)
    return np.stack([plane, plane, plane], axis=-1)


def patch_on_black(size: int = SIZE, top: int = 40, left: int = 40, side: int = 8) -> np.ndarray:
    """Black image with one small checkerboard patch, i.e. edge energy in a single cell."""
    img = solid((0, 0, 0), size)
    img[top:top + side, left:left + side] = checkerboard(side)
    return img


def png_bytes(pixels: np.ndarray) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(pixels).save(buf, format="PNG")
    return buf.getvalue()


def png_base64(pixels: np.ndarray) -> str:
    return base64.b64encode(png_bytes(pixels)).decode("ascii")


@pytest.fixture
def black_image() -> np.ndarray:
    return solid((0, 0, 0))


@pytest.fixture
def uniform_image() -> np.ndarray:
    return solid((90, 140, 60))


@pytest.fixture
def checkerboard_image() -> np.ndarray:
    return checkerboard()


@pytest.fixture
def patch_image() -> np.ndarray:
    return patch_on_black()


@pytest.fixture
def black_png_b64() -> str:
    return png_base64(solid((0, 0, 0), 64))
