"""Tests for feature extraction."""

import numpy as np
import pytest

from lithoscope.engine.features import (
    ColorBias,
    biomorphic_index,
    cell_edge_sums,
    detect_color_bias,
    edge_map,
    extract_features,
    luminance_plane,
)
from lithoscope.engine.sampler import sample_image
from tests.conftest import checkerboard


def _features(pixels):
    return extract_features(sample_image(pixels))


def test_uniform_image_has_no_texture_or_edges(uniform_image):
    f = _features(uniform_image)
    assert f.texture_score == pytest.approx(0.0, abs=1e-9)
    assert f.normalized_edge_density == 0.0
    assert f.biomorphic_index == 0.0
    assert (f.avg_r, f.avg_g, f.avg_b) == (90.0, 140.0, 60.0)


def test_black_image_is_all_zero(black_image):
    f = _features(black_image)
    assert f.avg_luminance == 0.0
    assert f.texture_score == 0.0
    assert f.normalized_edge_density == 0.0
    assert f.biomorphic_index == 0.0
    assert f.color_bias is ColorBias.NEUTRAL


def test_checkerboard_edge_density_uses_full_pixel_count(checkerboard_image):
    f = _features(checkerboard_image)
    # 126² interior pixels, each |±4·255|, over 128²·255
    expected = (126 * 126 * 1020) / (128 * 128 * 255)
    assert f.normalized_edge_density == pytest.approx(expected, rel=1e-9)
    assert f.texture_score == pytest.approx(127.5, rel=1e-9)
    assert f.avg_luminance == pytest.approx(127.5, rel=1e-9)


def test_border_pixels_do_not_contribute_edges():
    lum = np.zeros((8, 8))
    lum[0, :] = 255.0
    lum[:, 0] = 255.0
    edges = edge_map(lum)
    assert np.all(edges[0, :] == 0)
    assert np.all(edges[:, 0] == 0)
    assert np.all(edges[-1, :] == 0)
    # Row 1 sees the bright border above it
    assert edges[1, 3] == 255.0


def test_laplacian_single_bright_pixel():
    lum = np.zeros((5, 5))
    lum[2, 2] = 10.0
    edges = edge_map(lum)
    assert edges[2, 2] == 40.0
    assert edges[1, 2] == edges[3, 2] == edges[2, 1] == edges[2, 3] == 10.0
    assert edges[1, 1] == 0.0


def test_cell_sums_shape_and_total(checkerboard_image):
    lum = luminance_plane(checkerboard_image)
    edges = edge_map(lum)
    cells = cell_edge_sums(edges, 8)
    assert cells.shape == (16, 16)
    assert cells.sum() == pytest.approx(edges.sum())


def test_biomorphic_index_zero_mean_is_zero():
    assert biomorphic_index(np.zeros((16, 16))) == 0.0


def test_biomorphic_index_is_coefficient_of_variation():
    cells = np.array([[1.0, 3.0], [1.0, 3.0]])
    assert biomorphic_index(cells) == pytest.approx(0.5)


def test_features_never_negative(patch_image):
    for pixels in (patch_image, checkerboard(), np.random.default_rng(7).integers(0, 256, (128, 128, 3), dtype=np.uint8)):
        f = _features(pixels)
        assert f.texture_score >= 0
        assert f.normalized_edge_density >= 0
        assert f.biomorphic_index >= 0


@pytest.mark.parametrize(
    "rgb, expected",
    [
        ((200, 100, 100), ColorBias.RED),
        ((100, 180, 100), ColorBias.GREEN),
        ((100, 100, 180), ColorBias.BLUE),
        ((120, 122, 119), ColorBias.NEUTRAL),
        # Red needs a 15 margin; 14 is not enough
        ((114, 100, 100), ColorBias.NEUTRAL),
        # Green needs > 5 over blue
        ((100, 115, 110), ColorBias.NEUTRAL),
    ],
)
def test_color_bias(rgb, expected):
    assert detect_color_bias(*rgb) is expected


def test_rgb_display_rounds_half_up():
    f = _features(np.full((128, 128, 3), 0, dtype=np.uint8))
    assert f.rgb == (0, 0, 0)
    pixels = np.zeros((128, 128, 3), dtype=np.uint8)
    pixels[:, 64:, 0] = 1  # avg_r = 0.5
    assert _features(pixels).rgb == (1, 0, 0)
