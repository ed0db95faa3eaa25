import numpy as np
import pytest

from core.frame import CoordinateFrame
from core.spectrum import (
    base_weights,
    column_wavelengths,
    gamma_channel,
    intensity,
    iter_band,
    spectrum_rgb,
    wavelength_to_color,
)


def test_visible_range_always_lit():
    for nm in np.arange(380.0, 780.25, 0.25):
        assert any(wavelength_to_color(float(nm)).rgb), f"{nm} nm rendered black"


@pytest.mark.parametrize("nm", [0.0, 200.0, 379.0, 379.999, 780.001, 781.0, 900.0])
def test_outside_visible_range_is_black(nm):
    sample = wavelength_to_color(nm)
    assert sample.rgb == (0, 0, 0)
    assert (sample.r, sample.g, sample.b) == (0.0, 0.0, 0.0)


@pytest.mark.parametrize("nm, expected", [
    (380.0, (1.0, 0.0, 1.0)),
    (440.0, (0.0, 0.0, 1.0)),
    (490.0, (0.0, 1.0, 1.0)),
    (510.0, (0.0, 1.0, 0.0)),
    (580.0, (1.0, 1.0, 0.0)),
    (645.0, (1.0, 0.0, 0.0)),
    (780.0, (1.0, 0.0, 0.0)),
])
def test_boundaries_use_inclusive_upper_band(nm, expected):
    assert base_weights(nm) == pytest.approx(expected)


def test_band_interiors():
    assert base_weights(410.0) == pytest.approx((0.5, 0.0, 1.0))
    assert base_weights(465.0) == pytest.approx((0.0, 0.5, 1.0))
    assert base_weights(500.0) == pytest.approx((0.0, 1.0, 0.5))
    assert base_weights(545.0) == pytest.approx((0.5, 1.0, 0.0))
    assert base_weights(612.5) == pytest.approx((1.0, 0.5, 0.0))
    assert base_weights(700.0) == pytest.approx((1.0, 0.0, 0.0))


def test_intensity_fades_at_edges():
    assert intensity(379.0) == 0.0
    assert intensity(380.0) == pytest.approx(0.3 * 255)
    assert intensity(400.0) == pytest.approx(255 * 0.65)
    assert intensity(420.0) == 255.0
    assert intensity(700.0) == 255.0
    assert intensity(740.0) == pytest.approx(255 * 0.65)
    assert intensity(780.0) == pytest.approx(0.3 * 255)
    assert intensity(781.0) == 0.0


def test_zero_weight_channel_is_exactly_zero():
    assert gamma_channel(255.0, 0.0) == 0
    assert gamma_channel(0.0, 0.0) == 0
    assert isinstance(gamma_channel(0.0, 0.0), int)


def test_gamma_curve_values():
    assert gamma_channel(255.0, 1.0) == 204
    assert gamma_channel(255.0, 0.5) == 105
    # Full green at 550 nm, red partially lit.
    assert wavelength_to_color(550.0).rgb == (119, 204, 0)
    assert wavelength_to_color(440.0).rgb == (0, 0, 204)


def test_vectorised_matches_scalar():
    nms = np.concatenate([np.arange(300.0, 820.0, 0.37), [380.0, 440.0, 490.0, 510.0, 580.0, 645.0, 780.0]])
    expected = np.array([wavelength_to_color(float(nm)).rgb for nm in nms])
    np.testing.assert_array_equal(spectrum_rgb(nms), expected)


def test_column_wavelengths_follow_frame():
    frame = CoordinateFrame(min_x=50, max_x=750, min_y=0, max_y=400,
                            coord_min_x=200, coord_max_x=900)
    nms = column_wavelengths(frame)
    assert len(nms) == 700
    assert nms[0] == pytest.approx(200.0)
    assert nms[-1] == pytest.approx(899.0)

    # Changing the frame changes the mapping.
    frame.coord_min_x, frame.coord_max_x = 400, 750
    nms = column_wavelengths(frame)
    assert nms[0] == pytest.approx(400.0)
    assert nms[1] - nms[0] == pytest.approx(0.5)


def test_iter_band_yields_one_color_per_column():
    frame = CoordinateFrame(min_x=0, max_x=10, min_y=0, max_y=10,
                            coord_min_x=435, coord_max_x=445)
    band = list(iter_band(frame))
    assert [px for px, _ in band] == [float(i) for i in range(10)]
    colors = dict(band)
    # 440 nm sits at column 5; it must still have no red.
    assert colors[5.0][0] == 0
    assert colors[4.0][0] > 0


def test_iter_band_colors_match_column_wavelengths():
    frame = CoordinateFrame(min_x=50, max_x=750, min_y=0, max_y=400,
                            coord_min_x=200, coord_max_x=900)
    band = list(iter_band(frame, gamma=0.8))
    expected = spectrum_rgb(column_wavelengths(frame), 0.8)
    assert len(band) == len(expected)
    np.testing.assert_array_equal([rgb for _, rgb in band], expected)
