# core/spectrum.py
"""
Visible-spectrum color approximation.

Wavelengths are split into six piecewise-linear bands (after Dan Bruton's
well known FORTRAN approximation, https://www.physics.sfasu.edu/astro/color/spectra.html),
attenuated towards both edges of the visible range and passed through a
power-law gamma. Every band uses an inclusive upper bound, so a boundary
wavelength such as 440 nm belongs to the band below it.
"""
import math
from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np

from core.frame import CoordinateFrame

VISIBLE_MIN = 380.0
VISIBLE_MAX = 780.0
FADE_IN_END = 420.0
FADE_OUT_START = 700.0
EDGE_FLOOR = 0.3
FULL_SCALE = 255.0
GAMMA = 0.96

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class ColorSample:
    wavelength_nm: float
    r: float
    g: float
    b: float
    rgb: RGB


def base_weights(nm: float) -> Tuple[float, float, float]:
    """Unscaled red, green and blue weights for a wavelength."""
    if nm < VISIBLE_MIN or nm > VISIBLE_MAX:
        return 0.0, 0.0, 0.0
    if nm <= 440:
        return (440 - nm) / (440 - 380), 0.0, 1.0
    if nm <= 490:
        return 0.0, (nm - 440) / (490 - 440), 1.0
    if nm <= 510:
        return 0.0, 1.0, (510 - nm) / (510 - 490)
    if nm <= 580:
        return (nm - 510) / (580 - 510), 1.0, 0.0
    if nm <= 645:
        return 1.0, (645 - nm) / (645 - 580), 0.0
    return 1.0, 0.0, 0.0


def intensity(nm: float) -> float:
    """Edge attenuation in [0, 255]."""
    if nm < VISIBLE_MIN or nm > VISIBLE_MAX:
        return 0.0
    if nm > FADE_OUT_START:
        return FULL_SCALE * (EDGE_FLOOR + (1 - EDGE_FLOOR) * (VISIBLE_MAX - nm) / (VISIBLE_MAX - FADE_OUT_START))
    if nm < FADE_IN_END:
        return FULL_SCALE * (EDGE_FLOOR + (1 - EDGE_FLOOR) * (nm - VISIBLE_MIN) / (FADE_IN_END - VISIBLE_MIN))
    return FULL_SCALE


def gamma_channel(mag: float, weight: float, gamma: float = GAMMA) -> int:
    # 0 ** gamma is never evaluated for an unlit channel.
    if weight == 0:
        return 0
    return int(math.floor((mag * weight) ** gamma + 0.5))


def wavelength_to_color(nm: float, gamma: float = GAMMA) -> ColorSample:
    r, g, b = base_weights(nm)
    mag = intensity(nm)
    rgb = (gamma_channel(mag, r, gamma), gamma_channel(mag, g, gamma), gamma_channel(mag, b, gamma))
    return ColorSample(wavelength_nm=nm, r=r, g=g, b=b, rgb=rgb)


def spectrum_rgb(nm: np.ndarray, gamma: float = GAMMA) -> np.ndarray:
    """
    Vectorised form of :func:`wavelength_to_color`.

    Returns an integer array of shape (len(nm), 3).
    """
    nm = np.asarray(nm, dtype=float)
    zero = np.zeros_like(nm)
    one = np.ones_like(nm)
    outside = (nm < VISIBLE_MIN) | (nm > VISIBLE_MAX)
    bands = [outside, nm <= 440, nm <= 490, nm <= 510, nm <= 580, nm <= 645]

    r = np.select(bands, [zero, (440 - nm) / (440 - 380), zero, zero, (nm - 510) / (580 - 510), one], default=one)
    g = np.select(bands, [zero, zero, (nm - 440) / (490 - 440), one, one, (645 - nm) / (645 - 580)], default=zero)
    b = np.select(bands, [zero, one, one, (510 - nm) / (510 - 490), zero, zero], default=zero)

    fade_out = FULL_SCALE * (EDGE_FLOOR + (1 - EDGE_FLOOR) * (VISIBLE_MAX - nm) / (VISIBLE_MAX - FADE_OUT_START))
    fade_in = FULL_SCALE * (EDGE_FLOOR + (1 - EDGE_FLOOR) * (nm - VISIBLE_MIN) / (FADE_IN_END - VISIBLE_MIN))
    mag = np.select([outside, nm > FADE_OUT_START, nm < FADE_IN_END], [zero, fade_out, fade_in], default=FULL_SCALE * one)

    channels = []
    for weight in (r, g, b):
        lit = weight != 0
        value = np.zeros_like(nm)
        value[lit] = np.floor((mag[lit] * weight[lit]) ** gamma + 0.5)
        channels.append(value)
    return np.stack(channels, axis=-1).astype(int)


def band_columns(frame: CoordinateFrame) -> np.ndarray:
    """Integer-spaced pixel columns from min_x up to, but excluding, max_x."""
    return np.arange(frame.min_x, frame.max_x, 1.0)


def column_wavelengths(frame: CoordinateFrame) -> np.ndarray:
    ax, bx = frame.x_affine()
    return ax + bx * band_columns(frame)


def iter_band(frame: CoordinateFrame, gamma: float = GAMMA) -> Iterator[Tuple[float, RGB]]:
    """Yield (pixel column, rgb) for every column of the frame."""
    columns = band_columns(frame)
    colors = spectrum_rgb(column_wavelengths(frame), gamma)
    for px, (r, g, b) in zip(columns, colors):
        yield float(px), (int(r), int(g), int(b))
