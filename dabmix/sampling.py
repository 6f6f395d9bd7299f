"""Sampling of the colour under a dab, for smudging and colour pick-up.

The pixel and mask formats are those of :mod:`dabmix.blendmodes`: ``rgba``
holds premultiplied 15-bit RGBA values, four per pixel, and ``mask`` is the
run-length encoded dab shape.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional, Sequence

from .blendmodes import iter_mask
from .colors import UniformSource, rgb_to_spectral, spectral_to_rgb

_ONE = 1 << 15
_ONE_SQUARED = 1 << 30


@dataclass
class ColorSums:
    """Running totals gathered while sampling one or more tiles."""

    weight: float = 0.0
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 0.0


def get_color_pixels_legacy(
    mask: Sequence[int],
    rgba: Sequence[int],
    sums: ColorSums,
) -> ColorSums:
    """Add the mask-weighted sums of every covered pixel to ``sums``.

    Totals for one tile are gathered as integers, then added to ``sums``,
    which is updated in place and returned.
    """
    weight = r = g = b = a = 0
    for strength, k in iter_mask(mask):
        weight += strength
        r += strength * rgba[k] // _ONE
        g += strength * rgba[k + 1] // _ONE
        b += strength * rgba[k + 2] // _ONE
        a += strength * rgba[k + 3] // _ONE
    sums.weight += weight
    sums.r += r
    sums.g += g
    sums.b += b
    sums.a += a
    return sums


def get_color_pixels_accumulate(
    mask: Sequence[int],
    rgba: Sequence[int],
    sums: ColorSums,
    paint: float,
    sample_interval: int,
    random_sample_rate: float,
    rng: Optional[UniformSource] = None,
) -> ColorSums:
    """Fold the colour under the mask into the running average in ``sums``.

    ``paint`` weighs spectral (1.0) against additive (0.0) averaging; a
    negative ``paint`` falls back to :func:`get_color_pixels_legacy`. Every
    ``sample_interval``-th covered pixel is sampled, starting with the first,
    and each other pixel with probability ``random_sample_rate``, drawn from
    ``rng``. ``sums`` is updated in place and returned.
    """
    if paint < 0.0:
        return get_color_pixels_legacy(mask, rgba, sums)
    if sample_interval <= 0:
        raise ValueError("sample_interval must be positive")
    if rng is None:
        rng = random.Random()

    if paint > 0.0:
        avg_spectral = rgb_to_spectral(sums.r, sums.g, sums.b)
    else:
        avg_spectral = [0.0] * 10
    avg_rgb = [sums.r, sums.g, sums.b]

    counter = 0
    for strength, k in iter_mask(mask):
        if counter == 0 or rng.random() < random_sample_rate:
            alpha = rgba[k + 3]
            a = strength * alpha / _ONE_SQUARED
            alpha_sums = a + sums.a
            sums.weight += strength / _ONE
            fac_a = fac_b = 1.0
            if alpha_sums > 0.0:
                fac_a = a / alpha_sums
                fac_b = 1.0 - fac_a
            if paint > 0.0 and alpha > 0:
                spectral = rgb_to_spectral(
                    rgba[k] / alpha, rgba[k + 1] / alpha, rgba[k + 2] / alpha
                )
                avg_spectral = [
                    (s ** fac_a) * (avg ** fac_b)
                    for s, avg in zip(spectral, avg_spectral)
                ]
            if paint < 1.0 and alpha > 0:
                avg_rgb = [
                    rgba[k + c] * fac_a / alpha + avg_rgb[c] * fac_b
                    for c in range(3)
                ]
            sums.a += a
        counter = (counter + 1) % sample_interval

    spec_rgb = spectral_to_rgb(avg_spectral)
    sums.r = spec_rgb[0] * paint + (1.0 - paint) * avg_rgb[0]
    sums.g = spec_rgb[1] * paint + (1.0 - paint) * avg_rgb[1]
    sums.b = spec_rgb[2] * paint + (1.0 - paint) * avg_rgb[2]
    return sums