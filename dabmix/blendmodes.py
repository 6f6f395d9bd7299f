"""Blend modes that composite a brush dab into a tile of 15-bit RGBA pixels.

Pixel data (``rgba``) is a flat, mutable sequence of integers with four
channels per pixel (red, green, blue, alpha). Colour channels are
premultiplied by alpha, and every channel lies in ``0..2**15``. A list or an
``array('H')`` both work. The ``draw_dab_*`` functions change ``rgba`` in
place and return ``None``.

The dab shape (``mask``) is run-length encoded:

* a run of non-zero strengths, one per consecutive pixel,
* a ``0`` that ends the run,
* a skip count, in channel units (4 per pixel), to jump over before the
  next run begins; a skip count of ``0`` ends the mask.

A mask of ``[a, b, 0, 8, c, 0, 0]`` thus touches pixels 0 and 1, skips two
pixels and touches pixel 4.

Colours (``color_r``, ``color_g``, ``color_b``) are straight, not
premultiplied, in ``0..2**15``. ``opacity`` scales the mask strengths.
"""

from __future__ import annotations

from typing import Iterator, MutableSequence, Sequence, Tuple

from .colors import clamp, rgb_to_spectral, spectral_to_rgb

_ONE = 1 << 15

# Paint modes lose precision at very low opacities.
_MIN_PAINT_OPACITY = 150

# Luma weights scaled to fix15 (BT.709 coefficients, as in the W3C
# compositing specification).
_LUMA_RED = 0.2126 * _ONE
_LUMA_GREEN = 0.7152 * _ONE
_LUMA_BLUE = 0.0722 * _ONE

Pixels = MutableSequence[int]


def _u16(value: float) -> int:
    """Store a value the way a 16-bit unsigned channel would."""
    return int(value) & 0xFFFF


def _i16(value: int) -> int:
    return ((value + 0x8000) & 0xFFFF) - 0x8000


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def iter_mask(mask: Sequence[int]) -> Iterator[Tuple[int, int]]:
    """Yield ``(strength, index)`` for each pixel the encoded mask covers.

    ``index`` is the position of the pixel's first channel in the RGBA data.
    Raises ``ValueError`` if the mask ends without a terminating skip of 0.
    """
    i = 0
    pos = 0
    try:
        while True:
            while mask[i]:
                yield mask[i], pos
                i += 1
                pos += 4
            skip = mask[i + 1]
            if not skip:
                return
            pos += skip
            i += 2
    except IndexError:
        raise ValueError("mask is not terminated by a zero skip count") from None


def _spectral_mix(spectral_a: Sequence[float], spectral_b: Sequence[float],
                  fac_a: float, fac_b: float) -> Tuple[float, float, float]:
    """Weighted geometric mean of two spectra, converted back to RGB."""
    mixed = [(sa ** fac_a) * (sb ** fac_b) for sa, sb in zip(spectral_a, spectral_b)]
    return spectral_to_rgb(mixed)


def _straight_spectral(rgba: Sequence[int], k: int) -> list[float]:
    alpha = rgba[k + 3]
    return rgb_to_spectral(rgba[k] / alpha, rgba[k + 1] / alpha, rgba[k + 2] / alpha)


def _blend_rgb(rgba: Pixels, k: int, opa_a: int, opa_b: int,
               color: Tuple[int, int, int]) -> None:
    for c in range(3):
        rgba[k + c] = _u16((opa_a * color[c] + opa_b * rgba[k + c]) // _ONE)


def _top_alpha(strength: int, opacity: int) -> Tuple[int, int]:
    opa_a = strength * opacity // _ONE
    return opa_a, _ONE - opa_a


def draw_dab_normal(mask: Sequence[int], rgba: Pixels, color_r: int,
                    color_g: int, color_b: int, opacity: int) -> None:
    """Composite the colour over the pixels ("over" with premultiplied alpha)."""
    color = (color_r, color_g, color_b)
    for strength, k in iter_mask(mask):
        opa_a, opa_b = _top_alpha(strength, opacity)
        rgba[k + 3] = _u16(opa_a + opa_b * rgba[k + 3] // _ONE)
        _blend_rgb(rgba, k, opa_a, opa_b, color)


def draw_dab_normal_paint(mask: Sequence[int], rgba: Pixels, color_r: int,
                          color_g: int, color_b: int, opacity: int) -> None:
    """Composite the colour with spectral, paint-like mixing."""
    color = (color_r, color_g, color_b)
    spectral_a = rgb_to_spectral(color_r / _ONE, color_g / _ONE, color_b / _ONE)
    opacity = max(opacity, _MIN_PAINT_OPACITY)
    for strength, k in iter_mask(mask):
        opa_a, opa_b = _top_alpha(strength, opacity)
        if rgba[k + 3] <= 0:
            # Nothing underneath to mix with: plain additive blending.
            rgba[k + 3] = _u16(opa_a + opa_b * rgba[k + 3] // _ONE)
            _blend_rgb(rgba, k, opa_a, opa_b, color)
            continue
        fac_a = opa_a / (opa_a + opa_b * rgba[k + 3] // _ONE)
        fac_b = 1.0 - fac_a
        spectral_b = _straight_spectral(rgba, k)
        result = _spectral_mix(spectral_a, spectral_b, fac_a, fac_b)
        rgba[k + 3] = _u16(opa_a + opa_b * rgba[k + 3] // _ONE)
        for c in range(3):
            rgba[k + c] = _u16(result[c] * rgba[k + 3] + 0.5)


def draw_dab_posterize(mask: Sequence[int], rgba: Pixels, opacity: int,
                       posterize_num: int) -> None:
    """Reduce the pixels to ``posterize_num`` levels per channel, blended by opacity.

    Alpha is left unchanged.
    """
    if posterize_num <= 0:
        raise ValueError("posterize_num must be positive")
    for strength, k in iter_mask(mask):
        posterized = tuple(
            _ONE * int((rgba[k + c] / _ONE) * posterize_num + 0.5) // posterize_num
            for c in range(3)
        )
        opa_a, opa_b = _top_alpha(strength, opacity)
        _blend_rgb(rgba, k, opa_a, opa_b, posterized)


def _set_lum(top: Tuple[int, int, int], bottom: Tuple[int, int, int]) -> Tuple[int, int, int]:
    """Give the top colour the luminance of the bottom one, clipped into gamut."""

    def luma(r: float, g: float, b: float) -> float:
        return r * _LUMA_RED + g * _LUMA_GREEN + b * _LUMA_BLUE

    botlum = _u16(luma(*bottom) / _ONE)
    toplum = _u16(luma(*top) / _ONE)
    diff = _i16(botlum - toplum)
    r, g, b = (c + diff for c in top)

    lum = int(luma(r, g, b) / _ONE)
    cmin = min(r, g, b)
    cmax = max(r, g, b)
    if cmin < 0:
        r, g, b = (lum + _trunc_div((c - lum) * lum, lum - cmin) for c in (r, g, b))
    if cmax > _ONE:
        r, g, b = (lum + _trunc_div((c - lum) * (_ONE - lum), cmax - lum) for c in (r, g, b))
    return _u16(r), _u16(g), _u16(b)


def draw_dab_color(mask: Sequence[int], rgba: Pixels, color_r: int,
                   color_g: int, color_b: int, opacity: int) -> None:
    """Apply the hue and saturation of the colour, keeping the pixels' luminance.

    Alpha is left unchanged.
    """
    top = (color_r, color_g, color_b)
    for strength, k in iter_mask(mask):
        a = rgba[k + 3]
        if a:
            straight = tuple(_u16(_ONE * rgba[k + c] // a) for c in range(3))
        else:
            straight = (0, 0, 0)
        lum_rgb = _set_lum(top, straight)
        premult = tuple(_u16(c * a // _ONE) for c in lum_rgb)
        opa_a, opa_b = _top_alpha(strength, opacity)
        _blend_rgb(rgba, k, opa_a, opa_b, premult)


def draw_dab_normal_and_eraser(mask: Sequence[int], rgba: Pixels, color_r: int,
                               color_g: int, color_b: int, color_a: int,
                               opacity: int) -> None:
    """Blend a colour that carries its own alpha; ``color_a`` of 0 erases."""
    color = (color_r, color_g, color_b)
    for strength, k in iter_mask(mask):
        opa_a, opa_b = _top_alpha(strength, opacity)
        opa_a = opa_a * color_a // _ONE
        rgba[k + 3] = _u16(opa_a + opa_b * rgba[k + 3] // _ONE)
        _blend_rgb(rgba, k, opa_a, opa_b, color)


def spectral_blend_factor(x: float) -> float:
    """Sigmoid-like weight of spectral over additive mixing for canvas alpha ``x``."""
    ver_fac = 1.65
    hor_fac = 8.0
    hor_offs = 3.0
    b = x * hor_fac - hor_offs
    return 0.5 + b / (1 + abs(b) * ver_fac)


def draw_dab_normal_and_eraser_paint(mask: Sequence[int], rgba: Pixels, color_r: int,
                                     color_g: int, color_b: int, color_a: int,
                                     opacity: int) -> None:
    """Paint-like variant of :func:`draw_dab_normal_and_eraser`.

    Mostly transparent pixels are mixed additively, mostly opaque ones
    spectrally, with a smooth transition in between.
    """
    color = (color_r, color_g, color_b)
    spectral_a = rgb_to_spectral(color_r / _ONE, color_g / _ONE, color_b / _ONE)
    for strength, k in iter_mask(mask):
        opa_a, opa_b = _top_alpha(strength, opacity)
        opa_a2 = opa_a * color_a // _ONE
        bottom_alpha = rgba[k + 3]
        opa_out = opa_a2 + opa_b * bottom_alpha // _ONE

        spectral_factor = clamp(spectral_blend_factor(bottom_alpha / _ONE), 0.0, 1.0)
        additive_factor = 1.0 - spectral_factor

        rgb = [0, 0, 0]
        if additive_factor:
            rgb = [(opa_a2 * color[c] + opa_b * rgba[k + c]) // _ONE for c in range(3)]

        if spectral_factor and bottom_alpha != 0:
            spectral_b = _straight_spectral(rgba, k)
            fac_a = opa_a / (opa_a + opa_b * bottom_alpha // _ONE)
            fac_a *= color_a / _ONE
            fac_b = 1.0 - fac_a
            result = _spectral_mix(spectral_a, spectral_b, fac_a, fac_b)
            rgb = [
                int(additive_factor * rgb[c] + spectral_factor * result[c] * opa_out)
                for c in range(3)
            ]

        rgba[k + 3] = _u16(opa_out)
        for c in range(3):
            rgba[k + c] = _u16(rgb[c])


def draw_dab_lock_alpha(mask: Sequence[int], rgba: Pixels, color_r: int,
                        color_g: int, color_b: int, opacity: int) -> None:
    """Like :func:`draw_dab_normal`, but the pixels' alpha stays as it is."""
    color = (color_r, color_g, color_b)
    for strength, k in iter_mask(mask):
        opa_a, opa_b = _top_alpha(strength, opacity)
        opa_a = opa_a * rgba[k + 3] // _ONE
        _blend_rgb(rgba, k, opa_a, opa_b, color)


def draw_dab_lock_alpha_paint(mask: Sequence[int], rgba: Pixels, color_r: int,
                              color_g: int, color_b: int, opacity: int) -> None:
    """Paint-like variant of :func:`draw_dab_lock_alpha`."""
    color = (color_r, color_g, color_b)
    spectral_a = rgb_to_spectral(color_r / _ONE, color_g / _ONE, color_b / _ONE)
    opacity = max(opacity, _MIN_PAINT_OPACITY)
    for strength, k in iter_mask(mask):
        opa_a, opa_b = _top_alpha(strength, opacity)
        opa_a = opa_a * rgba[k + 3] // _ONE
        if rgba[k + 3] <= 0:
            _blend_rgb(rgba, k, opa_a, opa_b, color)
            continue
        fac_a = opa_a / (opa_a + opa_b * rgba[k + 3] // _ONE)
        fac_b = 1.0 - fac_a
        spectral_b = _straight_spectral(rgba, k)
        result = _spectral_mix(spectral_a, spectral_b, fac_a, fac_b)
        for c in range(3):
            rgba[k + c] = _u16(result[c] * rgba[k + 3] + 0.5)