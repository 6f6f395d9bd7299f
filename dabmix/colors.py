"""Colour-space conversions, spectral upsampling and colour mixing helpers.

All colour components are floats nominally in ``0.0..1.0``. The spectral
representation is a 10-band reflectance curve. Mixing in that space with a
weighted geometric mean gives paint-like subtractive results.
"""

from __future__ import annotations

import math
from typing import Protocol, Sequence, Tuple

WGM_EPSILON = 0.001

_T_MATRIX_SMALL = (
    (
        0.026595621243689, 0.049779426257903, 0.022449850859496,
        -0.218453689278271, -0.256894883201278, 0.445881722194840,
        0.772365886289756, 0.194498761382537, 0.014038157587820,
        0.007687264480513,
    ),
    (
        -0.032601672674412, -0.061021043498478, -0.052490001018404,
        0.206659098273522, 0.572496335158169, 0.317837248815438,
        -0.021216624031211, -0.019387668756117, -0.001521339050858,
        -0.000835181622534,
    ),
    (
        0.339475473216284, 0.635401374177222, 0.771520797089589,
        0.113222640692379, -0.055251113343776, -0.048222578468680,
        -0.012966666339586, -0.001523814504223, -0.000094718948810,
        -0.000051604594741,
    ),
)

_SPECTRAL_R_SMALL = (
    0.009281362787953, 0.009732627042016, 0.011254252737167,
    0.015105578649573, 0.024797924177217, 0.083622585502406,
    0.977865045723212, 1.000000000000000, 0.999961046144372,
    0.999999992756822,
)

_SPECTRAL_G_SMALL = (
    0.002854127435775, 0.003917589679914, 0.012132151699187,
    0.748259205918013, 1.000000000000000, 0.865695937531795,
    0.037477469241101, 0.022816789725717, 0.021747419446456,
    0.021384940572308,
)

_SPECTRAL_B_SMALL = (
    0.537052150373386, 0.546646402401469, 0.575501819073983,
    0.258778829633924, 0.041709923751716, 0.012662638828324,
    0.007485593127390, 0.006766900622462, 0.006699764779016,
    0.006676219883241,
)

_HCY_RED_LUMA = 0.2162
_HCY_GREEN_LUMA = 0.7152
_HCY_BLUE_LUMA = 0.0722

_SQRT3 = 1.73205080757
_TWO_SQRT3 = 3.46410161514

Color3 = Tuple[float, float, float]


class UniformSource(Protocol):
    """Anything that yields uniform random floats in ``[0, 1)``."""

    def random(self) -> float: ...


def clamp(x: float, low: float, high: float) -> float:
    """Limit ``x`` to the interval ``[low, high]``."""
    if x > high:
        return high
    if x < low:
        return low
    return x


def rand_gauss(rng: UniformSource) -> float:
    """Approximately normal random value (mean 0, deviation 1) from four uniform draws."""
    total = sum(rng.random() for _ in range(4))
    return total * _SQRT3 - _TWO_SQRT3


def mod_arith(a: float, n: float) -> float:
    """Arithmetic modulo: the result has the sign of ``n``, even for negative ``a``."""
    return a - n * math.floor(a / n)


def smallest_angular_difference(angle_a: float, angle_b: float) -> float:
    """Signed smallest difference in degrees to turn from ``angle_a`` to ``angle_b``."""
    a = mod_arith(angle_b - angle_a + 180, 360) - 180
    if a > 180:
        a -= 360
    elif a < -180:
        a += 360
    return a


def rgb_to_hsv(r: float, g: float, b: float) -> Color3:
    """Convert RGB to ``(hue, saturation, value)``, each in ``0..1``."""
    r, g, b = (clamp(c, 0.0, 1.0) for c in (r, g, b))
    high = max(r, g, b)
    low = min(r, g, b)
    delta = high - low
    if delta <= 0.0001:
        return 0.0, 0.0, high
    s = delta / high
    if r == high:
        h = (g - b) / delta
        if h < 0.0:
            h += 6.0
    elif g == high:
        h = 2.0 + (b - r) / delta
    else:
        h = 4.0 + (r - g) / delta
    return h / 6.0, s, high


def hsv_to_rgb(h: float, s: float, v: float) -> Color3:
    """Convert ``(hue, saturation, value)`` to RGB; the hue wraps around."""
    h = h - math.floor(h)
    s = clamp(s, 0.0, 1.0)
    v = clamp(v, 0.0, 1.0)
    if s == 0.0:
        return v, v, v
    hue = 0.0 if h == 1.0 else h
    hue *= 6.0
    i = int(hue)
    f = hue - i
    w = v * (1.0 - s)
    q = v * (1.0 - s * f)
    t = v * (1.0 - s * (1.0 - f))
    sectors = (
        (v, t, w),
        (q, v, w),
        (w, v, t),
        (w, q, v),
        (t, w, v),
        (v, w, q),
    )
    return sectors[i]


def rgb_to_hsl(r: float, g: float, b: float) -> Color3:
    """Convert RGB to ``(hue, saturation, lightness)``, each in ``0..1``."""
    r, g, b = (clamp(c, 0.0, 1.0) for c in (r, g, b))
    high = max(r, g, b)
    low = min(r, g, b)
    lightness = (high + low) / 2.0
    if high == low:
        return 0.0, 0.0, lightness
    if lightness <= 0.5:
        s = (high - low) / (high + low)
    else:
        s = (high - low) / (2.0 - high - low)
    delta = (high - low) or 1.0
    if r == high:
        h = (g - b) / delta
    elif g == high:
        h = 2.0 + (b - r) / delta
    else:
        h = 4.0 + (r - g) / delta
    h /= 6.0
    if h < 0.0:
        h += 1.0
    return h, s, lightness


def _hsl_value(n1: float, n2: float, hue: float) -> float:
    if hue > 6.0:
        hue -= 6.0
    elif hue < 0.0:
        hue += 6.0
    if hue < 1.0:
        return n1 + (n2 - n1) * hue
    if hue < 3.0:
        return n2
    if hue < 4.0:
        return n1 + (n2 - n1) * (4.0 - hue)
    return n1


def hsl_to_rgb(h: float, s: float, l: float) -> Color3:
    """Convert ``(hue, saturation, lightness)`` to RGB; the hue wraps around."""
    h = h - math.floor(h)
    s = clamp(s, 0.0, 1.0)
    l = clamp(l, 0.0, 1.0)
    if s == 0:
        return l, l, l
    m2 = l * (1.0 + s) if l <= 0.5 else l + s - l * s
    m1 = 2.0 * l - m2
    return (
        _hsl_value(m1, m2, h * 6.0 + 2.0),
        _hsl_value(m1, m2, h * 6.0),
        _hsl_value(m1, m2, h * 6.0 - 2.0),
    )


def rgb_to_hcy(r: float, g: float, b: float) -> Color3:
    """Convert RGB to ``(hue, chroma, luma)``."""
    y = _HCY_RED_LUMA * r + _HCY_GREEN_LUMA * g + _HCY_BLUE_LUMA * b
    p = max(r, g, b)
    n = min(r, g, b)
    d = p - n
    if n == p:
        h = 0.0
    elif p == r:
        h = (g - b) / d
        if h < 0:
            h += 6.0
    elif p == g:
        h = (b - r) / d + 2.0
    else:
        h = (r - g) / d + 4.0
    h = math.fmod(h / 6.0, 1.0)
    if r == g == b:
        c = 0.0
    else:
        c = max((y - n) / y, (p - y) / (1 - y))
    return h, c, y


def hcy_to_rgb(h: float, c: float, y: float) -> Color3:
    """Convert ``(hue, chroma, luma)`` to RGB; the hue wraps around."""
    h = h - math.floor(h)
    c = clamp(c, 0.0, 1.0)
    y = clamp(y, 0.0, 1.0)
    h = math.fmod(h, 1.0) * 6.0

    if h < 1:
        th = h
        tm = _HCY_RED_LUMA + _HCY_GREEN_LUMA * th
    elif h < 2:
        th = 2.0 - h
        tm = _HCY_GREEN_LUMA + _HCY_RED_LUMA * th
    elif h < 3:
        th = h - 2.0
        tm = _HCY_GREEN_LUMA + _HCY_BLUE_LUMA * th
    elif h < 4:
        th = 4.0 - h
        tm = _HCY_BLUE_LUMA + _HCY_GREEN_LUMA * th
    elif h < 5:
        th = h - 4.0
        tm = _HCY_BLUE_LUMA + _HCY_RED_LUMA * th
    else:
        th = 6.0 - h
        tm = _HCY_RED_LUMA + _HCY_BLUE_LUMA * th

    # Components in sorted order: p is the largest, n the smallest.
    if tm >= y:
        p = y + y * c * (1 - tm) / tm
        o = y + y * c * (th - tm) / tm
        n = y - y * c
    else:
        p = y + (1 - y) * c
        o = y + (1 - y) * c * (th - tm) / (1 - tm)
        n = y - (1 - y) * c * tm / (1 - tm)

    if h < 1:
        return p, o, n
    if h < 2:
        return o, p, n
    if h < 3:
        return n, p, o
    if h < 4:
        return n, o, p
    if h < 5:
        return o, n, p
    return p, n, o


def rgb_to_spectral(r: float, g: float, b: float) -> list[float]:
    """Upsample an RGB colour to a 10-band spectral reflectance curve."""
    offset = 1.0 - WGM_EPSILON
    r = r * offset + WGM_EPSILON
    g = g * offset + WGM_EPSILON
    b = b * offset + WGM_EPSILON
    return [
        sr * r + sg * g + sb * b
        for sr, sg, sb in zip(_SPECTRAL_R_SMALL, _SPECTRAL_G_SMALL, _SPECTRAL_B_SMALL)
    ]


def spectral_to_rgb(spectral: Sequence[float]) -> Color3:
    """Collapse a 10-band spectral curve back to an RGB colour clamped to ``0..1``."""
    if len(spectral) != 10:
        raise ValueError(f"expected 10 spectral bands, got {len(spectral)}")
    offset = 1.0 - WGM_EPSILON
    r, g, b = (
        clamp((sum(t * s for t, s in zip(row, spectral)) - WGM_EPSILON) / offset, 0.0, 1.0)
        for row in _T_MATRIX_SMALL
    )
    return r, g, b


def mix_colors(
    a: Sequence[float],
    b: Sequence[float],
    fac: float,
    paint_mode: float,
) -> Tuple[float, float, float, float]:
    """Mix two straight RGBA colours, ``fac`` being the weight of ``a``.

    ``paint_mode`` blends between additive mixing (0.0) and spectral,
    paint-like mixing (1.0). Returns ``(r, g, b, a)``.
    """
    if len(a) != 4 or len(b) != 4:
        raise ValueError("colours must have four components (r, g, b, a)")
    opa_a = fac
    opa_b = 1.0 - opa_a
    alpha = clamp(opa_a * a[3] + opa_b * b[3], 0.0, 1.0)
    sfac_a = 0.0 if a[3] == 0 else opa_a * a[3] / (a[3] + b[3] * opa_b)
    sfac_b = 1.0 - sfac_a

    rgb: Sequence[float] = (0.0, 0.0, 0.0)
    if paint_mode > 0.0:
        spec_a = rgb_to_spectral(a[0], a[1], a[2])
        spec_b = rgb_to_spectral(b[0], b[1], b[2])
        mixed = [math.pow(sa, sfac_a) * math.pow(sb, sfac_b) for sa, sb in zip(spec_a, spec_b)]
        rgb = spectral_to_rgb(mixed)

    if paint_mode < 1.0:
        rgb = tuple(
            rgb[i] * paint_mode + (1 - paint_mode) * (a[i] * opa_a + b[i] * opa_b)
            for i in range(3)
        )

    return rgb[0], rgb[1], rgb[2], alpha