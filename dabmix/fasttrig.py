"""Fast polynomial approximations of sine, cosine and tangent.

The plain variants (``fastsin``, ``fastcos``, ``fasttan`` and their ``faster``
counterparts) expect arguments in ``[-pi, pi]`` (``[-pi/2, pi/2]`` for the
tangents). The ``*full`` variants reduce any argument into that range first;
their range reduction becomes inaccurate for very large magnitudes.
"""

from __future__ import annotations

import math

_FOUR_OVER_PI = 1.2732395447351627
_FOUR_OVER_PI_SQ = 0.40528473456935109
_TWO_OVER_PI = 0.63661977236758134
_HALF_PI = 1.5707963267948966
_HALF_PI_MINUS_TWO_PI = -4.7123889803846899
_TWO_PI = 6.2831853071795865
_INV_TWO_PI = 0.15915494309189534

_SIN_Q = 0.78444488374548933
_SIN_P = 0.20363937680730309
_SIN_R = 0.015124940802184233
_SIN_S = -0.0032225901625579573

_FASTER_SIN_Q = 0.77633023248007499
_FASTER_SIN_P = 0.22308510060189463

_FASTER_COS_P = 0.54641335845679634


def _is_negative(x: float) -> bool:
    """True when the sign bit of ``x`` is set (including ``-0.0``)."""
    return math.copysign(1.0, x) < 0.0


def _parabola(x: float) -> float:
    return _FOUR_OVER_PI * x - _FOUR_OVER_PI_SQ * x * abs(x)


def _reduce(x: float) -> float:
    """Offset of ``x`` from the nearest odd multiple of pi, as used by the full variants."""
    k = int(x * _INV_TWO_PI)
    half = -0.5 if x < 0 else 0.5
    return (half + k) * _TWO_PI


def fastsin(x: float) -> float:
    """Approximate ``sin(x)`` for ``x`` in ``[-pi, pi]``."""
    negative = _is_negative(x)
    p = -_SIN_P if negative else _SIN_P
    r = -_SIN_R if negative else _SIN_R
    s = -_SIN_S if negative else _SIN_S
    q = _parabola(x)
    qsq = q * q
    return _SIN_Q * q + qsq * (p + qsq * (r + qsq * s))


def fastersin(x: float) -> float:
    """Coarser approximation of ``sin(x)`` for ``x`` in ``[-pi, pi]``."""
    p = -_FASTER_SIN_P if _is_negative(x) else _FASTER_SIN_P
    q = _parabola(x)
    return q * (_FASTER_SIN_Q + p * q)


def fastsinfull(x: float) -> float:
    """Approximate ``sin(x)`` for any ``x``."""
    return fastsin(_reduce(x) - x)


def fastersinfull(x: float) -> float:
    """Coarser approximation of ``sin(x)`` for any ``x``."""
    return fastersin(_reduce(x) - x)


def fastcos(x: float) -> float:
    """Approximate ``cos(x)`` for ``x`` in ``[-pi, pi]``."""
    offset = _HALF_PI_MINUS_TWO_PI if x > _HALF_PI else _HALF_PI
    return fastsin(x + offset)


def fastercos(x: float) -> float:
    """Coarser approximation of ``cos(x)`` for ``x`` in ``[-pi, pi]``."""
    q = 1.0 - _TWO_OVER_PI * abs(x)
    return q + _FASTER_COS_P * q * (1.0 - q * q)


def fastcosfull(x: float) -> float:
    """Approximate ``cos(x)`` for any ``x``."""
    return fastsinfull(x + _HALF_PI)


def fastercosfull(x: float) -> float:
    """Coarser approximation of ``cos(x)`` for any ``x``."""
    return fastersinfull(x + _HALF_PI)


def fasttan(x: float) -> float:
    """Approximate ``tan(x)`` for ``x`` in ``[-pi/2, pi/2]``."""
    return fastsin(x) / fastsin(x + _HALF_PI)


def fastertan(x: float) -> float:
    """Coarser approximation of ``tan(x)`` for ``x`` in ``[-pi/2, pi/2]``."""
    return fastersin(x) / fastercos(x)


def fasttanfull(x: float) -> float:
    """Approximate ``tan(x)`` for any ``x``."""
    reduced = x - _reduce(x)
    return fastsin(reduced) / fastcos(reduced)


def fastertanfull(x: float) -> float:
    """Coarser approximation of ``tan(x)`` for any ``x``."""
    reduced = x - _reduce(x)
    return fastersin(reduced) / fastercos(reduced)