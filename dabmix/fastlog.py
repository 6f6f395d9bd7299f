"""Fast approximations of logarithms and of the log-gamma and digamma functions.

The logarithms work on the IEEE-754 single-precision bit pattern of their
argument. They are only meaningful for positive, finite inputs. The gamma
family likewise only works for positive arguments.
"""

from __future__ import annotations

import struct

_FLOAT = struct.Struct("<f")
_UINT = struct.Struct("<I")

_MANTISSA_MASK = 0x007FFFFF
_HALF_EXPONENT = 0x3F000000
_BIT_SCALE_LOG2 = 1.1920928955078125e-7
_BIT_SCALE_LN = 8.2629582881927490e-8
_LN2 = 0.69314718


def _float_bits(x: float) -> int:
    """Bit pattern of ``x`` rounded to single precision."""
    return _UINT.unpack(_FLOAT.pack(x))[0]


def _bits_float(bits: int) -> float:
    """Single-precision value with the given bit pattern."""
    return _FLOAT.unpack(_UINT.pack(bits))[0]


def fastlog2(x: float) -> float:
    """Approximate ``log2(x)`` for positive ``x``."""
    bits = _float_bits(x)
    mantissa = _bits_float((bits & _MANTISSA_MASK) | _HALF_EXPONENT)
    y = bits * _BIT_SCALE_LOG2
    return (
        y
        - 124.22551499
        - 1.498030302 * mantissa
        - 1.72587999 / (0.3520887068 + mantissa)
    )


def fastlog(x: float) -> float:
    """Approximate the natural logarithm of positive ``x``."""
    return _LN2 * fastlog2(x)


def fasterlog2(x: float) -> float:
    """Coarser approximation of ``log2(x)`` for positive ``x``."""
    return _float_bits(x) * _BIT_SCALE_LOG2 - 126.94269504


def fasterlog(x: float) -> float:
    """Coarser approximation of the natural logarithm of positive ``x``."""
    return _float_bits(x) * _BIT_SCALE_LN - 87.989971088


def fastlgamma(x: float) -> float:
    """Approximate ``ln(Gamma(x))`` for positive ``x``."""
    logterm = fastlog(x * (1.0 + x) * (2.0 + x))
    xp3 = 3.0 + x
    return (
        -2.081061466
        - x
        + 0.0833333 / xp3
        - logterm
        + (2.5 + x) * fastlog(xp3)
    )


def fasterlgamma(x: float) -> float:
    """Coarser approximation of ``ln(Gamma(x))`` for positive ``x``."""
    return (
        -0.0810614667
        - x
        - fasterlog(x)
        + (0.5 + x) * fasterlog(1.0 + x)
    )


def fastdigamma(x: float) -> float:
    """Approximate the digamma function for positive ``x``."""
    twopx = 2.0 + x
    logterm = fastlog(twopx)
    numerator = -48.0 + x * (-157.0 + x * (-127.0 - 30.0 * x))
    denominator = 12.0 * x * (1.0 + x) * twopx * twopx
    return numerator / denominator + logterm


def fasterdigamma(x: float) -> float:
    """Coarser approximation of the digamma function for positive ``x``."""
    onepx = 1.0 + x
    return -1.0 / x - 1.0 / (2 * onepx) + fasterlog(onepx)