import math

import pytest

from dabmix.fasttrig import (
    fastcos,
    fastcosfull,
    fastercos,
    fastercosfull,
    fastersin,
    fastersinfull,
    fastertan,
    fastertanfull,
    fastsin,
    fastsinfull,
    fasttan,
    fasttanfull,
)

IN_RANGE = [i * math.pi / 20 for i in range(-20, 21)]
WIDE = [x * 0.37 for x in range(-60, 61)]
TAN_RANGE = [x / 10 for x in range(-12, 13)]
TAN_WIDE = [0.3, 1.0, 4.0, -7.0, 10.0, -2.5, 13.0]


@pytest.mark.parametrize("x", IN_RANGE)
def test_fastsin_close_to_sin(x):
    assert fastsin(x) == pytest.approx(math.sin(x), abs=2e-3)


@pytest.mark.parametrize("x", IN_RANGE)
def test_fastersin_close_to_sin(x):
    assert fastersin(x) == pytest.approx(math.sin(x), abs=1e-2)


@pytest.mark.parametrize("x", IN_RANGE)
def test_fastcos_close_to_cos(x):
    assert fastcos(x) == pytest.approx(math.cos(x), abs=2e-3)


@pytest.mark.parametrize("x", IN_RANGE)
def test_fastercos_close_to_cos(x):
    assert fastercos(x) == pytest.approx(math.cos(x), abs=1e-2)


@pytest.mark.parametrize("x", WIDE)
def test_full_sine_variants(x):
    assert fastsinfull(x) == pytest.approx(math.sin(x), abs=2e-3)
    assert fastersinfull(x) == pytest.approx(math.sin(x), abs=1e-2)


@pytest.mark.parametrize("x", WIDE)
def test_full_cosine_variants(x):
    assert fastcosfull(x) == pytest.approx(math.cos(x), abs=2e-3)
    assert fastercosfull(x) == pytest.approx(math.cos(x), abs=1e-2)


@pytest.mark.parametrize("x", TAN_RANGE)
def test_tangent_variants(x):
    assert fasttan(x) == pytest.approx(math.tan(x), abs=1e-2)
    assert fastertan(x) == pytest.approx(math.tan(x), abs=5e-2)


@pytest.mark.parametrize("x", TAN_WIDE)
def test_full_tangent_variants(x):
    assert fasttanfull(x) == pytest.approx(math.tan(x), abs=1e-2)
    assert fastertanfull(x) == pytest.approx(math.tan(x), abs=5e-2)


@pytest.mark.parametrize("x", IN_RANGE)
def test_sine_is_odd(x):
    assert fastsin(-x) == -fastsin(x)
    assert fastersin(-x) == -fastersin(x)


@pytest.mark.parametrize("x", IN_RANGE)
def test_fastercos_is_even(x):
    assert fastercos(-x) == fastercos(x)


def test_sine_of_zero():
    assert fastsin(0.0) == 0.0
    assert fastersin(0.0) == 0.0


def test_sine_bounded_in_range():
    assert all(-1.01 <= fastsin(x) <= 1.01 for x in IN_RANGE)