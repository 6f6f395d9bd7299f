import pytest

from dabmix.colors import rgb_to_spectral, spectral_to_rgb
from dabmix.sampling import (
    ColorSums,
    get_color_pixels_accumulate,
    get_color_pixels_legacy,
)

ONE = 1 << 15


class CountingRng:
    def __init__(self, value):
        self.value = value
        self.calls = 0

    def random(self):
        self.calls += 1
        return self.value


def test_legacy_single_opaque_pixel():
    sums = ColorSums()
    result = get_color_pixels_legacy([ONE, 0, 0], [1000, 2000, 3000, ONE], sums)
    assert result is sums
    assert (sums.weight, sums.r, sums.g, sums.b, sums.a) == (ONE, 1000, 2000, 3000, ONE)


def test_legacy_adds_to_existing_sums():
    sums = ColorSums(weight=1.0, r=2.0, g=3.0, b=4.0, a=5.0)
    get_color_pixels_legacy([ONE, 0, 0], [1000, 2000, 3000, ONE], sums)
    assert (sums.weight, sums.r, sums.g, sums.b, sums.a) == (
        ONE + 1.0, 1002.0, 2003.0, 3004.0, ONE + 5.0,
    )


def test_legacy_skips_uncovered_pixels():
    rgba = [ONE, ONE, ONE, ONE, 1000, 2000, 3000, ONE]
    sums = get_color_pixels_legacy([0, 4, ONE, 0, 0], rgba, ColorSums())
    assert (sums.r, sums.g, sums.b) == (1000, 2000, 3000)


def test_negative_paint_falls_back_to_legacy():
    rgba = [1000, 2000, 3000, ONE, 500, 500, 500, ONE]
    mask = [ONE, ONE // 2, 0, 0]
    expected = get_color_pixels_legacy(mask, rgba, ColorSums())
    got = get_color_pixels_accumulate(mask, rgba, ColorSums(), -1.0, 1, 0.0, CountingRng(0.0))
    assert got == expected


def test_additive_single_opaque_pixel():
    sums = get_color_pixels_accumulate(
        [ONE, 0, 0], [1000, 2000, 3000, ONE], ColorSums(), 0.0, 1, 0.0, CountingRng(0.5)
    )
    assert sums.weight == pytest.approx(1.0)
    assert sums.a == pytest.approx(1.0)
    assert sums.r == pytest.approx(1000 / ONE)
    assert sums.g == pytest.approx(2000 / ONE)
    assert sums.b == pytest.approx(3000 / ONE)


def test_spectral_single_opaque_pixel_matches_spectral_round_trip():
    rgba = [ONE // 2, ONE // 4, ONE // 8, ONE]
    sums = get_color_pixels_accumulate([ONE, 0, 0], rgba, ColorSums(), 1.0, 1, 0.0, CountingRng(0.5))
    expected = spectral_to_rgb(rgb_to_spectral(0.5, 0.25, 0.125))
    assert (sums.r, sums.g, sums.b) == pytest.approx(expected)


def test_transparent_pixel_keeps_colour_but_adds_weight():
    sums = ColorSums(r=0.25, g=0.5, b=0.75)
    get_color_pixels_accumulate([ONE, 0, 0], [0, 0, 0, 0], sums, 0.0, 1, 0.0, CountingRng(0.5))
    assert (sums.r, sums.g, sums.b) == pytest.approx((0.25, 0.5, 0.75))
    assert sums.weight == pytest.approx(1.0)
    assert sums.a == 0.0


def test_interval_samples_every_nth_pixel_only():
    rng = CountingRng(0.99)
    rgba = [0, 0, 0, ONE] * 4
    sums = get_color_pixels_accumulate([ONE] * 4 + [0, 0], rgba, ColorSums(), 0.0, 2, 0.0, rng)
    assert sums.weight == pytest.approx(2.0)
    assert rng.calls == 2


def test_full_random_rate_samples_every_pixel():
    rng = CountingRng(0.0)
    rgba = [0, 0, 0, ONE] * 4
    sums = get_color_pixels_accumulate([ONE] * 4 + [0, 0], rgba, ColorSums(), 0.0, 4, 1.0, rng)
    assert sums.weight == pytest.approx(4.0)
    assert rng.calls == 3


def test_equal_pixels_average_to_their_colour():
    rgba = [ONE // 2, ONE // 2, ONE // 2, ONE] * 3
    sums = get_color_pixels_accumulate([ONE] * 3 + [0, 0], rgba, ColorSums(), 0.0, 1, 0.0, CountingRng(0.0))
    assert (sums.r, sums.g, sums.b) == pytest.approx((0.5, 0.5, 0.5))
    assert sums.a == pytest.approx(3.0)


def test_zero_interval_raises():
    with pytest.raises(ValueError):
        get_color_pixels_accumulate([ONE, 0, 0], [0, 0, 0, ONE], ColorSums(), 0.0, 0, 0.0, CountingRng(0.0))


def test_unterminated_mask_raises():
    with pytest.raises(ValueError):
        get_color_pixels_accumulate([ONE], [0, 0, 0, ONE], ColorSums(), 0.5, 1, 0.0, CountingRng(0.0))