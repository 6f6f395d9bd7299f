# dabmix

Building blocks for a raster brush engine: blending one brush dab into
premultiplied 15-bit RGBA pixels, sampling colours back out of them, and the
colour math those steps need. Pure Python, no dependencies.

## What is inside

- `dabmix.blendmodes` – blend modes that change a pixel buffer in place,
  driven by a run-length encoded dab mask: `draw_dab_normal`,
  `draw_dab_normal_paint` (spectral, paint-like mixing), `draw_dab_posterize`,
  `draw_dab_color`, `draw_dab_normal_and_eraser`,
  `draw_dab_normal_and_eraser_paint`, `draw_dab_lock_alpha`,
  `draw_dab_lock_alpha_paint`, plus `iter_mask` (walks a mask, yielding
  `(strength, index)` pairs) and `spectral_blend_factor`.
- `dabmix.sampling` – `ColorSums` (a dataclass of running totals),
  `get_color_pixels_legacy` and `get_color_pixels_accumulate` for picking up
  the colour under a dab. The latter takes an optional `rng` with a
  `random()` method and falls back to `random.Random()`.
- `dabmix.colors` – `rgb_to_hsv` / `hsv_to_rgb`, `rgb_to_hsl` / `hsl_to_rgb`,
  `rgb_to_hcy` / `hcy_to_rgb`, `rgb_to_spectral` / `spectral_to_rgb` (10-band
  reflectance curves), `mix_colors` (weighted geometric mean of two RGBA
  colours), `mod_arith`, `smallest_angular_difference`, `rand_gauss` and
  `clamp`.
- `dabmix.fastlog` – fast logarithm approximations working on the
  single-precision bit pattern of their argument (`fastlog2`, `fastlog`,
  `fasterlog2`, `fasterlog`), and the log-gamma and digamma approximations
  built on them (`fastlgamma`, `fasterlgamma`, `fastdigamma`,
  `fasterdigamma`).
- `dabmix.fasttrig` – polynomial approximations of sine, cosine and tangent
  (`fastsin`, `fastersin`, `fastcos`, `fastercos`, `fasttan`, `fastertan`) and
  their `*full` variants that first reduce any argument into range.
- `dabmix.ppm` – `fix15_to_rgba8` (premultiplied fix15 RGBA to straight 8-bit
  RGBA bytes) and `write_ppm` for writing pixels to a plain-text (P3) PPM file.

## Pixel format

Pixels are RGBA with premultiplied alpha, four integers per pixel in a flat
mutable sequence (a list or an `array('H')`); each channel lies in 0..32768,
where `1 << 15` stands for 1.0.

A dab mask is a sequence of 15-bit strengths in runs: each non-zero value
covers the next pixel, a zero ends the run, and the value after that zero is
how many channel values (4 per pixel) to skip before the next run begins. A
skip count of zero ends the mask; a mask without one raises `ValueError`.

## Example

```python
from dabmix.blendmodes import draw_dab_normal
from dabmix.colors import hsv_to_rgb
from dabmix.ppm import write_ppm

width, height = 2, 1
rgba = [0] * (width * height * 4)
mask = [1 << 15, 1 << 15, 0, 0]          # two fully covered pixels

r, g, b = hsv_to_rgb(0.0, 1.0, 1.0)      # red
scale = 1 << 15
draw_dab_normal(mask, rgba, int(r * scale), int(g * scale), int(b * scale), scale)

write_ppm("out.ppm", width, height, rgba)
```

## What it does not do

dabmix works on one dab and one buffer of pixels at a time. It has no brush
settings or stroke dynamics, no tiled drawing surface or tile storage, no
rendering of dab masks from a brush shape, and no command-line program. The
only image output is `write_ppm`; it does not read images.

## Running the tests

```
pip install -e .[test]
pytest
```