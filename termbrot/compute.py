"""
Mandelbrot computation functions using Numba JIT compilation.

This module contains the performance-critical pieces of the renderer:
- escape_time: the escape-time evaluator for a single point
- smooth_color: continuous colouring of an escape result over a gradient
- render_rows: the parallel kernel that fills a band of the pixel buffer

Every function here is pure with respect to shared state, so the
parallel kernel can call the per-pixel functions from any number of
worker threads without synchronization.
"""

import numpy as np
from numba import jit, prange


ESCAPE_RADIUS = 2.0
DECOMPOSE_MASK = 0x10


@jit(nopython=True, cache=True)
def escape_time(c, max_depth):
    """
    Iterate z <- z² + c from z = 0 until |z| >= 2 or max_depth is reached.

    The escape test runs before each update, so a point that starts
    outside the radius still goes through one update (c itself) before
    it is seen to escape.

    Args:
        c: Point in the complex plane
        max_depth: Maximum iteration count

    Returns:
        (iteration_count, final_z). iteration_count == max_depth means the
        orbit stayed bounded.
    """
    z = 0j
    i = 0
    while i < max_depth:
        if abs(z) >= ESCAPE_RADIUS:
            break
        z = z * z + c
        i += 1
    return i, z


@jit(nopython=True, cache=True)
def smooth_color(i, z, max_depth, decompose, gradient):
    """
    Map an escape result to an RGB colour.

    Uses the fractional iteration count i + 1 - log2(log|z|) so that
    neighbouring pixels blend instead of forming bands, then linearly
    interpolates between the two gradient stops that bracket it.

    Args:
        i: Iteration count from escape_time
        z: Final orbit value from escape_time
        max_depth: Depth the orbit was computed with
        decompose: Flip bit 0x10 of blue when the orbit escaped below the real axis
        gradient: Nx3 array of RGB stops (uint8)

    Returns:
        (r, g, b) ints in 0..255
    """
    if i == max_depth:
        # Inside the set (black)
        return 0, 0, 0

    mag = abs(z)
    if mag > 1.0:
        smooth = i + 1.0 - np.log(np.log(mag)) / np.log(2.0)
    else:
        # log(log|z|) undefined, fall back to the integer count
        smooth = float(i)

    t = smooth / max_depth
    t = min(max(t, 0.0), 1.0)

    last = gradient.shape[0] - 1
    fidx = t * last
    idx = int(fidx)
    frac = fidx - idx
    upper = min(idx + 1, last)

    r = int(gradient[idx, 0] * (1.0 - frac) + gradient[upper, 0] * frac)
    g = int(gradient[idx, 1] * (1.0 - frac) + gradient[upper, 1] * frac)
    b = int(gradient[idx, 2] * (1.0 - frac) + gradient[upper, 2] * frac)

    if decompose and z.imag < 0:
        b ^= DECOMPOSE_MASK

    return r, g, b


@jit(nopython=True, parallel=True, cache=True)
def render_rows(fx0, fy0, dx, dy, row_start, out, max_depth, decompose, gradient):
    """
    Fill a band of rows of the pixel buffer.

    Each row is an independent task of the prange loop and writes only
    its own row of out, so rows can run on any thread in any order and
    still give the same bytes.

    Args:
        fx0, fy0: Plane coordinate of pixel (0, 0) of the full image
        dx, dy: Plane step per pixel along x and y
        row_start: Index of out's first row within the full image
        out: (rows, width, 3) uint8 array, modified in place
        max_depth: Maximum iteration count
        decompose: Decompose flag passed to smooth_color
        gradient: Nx3 array of RGB stops (uint8)
    """
    rows, width = out.shape[0], out.shape[1]

    for row in prange(rows):
        fy = fy0 + dy * (row_start + row)
        for px in range(width):
            i, z = escape_time(complex(fx0 + dx * px, fy), max_depth)
            r, g, b = smooth_color(i, z, max_depth, decompose, gradient)
            out[row, px, 0] = r
            out[row, px, 1] = g
            out[row, px, 2] = b


def warmup_jit(gradient):
    """
    Warm up JIT compilation with a tiny dummy render.

    Call this once at startup so the first interactive frame doesn't
    pay for compilation.

    Args:
        gradient: The gradient array the renderer will use
    """
    dummy = np.zeros((4, 4, 3), dtype=np.uint8)
    render_rows(-2.0, -2.0, 1.0, 1.0, 0, dummy, 64, False, gradient)
    render_rows(-2.0, -2.0, 1.0, 1.0, 0, dummy, 64, True, gradient)
