import numpy as np
import pytest

from termbrot.colormaps import GRADIENT
from termbrot.compute import escape_time, render_rows, smooth_color


@pytest.mark.parametrize("c", [3 + 0j, -2.5 + 0j, 0 + 2.1j, 1.5 - 1.5j, -100 + 100j])
def test_points_outside_radius_escape_after_one_update(c):
    # The check at iteration 0 sees z == 0, so the first update always runs
    i, z = escape_time(c, 256)
    assert i == 1
    assert z == c


@pytest.mark.parametrize("c", [0j, -1 + 0j, -0.75 + 0j, 0.25 + 0j, -0.1 + 0.1j])
@pytest.mark.parametrize("max_depth", [1, 64, 100, 500])
def test_points_in_the_set_never_escape(c, max_depth):
    i, z = escape_time(c, max_depth)
    assert i == max_depth
    assert abs(z) < 2


def test_escape_count_matches_hand_iteration():
    c = 0.5 + 0.5j
    z = 0j
    expected = 0
    while expected < 100 and abs(z) < 2:
        z = z * z + c
        expected += 1
    i, final = escape_time(c, 100)
    assert i == expected < 100
    assert final == pytest.approx(z)


@pytest.mark.parametrize("z", [0j, 1 + 1j, -3 - 4j, 100j])
@pytest.mark.parametrize("decompose", [False, True])
def test_interior_is_black(z, decompose):
    assert smooth_color(256, z, 256, decompose, GRADIENT) == (0, 0, 0)


def test_zero_maps_to_first_stop():
    # |z| <= 1 falls back to the integer count, so i = 0 gives t = 0
    assert smooth_color(0, 0.5 + 0j, 100, False, GRADIENT) == tuple(GRADIENT[0])


def test_full_depth_clamps_to_last_stop():
    # smooth = 99 + 1 - log2(log 2) > 100, so t clamps to exactly 1
    assert smooth_color(99, 2 + 0j, 100, False, GRADIENT) == tuple(GRADIENT[-1])


def test_midpoint_lands_on_middle_stop():
    # log(log(e)) == 0 so smooth == 50 and t == 0.5, the red stop
    r, g, b = smooth_color(49, complex(np.e, 0), 100, False, GRADIENT)
    assert abs(r - 255) <= 1
    assert g == 0
    assert b <= 1


def test_small_magnitude_uses_integer_count():
    # t = 0.1 sits 40% of the way from black to blue
    assert smooth_color(10, 0.5 + 0j, 100, False, GRADIENT) == (0, 0, 102)


@pytest.mark.parametrize("i", [1, 5, 20, 60, 99])
def test_decompose_flips_blue_bit_below_real_axis(i):
    z = 2.5 - 1.5j
    plain = smooth_color(i, z, 100, False, GRADIENT)
    flipped = smooth_color(i, z, 100, True, GRADIENT)
    assert flipped[0] == plain[0]
    assert flipped[1] == plain[1]
    assert flipped[2] == plain[2] ^ 0x10


def test_decompose_leaves_upper_half_alone():
    z = 2.5 + 1.5j
    assert smooth_color(30, z, 100, True, GRADIENT) == smooth_color(30, z, 100, False, GRADIENT)


def test_channels_stay_in_byte_range():
    for i in range(0, 256, 7):
        for z in (2 + 0j, 3 - 3j, 1e3 + 1e3j):
            for decompose in (False, True):
                color = smooth_color(i, z, 256, decompose, GRADIENT)
                assert all(0 <= v <= 255 for v in color)


def test_render_rows_matches_per_pixel_functions():
    out = np.zeros((3, 5, 3), dtype=np.uint8)
    fx0, fy0, dx, dy = -2.0, -1.0, 0.5, 0.25
    render_rows(fx0, fy0, dx, dy, 2, out, 64, True, GRADIENT)
    for row in range(3):
        for px in range(5):
            c = complex(fx0 + dx * px, fy0 + dy * (2 + row))
            i, z = escape_time(c, 64)
            assert tuple(out[row, px]) == smooth_color(i, z, 64, True, GRADIENT)
