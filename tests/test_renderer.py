import numpy as np
import pytest

from termbrot.colormaps import GRADIENT
from termbrot.compute import escape_time, smooth_color
from termbrot.renderer import PlaneRenderer
from termbrot.view import PlaneMapping, ViewState


@pytest.fixture
def renderer():
    return PlaneRenderer()


def test_buffer_shape_and_type(renderer):
    rgb = renderer.render(ViewState(), 48, 30)
    assert rgb.shape == (30, 48, 3)
    assert rgb.dtype == np.uint8


def test_same_view_renders_identical_bytes(renderer):
    view = ViewState(center=-0.5 + 0.1j, radius=0.8, depth=128, decompose=True)
    first = renderer.render(view, 97, 61)
    second = renderer.render(view, 97, 61)
    assert first is not second
    assert first.tobytes() == second.tobytes()


def test_end_to_end_center_is_interior(renderer):
    view = ViewState(center=-0.75 + 0j, radius=1.5, depth=100)
    mapping = PlaneMapping.from_view(view, 100, 100)
    c = mapping.pixel_to_plane(50, 50)
    assert c == pytest.approx(-0.75 + 0j, abs=mapping.dx)

    i, z = escape_time(c, 100)
    assert i == 100
    assert smooth_color(i, z, 100, False, GRADIENT) == (0, 0, 0)

    rgb = renderer.render(view, 100, 100)
    assert tuple(rgb[50, 50]) == (0, 0, 0)


def test_pixels_follow_the_shared_mapping(renderer):
    view = ViewState(center=0.25 + 0.5j, radius=0.6, depth=64)
    width, height = 31, 17
    rgb = renderer.render(view, width, height)
    mapping = PlaneMapping.from_view(view, width, height)
    for px, py in [(0, 0), (30, 16), (15, 8), (3, 12), (29, 1)]:
        i, z = escape_time(mapping.pixel_to_plane(px, py), view.depth)
        assert tuple(rgb[py, px]) == smooth_color(i, z, view.depth, False, GRADIENT)


@pytest.mark.parametrize("band_height", [1, 4, 7, 40])
def test_bands_cover_every_row(renderer, band_height):
    view = ViewState(radius=1.2)
    full = PlaneRenderer().render(view, 40, 23)

    starts = []
    pieces = []
    for row_start, band in renderer.iter_bands(view, 40, 23, band_height):
        starts.append(row_start)
        pieces.append(band.copy())
    assert starts == list(range(0, 23, band_height))
    assert np.array_equal(np.concatenate(pieces), full)


def test_decompose_only_touches_blue(renderer):
    view = ViewState(radius=1.5, depth=64)
    plain = renderer.render(view, 60, 40)
    view.decompose = True
    flipped = renderer.render(view, 60, 40)
    assert np.array_equal(plain[..., :2], flipped[..., :2])
    diff = plain[..., 2] ^ flipped[..., 2]
    assert set(np.unique(diff)) <= {0, 0x10}
    assert (diff == 0x10).any()


def test_render_records_duration(renderer):
    view = ViewState()
    view.last_render_duration = -1.0
    renderer.render(view, 20, 20)
    assert view.last_render_duration >= 0


def test_empty_raster_rejected(renderer):
    view = ViewState()
    with pytest.raises(ValueError):
        renderer.render(view, 0, 10)
    assert view.last_render_duration == 0.0


def test_renderer_keeps_no_frame_between_passes(renderer):
    view = ViewState()
    first = renderer.render(view, 16, 16)
    bands = [band for _, band in renderer.iter_bands(view, 16, 16, 4)]
    assert all(band.base is not first for band in bands)
    assert not any(isinstance(value, np.ndarray) and value.shape == (16, 16, 3)
                   for value in vars(renderer).values())
