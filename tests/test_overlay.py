import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
import pygame

from termbrot.overlay import HELP_LINES, OverlayComposer, format_center, format_duration
from termbrot.view import ViewState


@pytest.fixture
def view():
    return ViewState(center=-0.75 + 0.25j, radius=0.5, depth=1024,
                     last_render_duration=0.0421)


def test_full_overlay(view):
    image = OverlayComposer(view).compose()
    assert image.shape == (300, 600, 4)
    assert image.dtype.name == 'uint8'
    assert image[..., 3].any()
    # right half of the panel has no text
    assert not image[:, 590:, 3].any()


def test_info_only_overlay_is_shorter(view):
    view.show_help = False
    image = OverlayComposer(view).compose()
    assert image.shape == (7 * 22, 600, 4)
    assert image[..., 3].any()


def test_help_only_overlay(view):
    view.show_info = False
    image = OverlayComposer(view).compose()
    assert image.shape == (300, 600, 4)
    # info lines start at line 10
    assert not image[200:, :, 3].any()


def test_no_overlay_when_both_off(view):
    view.show_help = False
    view.show_info = False
    assert OverlayComposer(view).compose() is None


def test_info_lines(view):
    lines = OverlayComposer(view).info_lines()
    assert lines == [
        "- Center (-0.75+0.25i)",
        "- Radius 0.5",
        "- Depth 1024",
        "- Time 42.1ms",
    ]


def test_formatting():
    assert format_center(0j) == "(0+0i)"
    assert format_center(1.5 - 2j) == "(1.5-2i)"
    assert format_duration(1.25) == "1.250s"


def test_every_overlay_character_has_a_glyph(view):
    composer = OverlayComposer(view)
    composer.init_fonts()
    font = composer.font

    def alpha(text):
        return pygame.surfarray.array_alpha(font.render(text, True, (255, 255, 255)))

    missing = alpha("\uffff")
    text = "".join(HELP_LINES + [OverlayComposer.TITLE] + composer.info_lines())
    for ch in sorted(set(text) - {" "}):
        glyph = alpha(ch)
        assert glyph.shape != missing.shape or not np.array_equal(glyph, missing), repr(ch)
