"""
Help and info overlay.

Renders the key help and the current view parameters as text on a
transparent RGBA image, which the app sends to the terminal on top of
the Mandelbrot image. Uses pygame's font module only, so no window or
display is needed.
"""

import os

import numpy as np

# Keep pygame quiet on import; stdout carries the image stream
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame


HELP_LINES = [
    "- arrow keys to pan",
    "- +/- or left/right click to zoom",
    "- [/] to change depth",
    "- h/i toggle help/info",
    "- d toggle binary decompose",
    "- q/ESC/c-C to quit",
    "- r to reset",
]

WHITE = (255, 255, 255, 255)
WHITE_80 = (255, 255, 255, 204)
BLUE_80 = (128, 128, 255, 204)


def format_center(center):
    """Format a complex center the way the info panel shows it."""
    return f"({center.real:g}{center.imag:+g}i)"


def format_duration(seconds):
    if seconds < 1.0:
        return f"{seconds * 1000:.1f}ms"
    return f"{seconds:.3f}s"


class OverlayComposer:
    """
    Draws the text overlay for a ViewState.

    The view is only read. The image is 600x300 with help shown, and
    7 lines tall when only the info panel is on.
    """

    WIDTH = 600
    HEIGHT = 300
    LINE_HEIGHT = 22
    PADDING = 10
    FONT_SIZE = 24
    TITLE = "Terminal Mandelbrot"

    def __init__(self, view):
        self.view = view
        self.font = None

    def init_fonts(self):
        pygame.font.init()
        # None selects pygame's bundled default font
        self.font = pygame.font.Font(None, self.FONT_SIZE)

    def info_lines(self):
        view = self.view
        return [
            f"- Center {format_center(view.center)}",
            f"- Radius {view.radius:g}",
            f"- Depth {view.depth}",
            f"- Time {format_duration(view.last_render_duration)}",
        ]

    def compose(self):
        """
        Render the overlay.

        Returns:
            (height, width, 4) uint8 RGBA array, or None when both help
            and info are switched off
        """
        view = self.view
        if not (view.show_help or view.show_info):
            return None
        if self.font is None:
            self.init_fonts()

        h = self.LINE_HEIGHT
        height = self.HEIGHT
        info_y = h * 10
        if not view.show_help:
            height = 7 * h
            info_y = h

        surface = pygame.Surface((self.WIDTH, height), pygame.SRCALPHA)
        if view.show_help:
            self._draw_text(surface, h * 1, self.TITLE, WHITE)
            for n, line in enumerate(HELP_LINES, start=2):
                self._draw_text(surface, h * n, line, WHITE_80)
        if view.show_info:
            for n, line in enumerate(self.info_lines()):
                self._draw_text(surface, info_y + h * n, line, BLUE_80)

        rgb = pygame.surfarray.array3d(surface).swapaxes(0, 1)
        alpha = pygame.surfarray.array_alpha(surface).swapaxes(0, 1)
        return np.ascontiguousarray(np.dstack((rgb, alpha)), dtype=np.uint8)

    def _draw_text(self, surface, baseline, text, color):
        """Draw text with its baseline at y = baseline."""
        text_surface = self.font.render(text, True, color[:3])
        text_surface.set_alpha(color[3])
        surface.blit(text_surface, (self.PADDING, baseline - self.font.get_ascent()))
