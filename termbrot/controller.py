"""
Interaction controller.

Translates typed input events into ViewState mutations. The controller
knows nothing about curses or the terminal: input sources hand it
KeyEvent / MouseEvent / ResizeEvent objects, and it answers with an
Outcome telling the main loop whether to redraw, ignore, or quit.
"""

import enum
import logging
from dataclasses import dataclass

from .view import PlaneMapping

logger = logging.getLogger(__name__)


# Named keys. Printable keys are passed as their character.
KEY_UP = 'up'
KEY_DOWN = 'down'
KEY_LEFT = 'left'
KEY_RIGHT = 'right'
KEY_PGUP = 'pgup'
KEY_PGDN = 'pgdn'
KEY_ESC = 'esc'
KEY_CTRL_C = 'ctrl-c'

# Mouse buttons
MOUSE_LEFT = 'left'
MOUSE_RIGHT = 'right'
MOUSE_WHEEL_UP = 'wheel_up'
MOUSE_WHEEL_DOWN = 'wheel_down'


@dataclass(frozen=True)
class KeyEvent:
    key: str
    alt: bool = False


@dataclass(frozen=True)
class MouseEvent:
    """Mouse event at pixel (x, y) of the rendered image."""
    button: str
    x: int
    y: int
    alt: bool = False


@dataclass(frozen=True)
class ResizeEvent:
    pass


class Outcome(enum.Enum):
    IGNORE = 'ignore'
    REDRAW = 'redraw'
    QUIT = 'quit'


class Controller:
    """
    Applies one input event at a time to a ViewState.

    Args:
        view: ViewState to mutate
        raster_size: Callable returning the current (width, height) of the
            rendered image in pixels; used to turn clicks into plane points
    """

    QUIT_KEYS = (KEY_ESC, KEY_CTRL_C, 'q')

    def __init__(self, view, raster_size):
        self.view = view
        self.raster_size = raster_size

        # Key -> ViewState operation
        self.key_actions = {
            KEY_UP: lambda: view.pan('up'),
            KEY_DOWN: lambda: view.pan('down'),
            KEY_LEFT: lambda: view.pan('left'),
            KEY_RIGHT: lambda: view.pan('right'),
            KEY_PGUP: view.zoom_in,
            '=': view.zoom_in,
            '+': view.zoom_in,
            KEY_PGDN: view.zoom_out,
            '-': view.zoom_out,
            '_': view.zoom_out,
            ']': view.increase_depth,
            '[': view.decrease_depth,
            'h': view.toggle_help,
            'i': view.toggle_info,
            'd': view.toggle_decompose,
            'r': view.reset,
        }

    def handle(self, event):
        """
        Apply event to the view.

        Returns:
            Outcome.REDRAW if the frame must be redrawn, Outcome.QUIT to
            leave, Outcome.IGNORE for anything without a mapping or that
            leaves the view as it was (e.g. "[" at the depth floor)
        """
        before = self.view.snapshot()
        if isinstance(event, KeyEvent):
            outcome = self._handle_key(event)
        elif isinstance(event, MouseEvent):
            outcome = self._handle_mouse(event)
        elif isinstance(event, ResizeEvent):
            outcome = Outcome.REDRAW
        else:
            outcome = Outcome.IGNORE
        if outcome is Outcome.REDRAW and not isinstance(event, ResizeEvent):
            if self.view.snapshot() == before:
                outcome = Outcome.IGNORE
        logger.debug("%r -> %s", event, outcome.value)
        return outcome

    def _handle_key(self, event):
        if event.key in self.QUIT_KEYS:
            return Outcome.QUIT
        action = self.key_actions.get(event.key)
        if action is None:
            return Outcome.IGNORE
        action()
        return Outcome.REDRAW

    def _handle_mouse(self, event):
        view = self.view
        if event.button in (MOUSE_LEFT, MOUSE_RIGHT):
            width, height = self.raster_size()
            mapping = PlaneMapping.from_view(view, width, height)
            view.recenter(mapping.pixel_to_plane(event.x, event.y))
            if event.button == MOUSE_LEFT and not event.alt:
                view.zoom_in()
            else:
                view.zoom_out()
        elif event.button == MOUSE_WHEEL_UP:
            view.zoom_in()
        elif event.button == MOUSE_WHEEL_DOWN:
            view.zoom_out()
        else:
            return Outcome.IGNORE
        return Outcome.REDRAW
