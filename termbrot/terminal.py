"""
Terminal I/O for termbrot.

Three small collaborators live here:
- query_geometry(): terminal size in cells and pixels via TIOCGWINSZ
- KittyWriter: streams raw pixel data using the kitty graphics protocol
- CursesInput: blocking source of typed input events from curses

None of them know about the Mandelbrot set; the app wires them to the
renderer and the controller.
"""

import base64
import contextlib
import curses
import fcntl
import logging
import os
import struct
import sys
import termios
from dataclasses import dataclass

from .controller import (
    KeyEvent, MouseEvent, ResizeEvent,
    KEY_UP, KEY_DOWN, KEY_LEFT, KEY_RIGHT, KEY_PGUP, KEY_PGDN, KEY_ESC, KEY_CTRL_C,
    MOUSE_LEFT, MOUSE_RIGHT, MOUSE_WHEEL_UP, MOUSE_WHEEL_DOWN,
)

logger = logging.getLogger(__name__)


class GeometryError(RuntimeError):
    """The terminal did not report a usable pixel size."""


@dataclass(frozen=True)
class Geometry:
    """
    Usable terminal area in character cells and pixels.

    Attributes:
        rows, cols: Cells available for the image
        cell_width, cell_height: Size of one cell in pixels
    """
    rows: int
    cols: int
    cell_width: int
    cell_height: int

    @property
    def width(self):
        """Image width in pixels."""
        return self.cols * self.cell_width

    @property
    def height(self):
        """Image height in pixels."""
        return self.rows * self.cell_height

    @classmethod
    def from_winsize(cls, rows, cols, xpixel, ypixel):
        """
        Derive the image geometry from a TIOCGWINSZ reply.

        One row and one column are given up so the image never touches the
        last cell, which some terminals (ghostty) scroll on.

        Raises:
            GeometryError if the terminal reports no pixel size
        """
        if rows < 2 or cols < 2:
            raise GeometryError(f"terminal too small: {cols}x{rows} cells")
        if xpixel <= 0 or ypixel <= 0:
            raise GeometryError("terminal does not report its size in pixels")
        cell_width, cell_height = xpixel // cols, ypixel // rows
        if cell_width == 0 or cell_height == 0:
            raise GeometryError(f"bad pixel size {xpixel}x{ypixel} for {cols}x{rows} cells")
        return cls(rows - 1, cols - 1, cell_width, cell_height)


def query_geometry(fd=None):
    """
    Ask the terminal on fd (default: stdout) for its size.

    Returns:
        Geometry

    Raises:
        GeometryError if the size can't be read
    """
    if fd is None:
        fd = sys.stdout.fileno()
    try:
        packed = fcntl.ioctl(fd, termios.TIOCGWINSZ, struct.pack('HHHH', 0, 0, 0, 0))
    except OSError as e:
        raise GeometryError(f"error retrieving terminal size: {e}") from e
    rows, cols, xpixel, ypixel = struct.unpack('HHHH', packed)
    return Geometry.from_winsize(rows, cols, xpixel, ypixel)


# Kitty graphics pixel formats
FORMAT_RGB = 24
FORMAT_RGBA = 32


def encode_image(pixels, width, height, fmt, chunk_size=4096):
    """
    Build the kitty graphics escape sequences for one image.

    The base64 payload is split into chunk_size pieces; every piece but
    the last carries m=1 ("more follows").

    Args:
        pixels: Raw pixel bytes (or a uint8 numpy array), row-major
        width, height: Image size in pixels
        fmt: FORMAT_RGB or FORMAT_RGBA
        chunk_size: Payload bytes per escape sequence

    Returns:
        List of escape sequence strings
    """
    data = base64.standard_b64encode(bytes(pixels)).decode('ascii')
    sequences = []
    while data:
        chunk, data = data[:chunk_size], data[chunk_size:]
        more = 1 if data else 0
        sequences.append(
            f"\033_Gf={fmt},a=T,s={width},v={height},q=2,m={more};{chunk}\033\\"
        )
    return sequences


class KittyWriter:
    """
    Writes images to the terminal with the kitty graphics protocol.

    Images are placed at the cursor and overwrite whatever is there.

    Args:
        stream: Text stream to write to (default sys.stdout)
        chunk_size: Base64 bytes per escape sequence (default 4096)
    """

    CHUNK_SIZE = 4096

    def __init__(self, stream=None, chunk_size=None):
        self.stream = sys.stdout if stream is None else stream
        self.chunk_size = chunk_size or self.CHUNK_SIZE

    def home(self):
        """Home the cursor without clearing the screen."""
        self.stream.write("\033[H")

    def newline(self):
        self.stream.write("\n")

    def write_rgb(self, rgb):
        """Write a (height, width, 3) uint8 array."""
        self._write(rgb, FORMAT_RGB)

    def write_rgba(self, rgba):
        """Write a (height, width, 4) uint8 array."""
        self._write(rgba, FORMAT_RGBA)

    def _write(self, pixels, fmt):
        height, width = pixels.shape[:2]
        for seq in encode_image(pixels.tobytes(), width, height, fmt, self.chunk_size):
            self.stream.write(seq)

    def flush(self):
        self.stream.flush()


# curses key code -> named key
_CURSES_KEYS = {
    curses.KEY_UP: KEY_UP,
    curses.KEY_DOWN: KEY_DOWN,
    curses.KEY_LEFT: KEY_LEFT,
    curses.KEY_RIGHT: KEY_RIGHT,
    curses.KEY_PPAGE: KEY_PGUP,
    curses.KEY_NPAGE: KEY_PGDN,
    27: KEY_ESC,
    3: KEY_CTRL_C,
}


def mouse_button(bstate):
    """Map a curses button state to a mouse button name, or None."""
    if bstate & (curses.BUTTON1_PRESSED | curses.BUTTON1_CLICKED):
        return MOUSE_LEFT
    if bstate & (curses.BUTTON3_PRESSED | curses.BUTTON3_CLICKED):
        return MOUSE_RIGHT
    if bstate & curses.BUTTON4_PRESSED:
        return MOUSE_WHEEL_UP
    if bstate & curses.BUTTON5_PRESSED:
        return MOUSE_WHEEL_DOWN
    return None


class CursesInput:
    """
    Blocking source of input events.

    Args:
        stdscr: curses window in keypad mode
        geometry: Callable returning the current Geometry; mouse cell
            positions are turned into pixel positions with it
    """

    def __init__(self, stdscr, geometry):
        self.stdscr = stdscr
        self.geometry = geometry

    def next_event(self):
        """
        Wait for the next event.

        Returns:
            KeyEvent, MouseEvent or ResizeEvent, or None for input that
            has no event type (unknown keys, mouse releases, ...)
        """
        ch = self.stdscr.getch()
        if ch == curses.KEY_RESIZE:
            return ResizeEvent()
        if ch == curses.KEY_MOUSE:
            return self._mouse_event()
        if ch in _CURSES_KEYS:
            return KeyEvent(_CURSES_KEYS[ch])
        if 0 <= ch < 256:
            return KeyEvent(chr(ch))
        return None

    def _mouse_event(self):
        try:
            _, x, y, _, bstate = curses.getmouse()
        except curses.error:
            return None
        button = mouse_button(bstate)
        if button is None:
            return None
        geometry = self.geometry()
        return MouseEvent(button, x * geometry.cell_width, y * geometry.cell_height,
                          alt=bool(bstate & curses.BUTTON_ALT))


@contextlib.contextmanager
def curses_session():
    """
    Put the terminal in raw, keypad and mouse mode for the duration.

    Yields:
        The curses standard screen
    """
    os.environ.setdefault('ESCDELAY', '25')
    stdscr = curses.initscr()
    try:
        curses.noecho()
        curses.raw()
        curses.curs_set(0)
        stdscr.keypad(True)
        curses.mousemask(curses.ALL_MOUSE_EVENTS)
        curses.mouseinterval(0)
        # Do curses' initial clear now so the first getch() doesn't wipe the image
        stdscr.refresh()
        yield stdscr
    finally:
        stdscr.keypad(False)
        curses.noraw()
        curses.echo()
        curses.endwin()
