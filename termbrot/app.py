"""
Main application module for termbrot.

Contains the TermbrotApp class which handles:
- Terminal setup and the main event loop
- Feeding input events to the controller
- Rendering, streaming bands to the terminal, and the text overlay
"""

import logging
import sys

from .colormaps import GRADIENT
from .compute import warmup_jit
from .controller import Controller, Outcome
from .overlay import OverlayComposer
from .renderer import PlaneRenderer
from .terminal import CursesInput, GeometryError, KittyWriter, curses_session, query_geometry
from .view import ViewState

logger = logging.getLogger(__name__)


class TermbrotApp:
    """
    Main application class for termbrot.

    Owns the ViewState and wires it to the renderer, the overlay, the
    controller and the terminal. Everything runs on one thread: an event
    is read, applied, and the frame redrawn before the next event is read.

    Args:
        view: Starting ViewState (default: home view)
        geometry: Callable returning the current terminal Geometry
        writer: KittyWriter to draw with (default: one on stdout)
    """

    def __init__(self, view=None, geometry=query_geometry, writer=None):
        self.view = view or ViewState()
        self.geometry = geometry
        self.writer = writer or KittyWriter()

        self.renderer = PlaneRenderer(GRADIENT)
        self.overlay = OverlayComposer(self.view)
        self.controller = Controller(self.view, self._raster_size)
        self.input = None

        self.running = False

    def run(self):
        """Run the application main loop until the user quits."""
        # Fail before touching the terminal if there's nothing to draw on
        self.geometry()
        warmup_jit(self.renderer.gradient)

        with curses_session() as stdscr:
            self.input = CursesInput(stdscr, self.geometry)
            self.draw()

            self.running = True
            while self.running:
                event = self.input.next_event()
                if event is None:
                    continue
                outcome = self.controller.handle(event)
                if outcome is Outcome.QUIT:
                    self.running = False
                elif outcome is Outcome.REDRAW:
                    self.draw()

    def _raster_size(self):
        geometry = self.geometry()
        return geometry.width, geometry.height

    def draw(self):
        """Draw the Mandelbrot set and any help/info required."""
        geometry = self.geometry()
        writer = self.writer

        # Home the cursor - don't clear the screen
        writer.home()
        bands = self.renderer.iter_bands(self.view, geometry.width, geometry.height,
                                         geometry.cell_height)
        for _, band in bands:
            writer.write_rgb(band)
            writer.newline()
            writer.flush()

        overlay = self.overlay.compose()
        if overlay is not None:
            writer.home()
            writer.write_rgba(overlay)
        writer.flush()


def run(center=None, radius=None, depth=None, decompose=False,
        show_help=True, show_info=True):
    """
    Run termbrot in the current terminal.

    Args:
        center: Starting center (default 0+0i)
        radius: Starting radius (default 2.0)
        depth: Starting depth (default 256)
        decompose: Start with decompose mode on
        show_help, show_info: Initial overlay panels

    Exits with status 1 if the terminal can't report its pixel size.
    """
    view = ViewState(decompose=decompose, show_help=show_help, show_info=show_info)
    if center is not None:
        view.center = complex(center)
    if radius is not None:
        view.radius = radius
    if depth is not None:
        view.depth = depth

    app = TermbrotApp(view)
    try:
        app.run()
    except GeometryError as e:
        logger.error("geometry unavailable: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        pass
