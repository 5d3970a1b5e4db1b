"""
termbrot - Mandelbrot set explorer for the terminal

Draws the Mandelbrot set straight into a terminal that speaks the kitty
graphics protocol, using Numba for the JIT-compiled, row-parallel
computation and pygame for the text overlay.

Quick Start:
    from termbrot import run
    run()

Or from command line:
    termbrot
    python -m termbrot

Package Structure:
    - compute.py: JIT-compiled escape-time, colouring and row kernels
    - colormaps.py: The fixed colour gradient
    - view.py: View state and the pixel <-> plane mapping
    - renderer.py: Parallel renderer producing the pixel buffer
    - controller.py: Input events and the interaction controller
    - overlay.py: Help/info text overlay
    - terminal.py: Terminal geometry, kitty graphics output, curses input
    - app.py: Main application and event loop

Controls:
    - Arrows: Pan
    - +/- or PgUp/PgDn or wheel: Zoom
    - Left/right click: Recenter and zoom in/out
    - [ / ]: Halve/double depth
    - h / i / d: Toggle help / info / decompose
    - r: Reset to default view
    - q / ESC / Ctrl-C: Quit
"""

from .app import run, TermbrotApp
from .controller import Controller, KeyEvent, MouseEvent, ResizeEvent, Outcome
from .renderer import PlaneRenderer
from .view import ViewState, PlaneMapping
from .colormaps import GRADIENT

__version__ = "1.0.0"
__all__ = [
    "run",
    "TermbrotApp",
    "Controller",
    "KeyEvent",
    "MouseEvent",
    "ResizeEvent",
    "Outcome",
    "PlaneRenderer",
    "ViewState",
    "PlaneMapping",
    "GRADIENT",
]
