"""
Parallel Mandelbrot renderer.

The PlaneRenderer class handles:
- Deriving the pixel <-> plane mapping for the current view
- Allocating a fresh pixel buffer for each pass
- Dispatching rows to the parallel JIT kernel, a band at a time
- Timing the whole pass into ViewState.last_render_duration
"""

import logging
import time

import numpy as np

from .colormaps import GRADIENT
from .compute import render_rows
from .view import PlaneMapping

logger = logging.getLogger(__name__)


class PlaneRenderer:
    """
    Renders a ViewState into an RGB pixel buffer.

    Usage:
        renderer = PlaneRenderer()
        rgb = renderer.render(view, 800, 600)

        # Or stream it band by band as rows finish:
        for row_start, band in renderer.iter_bands(view, 800, 600, 20):
            send(band)

    Rendering is synchronous from the caller's point of view: the rows of
    a band run in parallel inside the kernel and the call returns only
    once every row is filled.

    Attributes:
        gradient: Nx3 uint8 array of colour stops
    """

    def __init__(self, gradient=None):
        """
        Args:
            gradient: Colour stops to use (default: colormaps.GRADIENT)
        """
        self.gradient = GRADIENT if gradient is None else gradient

    def render(self, view, width, height):
        """
        Render the full frame in one pass.

        Args:
            view: ViewState to render (read only)
            width, height: Raster size in pixels

        Returns:
            (height, width, 3) uint8 numpy array, owned by the caller
        """
        rgb = self._allocate(width, height)
        for _ in self._fill_bands(view, rgb, height):
            pass
        return rgb

    def iter_bands(self, view, width, height, band_height):
        """
        Render the frame band by band, yielding each band once it's done.

        All bands are slices of one buffer allocated for this pass; the
        renderer keeps no reference to it afterwards. The pass duration
        (including time spent by the consumer of each band) is stored on
        the view.

        Args:
            view: ViewState to render (read only)
            width, height: Raster size in pixels
            band_height: Rows per band, usually the terminal cell height

        Yields:
            (row_start, band) with band a (rows, width, 3) uint8 view
        """
        rgb = self._allocate(width, height)
        yield from self._fill_bands(view, rgb, band_height)

    def _allocate(self, width, height):
        if width <= 0 or height <= 0:
            raise ValueError(f"raster must be non-empty, got {width}x{height}")
        return np.zeros((height, width, 3), dtype=np.uint8)

    def _fill_bands(self, view, rgb, band_height):
        height, width = rgb.shape[:2]
        band_height = max(1, band_height)

        t0 = time.perf_counter()
        mapping = PlaneMapping.from_view(view, width, height)
        depth = view.depth
        decompose = view.decompose

        for row_start in range(0, height, band_height):
            band = rgb[row_start:row_start + band_height]
            render_rows(mapping.fx0, mapping.fy0, mapping.dx, mapping.dy,
                        row_start, band, depth, decompose, self.gradient)
            yield row_start, band

        view.last_render_duration = time.perf_counter() - t0
        logger.debug("rendered %dx%d depth=%d in %.3fs",
                     width, height, depth, view.last_render_duration)
