"""
View state and the pixel <-> plane mapping.

ViewState is the single source of truth for which part of the complex
plane gets rendered next. It is owned by the application, mutated only
by the controller between render passes, and read by the renderer and
the overlay.

PlaneMapping is the one place the affine map between raster pixels and
plane coordinates is derived. The renderer uses it to place every row
and the controller uses it to turn a mouse click back into a plane
coordinate, so the two can never drift apart.
"""

from dataclasses import dataclass


# Home view
HOME_CENTER = complex(0.0, 0.0)
HOME_RADIUS = 2.0
HOME_DEPTH = 256

MIN_DEPTH = 64

# Fraction of the radius moved on each pan
PAN_FRACTION = 0.2
# Factor applied to the radius on each zoom step
ZOOM_FACTOR = 2
# X/Y aspect ratio of a pixel in plane units
ASPECT = 1.0

# Unit vectors for pan directions; the imaginary axis grows downward to
# match raster row order, so "up" is -i.
PAN_DIRECTIONS = {
    'up': complex(0.0, -1.0),
    'down': complex(0.0, 1.0),
    'left': complex(-1.0, 0.0),
    'right': complex(1.0, 0.0),
}


@dataclass
class ViewState:
    """Mutable description of what the next render shows."""
    center: complex = HOME_CENTER
    radius: float = HOME_RADIUS
    depth: int = HOME_DEPTH
    decompose: bool = False
    show_help: bool = True
    show_info: bool = True
    last_render_duration: float = 0.0

    def snapshot(self):
        """Everything that affects the next frame, as a comparable tuple."""
        return (self.center, self.radius, self.depth,
                self.decompose, self.show_help, self.show_info)

    def reset(self):
        """Return to the home view. Display flags are left alone."""
        self.center = HOME_CENTER
        self.radius = HOME_RADIUS
        self.depth = HOME_DEPTH

    def pan(self, direction):
        """Move the center by PAN_FRACTION of the radius."""
        self.center += self.radius * PAN_FRACTION * PAN_DIRECTIONS[direction]

    def zoom_in(self):
        # Past float64 resolution the radius would underflow to zero
        if self.radius / ZOOM_FACTOR > 0:
            self.radius /= ZOOM_FACTOR

    def zoom_out(self):
        self.radius *= ZOOM_FACTOR

    def increase_depth(self):
        self.depth *= 2

    def decrease_depth(self):
        self.depth = max(MIN_DEPTH, self.depth // 2)

    def toggle_help(self):
        self.show_help = not self.show_help

    def toggle_info(self):
        self.show_info = not self.show_info

    def toggle_decompose(self):
        self.decompose = not self.decompose

    def recenter(self, point):
        self.center = complex(point)


@dataclass(frozen=True)
class PlaneMapping:
    """
    Affine map between pixel (px, py) and a plane coordinate.

    Pixel (0, 0) is the top-left of the raster; pixel
    (width // 2, height // 2) sits exactly on the view center.

    Attributes:
        fx0, fy0: Plane coordinate of pixel (0, 0)
        dx, dy: Plane step per pixel along x and y
        width, height: Raster size in pixels
    """
    fx0: float
    fy0: float
    dx: float
    dy: float
    width: int
    height: int

    @classmethod
    def from_view(cls, view, width, height):
        """
        Build the mapping for a view rendered at width x height pixels.

        The step size is chosen from the shorter side, so that side always
        spans exactly 2 * radius of the plane whatever the terminal's shape.
        """
        dx, dy = plane_step(view.radius, width, height)
        fx0 = view.center.real - dx * (width // 2)
        fy0 = view.center.imag - dy * (height // 2)
        return cls(fx0, fy0, dx, dy, width, height)

    def pixel_to_plane(self, px, py):
        """Plane coordinate of pixel (px, py)."""
        return complex(self.fx0 + px * self.dx, self.fy0 + py * self.dy)

    def plane_to_pixel(self, point):
        """Pixel (px, py), as floats, that point falls on."""
        return (point.real - self.fx0) / self.dx, (point.imag - self.fy0) / self.dy


def plane_step(radius, width, height):
    """
    Plane distance covered by one pixel along x and y.

    Returns:
        (dx, dy)
    """
    # Choose shortest direction for radius
    if height > width / ASPECT:
        dx = 2 * radius / width
        dy = 2 * radius / width * ASPECT
    else:
        dx = 2 * radius / height / ASPECT
        dy = 2 * radius / height
    return dx, dy
