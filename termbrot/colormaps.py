"""
Gradient definition for termbrot.

The gradient is a short list of RGB stops; smooth_color() in compute.py
interpolates linearly between neighbouring stops, so the stops split
the normalised escape value [0, 1] into len(GRADIENT) - 1 equal segments.

GRADIENT is built once at import and is read-only; the renderer passes
it to the JIT kernels unchanged for the life of the process.
"""

import numpy as np


def create_gradient_classic():
    """
    Classic gradient: black -> blue -> red -> yellow -> white.

    Dark near the set boundary at low depth, burning out to white for
    points that took nearly the full depth to escape.
    """
    stops = np.array([
        [0, 0, 0],        # Black
        [0, 0, 255],      # Blue
        [255, 0, 0],      # Red
        [255, 255, 0],    # Yellow
        [255, 255, 255],  # White
    ], dtype=np.uint8)
    stops.flags.writeable = False
    return stops


# Process-wide gradient used by the renderer.
GRADIENT = create_gradient_classic()
