"""
cases.py

Classification of grid cells into the 16 Marching Squares cases.

Each cell between four neighbouring grid points gets a 4-bit code where a
set bit means the corner sample is strictly below the cutoff:

    bit 3 (8): top-left      bit 2 (4): top-right
    bit 0 (1): bottom-left   bit 1 (2): bottom-right

Corners on the outer boundary of the grid are always treated as not below
the cutoff, so every isoline closes inside the sampled area even when the
underlying surface extends past it.

Public functions:
- `classify_cells(samples, cutoff)` -> (height-1, width-1) uint8 array
- `contour_cases(surface, width, height, cutoff)` -> flat uint8 case grid
"""
from enum import IntEnum
from typing import Dict, Tuple

import numpy as np


class Case(IntEnum):
    """Cell case code, named by the corners that are below the cutoff."""
    EMPTY = 0
    BOTTOM_LEFT = 1
    BOTTOM_RIGHT = 2
    BOTTOM = 3
    TOP_RIGHT = 4
    SADDLE_TOP_RIGHT_BOTTOM_LEFT = 5
    RIGHT = 6
    ALL_BUT_TOP_LEFT = 7
    TOP_LEFT = 8
    LEFT = 9
    SADDLE_TOP_LEFT_BOTTOM_RIGHT = 10
    ALL_BUT_TOP_RIGHT = 11
    TOP = 12
    ALL_BUT_BOTTOM_RIGHT = 13
    ALL_BUT_BOTTOM_LEFT = 14
    FULL = 15


TOP_LEFT_BIT = 1 << 3
TOP_RIGHT_BIT = 1 << 2
BOTTOM_RIGHT_BIT = 1 << 1
BOTTOM_LEFT_BIT = 1

TRIVIAL = frozenset((Case.EMPTY, Case.FULL))
SADDLES = frozenset((Case.SADDLE_TOP_RIGHT_BOTTOM_LEFT, Case.SADDLE_TOP_LEFT_BOTTOM_RIGHT))

# Exit step (dx, dy) for every unambiguous case. +y is down. Following these
# always keeps the below-cutoff area on the left of the direction of travel.
EXITS: Dict[Case, Tuple[int, int]] = {
    Case.BOTTOM_LEFT: (-1, 0),
    Case.BOTTOM_RIGHT: (0, 1),
    Case.BOTTOM: (-1, 0),
    Case.TOP_RIGHT: (1, 0),
    Case.RIGHT: (0, 1),
    Case.ALL_BUT_TOP_LEFT: (-1, 0),
    Case.TOP_LEFT: (0, -1),
    Case.LEFT: (0, -1),
    Case.ALL_BUT_TOP_RIGHT: (0, -1),
    Case.TOP: (1, 0),
    Case.ALL_BUT_BOTTOM_RIGHT: (1, 0),
    Case.ALL_BUT_BOTTOM_LEFT: (0, 1),
}


def encode_corners(top_left, top_right, bottom_right, bottom_left):
    """Pack below-cutoff flags into case codes.

    Accepts scalars or equally shaped boolean arrays and returns integer
    codes of the same shape.
    """
    return (
        np.asarray(top_left, dtype=int) * TOP_LEFT_BIT
        + np.asarray(top_right, dtype=int) * TOP_RIGHT_BIT
        + np.asarray(bottom_right, dtype=int) * BOTTOM_RIGHT_BIT
        + np.asarray(bottom_left, dtype=int) * BOTTOM_LEFT_BIT
    )


def classify_cells(samples: np.ndarray, cutoff: float) -> np.ndarray:
    """Return the (height-1, width-1) case array for a 2-D sample array.

    A corner is below when its sample is strictly less than `cutoff`. The
    boundary rule forces the outer ring of grid points to "not below"; every
    boundary point is only ever a corner on the boundary side of its cells,
    so clearing it once is the same as clearing it per cell.
    """
    below = np.asarray(samples) < cutoff
    below[0, :] = False
    below[-1, :] = False
    below[:, 0] = False
    below[:, -1] = False

    top_left = below[:-1, :-1]
    top_right = below[:-1, 1:]
    bottom_left = below[1:, :-1]
    bottom_right = below[1:, 1:]

    cases = encode_corners(top_left, top_right, bottom_right, bottom_left)
    return cases.astype(np.uint8)


def as_grid(surface, width: int, height: int) -> np.ndarray:
    """Validate a flat row-major surface and view it as a (height, width) float array.

    Raises ValueError when the dimensions are below 2 or the surface holds
    fewer than ``width * height`` samples. Extra trailing samples are ignored.
    """
    width = int(width)
    height = int(height)
    if width < 2 or height < 2:
        raise ValueError(f'grid must be at least 2x2, got width={width}, height={height}')
    flat = np.asarray(surface, dtype=float).reshape(-1)
    n = width * height
    if flat.size < n:
        raise ValueError(f'surface has {flat.size} samples, expected at least {n} for a {width}x{height} grid')
    return flat[:n].reshape(height, width)


def contour_cases(surface, width: int, height: int, cutoff: float) -> np.ndarray:
    """Return the flat row-major case grid, ``(width-1) * (height-1)`` uint8 values.

    Diagnostic entry point; cell ``(x, y)`` lives at index ``y * (width-1) + x``.
    """
    samples = as_grid(surface, width, height)
    return classify_cells(samples, cutoff).reshape(-1)
