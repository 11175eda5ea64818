"""
interpolate.py

Sub-cell placement of isoline vertices.

When the tracer steps from one cell into the next it crosses exactly one
cell edge. The vertex for that step lies on the crossed edge, at the
fraction where the linearly interpolated surface equals the cutoff.

Public functions:
- `prepare_samples(samples, cutoff)` -> copy with boundary samples set to the cutoff
- `crossing_fraction(cutoff, start, end, ...)` -> fraction in [0, 1] along an edge
- `edge_crossing(edge_samples, x, y, prev_x, prev_y, cutoff, ...)` -> (x, y) or None
"""
from typing import Optional, Tuple
import logging
import math

import numpy as np

from isolines.marching.config import MIDPOINT_FRACTION
from isolines.marching.utils import get_logger

Coordinate = Tuple[float, float]


def prepare_samples(samples: np.ndarray, cutoff: float) -> np.ndarray:
    """Return a float copy of `samples` with the outer ring of points set to `cutoff`.

    This mirrors the boundary rule of the classifier: a crossing on a
    boundary edge never extrapolates past the sampled area.
    """
    out = np.array(samples, dtype=float, copy=True)
    out[0, :] = cutoff
    out[-1, :] = cutoff
    out[:, 0] = cutoff
    out[:, -1] = cutoff
    return out


def crossing_fraction(cutoff: float, start: float, end: float, interpolation: bool = True,
                      logger: Optional[logging.Logger] = None, where: str = '') -> float:
    """Fraction along the edge from `start` to `end` at which the surface hits `cutoff`.

    Returns `MIDPOINT_FRACTION` when interpolation is off, or when the
    computed fraction is not finite (flat edge).
    """
    if not interpolation:
        return MIDPOINT_FRACTION
    denom = float(end) - float(start)
    if denom == 0.0:
        frac = math.nan
    else:
        frac = (float(cutoff) - float(start)) / denom
    if not math.isfinite(frac):
        get_logger(logger).debug(
            'segment fraction %s is %s; if this is at the edge of the grid this is expected.',
            where, frac)
        return MIDPOINT_FRACTION
    return frac


def edge_crossing(edge_samples: np.ndarray, x: int, y: int, prev_x: int, prev_y: int, cutoff: float,
                  interpolation: bool = True, logger: Optional[logging.Logger] = None) -> Optional[Coordinate]:
    """Grid-space vertex where the ring entered cell (x, y) from cell (prev_x, prev_y).

    `edge_samples` must come from `prepare_samples`. Returns None when the
    two cells are not horizontal or vertical neighbours, in which case no
    edge was crossed and the caller should abandon the ring.
    """
    top_left = edge_samples[y, x]
    top_right = edge_samples[y, x + 1]
    bottom_left = edge_samples[y + 1, x]
    bottom_right = edge_samples[y + 1, x + 1]

    if prev_x < x:
        # came from left
        where = f'from left at {x}, {y}'
        frac = crossing_fraction(cutoff, top_left, bottom_left, interpolation, logger, where)
        return (float(x), y + frac)
    if prev_x > x:
        # came from right
        where = f'from right at {x}, {y}'
        frac = crossing_fraction(cutoff, top_right, bottom_right, interpolation, logger, where)
        return (float(x + 1), y + frac)
    if prev_y > y:
        # came from bottom
        where = f'from bottom at {x}, {y}'
        frac = crossing_fraction(cutoff, bottom_left, bottom_right, interpolation, logger, where)
        return (x + frac, float(y + 1))
    if prev_y < y:
        # came from top
        where = f'from top at {x}, {y}'
        frac = crossing_fraction(cutoff, top_left, top_right, interpolation, logger, where)
        return (x + frac, float(y))

    get_logger(logger).warning(
        'Unexpected coordinate shift from %s, %s to %s, %s, discarding ring', prev_x, prev_y, x, y)
    return None
