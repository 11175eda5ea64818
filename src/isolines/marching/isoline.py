"""
isoline.py

Entry points: compute the polygons enclosed by an isoline of a regular
grid using Marching Squares.

`isoline` runs the whole pipeline:

    surface -> case grid -> traced rings -> nested shells/holes -> MultiPolygon

`contour_cases` exposes the intermediate case grid for debugging.

Everything is local to one call; no state is shared between invocations.
"""
from typing import Any, Callable, Dict, Optional, Sequence, Tuple
import logging

from shapely.geometry import MultiPolygon, mapping

from isolines.marching.cases import as_grid, classify_cells, contour_cases
from isolines.marching.config import DEFAULT_MAX_COORDINATES
from isolines.marching.geometry import identity_projector
from isolines.marching.interpolate import edge_crossing, prepare_samples
from isolines.marching.nester import nest_rings, to_multipolygon
from isolines.marching.tracer import trace_rings
from isolines.marching.utils import get_logger

__all__ = ['isoline', 'isoline_feature', 'contour_cases']

Coordinate = Tuple[float, float]


def isoline(surface: Sequence[float], width: int, height: int, cutoff: float,
            project: Optional[Callable[[Coordinate], Coordinate]] = None,
            interpolation: bool = True,
            max_coordinates: int = DEFAULT_MAX_COORDINATES,
            logger: Optional[logging.Logger] = None) -> MultiPolygon:
    """Compute the isoline of `surface` at `cutoff` as a `MultiPolygon`.

    Parameters:
    - surface: flat row-major samples, at least ``width * height`` long
    - width, height: grid dimensions in points, both >= 2
    - cutoff: a point is inside when its sample is strictly below this
    - project: maps grid-space ``(x, y)`` to output coordinates; None keeps grid space
    - interpolation: False places every vertex at its edge midpoint (debugging)
    - max_coordinates: rings with more vertices are dropped
    - logger: receives diagnostics; defaults to the package logger

    Grid-boundary points are always treated as outside, so every region is
    closed at the edge of the grid. Malformed local topology costs a ring or
    a hole and a logged diagnostic, never an exception. Raises ValueError
    only when the grid is smaller than 2x2 or `surface` is too short.
    """
    log = get_logger(logger)
    samples = as_grid(surface, width, height)
    if project is None:
        project = identity_projector()

    cases = classify_cells(samples, cutoff)
    cells_high, cells_wide = cases.shape
    edge_samples = prepare_samples(samples, cutoff)

    def locate(x, y, prev_x, prev_y):
        coord = edge_crossing(edge_samples, x, y, prev_x, prev_y, cutoff,
                              interpolation=interpolation, logger=log)
        if coord is None:
            return None
        return project(coord)

    rings = trace_rings(cases.reshape(-1), cells_wide, cells_high, locate,
                        max_coordinates=max_coordinates, logger=log)
    log.debug('Traced %d rings at cutoff %s', len(rings), cutoff)
    return to_multipolygon(nest_rings(rings, logger=log), logger=log)


def isoline_feature(surface: Sequence[float], width: int, height: int, cutoff: float,
                    **kwargs: Any) -> Dict[str, Any]:
    """Same as `isoline`, wrapped in a GeoJSON-like Feature mapping.

    The cutoff is recorded under ``properties``. Nothing is serialized; the
    result is a plain dict suitable for ``json.dumps`` by the caller.
    """
    geom = isoline(surface, width, height, cutoff, **kwargs)
    return {
        'type': 'Feature',
        'properties': {'cutoff': cutoff},
        'geometry': mapping(geom),
    }
