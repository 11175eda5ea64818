"""
nester.py

Shell/hole assembly for traced rings.

Rings are split by winding sign. Each hole is assigned to the first shell
that covers the hole's first coordinate. This is sufficient because shells
never overlap and a hole is always completely contained by a single shell;
neither property is verified here.
"""
from typing import List, Optional, Sequence, Tuple
import logging

from shapely.geometry import MultiPolygon, Point, Polygon

from isolines.marching.tracer import Coordinate, Ring
from isolines.marching.utils import get_logger

RingCoords = List[Coordinate]
NestedPolygon = Tuple[RingCoords, List[RingCoords]]

MIN_RING_COORDS = 4


def _closes(coords: Sequence[Coordinate], kind: str, log: logging.Logger) -> bool:
    # a closed ring needs three distinct vertices plus the closing duplicate
    if len(coords) < MIN_RING_COORDS:
        log.warning('Dropping %s with %d coordinates, a ring needs at least %d',
                    kind, len(coords), MIN_RING_COORDS)
        return False
    return True


def nest_rings(rings: Sequence[Ring], logger: Optional[logging.Logger] = None) -> List[NestedPolygon]:
    """Return ``[(shell_coords, [hole_coords, ...]), ...]`` in shell scan order.

    Rings with fewer than four coordinates are dropped before matching.
    Holes whose first coordinate is not covered by any shell are dropped
    with a diagnostic.
    """
    log = get_logger(logger)
    shells = [r for r in rings if r.is_shell]
    holes = [r for r in rings if r.is_hole]

    candidates = [(shell, Polygon(shell.coords)) for shell in shells if _closes(shell.coords, 'shell', log)]
    nested = [(list(shell.coords), []) for shell, _ in candidates]

    for hole in holes:
        if not _closes(hole.coords, 'hole', log):
            continue
        hole_point = Point(hole.coords[0])
        for i, (_, poly) in enumerate(candidates):
            if poly.covers(hole_point):
                nested[i][1].append(list(hole.coords))
                break
        else:
            log.warning('Did not find fitting shell for hole starting at %s', hole.coords[0])

    return nested


def to_multipolygon(nested: Sequence[NestedPolygon], logger: Optional[logging.Logger] = None) -> MultiPolygon:
    """Bundle nested shells and holes into one `MultiPolygon`.

    Holes with fewer than four coordinates are dropped with a diagnostic;
    the shell is kept.
    """
    log = get_logger(logger)
    polys = []
    for shell_coords, hole_coords in nested:
        holes = [coords for coords in hole_coords if _closes(coords, 'hole', log)]
        polys.append(Polygon(shell_coords, holes))
    return MultiPolygon(polys)
