"""
tracer.py

Ring tracing over a case grid.

The tracer scans cells in row-major order. Whenever it finds an unvisited
cell that carries a line (and is not a saddle, whose direction cannot be
known before a ring walks into it) it follows that line cell by cell,
always keeping the below-cutoff area to its left, until it is back at the
starting cell. Keeping filled area on the left means the accumulated
winding sum tells outer shells from holes.

Each ring attempt is a small state machine:

    TRACING -> CLOSED      ring returned to its start cell
    TRACING -> BROKEN      revisited a consumed cell, ran off the line,
                           stepped out of the grid or crossed no edge
    TRACING -> OVERSIZED   more vertices than the configured cap

Only CLOSED rings are returned; aborted rings are logged and dropped.
"""
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Tuple
import logging

import numpy as np

from isolines.marching.cases import Case, EXITS, SADDLES, TRIVIAL
from isolines.marching.config import DEFAULT_MAX_COORDINATES, RECENT_CASE_HISTORY
from isolines.marching.utils import get_logger

Coordinate = Tuple[float, float]
# locate(x, y, prev_x, prev_y) -> output vertex for entering (x, y), or None
Locator = Callable[[int, int, int, int], Optional[Coordinate]]


class RingState(Enum):
    TRACING = 'tracing'
    CLOSED = 'closed'
    BROKEN = 'broken'
    OVERSIZED = 'oversized'


@dataclass
class Ring:
    """A closed ring of output coordinates and its accumulated winding sum.

    The row axis grows downward, so a positive sum means the ring was
    walked counter-clockwise on screen: an outer shell. Zero or negative
    sums are holes.
    """
    coords: List[Coordinate] = field(default_factory=list)
    direction: float = 0

    @property
    def is_shell(self) -> bool:
        return self.direction > 0

    @property
    def is_hole(self) -> bool:
        return not self.is_shell


def exit_step(case: Case, x: int, y: int, prev_x: int, prev_y: int,
              logger: Optional[logging.Logger] = None) -> Tuple[int, int]:
    """Return the (dx, dy) step out of a cell of the given case.

    Saddles assume a // orientation for case 5 and pick the exit from the
    side the ring came in on. Entering a saddle from an unexpected side logs
    a diagnostic and returns (0, 0), holding position.
    """
    if case == Case.SADDLE_TOP_RIGHT_BOTTOM_LEFT:
        if prev_y > y:
            # came from bottom
            return (1, 0)
        if prev_y < y:
            # came from top
            return (-1, 0)
        get_logger(logger).warning('Entered case 5 saddle point from wrong direction at %s, %s', x, y)
        return (0, 0)
    if case == Case.SADDLE_TOP_LEFT_BOTTOM_RIGHT:
        if prev_x < x:
            # came from left
            return (0, 1)
        if prev_x > x:
            # came from right
            return (0, -1)
        get_logger(logger).warning('Entered case 10 saddle point from wrong direction at %s, %s', x, y)
        return (0, 0)
    return EXITS[case]


def _trace_ring(cases: np.ndarray, visited: np.ndarray, cells_wide: int, cells_high: int,
                origin: Tuple[int, int], locate: Locator, max_coordinates: int,
                log: logging.Logger) -> Tuple[RingState, Optional[Ring]]:
    origin_x, origin_y = origin
    x, y = origin
    start_x = start_y = -1
    direction = 0
    coords: List[Coordinate] = []
    recent = deque(maxlen=RECENT_CASE_HISTORY)

    # bounded by the coordinate cap: every pass appends one vertex or returns
    while True:
        idx = y * cells_wide + x
        # NB recent[-1] is the case of the previous cell; this one is not read yet
        if visited[idx]:
            log.warning('Ring crosses other ring (or possibly self) at %s, %s coming from case %s; '
                        'last few cases: %s', x, y, recent[-1] if recent else None, list(recent))
            return RingState.BROKEN, None

        prev_x, prev_y = start_x, start_y
        start_x, start_y = x, y
        case = Case(int(cases[idx]))
        recent.append(int(case))

        # saddles are expected to be reached twice
        if case not in SADDLES:
            visited[idx] = 1

        if case in TRIVIAL:
            log.warning('Ran off outside of ring at %s, %s; last few cases: %s', x, y, list(recent))
            return RingState.BROKEN, None

        dx, dy = exit_step(case, x, y, prev_x, prev_y, log)
        x += dx
        y += dy

        if not (0 <= x < cells_wide and 0 <= y < cells_high):
            log.warning('Ring left the grid at %s, %s coming from case %s', x, y, int(case))
            return RingState.BROKEN, None

        direction += (x - start_x) * (y + start_y)

        coord = locate(x, y, start_x, start_y)
        if coord is None:
            return RingState.BROKEN, None
        coords.append(coord)

        if len(coords) > max_coordinates:
            log.warning('More than %s coordinates found in ring, skipping this ring', max_coordinates)
            return RingState.OVERSIZED, None

        if x == origin_x and y == origin_y:
            coords.append(coords[0])
            return RingState.CLOSED, Ring(coords=coords, direction=direction)


def trace_rings(cases: np.ndarray, cells_wide: int, cells_high: int, locate: Locator,
                max_coordinates: int = DEFAULT_MAX_COORDINATES,
                logger: Optional[logging.Logger] = None) -> List[Ring]:
    """Trace every closed ring in a flat row-major case grid.

    Parameters:
    - cases: flat array of case codes, ``cells_wide * cells_high`` long
    - locate: called once per step with the entered cell and the cell it was
      entered from; returns the output vertex, or None to abandon the ring
    - max_coordinates: rings with more vertices than this are dropped

    Returns the closed rings in the order their start cells were scanned.
    """
    log = get_logger(logger)
    cases = np.asarray(cases).reshape(-1)
    visited = np.zeros(cells_wide * cells_high, dtype=np.uint8)
    rings: List[Ring] = []

    for origin_y in range(cells_high):
        for origin_x in range(cells_wide):
            idx = origin_y * cells_wide + origin_x
            if visited[idx]:
                continue
            case = Case(int(cases[idx]))
            # no line here, or a saddle whose direction we don't know yet
            if case in TRIVIAL or case in SADDLES:
                continue

            state, ring = _trace_ring(cases, visited, cells_wide, cells_high,
                                      (origin_x, origin_y), locate, max_coordinates, log)
            if state is RingState.CLOSED:
                rings.append(ring)

    return rings
