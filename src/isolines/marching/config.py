# -*- coding: utf-8 -*-

"""
marching/config.py

Central place for the tunable defaults of the Marching Squares pipeline.
Every value here can be overridden per call through keyword arguments of
`isolines.marching.isoline.isoline`; the constants only supply defaults.

Contents:
---------
1. DEFAULT_MAX_COORDINATES:
   - Upper bound on the number of vertices in a single traced ring.
   - A ring that grows past this is discarded rather than emitted truncated.

2. MIDPOINT_FRACTION:
   - Edge fraction used when interpolation is disabled, and substituted
     whenever an interpolated fraction is not a finite number.

3. RECENT_CASE_HISTORY:
   - Number of trailing case codes reported with a broken-ring diagnostic.

4. LOGGER_NAME:
   - Name of the package logger used when the caller injects none.

Usage:
------
    from isolines.marching.config import DEFAULT_MAX_COORDINATES
"""

# vertices per ring
DEFAULT_MAX_COORDINATES = 10000

# fraction along a cell edge (0.0 - 1.0)
MIDPOINT_FRACTION = 0.5

# case codes
RECENT_CASE_HISTORY = 10

LOGGER_NAME = 'isolines.marching'
