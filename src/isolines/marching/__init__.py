"""Marching Squares isoline polygons.

Public API:
- `isoline(surface, width, height, cutoff, ...)` -> shapely MultiPolygon
- `isoline_feature(...)` -> GeoJSON-like Feature mapping
- `contour_cases(surface, width, height, cutoff)` -> flat case grid
"""
from isolines.marching.cases import Case, contour_cases
from isolines.marching.geometry import affine_projector, identity_projector
from isolines.marching.isoline import isoline, isoline_feature

__all__ = [
    'Case',
    'affine_projector',
    'contour_cases',
    'identity_projector',
    'isoline',
    'isoline_feature',
]
