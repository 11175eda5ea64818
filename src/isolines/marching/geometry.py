"""
geometry.py

Projection callbacks for isoline vertices. A projector maps a grid-space
``(x, y)`` pair, where x runs along columns and y along rows, to the
caller's output coordinate space. It is called once per emitted vertex.

Public functions:
- `identity_projector()` -> callback returning grid coordinates unchanged
- `as_affine(transform)` -> `affine.Affine` from an Affine or a GDAL geotransform
- `affine_projector(transform)` -> callback applying an affine transform
"""
from typing import Callable, Sequence, Tuple, Union

from affine import Affine

Coordinate = Tuple[float, float]
Projector = Callable[[Coordinate], Coordinate]

GDAL_GEOTRANSFORM_LEN = 6


def identity_projector() -> Projector:
    """Return a projector that keeps vertices in grid space."""
    def project(coord: Coordinate) -> Coordinate:
        return (float(coord[0]), float(coord[1]))
    return project


def as_affine(transform: Union[Affine, Sequence[float]]) -> Affine:
    """Return `transform` as an `affine.Affine`.

    Accepts an `Affine` unchanged, or a 6-element GDAL geotransform
    ``(c, a, b, f, d, e)`` as returned by ``Dataset.GetGeoTransform()``.
    Raises ValueError for anything else.
    """
    if isinstance(transform, Affine):
        return transform
    values = tuple(transform)
    if len(values) != GDAL_GEOTRANSFORM_LEN:
        raise ValueError(f'expected an Affine or a 6-element GDAL geotransform, got {len(values)} values')
    return Affine.from_gdal(*values)


def affine_projector(transform: Union[Affine, Sequence[float]]) -> Projector:
    """Return a projector applying `transform` to grid coordinates.

    Parameters:
    - transform: `affine.Affine` or GDAL geotransform tuple, e.g. a raster's
      geotransform.

    Grid points sit on the lattice, so grid coordinate (0, 0) maps to
    whatever `transform * (0, 0)` is; shift the transform by half a pixel
    beforehand if samples represent pixel centres.
    """
    aff = as_affine(transform)

    def project(coord: Coordinate) -> Coordinate:
        # Affine expects (x=col, y=row)
        xw, yw = aff * (float(coord[0]), float(coord[1]))
        return (float(xw), float(yw))
    return project
