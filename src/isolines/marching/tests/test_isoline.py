import logging

import numpy as np
import pytest
from affine import Affine
from shapely.geometry import MultiPolygon, Point

from isolines.marching import contour_cases, isoline, isoline_feature
from isolines.marching.geometry import affine_projector
from isolines.marching.tests.fixtures.grids import (
    CUTOFF,
    annulus_grid,
    block,
    interior_block_grid,
    make_grid,
    saddle_grid,
    two_islands_grid,
)


def exterior(mp, i=0):
    return [tuple(c) for c in mp.geoms[i].exterior.coords]


def test_all_above_cutoff_gives_no_rings():
    mp = isoline(np.full(25, 10.0), 5, 5, CUTOFF)
    assert isinstance(mp, MultiPolygon)
    assert mp.is_empty


def test_all_below_cutoff_closes_at_grid_boundary():
    mp = isoline(np.zeros(16), 4, 4, CUTOFF)
    assert len(mp.geoms) == 1
    poly = mp.geoms[0]
    assert len(poly.interiors) == 0
    coords = exterior(mp)
    assert coords[0] == coords[-1]
    assert coords == [(0, 1), (0, 2), (1, 3), (2, 3), (3, 2), (3, 1), (2, 0), (1, 0), (0, 1)]
    assert poly.area == pytest.approx(7.0)


def test_block_touching_boundary_cells_is_closed():
    # 4x4 grid, 2x2 block of interior points below the cutoff; every cell
    # around the block touches the grid boundary
    surface = make_grid(4, 4, block(1, 1, 2, 2))
    mp = isoline(surface, 4, 4, CUTOFF)
    assert len(mp.geoms) == 1
    assert len(mp.geoms[0].interiors) == 0
    coords = exterior(mp)
    assert coords[0] == coords[-1]
    # boundary samples take the cutoff value, so each crossing lands at
    # fraction 0 or 1 of its edge, i.e. on a grid point
    assert coords == [(0, 1), (0, 2), (1, 3), (2, 3), (3, 2), (3, 1), (2, 0), (1, 0), (0, 1)]
    for x, y in coords:
        assert float(x).is_integer() and float(y).is_integer()


def test_interior_block_interpolates_edge_crossings():
    surface, width, height = interior_block_grid()
    mp = isoline(surface, width, height, CUTOFF)
    assert len(mp.geoms) == 1
    assert len(mp.geoms[0].interiors) == 0
    assert exterior(mp) == [
        (1.5, 2.0), (1.5, 3.0), (2.0, 3.5), (3.0, 3.5),
        (3.5, 3.0), (3.5, 2.0), (3.0, 1.5), (2.0, 1.5), (1.5, 2.0),
    ]
    assert mp.area == pytest.approx(3.5)
    assert mp.covers(Point(2.5, 2.5))


def test_interpolation_follows_sample_values():
    surface = make_grid(6, 6, block(2, 2, 3, 3), outside=100.0, inside=1.0)
    mp = isoline(surface, 6, 6, CUTOFF)
    frac = (CUTOFF - 100.0) / (1.0 - 100.0)
    assert exterior(mp)[0] == pytest.approx((1.0 + frac, 2.0))


def test_non_interpolating_mode_uses_edge_midpoints():
    surface = make_grid(6, 6, block(2, 2, 3, 3), outside=100.0, inside=1.0)
    mp = isoline(surface, 6, 6, CUTOFF, interpolation=False)
    coords = exterior(mp)
    assert len(coords) == 9
    for x, y in coords:
        fracs = sorted([x % 1.0, y % 1.0])
        assert fracs == [0.0, 0.5]


def test_annulus_produces_shell_with_hole():
    surface, width, height = annulus_grid()
    mp = isoline(surface, width, height, CUTOFF)
    assert len(mp.geoms) == 1
    poly = mp.geoms[0]
    assert len(poly.interiors) == 1
    hole = [tuple(c) for c in poly.interiors[0].coords]
    assert hole == [(3.0, 2.5), (3.5, 3.0), (3.0, 3.5), (2.5, 3.0), (3.0, 2.5)]
    assert poly.area == pytest.approx(8.0)
    assert not poly.covers(Point(3.0, 3.0))


def test_saddle_is_walked_through_twice():
    surface, width, height = saddle_grid()
    cases = contour_cases(surface, width, height, CUTOFF)
    assert cases[2 * 5 + 2] == 10
    mp = isoline(surface, width, height, CUTOFF)
    assert len(mp.geoms) == 1
    assert exterior(mp) == [
        (1.5, 2.0), (2.0, 2.5), (2.5, 3.0), (3.0, 3.5), (3.5, 3.0),
        (3.0, 2.5), (2.5, 2.0), (2.0, 1.5), (1.5, 2.0),
    ]


def test_separate_regions_give_separate_polygons():
    surface, width, height = two_islands_grid()
    mp = isoline(surface, width, height, CUTOFF)
    assert len(mp.geoms) == 2
    assert all(len(p.interiors) == 0 for p in mp.geoms)
    assert mp.geoms[0].centroid.x < mp.geoms[1].centroid.x


def test_project_is_called_once_per_vertex():
    surface, width, height = interior_block_grid()
    calls = []

    def project(coord):
        calls.append(coord)
        return coord

    isoline(surface, width, height, CUTOFF, project=project)
    assert len(calls) == 8


def test_affine_projection_of_vertices():
    surface, width, height = interior_block_grid()
    transform = Affine(2.0, 0.0, 100.0, 0.0, -2.0, 50.0)
    mp = isoline(surface, width, height, CUTOFF, project=affine_projector(transform))
    coords = exterior(mp)
    assert coords[0] == pytest.approx((103.0, 46.0))
    assert mp.area == pytest.approx(3.5 * 4)


def test_ring_over_coordinate_cap_is_dropped(caplog):
    surface, width, height = interior_block_grid()
    log = logging.getLogger('isolines.tests.cap')
    with caplog.at_level(logging.WARNING, logger='isolines.tests.cap'):
        mp = isoline(surface, width, height, CUTOFF, max_coordinates=7, logger=log)
    assert mp.is_empty
    assert 'More than 7 coordinates' in caplog.text
    assert all(r.name == 'isolines.tests.cap' for r in caplog.records)


def test_ring_at_coordinate_cap_is_kept():
    surface, width, height = interior_block_grid()
    mp = isoline(surface, width, height, CUTOFF, max_coordinates=8)
    assert len(mp.geoms) == 1


def test_short_surface_is_rejected():
    with pytest.raises(ValueError):
        isoline(np.zeros(10), 4, 4, CUTOFF)


def test_isoline_feature_mapping():
    surface, width, height = annulus_grid()
    feature = isoline_feature(surface, width, height, CUTOFF)
    assert feature['type'] == 'Feature'
    assert feature['properties'] == {'cutoff': CUTOFF}
    geom = feature['geometry']
    assert geom['type'] == 'MultiPolygon'
    assert len(geom['coordinates']) == 1
    # exterior plus one hole
    assert len(geom['coordinates'][0]) == 2


def test_contour_cases_entry_point():
    surface, width, height = interior_block_grid()
    cases = contour_cases(surface, width, height, CUTOFF)
    assert cases.shape == ((width - 1) * (height - 1),)
    assert cases[2 * 5 + 2] == 15
    assert cases[1 * 5 + 1] == 2
