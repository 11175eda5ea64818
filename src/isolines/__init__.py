"""Isoline polygon extraction from regular scalar grids."""
