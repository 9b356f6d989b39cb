"""Leaf helpers for grids and polar geometry. No engine imports."""
