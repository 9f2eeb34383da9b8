"""Quadtree split-and-merge segmentation of intensity grids."""

__version__ = "0.1.0"
