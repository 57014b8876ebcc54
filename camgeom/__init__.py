"""Geometry helpers for camera calibration and chessboard corner extraction."""

__version__ = "0.1.0"

__all__ = [
    "colormaps",
    "geometry",
    "utm",
    "timing",
    "quaternion",
    "transform",
    "quadgraph",
    "labeling",
    "extraction",
]