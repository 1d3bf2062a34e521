"""Building blocks for global structure-from-motion: poses, cameras, view graphs, two-view geometry, inlier scoring, track filtering and clustering."""

__version__ = "0.1.0"