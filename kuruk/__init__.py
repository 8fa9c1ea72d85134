"""Voronoi graph path search, field model, heat-map colours and simulator message helpers for small-size robot soccer."""

__version__ = "1.0.0"