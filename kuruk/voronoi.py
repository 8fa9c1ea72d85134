"""Primitives for Fortune's sweep-line Voronoi construction.

Holds the points, edges, events and beach-line tree nodes that the
sweep works on.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

__all__ = ["Point", "Edge", "Event", "Parabola"]


@dataclass
class Point:
    """A 2D point, optionally tagged with an integer id (-1 if untagged)."""

    x: float
    y: float
    id: int = -1


def _ieee_div(num: float, den: float) -> float:
    """Divide with IEEE semantics: a zero denominator gives inf or nan."""
    if den != 0:
        return num / den
    if num == 0 or math.isnan(num):
        return math.nan
    negative = (num < 0) != (math.copysign(1.0, den) < 0)
    return -math.inf if negative else math.inf


class Edge:
    """An edge of the Voronoi diagram, lying on ``y = f*x + g``.

    ``direction`` is normal to the segment joining the two sites.
    ``end`` and ``neighbour`` are filled in by the sweep.
    """

    def __init__(self, start: Point, left: Point, right: Point) -> None:
        self.start = start
        self.left = left
        self.right = right
        self.end: Optional[Point] = None
        self.neighbour: Optional[Edge] = None
        self.f = _ieee_div(right.x - left.x, left.y - right.y)
        self.g = start.y - self.f * start.x
        self.direction = Point(right.y - left.y, -(right.x - left.x))

    def __repr__(self) -> str:
        return f"Edge(start={self.start!r}, end={self.end!r})"


class Event:
    """A site event or a circle event in the sweep's event queue.

    Events order by the y coordinate of their point.
    """

    def __init__(self, point: Point, is_site: bool) -> None:
        self.point = point
        self.is_site = is_site
        self.y = point.y
        self.arch: Optional[Parabola] = None

    def __lt__(self, other: "Event") -> bool:
        return self.y < other.y

    def __repr__(self) -> str:
        kind = "site" if self.is_site else "circle"
        return f"Event({kind}, y={self.y})"


class Parabola:
    """A node of the beach-line tree.

    Leaves are arcs with a focus ``site``; internal nodes stand for the
    edges traced by the breakpoints between neighbouring arcs.
    """

    def __init__(self, site: Optional[Point] = None) -> None:
        self.site = site
        self.is_leaf = site is not None
        self.edge: Optional[Edge] = None
        self.c_event: Optional[Event] = None
        self.parent: Optional[Parabola] = None
        self.left: Optional[Parabola] = None
        self.right: Optional[Parabola] = None

    def set_left(self, p: "Parabola") -> None:
        """Attach ``p`` as the left child."""
        self.left = p
        p.parent = self

    def set_right(self, p: "Parabola") -> None:
        """Attach ``p`` as the right child."""
        self.right = p
        p.parent = self

    @staticmethod
    def get_left(p: "Parabola") -> Optional["Parabola"]:
        """Closest leaf to the left of ``p``."""
        return Parabola.get_left_child(Parabola.get_left_parent(p))

    @staticmethod
    def get_right(p: "Parabola") -> Optional["Parabola"]:
        """Closest leaf to the right of ``p``."""
        return Parabola.get_right_child(Parabola.get_right_parent(p))

    @staticmethod
    def get_left_parent(p: "Parabola") -> Optional["Parabola"]:
        """Closest ancestor lying to the left of ``p``."""
        par = p.parent
        last = p
        while par.left is last:
            if par.parent is None:
                return None
            last = par
            par = par.parent
        return par

    @staticmethod
    def get_right_parent(p: "Parabola") -> Optional["Parabola"]:
        """Closest ancestor lying to the right of ``p``."""
        par = p.parent
        last = p
        while par.right is last:
            if par.parent is None:
                return None
            last = par
            par = par.parent
        return par

    @staticmethod
    def get_left_child(p: Optional["Parabola"]) -> Optional["Parabola"]:
        """Rightmost leaf of the left subtree of ``p``."""
        if p is None:
            return None
        par = p.left
        while not par.is_leaf:
            par = par.right
        return par

    @staticmethod
    def get_right_child(p: Optional["Parabola"]) -> Optional["Parabola"]:
        """Leftmost leaf of the right subtree of ``p``."""
        if p is None:
            return None
        par = p.right
        while not par.is_leaf:
            par = par.left
        return par