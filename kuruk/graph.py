"""A weighted graph built from Voronoi edges, with path search."""

from __future__ import annotations

import heapq
import math
import sys
from collections import defaultdict
from typing import Iterable, TextIO

from .voronoi import Edge, Point

__all__ = ["Graph"]

Coord = tuple[float, float]

_MAX_BACKTRACK = 100


class Graph:
    """Undirected graph whose vertices are the edge endpoints, keyed by id.

    Edge weights are Euclidean lengths computed from the endpoint
    coordinates truncated to integers.
    """

    def __init__(self, edges: Iterable[Edge]) -> None:
        edges = list(edges)
        self.idmap: dict[int, Point] = {}
        for e in edges:
            self.idmap.setdefault(e.start.id, e.start)
            self.idmap.setdefault(e.end.id, e.end)
        self.vertices: list[int] = sorted(self.idmap)
        self.edges: list[tuple[float, tuple[int, int]]] = []
        for e in edges:
            sx, sy = int(e.start.x), int(e.start.y)
            ex, ey = int(e.end.x), int(e.end.y)
            length = math.sqrt((sx - ex) ** 2 + (sy - ey) ** 2)
            self.edges.append((length, (e.start.id, e.end.id)))

    def display(self, stream: TextIO | None = None) -> None:
        """Write the vertex ids and weighted edges to ``stream``."""
        out = sys.stdout if stream is None else stream
        out.write("Vertices : ")
        for v in self.vertices:
            out.write(f"{v} ")
        out.write("\n")
        out.write("Edges : ")
        for length, (a, b) in self.edges:
            out.write(f"{a} {b} - {length:g}\n")

    def nearest_vertex(self, x: float, y: float) -> int:
        """Id of the vertex closest to ``(x, y)``; the first one on ties."""
        if not self.vertices:
            raise ValueError("graph has no vertices")
        return min(self.vertices, key=lambda v: self.dist((x, y), self.vertex_by_id(v)))

    def path_endpoints(
        self,
        start_vertices: tuple[int, int],
        end_vertices: tuple[int, int],
        startx: float,
        starty: float,
        endx: float,
        endy: float,
    ) -> tuple[int, int]:
        """Pick the start/end vertex pair giving the shortest three-leg route."""
        a = (startx, starty)
        b = self.vertex_by_id(start_vertices[0])
        c = self.vertex_by_id(start_vertices[1])
        d = (endx, endy)
        e = self.vertex_by_id(end_vertices[0])
        f = self.vertex_by_id(end_vertices[1])
        ab, ac = self.dist(a, b), self.dist(a, c)
        path1 = ab + self.dist(b, f) + self.dist(f, d)
        path2 = ab + self.dist(b, e) + self.dist(e, d)
        path3 = ac + self.dist(c, f) + self.dist(f, d)
        path4 = ac + self.dist(c, e) + self.dist(e, d)
        if path1 <= path2 and path1 <= path3 and path1 <= path4:
            return start_vertices[0], end_vertices[1]
        if path2 <= path1 and path2 <= path3 and path2 <= path4:
            return start_vertices[0], end_vertices[0]
        if path3 <= path1 and path3 <= path2 and path3 <= path4:
            return start_vertices[1], end_vertices[1]
        return start_vertices[1], end_vertices[0]

    @staticmethod
    def dist(a: Coord, b: Coord) -> float:
        """Euclidean distance between two points."""
        return math.sqrt((a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2)

    def vertex_by_id(self, vertex_id: int) -> Coord:
        """Coordinates of the vertex with the given id."""
        p = self.idmap[vertex_id]
        return p.x, p.y

    def shortest_path(self, start: int, end: int) -> list[int]:
        """Shortest path by Dijkstra's method, listed from ``end`` back to ``start``.

        Vertex ids absent from the graph count as already settled at
        distance 0, and an unresolved predecessor is taken to be vertex 0;
        the walk back stops after a fixed number of steps.
        """
        settled: dict[int, float] = {v: -1.0 for v in self.vertices}
        adjacency: defaultdict[int, list[tuple[int, float]]] = defaultdict(list)
        for weight, (a, b) in self.edges:
            adjacency[a].append((b, weight))
            adjacency[b].append((a, weight))

        # Entries (distance, -vertex, -parent): ties go to the larger vertex id.
        queue: list[tuple[float, int, int]] = [(0.0, -start, 1)]
        backtrack: dict[int, int] = {}
        while queue:
            distance, neg_vertex, neg_parent = heapq.heappop(queue)
            vertex = -neg_vertex
            if settled.setdefault(vertex, 0.0) != -1.0:
                continue
            settled[vertex] = distance
            backtrack[vertex] = -neg_parent
            for nxt, weight in adjacency[vertex]:
                if settled.setdefault(nxt, 0.0) != -1.0:
                    continue
                heapq.heappush(queue, (distance + weight, -nxt, -vertex))

        path = [end]
        steps = 0
        while backtrack.setdefault(end, 0) != -1:
            if steps > _MAX_BACKTRACK:
                break
            steps += 1
            end = backtrack[end]
            path.append(end)
        return path