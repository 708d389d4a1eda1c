"""S2.01: Conflict graph and maximum independent set of diagonals.

Verticals form the left partition and horizontals the right one; an edge
joins every crossing pair. A maximum matching (Hopcroft-Karp) gives a minimum
vertex cover by König's theorem, and its complement is the largest set of
mutually non-crossing diagonals.

Vertices are 1-indexed on both sides; index 0 is the NIL sentinel meaning
"unmatched". All searches use explicit stacks so deep alternating paths cannot
exhaust the interpreter stack.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass

from pixrect.engine.context import PartitionContext
from pixrect.engine.diagonals import Diagonal
from pixrect.engine.registry import Phase, stage

logger = logging.getLogger(__name__)

NIL = 0
_INF = float("inf")


@dataclass
class IndependentSet:
    """Keep flags, 0-indexed, one per left / right vertex."""

    left: list[bool]
    right: list[bool]

    @property
    def size(self) -> int:
        return sum(self.left) + sum(self.right)


class BipartiteGraph:
    """Bipartite graph with ``m`` left and ``n`` right vertices."""

    def __init__(self, m: int, n: int) -> None:
        self.m = m
        self.n = n
        self.adj: list[list[int]] = [[] for _ in range(m + 1)]
        self.pair_u: list[int] = [NIL] * (m + 1)
        self.pair_v: list[int] = [NIL] * (n + 1)
        self._dist: list[float] = [_INF] * (m + 1)
        self._matched = False

    def add_edge(self, u: int, v: int) -> None:
        if not (1 <= u <= self.m and 1 <= v <= self.n):
            raise IndexError(f"edge ({u}, {v}) outside {self.m}x{self.n} graph")
        self.adj[u].append(v)
        self._matched = False

    @property
    def edge_count(self) -> int:
        return sum(len(a) for a in self.adj)

    @property
    def matching_size(self) -> int:
        return sum(1 for u in range(1, self.m + 1) if self.pair_u[u] != NIL)

    def hopcroft_karp(self) -> int:
        """Compute a maximum matching in place and return its size."""
        self.pair_u = [NIL] * (self.m + 1)
        self.pair_v = [NIL] * (self.n + 1)
        rounds = 0

        while self._bfs():
            rounds += 1
            cursor = [0] * (self.m + 1)
            augmented = 0
            for u in range(1, self.m + 1):
                if self.pair_u[u] == NIL and self._augment(u, cursor):
                    augmented += 1
            if not augmented:
                break

        self._matched = True
        size = self.matching_size
        logger.debug("Hopcroft-Karp: matching of %d after %d rounds", size, rounds)
        return size

    def _bfs(self) -> bool:
        """Layer the graph from free left vertices; True if a free right vertex is reachable."""
        queue: deque[int] = deque()
        for u in range(1, self.m + 1):
            if self.pair_u[u] == NIL:
                self._dist[u] = 0
                queue.append(u)
            else:
                self._dist[u] = _INF
        self._dist[NIL] = _INF

        while queue:
            u = queue.popleft()
            if self._dist[u] >= self._dist[NIL]:
                continue
            for v in self.adj[u]:
                w = self.pair_v[v]
                if self._dist[w] == _INF:
                    self._dist[w] = self._dist[u] + 1
                    if w != NIL:
                        queue.append(w)

        return self._dist[NIL] != _INF

    def _augment(self, root: int, cursor: list[int]) -> bool:
        """Find one shortest augmenting path from ``root`` and flip it."""
        stack = [root]
        via: list[int] = []

        while stack:
            u = stack[-1]
            edges = self.adj[u]
            descended = False
            while cursor[u] < len(edges):
                v = edges[cursor[u]]
                cursor[u] += 1
                w = self.pair_v[v]
                if self._dist[w] != self._dist[u] + 1:
                    continue
                if w == NIL:
                    via.append(v)
                    for pu, pv in zip(stack, via):
                        self.pair_u[pu] = pv
                        self.pair_v[pv] = pu
                    return True
                via.append(v)
                stack.append(w)
                descended = True
                break
            if not descended:
                # Dead end for the rest of this round
                self._dist[u] = _INF
                stack.pop()
                if via:
                    via.pop()

        return False

    def _alternating_reach(self) -> tuple[list[bool], list[bool]]:
        """Vertices reachable from free left vertices along alternating paths."""
        vis_u = [False] * (self.m + 1)
        vis_v = [False] * (self.n + 1)

        for root in range(1, self.m + 1):
            if self.pair_u[root] != NIL or vis_u[root]:
                continue
            vis_u[root] = True
            work = [root]
            while work:
                u = work.pop()
                for v in self.adj[u]:
                    if v == self.pair_u[u] or vis_v[v]:
                        continue
                    vis_v[v] = True
                    w = self.pair_v[v]
                    if w != NIL and not vis_u[w]:
                        vis_u[w] = True
                        work.append(w)

        return vis_u, vis_v

    def minimum_vertex_cover(self) -> tuple[list[bool], list[bool]]:
        """König cover: unreached left vertices plus reached right vertices (0-indexed)."""
        if not self._matched:
            self.hopcroft_karp()
        vis_u, vis_v = self._alternating_reach()
        return [not r for r in vis_u[1:]], vis_v[1:]

    def maximum_independent_set(self) -> IndependentSet:
        """Complement of the minimum vertex cover, both partitions at once."""
        cover_u, cover_v = self.minimum_vertex_cover()
        return IndependentSet(
            left=[not c for c in cover_u],
            right=[not c for c in cover_v],
        )


def build_conflict_graph(verticals: list[Diagonal], horizontals: list[Diagonal]) -> BipartiteGraph:
    graph = BipartiteGraph(len(verticals), len(horizontals))
    for i, v in enumerate(verticals, start=1):
        for j, h in enumerate(horizontals, start=1):
            if v.crosses(h):
                graph.add_edge(i, j)
    return graph


@stage(
    id="S2.01",
    phase=Phase.MATCHING,
    dependencies=["S1.01"],
    description="Choose the largest non-crossing set of diagonals",
)
def independent_diagonals(ctx: PartitionContext) -> None:
    graph = build_conflict_graph(ctx.verticals, ctx.horizontals)
    ctx.matching_size = graph.hopcroft_karp()
    keep = graph.maximum_independent_set()
    ctx.keep_vertical = keep.left
    ctx.keep_horizontal = keep.right
    logger.debug(
        "label %r: %d conflicts, matching %d, keeping %d of %d diagonals",
        ctx.label,
        graph.edge_count,
        ctx.matching_size,
        keep.size,
        len(ctx.verticals) + len(ctx.horizontals),
    )
