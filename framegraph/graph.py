"""
Reference Frame Graph - Frame Graph

A directed graph with frames as vertices and TransformFactories as edges.
Every edge is registered together with its reverse edge. Queries pick the
cheapest chain of factories at the query epoch and fold it into a single
Transform:

    get_transform(A, C, t) = f_AB.get_transform(t).add(f_BC.get_transform(t))

Edge weights are factory.get_cost(epoch), evaluated per query only for the
edges the search visits, so different epochs may select different paths.

Setup (add_frame / register / connect) is single-threaded. Call freeze()
before sharing a graph between threads; a frozen graph rejects mutation.
"""

import heapq
import logging
import math
import threading
from collections import OrderedDict
from itertools import count
from typing import Callable, Dict, List, Optional, Tuple

from .config import GraphConfig, create_default_config
from .factory import IdentityFactory, TransformFactory
from .frames import Frame
from .transform import Transform
from .types import PathReport
from .validation import (
    GraphFrozenError,
    InconsistentRegistrationError,
    InvalidCostError,
    NoPathError,
    check_cost,
)

# Configure module logger
logger = logging.getLogger(__name__)


class FrameGraph:
    """
    Weighted graph of reference frames and the factories linking them.

    Attributes:
        config: GraphConfig controlling cost policy, caching and logging
    """

    def __init__(self, config: Optional[GraphConfig] = None):
        self.config = config if config is not None else create_default_config()
        self._edges: Dict[Frame, Dict[Frame, TransformFactory]] = {}
        self._frozen = False
        self._cache: "OrderedDict[tuple, Transform]" = OrderedDict()
        self._cache_lock = threading.Lock()

    # ── Topology ────────────────────────────────────────────────────────

    def __contains__(self, frame) -> bool:
        return frame in self._edges

    def __len__(self) -> int:
        return len(self._edges)

    def frames(self) -> List[Frame]:
        """Return all frames (registration order)."""
        return list(self._edges)

    def edges(self) -> List[TransformFactory]:
        """Return every directed edge factory."""
        return [f for targets in self._edges.values() for f in targets.values()]

    def edges_from(self, frame: Frame) -> List[TransformFactory]:
        """Return the outgoing edge factories of `frame`."""
        if frame not in self._edges:
            raise NoPathError(f"Frame {frame} is not registered in the graph")
        return list(self._edges[frame].values())

    def transforms_of(self, frame: Frame) -> List[TransformFactory]:
        """Return every edge factory starting or ending at `frame`."""
        return [f for f in self.edges() if f.source == frame or f.target == frame]

    def find_frame(self, predicate: Callable[[Frame], bool]) -> Optional[Frame]:
        """First registered frame matching `predicate`, or None."""
        for frame in self._edges:
            if predicate(frame):
                return frame
        return None

    # ── Mutation ────────────────────────────────────────────────────────

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> 'FrameGraph':
        """Make the graph read-only; later mutation raises GraphFrozenError."""
        self._frozen = True
        logger.info(f"Frame graph frozen: {len(self._edges)} frames, "
                    f"{len(self.edges())} edges")
        return self

    def add_frame(self, frame: Frame) -> Frame:
        """
        Add a root frame (a vertex without a parent edge).

        Raises:
            InconsistentRegistrationError: frame already registered
        """
        self._check_mutable()
        self._check_frame_type(frame)
        if frame in self._edges:
            raise InconsistentRegistrationError(f"Frame {frame} is already registered")
        self._edges[frame] = {}
        self._clear_cache()
        logger.debug(f"Added root frame {frame}")
        return frame

    def register(self, parent: Frame, child: Frame,
                 parent_to_child: TransformFactory,
                 child_to_parent: Optional[TransformFactory] = None) -> Frame:
        """
        Add `child` below the registered `parent`, with edges both ways.

        The child->parent edge defaults to parent_to_child.inverse(). All
        checks run before the graph is touched: on error nothing is added.

        Raises:
            InconsistentRegistrationError: unknown parent, child already
                registered, or factories not matching (parent, child)
            GraphFrozenError: graph is frozen
        """
        self._check_mutable()
        self._check_frame_type(child)
        if parent not in self._edges:
            raise InconsistentRegistrationError(
                f"Parent frame {parent} of {child} is not registered"
            )
        if child in self._edges:
            raise InconsistentRegistrationError(f"Frame {child} is already registered")
        if child_to_parent is None:
            child_to_parent = parent_to_child.inverse()
        self._check_edge_pair(parent, child, parent_to_child, child_to_parent)

        self._edges[child] = {parent: child_to_parent}
        self._edges[parent][child] = parent_to_child
        self._clear_cache()
        logger.debug(f"Registered frame {child} under {parent} "
                     f"via {parent_to_child!r} / {child_to_parent!r}")
        return child

    def connect(self, frame_a: Frame, frame_b: Frame,
                a_to_b: TransformFactory,
                b_to_a: Optional[TransformFactory] = None) -> None:
        """
        Add an extra edge pair between two registered frames.

        Raises:
            InconsistentRegistrationError: unknown frame or existing edge
            GraphFrozenError: graph is frozen
        """
        self._check_mutable()
        for frame in (frame_a, frame_b):
            if frame not in self._edges:
                raise InconsistentRegistrationError(f"Frame {frame} is not registered")
        if frame_a == frame_b:
            raise InconsistentRegistrationError(f"Cannot connect {frame_a} to itself")
        if frame_b in self._edges[frame_a] or frame_a in self._edges[frame_b]:
            raise InconsistentRegistrationError(
                f"An edge between {frame_a} and {frame_b} is already registered"
            )
        if b_to_a is None:
            b_to_a = a_to_b.inverse()
        self._check_edge_pair(frame_a, frame_b, a_to_b, b_to_a)

        self._edges[frame_a][frame_b] = a_to_b
        self._edges[frame_b][frame_a] = b_to_a
        self._clear_cache()
        logger.debug(f"Connected {frame_a} <-> {frame_b} via {a_to_b!r} / {b_to_a!r}")

    def _check_mutable(self) -> None:
        if self._frozen:
            raise GraphFrozenError("Frame graph is frozen; registration is closed")

    @staticmethod
    def _check_frame_type(frame) -> None:
        if not isinstance(frame, Frame):
            raise InconsistentRegistrationError(
                f"Expected a Frame, got {type(frame).__name__}: {frame!r}"
            )

    @staticmethod
    def _check_edge_pair(frame_a, frame_b, a_to_b, b_to_a) -> None:
        if a_to_b.source != frame_a or a_to_b.target != frame_b:
            raise InconsistentRegistrationError(
                f"Factory {a_to_b!r} does not map {frame_a} -> {frame_b}"
            )
        if b_to_a.source != frame_b or b_to_a.target != frame_a:
            raise InconsistentRegistrationError(
                f"Factory {b_to_a!r} does not map {frame_b} -> {frame_a}"
            )

    def _clear_cache(self) -> None:
        with self._cache_lock:
            self._cache.clear()

    # ── Path search ─────────────────────────────────────────────────────

    def _edge_cost(self, factory: TransformFactory, epoch) -> float:
        """Cost of one edge at `epoch`, checked against the cost policy."""
        cost = float(factory.get_cost(epoch))
        if self.config.negative_cost_policy == "raise" or math.isnan(cost) or math.isinf(cost):
            return check_cost(cost, factory)
        if cost < 0.0:
            logger.warning(f"Negative cost {cost} on {factory!r} at {epoch}")
        return cost

    def _dijkstra(self, source: Frame, target: Frame, epoch
                  ) -> Dict[Frame, Tuple[Frame, TransformFactory]]:
        """Predecessor map of the cheapest paths from `source`, up to `target`."""
        dist: Dict[Frame, float] = {source: 0.0}
        prev: Dict[Frame, Tuple[Frame, TransformFactory]] = {}
        visited = set()
        tie = count()
        heap = [(0.0, next(tie), source)]

        while heap:
            d, _, u = heapq.heappop(heap)
            if u in visited:
                continue
            visited.add(u)
            if u == target:
                break

            for v, factory in self._edges[u].items():
                if v in visited:
                    continue
                nd = d + self._edge_cost(factory, epoch)
                if nd < dist.get(v, math.inf):
                    dist[v] = nd
                    prev[v] = (u, factory)
                    heapq.heappush(heap, (nd, next(tie), v))

        return prev

    def _bellman_ford(self, source: Frame, target: Frame, epoch
                      ) -> Dict[Frame, Tuple[Frame, TransformFactory]]:
        """
        Predecessor map of the cheapest paths from `source`, negative costs allowed.

        Only edges leaving frames reachable from `source` are weighed.
        """
        reachable = [source]
        seen = {source}
        for u in reachable:
            for v in self._edges[u]:
                if v not in seen:
                    seen.add(v)
                    reachable.append(v)

        edges = [(u, v, factory, self._edge_cost(factory, epoch))
                 for u in reachable
                 for v, factory in self._edges[u].items()]
        dist: Dict[Frame, float] = {source: 0.0}
        prev: Dict[Frame, Tuple[Frame, TransformFactory]] = {}

        for _ in range(len(reachable) - 1):
            changed = False
            for u, v, factory, cost in edges:
                if u in dist and dist[u] + cost < dist.get(v, math.inf):
                    dist[v] = dist[u] + cost
                    prev[v] = (u, factory)
                    changed = True
            if not changed:
                break

        for u, v, factory, cost in edges:
            if u in dist and dist[u] + cost < dist.get(v, math.inf):
                raise InvalidCostError(
                    f"Negative-cost cycle through {u} -> {v} reachable from {source} at {epoch}"
                )
        return prev

    def find_path(self, from_frame: Frame, to_frame: Frame, epoch) -> List[TransformFactory]:
        """
        Cheapest chain of edge factories from `from_frame` to `to_frame` at `epoch`.

        Returns an empty list when the frames are equal.

        Raises:
            NoPathError: unknown frame or no connecting chain
            InvalidCostError: a visited edge reported an unusable cost
        """
        for frame in (from_frame, to_frame):
            if frame not in self._edges:
                raise NoPathError(f"Frame {frame} is not registered in the graph")
        if from_frame == to_frame:
            return []

        if self.config.negative_cost_policy == "bellman_ford":
            prev = self._bellman_ford(from_frame, to_frame, epoch)
        else:
            prev = self._dijkstra(from_frame, to_frame, epoch)

        if to_frame not in prev:
            raise NoPathError(
                f"No reference frame transformation path exists between "
                f"'{from_frame}' and '{to_frame}'"
            )

        path: List[TransformFactory] = []
        node = to_frame
        while node != from_frame:
            node, factory = prev[node]
            path.append(factory)
        path.reverse()

        log = logger.info if self.config.verbose else logger.debug
        log(f"Path {from_frame} -> {to_frame} at {epoch}: "
            + " -> ".join(str(f.source) for f in path) + f" -> {to_frame}")
        return path

    def describe_path(self, from_frame: Frame, to_frame: Frame, epoch) -> PathReport:
        """Frames, factories and per-edge costs of the selected path."""
        path = self.find_path(from_frame, to_frame, epoch)
        costs = [float(factory.get_cost(epoch)) for factory in path]
        return PathReport(
            frames=[from_frame] + [factory.target for factory in path],
            factories=path,
            costs=costs,
            total_cost=float(sum(costs)),
        )

    # ── Queries ─────────────────────────────────────────────────────────

    def get_transform_factory(self, from_frame: Frame, to_frame: Frame,
                              epoch) -> TransformFactory:
        """
        Single factory for the cheapest path at `epoch`.

        The path is chosen with the costs at `epoch`; the returned factory
        keeps that route for every epoch it is later asked for.
        """
        if from_frame == to_frame:
            return IdentityFactory(from_frame)
        path = self.find_path(from_frame, to_frame, epoch)
        factory = path[0]
        for edge in path[1:]:
            factory = factory.add(edge)
        return factory

    def get_transform(self, from_frame: Frame, to_frame: Frame, epoch) -> Transform:
        """
        Transform from `from_frame` to `to_frame` at `epoch`.

        Raises:
            NoPathError: frames are not connected
            InvalidEpochError: an edge on the path is undefined at `epoch`
            InvalidCostError: an edge reported an unusable cost
        """
        if from_frame == to_frame:
            return IdentityFactory(from_frame).get_transform(epoch)

        key = (from_frame, to_frame, epoch)
        if self.config.cache_transforms:
            with self._cache_lock:
                cached = self._cache.get(key)
                if cached is not None:
                    self._cache.move_to_end(key)
                    return cached

        path = self.find_path(from_frame, to_frame, epoch)
        transform = path[0].get_transform(epoch)
        for factory in path[1:]:
            transform = transform.add(factory.get_transform(epoch))

        if self.config.cache_transforms:
            with self._cache_lock:
                self._cache[key] = transform
                while len(self._cache) > self.config.max_cache_entries:
                    self._cache.popitem(last=False)
        return transform

    def get_transform_matching(self, from_predicate: Callable[[Frame], bool],
                               to_predicate: Callable[[Frame], bool], epoch) -> Transform:
        """Transform between the first registered frames matching each predicate."""
        from_frame = self.find_frame(from_predicate)
        to_frame = self.find_frame(to_predicate)
        if from_frame is None or to_frame is None:
            raise NoPathError(
                "Could not find any frame matching the from or to frame predicate; "
                "was the frame attached to the graph?"
            )
        return self.get_transform(from_frame, to_frame, epoch)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"FrameGraph({len(self._edges)} frames, {len(self.edges())} edges, {state})"
