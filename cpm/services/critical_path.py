import logging

import networkx as nx

from cpm.domain.activity import CPMError
from cpm.domain.path import Path
from cpm.utils.graph import CyclicDependencyError

logger = logging.getLogger(__name__)

DEFAULT_MAX_PATHS = 10000


class PathLimitError(CPMError):
    """Raised when path enumeration exceeds its configured bounds."""

    pass


class PathAnalysis:
    """Enumerated paths split into critical and other."""

    def __init__(self, critical_paths, other_paths, max_duration, all_paths=None):
        self.critical_paths = list(critical_paths)
        self.other_paths = list(other_paths)
        self.max_duration = max_duration
        # Every path in enumeration order
        if all_paths is None:
            all_paths = self.critical_paths + self.other_paths
        self.all_paths = list(all_paths)

    def critical_activities(self):
        """Names on at least one critical path, in order of first appearance."""
        names = []
        for path in self.critical_paths:
            for name in path.activities:
                if name not in names:
                    names.append(name)
        return names

    def is_critical(self, name):
        return any(name in path.activities for path in self.critical_paths)

    def to_dict(self):
        return {
            "criticalPaths": [p.to_dict() for p in self.critical_paths],
            "otherPaths": [p.to_dict() for p in self.other_paths],
            "maxDuration": self.max_duration,
        }

    def __eq__(self, other):
        if not isinstance(other, PathAnalysis):
            return NotImplemented
        return (
            self.critical_paths == other.critical_paths
            and self.other_paths == other.other_paths
            and self.max_duration == other.max_duration
        )

    def __repr__(self):
        return (
            f"PathAnalysis(max_duration={self.max_duration}, "
            f"critical={len(self.critical_paths)}, other={len(self.other_paths)})"
        )


def _find_cycle(forward_edges):
    G = nx.DiGraph()
    for name, successors in forward_edges.items():
        G.add_node(name)
        G.add_edges_from((name, succ) for succ in successors)
    try:
        return [u for u, v in nx.find_cycle(G)]
    except nx.NetworkXNoCycle:
        return []


def enumerate_paths(activities, forward_edges, roots, max_paths=DEFAULT_MAX_PATHS, max_depth=None):
    """
    Enumerate every root-to-leaf path with its total duration.

    The traversal keeps an explicit stack of (activity, accumulated duration,
    path so far) frames instead of recursing. Roots and successors are
    visited in declaration order.

    Args:
        activities: Ordered sequence of Activity objects with unique names
        forward_edges: Mapping of activity name -> successor names
        roots: Names of activities with no predecessors; activities with no
            incoming edge are added to them
        max_paths: Maximum number of paths before PathLimitError (None for no limit)
        max_depth: Maximum number of activities on a path (None for no limit)

    Returns:
        list of (path names tuple, duration) in enumeration order

    Raises:
        CyclicDependencyError: If an activity is reached again along the same path,
            or some activities cannot be reached from any root
        PathLimitError: If max_paths or max_depth is exceeded
    """
    durations = {}
    position = {}
    for activity in activities:
        if activity.name not in durations:
            durations[activity.name] = activity.duration
            position[activity.name] = len(position)

    # Activities with no incoming edge start a path even when the caller's
    # roots only list activities with an empty predecessor list
    has_incoming = {
        s for successors in forward_edges.values() for s in successors if s in durations
    }
    start_names = set(r for r in roots if r in durations)
    start_names.update(name for name in durations if name not in has_incoming)
    ordered_roots = sorted(start_names, key=position.__getitem__)

    paths = []
    visited = set()
    stack = [(root, 0, ()) for root in reversed(ordered_roots)]

    while stack:
        node, accumulated, path = stack.pop()
        path = path + (node,)
        visited.add(node)

        if max_depth is not None and len(path) > max_depth:
            raise PathLimitError(
                f"Path {' -> '.join(path)} exceeds the maximum depth of {max_depth}"
            )

        total = accumulated + durations[node]
        successors = sorted(
            (s for s in forward_edges.get(node, ()) if s in durations),
            key=position.__getitem__,
        )

        if not successors:
            paths.append((path, total))
            if max_paths is not None and len(paths) > max_paths:
                raise PathLimitError(
                    f"Dependency graph has more than {max_paths} paths"
                )
            continue

        for succ in reversed(successors):
            if succ in path:
                raise CyclicDependencyError(path[path.index(succ):])
            stack.append((succ, total, path))

    if len(visited) < len(durations):
        # Every activity of an acyclic graph is reachable from some root
        cycle = _find_cycle(forward_edges)
        if cycle:
            raise CyclicDependencyError(cycle)
        unreached = sorted(set(durations) - visited, key=position.__getitem__)
        raise ValueError(f"Activities not reachable from any root: {unreached}")

    return paths


def analyze_paths(activities, forward_edges, roots, max_paths=DEFAULT_MAX_PATHS, max_depth=None):
    """
    Find the critical path(s) of a project.

    All root-to-leaf paths are enumerated. Paths whose duration equals the
    longest duration are critical; ties are all kept. Every other path is
    returned as other.

    Args:
        activities: Ordered sequence of Activity objects with unique names
        forward_edges: Mapping of activity name -> successor names
        roots: Names of activities with no predecessors
        max_paths: Maximum number of paths before PathLimitError
        max_depth: Maximum number of activities on a path

    Returns:
        PathAnalysis, or None when there are no activities
    """
    activities = list(activities)
    if not activities:
        return None

    paths = enumerate_paths(
        activities, forward_edges, roots, max_paths=max_paths, max_depth=max_depth
    )

    max_duration = max(duration for _, duration in paths)

    critical_paths = []
    other_paths = []
    all_paths = []
    for names, duration in paths:
        if duration == max_duration:
            path = Path(names, duration, type="critical")
            critical_paths.append(path)
        else:
            path = Path(names, duration, type="other")
            other_paths.append(path)
        all_paths.append(path)

    logger.debug(
        "Enumerated %d paths, %d critical with duration %d",
        len(paths),
        len(critical_paths),
        max_duration,
    )

    return PathAnalysis(critical_paths, other_paths, max_duration, all_paths)
