import logging

import networkx as nx

from cpm.domain.activity import CPMError

logger = logging.getLogger(__name__)

UNRESOLVED_POLICIES = ("ignore", "warn", "reject")


class CyclicDependencyError(CPMError):
    """Raised when the predecessor relation contains a cycle."""

    def __init__(self, cycle):
        self.cycle = list(cycle)
        chain = " -> ".join(str(name) for name in self.cycle + self.cycle[:1])
        super().__init__(f"Activity dependencies contain a cycle: {chain}")


class UnresolvedPredecessorError(CPMError):
    """Raised when a predecessor names an activity that was never declared."""

    def __init__(self, activity, predecessor):
        self.activity = activity
        self.predecessor = predecessor
        super().__init__(
            f"Activity {activity} depends on unknown activity {predecessor}"
        )


class DependencyGraph:
    """Forward adjacency of a set of activities, backed by a networkx DiGraph."""

    def __init__(self, graph, order, unresolved=None):
        self.graph = graph
        self.order = list(order)
        self.unresolved = list(unresolved or [])
        self._position = {name: i for i, name in enumerate(self.order)}

    @property
    def forward_edges(self):
        """Mapping of every activity name to the set of its successors."""
        return {name: set(self.graph.successors(name)) for name in self.order}

    @property
    def roots(self):
        """Activities with no resolvable predecessor."""
        return {name for name in self.order if self.graph.in_degree(name) == 0}

    @property
    def leaves(self):
        """Activities with no successor."""
        return {name for name in self.order if self.graph.out_degree(name) == 0}

    def ordered_roots(self):
        return [name for name in self.order if self.graph.in_degree(name) == 0]

    def successors(self, name):
        """Successors of name in declaration order."""
        return sorted(self.graph.successors(name), key=self._position.__getitem__)

    def predecessors(self, name):
        """Resolvable predecessors of name in declaration order."""
        return sorted(self.graph.predecessors(name), key=self._position.__getitem__)

    def is_acyclic(self):
        return nx.is_directed_acyclic_graph(self.graph)

    def find_cycle(self):
        """Return one cycle as an ordered list of names, or None."""
        try:
            edges = nx.find_cycle(self.graph)
        except nx.NetworkXNoCycle:
            return None
        return [u for u, v in edges]

    def check_acyclic(self):
        cycle = self.find_cycle()
        if cycle is not None:
            raise CyclicDependencyError(cycle)

    def topological_order(self):
        """Topological order with ties broken by declaration order."""
        try:
            return list(
                nx.lexicographical_topological_sort(
                    self.graph, key=self._position.__getitem__
                )
            )
        except nx.NetworkXUnfeasible:
            raise CyclicDependencyError(self.find_cycle() or [])

    def __contains__(self, name):
        return name in self._position

    def __len__(self):
        return len(self.order)


def build_dependency_graph(activities, unresolved="ignore", check_cycles=True):
    """
    Build a directed graph representing activity dependencies.

    An edge runs from each predecessor to the activity that depends on it.
    Predecessor names that match no activity contribute no edge and are
    handled according to the unresolved policy.

    Args:
        activities: Ordered sequence of Activity objects (names must be unique)
        unresolved: "ignore", "warn" (log a warning) or "reject" (raise)
        check_cycles: Raise CyclicDependencyError if the graph has a cycle

    Returns:
        DependencyGraph
    """
    if unresolved not in UNRESOLVED_POLICIES:
        raise ValueError(
            f"Invalid unresolved predecessor policy: {unresolved}. "
            f"Must be one of {list(UNRESOLVED_POLICIES)}"
        )

    G = nx.DiGraph()
    order = []

    # Add activity nodes
    for activity in activities:
        if activity.name in G:
            continue
        G.add_node(activity.name, activity=activity)
        order.append(activity.name)

    # Add dependency edges
    missing = []
    for activity in activities:
        if G.nodes[activity.name]["activity"] is not activity:
            continue  # Shadowed duplicate
        for pred_name in activity.predecessors:
            if pred_name in G:
                G.add_edge(pred_name, activity.name)
                continue

            missing.append((activity.name, pred_name))
            if unresolved == "reject":
                raise UnresolvedPredecessorError(activity.name, pred_name)
            if unresolved == "warn":
                logger.warning(
                    "Activity %s depends on unknown activity %s; the reference is ignored",
                    activity.name,
                    pred_name,
                )

    dependency_graph = DependencyGraph(G, order, missing)

    # Check for cycles
    if check_cycles:
        dependency_graph.check_acyclic()

    return dependency_graph
