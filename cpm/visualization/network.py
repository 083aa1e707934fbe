import networkx as nx
import matplotlib.pyplot as plt
from matplotlib.lines import Line2D
from matplotlib.patches import Patch


def _layered_layout(dependency_graph):
    """Place each activity in a column by its longest distance from a root."""
    layer = {}
    for name in dependency_graph.topological_order():
        preds = dependency_graph.predecessors(name)
        layer[name] = max((layer[p] + 1 for p in preds), default=0)

    rows = {}
    pos = {}
    for name in dependency_graph.order:
        column = layer[name]
        row = rows.get(column, 0)
        rows[column] = row + 1
        pos[name] = (column, -row)
    return pos


def create_network_diagram(engine, filename=None, show=True, layout="layered"):
    """
    Visualize the activity dependency network with critical paths highlighted.

    Args:
        engine: The CPMEngine instance
        filename: Optional filename to save the diagram
        show: Whether to display the diagram (default: True)
        layout: Network layout type ('layered', 'spring', 'circular' or 'shell')

    Returns:
        The matplotlib figure
    """
    dependency_graph = engine.graph
    if dependency_graph is None:
        raise ValueError("Nothing to draw: the engine has no dependency graph")

    G = dependency_graph.graph
    analysis = engine.analysis

    critical_nodes = set()
    critical_edges = set()
    if analysis is not None:
        for path in analysis.critical_paths:
            critical_nodes.update(path.activities)
            critical_edges.update(path.edges())

    fig = plt.figure(figsize=(12, 8))

    node_colors = ["red" if n in critical_nodes else "skyblue" for n in G.nodes()]

    edge_colors = []
    edge_widths = []
    for u, v in G.edges():
        if (u, v) in critical_edges:
            edge_colors.append("red")
            edge_widths.append(2.5)
        else:
            edge_colors.append("gray")
            edge_widths.append(1.0)

    # Choose layout algorithm
    if layout == "layered":
        pos = _layered_layout(dependency_graph)
    elif layout == "circular":
        pos = nx.circular_layout(G)
    elif layout == "shell":
        pos = nx.shell_layout(G)
    else:
        pos = nx.spring_layout(G, seed=42)

    nx.draw_networkx_nodes(
        G,
        pos,
        node_color=node_colors,
        node_size=700,
        node_shape="o",
        edgecolors="black",
    )

    nx.draw_networkx_edges(
        G,
        pos,
        edge_color=edge_colors,
        width=edge_widths,
        arrowsize=15,
        arrowstyle="-|>",
        node_size=700,
    )

    labels = {}
    for node in G.nodes():
        activity = G.nodes[node]["activity"]
        labels[node] = f"{activity.name}\n({activity.duration}d)"
    nx.draw_networkx_labels(G, pos, labels=labels, font_size=9)

    legend_elements = [
        Patch(facecolor="red", edgecolor="black", label="Critical Activity"),
        Patch(facecolor="skyblue", edgecolor="black", label="Other Activity"),
        Line2D([0], [0], color="red", lw=2.5, label="Critical Path"),
    ]
    plt.legend(handles=legend_elements, loc="best", fontsize=10)

    title = "Project Network Diagram"
    if analysis is not None:
        title += f" (Critical Path: {analysis.max_duration} days)"
    plt.title(title, fontsize=14)
    plt.axis("off")

    plt.tight_layout()

    if filename:
        plt.savefig(filename, dpi=300, bbox_inches="tight")

    if show:
        plt.show()

    return fig
