"""Network graph visualization module.

This module renders a NetworkGraph as a directed graph image using
NetworkX and matplotlib, at the positions computed by the builder.
"""

from pathlib import Path

import matplotlib.pyplot as plt
import networkx as nx

from company_network.schema import CompanyNode, NetworkGraph, PersonNode

# Company node colors by risk level
RISK_COLORS: dict[str, str] = {
    "low": "#22c55e",
    "medium": "#f59e0b",
    "high": "#f97316",
    "critical": "#ef4444",
}

# Person node colors by person type
PERSON_COLORS: dict[str, str] = {
    "officer": "#3b82f6",
    "psc": "#8b5cf6",
}

# Default output path for the rendered graph
OUTPUT_PATH: Path = Path("visuals/graph.png")


def render_graph(graph: NetworkGraph, output_path: Path = OUTPUT_PATH) -> None:
    """Render a NetworkGraph as a directed graph image.

    Builds a directed NetworkX graph from the NetworkGraph, colours nodes
    by risk level (companies) or person type (people), draws each edge with
    its style hint, and saves the visualization to disk.

    Args:
        graph: A validated NetworkGraph instance to visualize.
        output_path: Path where the image will be saved.
            Defaults to visuals/graph.png.

    Returns:
        None. The graph image is saved to the specified output path.

    Raises:
        OSError: If the output directory cannot be created or file cannot be written.
    """
    G = _build_networkx_graph(graph)
    _render_and_save(G, graph, output_path)


def _build_networkx_graph(graph: NetworkGraph) -> nx.DiGraph:
    """Build a directed NetworkX graph from a NetworkGraph.

    Args:
        graph: The NetworkGraph instance to convert.

    Returns:
        A NetworkX DiGraph with nodes and edges populated.
    """
    G = nx.DiGraph()

    for node in graph.nodes:
        G.add_node(
            node.id,
            label=node.display_name,
            type=node.type,
        )

    for edge in graph.edges:
        G.add_edge(
            edge.source,
            edge.target,
            label=edge.label,
        )

    return G


def _node_color(node: CompanyNode | PersonNode) -> str:
    if isinstance(node, CompanyNode):
        return RISK_COLORS.get(node.data.risk_level, "gray")
    return PERSON_COLORS.get(node.data.person_type, "gray")


def _render_and_save(
    G: nx.DiGraph,
    graph: NetworkGraph,
    output_path: Path,
) -> None:
    """Render the NetworkX graph and save to an image file.

    Args:
        G: The NetworkX DiGraph to render.
        graph: The original NetworkGraph (used for positions and styles).
        output_path: Path where the image will be saved.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(12, 8))

    # Canvas y grows downwards, matplotlib y grows upwards
    pos = {node.id: (node.position.x, -node.position.y) for node in graph.nodes}

    nx.draw_networkx_nodes(
        G,
        pos,
        nodelist=[node.id for node in graph.nodes],
        node_color=[_node_color(node) for node in graph.nodes],
        node_size=2000,
        alpha=0.9,
        ax=ax,
    )

    nx.draw_networkx_labels(
        G,
        pos,
        labels={node.id: node.display_name for node in graph.nodes},
        font_size=8,
        font_weight="bold",
        ax=ax,
    )

    for edge in graph.edges:
        nx.draw_networkx_edges(
            G,
            pos,
            edgelist=[(edge.source, edge.target)],
            edge_color=edge.style.stroke,
            width=edge.style.stroke_width,
            style="dashed" if edge.style.stroke_dasharray else "solid",
            arrows=True,
            arrowsize=20,
            node_size=2000,
            ax=ax,
        )

    edge_labels = {(edge.source, edge.target): edge.label for edge in graph.edges}
    nx.draw_networkx_edge_labels(
        G,
        pos,
        edge_labels=edge_labels,
        font_size=7,
        ax=ax,
    )

    ax.set_title("Company Network", fontsize=14, fontweight="bold")
    ax.axis("off")

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
