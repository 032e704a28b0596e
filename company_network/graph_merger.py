"""Graph merging module for combining separately built networks.

Every build numbers its nodes and edges from node_1/edge_1, so graphs from
different builds cannot simply be concatenated. This module merges them
into a single graph.

Key features:
- Re-numbers IDs to prevent collisions across builds
- Deduplicates companies by company number and people by name and birth date
- Updates edge references to point to deduplicated nodes
"""

import logging

from company_network.records import UNNAMED_PSC_NAME
from company_network.schema import CompanyNode, GraphEdge, NetworkGraph, PersonNode
from company_network.validator import validate_network

logger = logging.getLogger(__name__)

NodeKey = tuple[str, ...]


def merge_networks(graphs: list[NetworkGraph]) -> NetworkGraph:
    """Merge multiple network graphs into a single unified graph.

    Combines nodes and edges from all input graphs with:
    1. ID collision prevention: IDs are renumbered node_N / edge_N in
       first-seen order
    2. Deduplication: companies with the same company number, and people
       with the same role type, name and date of birth, are merged
    3. Reference updates: edges point to deduplicated node IDs, and
       duplicate edges (same endpoints, relationship and label) are dropped

    The first occurrence of a node keeps its payload and position.
    Connection counts are recomputed on the merged graph.

    Args:
        graphs: List of NetworkGraph instances to merge.
            Must contain at least one graph.

    Returns:
        A new NetworkGraph containing deduplicated nodes and edges.

    Raises:
        ValueError: If graphs list is empty.

    Example:
        >>> merged = merge_networks([build_network(a), build_network(b)])
        >>> analysis = analyze_network(merged)
    """
    if not graphs:
        raise ValueError("Cannot merge empty list of graphs")

    if len(graphs) == 1:
        return graphs[0]

    node_key_to_id: dict[NodeKey, str] = {}
    unique_nodes: list[CompanyNode | PersonNode] = []

    # (graph_index, old_id) -> new_id
    id_mapping: dict[tuple[int, str], str] = {}

    # First pass: collect and deduplicate nodes
    for graph_idx, graph in enumerate(graphs):
        for node in graph.nodes:
            node_key = _node_key(node, graph_idx)

            if node_key in node_key_to_id:
                id_mapping[(graph_idx, node.id)] = node_key_to_id[node_key]
                continue

            new_id = f"node_{len(unique_nodes) + 1}"
            node_key_to_id[node_key] = new_id
            id_mapping[(graph_idx, node.id)] = new_id
            unique_nodes.append(node.model_copy(update={"id": new_id}, deep=True))

    # Second pass: collect edges with updated IDs
    merged_edges: list[GraphEdge] = []
    seen_edges: set[tuple[str, str, str, str]] = set()

    for graph_idx, graph in enumerate(graphs):
        for edge in graph.edges:
            new_source = id_mapping[(graph_idx, edge.source)]
            new_target = id_mapping[(graph_idx, edge.target)]

            edge_key = (new_source, new_target, edge.relationship, edge.label)
            if edge_key in seen_edges:
                continue
            seen_edges.add(edge_key)

            merged_edges.append(
                edge.model_copy(
                    update={
                        "id": f"edge_{len(merged_edges) + 1}",
                        "source": new_source,
                        "target": new_target,
                    }
                )
            )

    merged = NetworkGraph(nodes=unique_nodes, edges=merged_edges)
    merged.refresh_connection_counts()
    validate_network(merged)

    logger.debug(
        "Merged %d graphs into %d nodes, %d edges",
        len(graphs),
        len(merged.nodes),
        len(merged.edges),
    )
    return merged


def _node_key(node: CompanyNode | PersonNode, graph_idx: int) -> NodeKey:
    """Get the deduplication key for a node.

    Args:
        node: A company or person node.
        graph_idx: Index of the graph the node came from.

    Returns:
        ("company", company_number) for companies;
        (person_type, normalised name, birth month/year) for people.
        Unnamed PSCs are never merged, so their key is scoped to their graph.
    """
    if isinstance(node, CompanyNode):
        return ("company", node.data.company_number.upper())

    if node.data.name == UNNAMED_PSC_NAME:
        return ("unnamed", str(graph_idx), node.id)

    birth = node.data.date_of_birth
    birth_key = f"{birth.year}-{birth.month:02d}" if birth is not None else ""
    return (node.data.person_type, " ".join(node.data.name.casefold().split()), birth_key)
