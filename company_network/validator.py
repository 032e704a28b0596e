"""Network graph validation module.

This module checks the integrity of a NetworkGraph beyond Pydantic schema
validation: ids must be unique and every edge must connect two nodes of
the same graph.
"""

from company_network.schema import NetworkGraph


def validate_network(graph: NetworkGraph) -> None:
    """Validate the integrity of a NetworkGraph.

    Performs the following validations:
      1. NetworkGraph must contain at least one node.
      2. All node IDs must be unique.
      3. All edge IDs must be unique.
      4. Every edge source and target must reference an existing node ID.

    This function does not modify the NetworkGraph.

    Args:
        graph: The NetworkGraph instance to validate.

    Returns:
        None. Validation passes silently if all checks succeed.

    Raises:
        ValueError: If the graph is empty, has duplicate node or edge IDs,
            or has an edge referencing a non-existent node ID.
    """
    if not graph.nodes:
        raise ValueError("NetworkGraph must contain at least one node")

    _validate_unique_ids([node.id for node in graph.nodes], "node")
    _validate_unique_ids([edge.id for edge in graph.edges], "edge")
    _validate_edge_references(graph)


def _validate_unique_ids(ids: list[str], kind: str) -> None:
    """Check that a list of IDs has no duplicates.

    Args:
        ids: IDs in graph order.
        kind: "node" or "edge", used in the error message.

    Raises:
        ValueError: If duplicate IDs are found.
    """
    seen_ids: set[str] = set()
    duplicates: list[str] = []

    for item_id in ids:
        if item_id in seen_ids:
            duplicates.append(item_id)
        seen_ids.add(item_id)

    if duplicates:
        raise ValueError(f"Duplicate {kind} IDs found: {duplicates}")


def _validate_edge_references(graph: NetworkGraph) -> None:
    """Check that all edge sources and targets reference existing nodes.

    Args:
        graph: The NetworkGraph instance to validate.

    Raises:
        ValueError: If an edge references a non-existent node ID.
    """
    node_ids: set[str] = {node.id for node in graph.nodes}
    invalid_references: list[str] = []

    for edge in graph.edges:
        if edge.source not in node_ids:
            invalid_references.append(f"source '{edge.source}' in edge {edge.id}")
        if edge.target not in node_ids:
            invalid_references.append(f"target '{edge.target}' in edge {edge.id}")

    if invalid_references:
        raise ValueError(f"Invalid node references in edges: {invalid_references}")
