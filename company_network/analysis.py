"""Network analysis module.

Computes structure and risk summaries over a NetworkGraph using NetworkX.
The graph is passed in explicitly; nothing is read from earlier builds.
"""

import logging
from typing import Final

import networkx as nx

from company_network.schema import (
    CentralNode,
    CompanyNode,
    NetworkAnalysis,
    NetworkGraph,
    PersonNode,
    RiskFactor,
)

logger = logging.getLogger(__name__)

# A PSC controlling more companies than this is flagged as a complex structure
HIGH_CONTROL_FAN_OUT: Final[int] = 3


def analyze_network(
    graph: NetworkGraph,
    max_central_nodes: int | None = None,
) -> NetworkAnalysis:
    """Summarise the structure and heuristic risks of a network graph.

    Args:
        graph: The graph to analyse.
        max_central_nodes: Keep only this many top-ranked central nodes.
            None keeps all of them.

    Returns:
        A NetworkAnalysis with node/edge counts, directed density
        (edges / (n * (n - 1)), 0 for one node or fewer), nodes ranked by
        degree, and the flagged risk factors.
    """
    G = _build_networkx_graph(graph)

    central_nodes = _rank_central_nodes(G, graph)
    if max_central_nodes is not None:
        central_nodes = central_nodes[:max_central_nodes]

    risk_factors = [
        *_find_circular_ownership(graph),
        *_find_high_control_fan_out(graph),
        *_find_critical_entities(graph),
    ]
    if risk_factors:
        logger.info("Flagged %d risk factor(s)", len(risk_factors))

    return NetworkAnalysis(
        total_nodes=G.number_of_nodes(),
        total_edges=G.number_of_edges(),
        network_density=float(nx.density(G)),
        central_nodes=central_nodes,
        risk_factors=risk_factors,
    )


def _build_networkx_graph(graph: NetworkGraph) -> nx.MultiDiGraph:
    """Build a directed NetworkX multigraph from a NetworkGraph.

    A multigraph keeps parallel edges so counts and degrees match the
    edge list. Edges pointing at unknown node ids are skipped.

    Args:
        graph: The NetworkGraph instance to convert.

    Returns:
        A NetworkX MultiDiGraph with nodes and edges populated.
    """
    G = nx.MultiDiGraph()

    for node in graph.nodes:
        G.add_node(node.id, label=node.display_name, type=node.type)

    for edge in graph.edges:
        if edge.source not in G or edge.target not in G:
            logger.warning("Skipping edge %s with unknown endpoint(s)", edge.id)
            continue
        G.add_edge(
            edge.source,
            edge.target,
            key=edge.id,
            label=edge.label,
            relationship=edge.relationship,
        )

    return G


def _rank_central_nodes(G: nx.MultiDiGraph, graph: NetworkGraph) -> list[CentralNode]:
    """Rank nodes by total degree, descending, keeping graph order on ties."""
    centrality = nx.degree_centrality(G) if G.number_of_nodes() else {}
    ranked = sorted(graph.nodes, key=lambda node: G.degree(node.id), reverse=True)

    return [
        CentralNode(
            id=node.id,
            name=node.display_name,
            connections=G.degree(node.id),
            centrality=centrality.get(node.id, 0.0),
        )
        for node in ranked
    ]


def _ownership_pairs(graph: NetworkGraph) -> list[tuple[str, str]]:
    """Ownership edges as (source, target), ignoring edges to unknown nodes."""
    node_ids = graph.node_by_id()
    return [
        (edge.source, edge.target)
        for edge in graph.edges
        if edge.relationship == "ownership"
        and edge.source in node_ids
        and edge.target in node_ids
    ]


def _find_circular_ownership(graph: NetworkGraph) -> list[RiskFactor]:
    """Flag node pairs joined by ownership edges in both directions."""
    nodes = graph.node_by_id()
    pairs = _ownership_pairs(graph)
    present = set(pairs)
    reported: set[frozenset[str]] = set()
    factors: list[RiskFactor] = []

    for source, target in pairs:
        key = frozenset((source, target))
        if source == target or key in reported or (target, source) not in present:
            continue
        reported.add(key)
        factors.append(
            RiskFactor(
                type="circular_ownership",
                severity="high",
                description=(
                    f"{nodes[source].display_name} and {nodes[target].display_name}"
                    " hold ownership over each other"
                ),
                affected_nodes=[source, target],
            )
        )

    return factors


def _find_high_control_fan_out(graph: NetworkGraph) -> list[RiskFactor]:
    """Flag PSCs with ownership edges into many companies."""
    nodes = graph.node_by_id()
    controlled: dict[str, list[str]] = {}

    for source, target in _ownership_pairs(graph):
        owner = nodes.get(source)
        if (
            isinstance(owner, PersonNode)
            and owner.data.person_type == "psc"
            and isinstance(nodes.get(target), CompanyNode)
        ):
            companies = controlled.setdefault(source, [])
            if target not in companies:
                companies.append(target)

    return [
        RiskFactor(
            type="complex_structure",
            severity="medium",
            description=(
                f"{nodes[psc_id].display_name} has significant control over"
                f" {len(companies)} companies"
            ),
            affected_nodes=[psc_id, *companies],
        )
        for psc_id, companies in controlled.items()
        if len(companies) > HIGH_CONTROL_FAN_OUT
    ]


def _find_critical_entities(graph: NetworkGraph) -> list[RiskFactor]:
    """Flag company nodes whose heuristic risk level is critical."""
    return [
        RiskFactor(
            type="critical_risk_entity",
            severity="high",
            description=(
                f"{node.data.company_name} ({node.data.company_number})"
                " has a critical risk level"
            ),
            affected_nodes=[node.id],
        )
        for node in graph.nodes
        if isinstance(node, CompanyNode) and node.data.risk_level == "critical"
    ]
