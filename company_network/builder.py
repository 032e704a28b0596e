"""Network graph builder.

Converts a primary company's profile, officers and PSCs (plus optional
related companies) into a positioned NetworkGraph for a node-graph UI.

Each call to build_network is self-contained: node and edge ids restart
at node_1/edge_1 and no state survives the call, so ids are unique only
within one graph. Use merge_networks to combine graphs from separate
builds.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from datetime import date
from itertools import count
from typing import Any, Final

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from company_network.analysis import analyze_network
from company_network.heuristics import calculate_risk_level, extract_ownership_percentage
from company_network.layout import (
    PRIMARY_LEVEL,
    apply_hierarchical_layout,
    center_position,
    officer_arc_position,
    psc_arc_position,
    related_circle_position,
)
from company_network.records import (
    CompanyBundle,
    CompanyRecord,
    OfficerRecord,
    PscRecord,
    coerce_bundle,
)
from company_network.schema import (
    CompanyNode,
    CompanyNodeData,
    EdgeStyle,
    GraphEdge,
    NetworkAnalysis,
    NetworkGraph,
    OfficerNodeData,
    PersonNode,
    Position,
    PscNodeData,
)
from company_network.validator import validate_network

logger = logging.getLogger(__name__)

PERSON_LEVEL: Final[int] = 2
RELATED_LEVEL: Final[int] = 3

# Related companies are only drawn when the requested depth reaches their level
RELATED_MIN_DEPTH: Final[int] = RELATED_LEVEL

RELATED_ENTITY_LABEL: Final[str] = "Related entity"

OFFICER_EDGE_STYLE: Final[EdgeStyle] = EdgeStyle(stroke="#8B5CF6", stroke_width=1.5)
OWNERSHIP_EDGE_STYLE: Final[EdgeStyle] = EdgeStyle(stroke="#10B981", stroke_width=2)
RELATED_EDGE_STYLE: Final[EdgeStyle] = EdgeStyle(
    stroke="#3B82F6", stroke_width=1, stroke_dasharray="5,5"
)

NetworkInput = CompanyBundle | Mapping[str, Any]


class BuildOptions(BaseModel):
    """Options controlling which records enter the graph.

    Accepts both snake_case and the dashboard's camelCase keys;
    ``max_hops``/``maxHops`` are accepted as aliases of max_depth.

    Attributes:
        max_depth: Hierarchy depth to draw. Callers keep it within 1 to 3;
            the build does not range-check it. Related companies appear
            from depth 3 upwards.
        include_officers: Add officer nodes.
        include_pscs: Add PSC nodes.
        include_inactive: Keep resigned officers and ceased PSCs.
        center_company: Run the hierarchical layout pass.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    max_depth: int = Field(
        default=3,
        validation_alias=AliasChoices("max_depth", "maxDepth", "max_hops", "maxHops"),
    )
    include_officers: bool = Field(
        default=True,
        validation_alias=AliasChoices("include_officers", "includeOfficers"),
    )
    include_pscs: bool = Field(
        default=True,
        validation_alias=AliasChoices("include_pscs", "includePSCs", "includePscs"),
    )
    include_inactive: bool = Field(
        default=False,
        validation_alias=AliasChoices("include_inactive", "includeInactive"),
    )
    center_company: bool = Field(
        default=True,
        validation_alias=AliasChoices("center_company", "centerCompany"),
    )


def coerce_options(options: BuildOptions | Mapping[str, Any] | None) -> BuildOptions:
    """Return options as BuildOptions, applying defaults for None."""
    if options is None:
        return BuildOptions()
    if isinstance(options, BuildOptions):
        return options
    return BuildOptions.model_validate(options)


class _IdSequence:
    """Sequential node_N / edge_N ids scoped to one build."""

    def __init__(self) -> None:
        self._nodes: Iterator[int] = count(1)
        self._edges: Iterator[int] = count(1)

    def node(self) -> str:
        return f"node_{next(self._nodes)}"

    def edge(self) -> str:
        return f"edge_{next(self._edges)}"


def build_network(
    primary: NetworkInput,
    related: Iterable[NetworkInput] = (),
    options: BuildOptions | Mapping[str, Any] | None = None,
    today: date | None = None,
) -> NetworkGraph:
    """Build a positioned network graph around a primary company.

    The primary company becomes node_1 at level 1, fixed at the canvas
    centre. Officers and PSCs become level-2 person nodes, related
    companies level-3 company nodes. Officer edges run company → officer,
    PSC edges run PSC → company, related edges run primary → related.

    Args:
        primary: The primary company bundle (profile, officers, PSCs).
        related: Bundles of known related companies. Only their profiles
            are drawn; the link carries no relationship semantics.
        options: BuildOptions or an equivalent mapping. Defaults apply
            when None.
        today: Reference date for company risk scoring. Defaults to
            date.today().

    Returns:
        A validated NetworkGraph whose first node is the primary company.

    Raises:
        InvalidRecordError: If a bundle is missing required fields.
        pydantic.ValidationError: If options fail validation.
    """
    primary_bundle = coerce_bundle(primary)
    related_bundles = [coerce_bundle(bundle) for bundle in related]
    opts = coerce_options(options)

    ids = _IdSequence()
    nodes: list[CompanyNode | PersonNode] = []
    edges: list[GraphEdge] = []

    # Level 1: primary company
    primary_id = ids.node()
    nodes.append(
        _create_company_node(
            primary_id, primary_bundle.profile, center_position(), PRIMARY_LEVEL, today
        )
    )

    # Level 2: officers and PSCs
    if opts.include_officers:
        _add_officers(nodes, edges, ids, primary_id, primary_bundle.officers, opts.include_inactive)

    if opts.include_pscs:
        _add_pscs(nodes, edges, ids, primary_id, primary_bundle.pscs, opts.include_inactive)

    # Level 3: related companies
    if opts.max_depth >= RELATED_MIN_DEPTH and related_bundles:
        _add_related_companies(nodes, edges, ids, primary_id, related_bundles, today)

    if opts.center_company:
        apply_hierarchical_layout(nodes)

    graph = NetworkGraph(nodes=nodes, edges=edges)
    graph.refresh_connection_counts()
    validate_network(graph)

    logger.debug(
        "Built network for %s: %d nodes, %d edges",
        primary_bundle.profile.company_number,
        len(graph.nodes),
        len(graph.edges),
    )
    return graph


def _create_company_node(
    node_id: str,
    company: CompanyRecord,
    position: Position,
    level: int,
    today: date | None,
) -> CompanyNode:
    return CompanyNode(
        id=node_id,
        position=position,
        data=CompanyNodeData(
            company_name=company.company_name,
            company_number=company.company_number,
            company_type=company.company_type,
            company_status=company.company_status,
            date_of_creation=company.date_of_creation,
            registered_office_address=company.registered_office_address,
            sic_codes=list(company.sic_codes),
            level=level,
            risk_level=calculate_risk_level(company, today),
        ),
    )


def _create_officer_node(node_id: str, officer: OfficerRecord, position: Position) -> PersonNode:
    return PersonNode(
        id=node_id,
        position=position,
        data=OfficerNodeData(
            name=officer.name,
            role=officer.officer_role,
            nationality=officer.nationality,
            country_of_residence=officer.country_of_residence,
            date_of_birth=officer.date_of_birth,
            appointed_on=officer.appointed_on,
            resigned_on=officer.resigned_on,
            level=PERSON_LEVEL,
        ),
    )


def _create_psc_node(
    node_id: str,
    psc: PscRecord,
    position: Position,
    ownership_percentage: int,
) -> PersonNode:
    return PersonNode(
        id=node_id,
        position=position,
        data=PscNodeData(
            name=psc.display_name,
            nationality=psc.nationality,
            country_of_residence=psc.country_of_residence,
            date_of_birth=psc.date_of_birth,
            ceased_on=psc.ceased_on,
            ownership_percentage=ownership_percentage,
            natures_of_control=list(psc.natures_of_control),
            level=PERSON_LEVEL,
        ),
    )


def _add_officers(
    nodes: list[CompanyNode | PersonNode],
    edges: list[GraphEdge],
    ids: _IdSequence,
    company_id: str,
    officers: list[OfficerRecord],
    include_inactive: bool,
) -> None:
    selected = officers if include_inactive else [o for o in officers if o.is_active]
    skipped = len(officers) - len(selected)
    if skipped:
        logger.debug("Skipping %d resigned officer(s)", skipped)

    for index, officer in enumerate(selected):
        officer_id = ids.node()
        nodes.append(
            _create_officer_node(officer_id, officer, officer_arc_position(index, len(selected)))
        )
        edges.append(
            GraphEdge(
                id=ids.edge(),
                source=company_id,
                target=officer_id,
                label=officer.officer_role,
                relationship="officer",
                style=OFFICER_EDGE_STYLE,
            )
        )


def _add_pscs(
    nodes: list[CompanyNode | PersonNode],
    edges: list[GraphEdge],
    ids: _IdSequence,
    company_id: str,
    pscs: list[PscRecord],
    include_inactive: bool,
) -> None:
    selected = pscs if include_inactive else [p for p in pscs if p.is_active]
    skipped = len(pscs) - len(selected)
    if skipped:
        logger.debug("Skipping %d ceased PSC(s)", skipped)

    for index, psc in enumerate(selected):
        psc_id = ids.node()
        percentage = extract_ownership_percentage(psc.natures_of_control)
        nodes.append(
            _create_psc_node(psc_id, psc, psc_arc_position(index, len(selected)), percentage)
        )
        edges.append(
            GraphEdge(
                id=ids.edge(),
                source=psc_id,
                target=company_id,
                label=f"{percentage}% control",
                relationship="ownership",
                style=OWNERSHIP_EDGE_STYLE,
            )
        )


def _add_related_companies(
    nodes: list[CompanyNode | PersonNode],
    edges: list[GraphEdge],
    ids: _IdSequence,
    primary_id: str,
    related: list[CompanyBundle],
    today: date | None,
) -> None:
    # TODO: derive parent/subsidiary direction once related records carry a relationship type
    for index, bundle in enumerate(related):
        related_id = ids.node()
        nodes.append(
            _create_company_node(
                related_id,
                bundle.profile,
                related_circle_position(index, len(related)),
                RELATED_LEVEL,
                today,
            )
        )
        edges.append(
            GraphEdge(
                id=ids.edge(),
                source=primary_id,
                target=related_id,
                label=RELATED_ENTITY_LABEL,
                relationship="related",
                style=RELATED_EDGE_STYLE,
            )
        )


class NetworkBuilder:
    """Stateful facade pairing build_network with analyze_network.

    Remembers the most recently built graph so analyze_network can be
    called without arguments. Not safe to share between threads: a later
    build overwrites last_graph. Prefer the module-level functions, which
    keep no state.
    """

    def __init__(self, options: BuildOptions | Mapping[str, Any] | None = None) -> None:
        self.options = coerce_options(options)
        self.last_graph: NetworkGraph | None = None

    def build_network(
        self,
        primary: NetworkInput,
        related: Iterable[NetworkInput] = (),
        options: BuildOptions | Mapping[str, Any] | None = None,
        today: date | None = None,
    ) -> NetworkGraph:
        """Build a graph (see build_network) and remember it as last_graph."""
        graph = build_network(
            primary,
            related,
            self.options if options is None else options,
            today=today,
        )
        self.last_graph = graph
        return graph

    def analyze_network(self, graph: NetworkGraph | None = None) -> NetworkAnalysis:
        """Analyse graph, or the last built graph when graph is None.

        Returns an empty NetworkAnalysis when nothing has been built yet.
        """
        target = graph if graph is not None else self.last_graph
        if target is None:
            logger.warning("analyze_network called before any network was built")
            return NetworkAnalysis()
        return analyze_network(target)
