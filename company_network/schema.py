"""Network graph schema definitions using Pydantic v2.

This module defines the positioned node/edge graph handed to the rendering
layer, and the NetworkAnalysis summary computed over it.

Node and edge payloads are tagged unions: nodes discriminate on ``type``
("company" or "person") and person payloads on ``person_type``
("officer" or "psc"). Field names are snake_case; models serialise with
the camelCase aliases a React Flow client expects (``riskLevel``,
``personType``, ``markerEnd``, ...) when dumped with ``by_alias=True``.
"""

from datetime import date
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from company_network.records import Address, PartialDate

RiskLevel = Literal["low", "medium", "high", "critical"]
Severity = Literal["low", "medium", "high"]
RelationshipKind = Literal["officer", "ownership", "related"]
RiskFactorType = Literal["circular_ownership", "complex_structure", "critical_risk_entity"]

PSC_ROLE = "Person with Significant Control"


class Position(BaseModel):
    """2-D layout coordinate in canvas pixels."""

    model_config = ConfigDict(extra="forbid")

    x: float
    y: float


class CompanyNodeData(BaseModel):
    """Payload of a company node.

    Attributes:
        level: Hierarchy depth. The primary company is level 1.
        risk_level: Heuristic risk band, see company_network.heuristics.
        connection_count: Number of edges touching the node.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    company_name: str
    company_number: str
    company_type: str | None = None
    company_status: str | None = None
    date_of_creation: date | None = None
    registered_office_address: Address | None = None
    sic_codes: list[str] = Field(default_factory=list)
    level: int
    risk_level: RiskLevel = Field(default="low", alias="riskLevel")
    connection_count: int = Field(default=0, alias="connectionCount")


class OfficerNodeData(BaseModel):
    """Payload of an officer person node."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    person_type: Literal["officer"] = Field(default="officer", alias="personType")
    name: str
    role: str
    nationality: str | None = None
    country_of_residence: str | None = None
    date_of_birth: PartialDate | None = None
    appointed_on: date | None = None
    resigned_on: date | None = None
    level: int


class PscNodeData(BaseModel):
    """Payload of a PSC person node.

    ownership_percentage is a best-effort parse of natures_of_control,
    not authoritative data.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    person_type: Literal["psc"] = Field(default="psc", alias="personType")
    name: str
    role: str = PSC_ROLE
    nationality: str | None = None
    country_of_residence: str | None = None
    date_of_birth: PartialDate | None = None
    ceased_on: date | None = None
    ownership_percentage: int
    natures_of_control: list[str] = Field(default_factory=list)
    level: int


PersonNodeData = Annotated[
    OfficerNodeData | PscNodeData,
    Field(discriminator="person_type"),
]


class CompanyNode(BaseModel):
    """A company in the network graph."""

    model_config = ConfigDict(extra="forbid")

    id: str
    type: Literal["company"] = "company"
    position: Position
    data: CompanyNodeData

    @property
    def display_name(self) -> str:
        return self.data.company_name

    @property
    def level(self) -> int:
        return self.data.level


class PersonNode(BaseModel):
    """An officer or PSC in the network graph."""

    model_config = ConfigDict(extra="forbid")

    id: str
    type: Literal["person"] = "person"
    position: Position
    data: PersonNodeData

    @property
    def display_name(self) -> str:
        return self.data.name

    @property
    def level(self) -> int:
        return self.data.level


GraphNode = Annotated[CompanyNode | PersonNode, Field(discriminator="type")]


class EdgeStyle(BaseModel):
    """Line style hint encoding the relationship category."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    stroke: str
    stroke_width: float = Field(alias="strokeWidth")
    stroke_dasharray: str | None = Field(default=None, alias="strokeDasharray")


class EdgeMarker(BaseModel):
    """Directional arrow marker drawn at the edge target."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["arrowclosed"] = "arrowclosed"


class GraphEdge(BaseModel):
    """A directed, labelled edge between two nodes of the same graph.

    Attributes:
        relationship: Category of the link: officer appointment,
            PSC ownership/control, or an untyped related-company link.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: str
    source: str
    target: str
    type: str = "smoothstep"
    label: str
    relationship: RelationshipKind
    marker_end: EdgeMarker = Field(default_factory=EdgeMarker, alias="markerEnd")
    style: EdgeStyle


class NetworkGraph(BaseModel):
    """Root container for a positioned network graph."""

    model_config = ConfigDict(extra="forbid")

    nodes: list[GraphNode]
    edges: list[GraphEdge]

    def node_by_id(self) -> dict[str, CompanyNode | PersonNode]:
        return {node.id: node for node in self.nodes}

    def refresh_connection_counts(self) -> None:
        """Set connection_count on every company node to its degree."""
        degrees: dict[str, int] = {}
        for edge in self.edges:
            degrees[edge.source] = degrees.get(edge.source, 0) + 1
            degrees[edge.target] = degrees.get(edge.target, 0) + 1

        for node in self.nodes:
            if isinstance(node, CompanyNode):
                node.data.connection_count = degrees.get(node.id, 0)


class CentralNode(BaseModel):
    """A node ranked by degree."""

    model_config = ConfigDict(extra="forbid")

    id: str
    name: str
    connections: int
    centrality: float


class RiskFactor(BaseModel):
    """A structural or entity risk flagged by the analysis heuristics."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    type: RiskFactorType
    severity: Severity
    description: str
    affected_nodes: list[str] = Field(default_factory=list, alias="affectedNodes")


class NetworkAnalysis(BaseModel):
    """Summary analytics over one network graph. Not persisted."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    total_nodes: int = Field(default=0, alias="totalNodes")
    total_edges: int = Field(default=0, alias="totalEdges")
    network_density: float = Field(default=0.0, alias="networkDensity")
    central_nodes: list[CentralNode] = Field(default_factory=list, alias="centralNodes")
    risk_factors: list[RiskFactor] = Field(default_factory=list, alias="riskFactors")
