"""Sample airline holding-company network for UI development and tests.

Not part of the production data path. Node ids are readable slugs rather
than node_N sequences, and levels follow the sample's own hierarchy.
"""

from company_network.builder import OFFICER_EDGE_STYLE, OWNERSHIP_EDGE_STYLE
from company_network.schema import (
    CompanyNode,
    CompanyNodeData,
    EdgeStyle,
    GraphEdge,
    NetworkGraph,
    OfficerNodeData,
    PersonNode,
    Position,
    PscNodeData,
)

GROUP_EDGE_STYLE = EdgeStyle(stroke="#3B82F6", stroke_width=2)


def create_sample_network(center_company_number: str = "07765187") -> NetworkGraph:
    """Create a fixed British Airways-style demo network.

    Args:
        center_company_number: Id and company number of the centre company.

    Returns:
        A NetworkGraph with three companies, two officers, one PSC and
        five edges.
    """
    nodes = [
        # Level 1: main company
        CompanyNode(
            id=center_company_number,
            position=Position(x=500, y=300),
            data=CompanyNodeData(
                company_name="British Airways Plc",
                company_number=center_company_number,
                company_type="plc",
                company_status="active",
                level=1,
                connection_count=2,
            ),
        ),
        # Level 2: holdings
        CompanyNode(
            id="ba-holdings",
            position=Position(x=200, y=500),
            data=CompanyNodeData(
                company_name="BA Holdings Ltd",
                company_number="02345815",
                company_type="ltd",
                company_status="active",
                level=2,
                connection_count=3,
            ),
        ),
        CompanyNode(
            id="iag-group",
            position=Position(x=800, y=500),
            data=CompanyNodeData(
                company_name="International Consolidated Airlines Group",
                company_number="06648088",
                company_type="plc",
                company_status="active",
                level=2,
                connection_count=2,
            ),
        ),
        # Level 3: directors and PSCs
        PersonNode(
            id="luis-gallego",
            position=Position(x=100, y=700),
            data=OfficerNodeData(
                name="Luis Gallego Martin",
                role="CEO & Director",
                nationality="Spanish",
                level=3,
            ),
        ),
        PersonNode(
            id="stephen-gunning",
            position=Position(x=300, y=700),
            data=OfficerNodeData(
                name="Stephen Gunning",
                role="CFO & Director",
                nationality="British",
                level=3,
            ),
        ),
        PersonNode(
            id="antonio-vazquez",
            position=Position(x=900, y=700),
            data=PscNodeData(
                name="Antonio Vazquez",
                role="Chairman",
                nationality="Spanish",
                ownership_percentage=75,
                level=3,
            ),
        ),
    ]

    edges = [
        GraphEdge(
            id="ba-to-holdings",
            source=center_company_number,
            target="ba-holdings",
            label="100% owned by",
            relationship="ownership",
            style=GROUP_EDGE_STYLE,
        ),
        GraphEdge(
            id="ba-to-iag",
            source="iag-group",
            target=center_company_number,
            label="Parent company",
            relationship="ownership",
            style=GROUP_EDGE_STYLE,
        ),
        GraphEdge(
            id="holdings-to-luis",
            source="ba-holdings",
            target="luis-gallego",
            label="Director of",
            relationship="officer",
            style=OFFICER_EDGE_STYLE,
        ),
        GraphEdge(
            id="holdings-to-stephen",
            source="ba-holdings",
            target="stephen-gunning",
            label="Director of",
            relationship="officer",
            style=OFFICER_EDGE_STYLE,
        ),
        GraphEdge(
            id="iag-to-antonio",
            source="iag-group",
            target="antonio-vazquez",
            label="PSC of",
            relationship="ownership",
            style=OWNERSHIP_EDGE_STYLE,
        ),
    ]

    return NetworkGraph(nodes=nodes, edges=edges)
