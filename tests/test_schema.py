"""Unit tests for the schema module.

Tests Pydantic schema validation:
- Tagged unions for node kind and person type
- Extra field rejection (extra="forbid")
- Alias serialisation for the rendering layer
- Connection count refresh
"""

from typing import Any

import pytest
from pydantic import ValidationError

from company_network.builder import build_network
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

from conftest import TODAY


def _company_payload() -> dict:
    return {
        "id": "node_1",
        "type": "company",
        "position": {"x": 500, "y": 300},
        "data": {"company_name": "Acme Ltd", "company_number": "01234567", "level": 1},
    }


def _person_payload(data: dict) -> dict:
    return {"id": "node_2", "type": "person", "position": {"x": 0, "y": 0}, "data": data}


class TestGraphNodes:
    """Tests for the node models and their unions."""

    def test_node_kind_discriminates(self) -> None:
        graph = NetworkGraph.model_validate(
            {
                "nodes": [
                    _company_payload(),
                    _person_payload({"person_type": "psc", "name": "Owner", "ownership_percentage": 75, "level": 2}),
                ],
                "edges": [],
            }
        )

        assert isinstance(graph.nodes[0], CompanyNode)
        assert isinstance(graph.nodes[1], PersonNode)
        assert isinstance(graph.nodes[1].data, PscNodeData)

    def test_officer_payload(self) -> None:
        node = PersonNode.model_validate(
            _person_payload({"person_type": "officer", "name": "Jane", "role": "director", "level": 2})
        )

        assert isinstance(node.data, OfficerNodeData)
        assert node.display_name == "Jane"

    def test_psc_default_role(self) -> None:
        data = PscNodeData(name="Owner", ownership_percentage=50, level=2)

        assert data.role == "Person with Significant Control"

    def test_unknown_person_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PersonNode.model_validate(_person_payload({"person_type": "auditor", "name": "X", "level": 2}))

    def test_officer_fields_rejected_on_psc(self) -> None:
        """PSC payloads cannot carry officer-only fields."""
        with pytest.raises(ValidationError):
            PersonNode.model_validate(
                _person_payload(
                    {
                        "person_type": "psc",
                        "name": "X",
                        "ownership_percentage": 25,
                        "appointed_on": "2020-01-01",
                        "level": 2,
                    }
                )
            )

    def test_invalid_risk_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CompanyNodeData(company_name="A", company_number="1", level=1, risk_level="extreme")  # type: ignore[arg-type]

    def test_extra_fields_forbidden(self) -> None:
        payload = _company_payload()
        payload["color"] = "red"

        with pytest.raises(ValidationError):
            CompanyNode.model_validate(payload)

    def test_company_display_name(self) -> None:
        node = CompanyNode.model_validate(_company_payload())

        assert node.display_name == "Acme Ltd"
        assert node.level == 1


class TestGraphEdge:
    """Tests for GraphEdge and EdgeStyle."""

    def test_defaults(self) -> None:
        edge = GraphEdge(
            id="edge_1",
            source="node_1",
            target="node_2",
            label="Related entity",
            relationship="related",
            style=EdgeStyle(stroke="#3B82F6", stroke_width=1, stroke_dasharray="5,5"),
        )

        assert edge.type == "smoothstep"
        assert edge.marker_end.type == "arrowclosed"

    def test_accepts_camel_case_style(self) -> None:
        style = EdgeStyle.model_validate({"stroke": "#10B981", "strokeWidth": 2})

        assert style.stroke_width == 2
        assert style.stroke_dasharray is None

    def test_invalid_relationship_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GraphEdge(
                id="edge_1",
                source="a",
                target="b",
                label="x",
                relationship="friendship",  # type: ignore[arg-type]
                style=EdgeStyle(stroke="#000", stroke_width=1),
            )

    def test_alias_dump(self) -> None:
        style = EdgeStyle(stroke="#3B82F6", stroke_width=1, stroke_dasharray="5,5")

        assert style.model_dump(by_alias=True) == {
            "stroke": "#3B82F6",
            "strokeWidth": 1,
            "strokeDasharray": "5,5",
        }


class TestNetworkGraph:
    """Tests for NetworkGraph helpers."""

    def test_refresh_connection_counts(self) -> None:
        graph = NetworkGraph.model_validate(
            {
                "nodes": [
                    _company_payload(),
                    _person_payload({"person_type": "officer", "name": "Jane", "role": "director", "level": 2}),
                ],
                "edges": [
                    {
                        "id": "edge_1",
                        "source": "node_1",
                        "target": "node_2",
                        "label": "director",
                        "relationship": "officer",
                        "style": {"stroke": "#8B5CF6", "strokeWidth": 1.5},
                    }
                ],
            }
        )

        graph.refresh_connection_counts()

        assert graph.nodes[0].data.connection_count == 1

    def test_node_by_id(self) -> None:
        graph = NetworkGraph(
            nodes=[
                CompanyNode(
                    id="node_1",
                    position=Position(x=1, y=2),
                    data=CompanyNodeData(company_name="A", company_number="1", level=1),
                )
            ],
            edges=[],
        )

        assert list(graph.node_by_id()) == ["node_1"]

    def test_alias_dump_validates_back(self, primary_bundle: dict[str, Any]) -> None:
        """The camelCase output written for the rendering layer loads back into the model."""
        graph = build_network(primary_bundle, today=TODAY)
        dumped = graph.model_dump(mode="json", by_alias=True)

        restored = NetworkGraph.model_validate(dumped)

        assert restored.model_dump(mode="json", by_alias=True) == dumped
        assert isinstance(restored.nodes[1].data, OfficerNodeData)
        assert isinstance(restored.nodes[3].data, PscNodeData)

    def test_camel_case_person_type_accepted(self) -> None:
        node = PersonNode.model_validate(
            _person_payload({"personType": "officer", "name": "Jane", "role": "director", "level": 2})
        )

        assert isinstance(node.data, OfficerNodeData)
