"""Mermaid diagram generation module.

This module provides functionality to render a NetworkGraph
as a Mermaid flowchart diagram for lightweight visualization.
"""

import html
from pathlib import Path

from company_network.schema import CompanyNode, GraphEdge, NetworkGraph, PersonNode

# Default output paths for the Mermaid diagram and its HTML page
OUTPUT_PATH: Path = Path("visuals/graph.mmd")
HTML_OUTPUT_PATH: Path = Path("visuals/graph.html")

# Mermaid class definitions, one per node colouring
CLASS_DEFS: dict[str, str] = {
    "risk_low": "fill:#dcfce7,stroke:#22c55e",
    "risk_medium": "fill:#fef3c7,stroke:#f59e0b",
    "risk_high": "fill:#ffedd5,stroke:#f97316",
    "risk_critical": "fill:#fee2e2,stroke:#ef4444,stroke-width:2px",
    "officer": "fill:#dbeafe,stroke:#3b82f6",
    "psc": "fill:#ede9fe,stroke:#8b5cf6",
}


def _escape_mermaid_label(text: str) -> str:
    """Escape special characters in text for Mermaid compatibility.

    Args:
        text: Raw text that may contain special characters.

    Returns:
        Escaped text safe for use in Mermaid labels.
    """
    # Replace characters that break Mermaid syntax
    text = text.replace('"', "'")
    text = text.replace('`', "'")
    text = text.replace('#', "")
    text = text.replace('&', "and")
    text = text.replace('<', "")
    text = text.replace('>', "")
    text = text.replace('[', "(")
    text = text.replace(']', ")")
    text = text.replace('{', "(")
    text = text.replace('}', ")")
    text = text.replace('|', "-")
    # Truncate very long labels
    if len(text) > 60:
        text = text[:57] + "..."
    return text


def _mermaid_id(node_id: str) -> str:
    """Make a node id safe for Mermaid (sample ids contain hyphens)."""
    return "n_" + "".join(ch if ch.isalnum() else "_" for ch in node_id)


def _assign_mermaid_ids(graph: NetworkGraph) -> dict[str, str]:
    """Map node ids to unique Mermaid ids.

    Sanitising can map distinct ids (a-b, a_b) to the same Mermaid id;
    later collisions get a numeric suffix.
    """
    assigned: dict[str, str] = {}
    used: set[str] = set()

    for node in graph.nodes:
        base = _mermaid_id(node.id)
        candidate = base
        suffix = 2
        while candidate in used:
            candidate = f"{base}_{suffix}"
            suffix += 1
        used.add(candidate)
        assigned[node.id] = candidate

    return assigned


def _get_node_shape(node: CompanyNode | PersonNode, node_id: str) -> str:
    """Get the Mermaid shape syntax for a node based on its kind.

    Args:
        node: The node to get shape syntax for.
        node_id: The Mermaid id assigned to the node.

    Returns:
        A string with the node ID and label in appropriate Mermaid shape syntax.
        - Company: rectangle ["name (number)"]
        - Person: rounded ("name (role)")
    """
    if isinstance(node, CompanyNode):
        label = _escape_mermaid_label(f"{node.data.company_name} ({node.data.company_number})")
        return f'{node_id}["{label}"]'

    label = _escape_mermaid_label(f"{node.data.name} ({node.data.role})")
    return f'{node_id}("{label}")'


def _get_node_class(node: CompanyNode | PersonNode) -> str:
    if isinstance(node, CompanyNode):
        return f"risk_{node.data.risk_level}"
    return node.data.person_type


def _get_edge_line(edge: GraphEdge, mermaid_ids: dict[str, str]) -> str:
    """Get the Mermaid syntax for an edge; dashed styles become dotted links."""
    arrow = "-.->" if edge.style.stroke_dasharray else "-->"
    label = _escape_mermaid_label(edge.label)
    source = mermaid_ids.get(edge.source, _mermaid_id(edge.source))
    target = mermaid_ids.get(edge.target, _mermaid_id(edge.target))
    return f"{source} {arrow}|{label}| {target}"


def _generate_mermaid_content(graph: NetworkGraph) -> str:
    """Generate Mermaid diagram content from a NetworkGraph.

    Args:
        graph: A validated NetworkGraph instance.

    Returns:
        Mermaid diagram content as a string.
    """
    mermaid_ids = _assign_mermaid_ids(graph)
    lines: list[str] = []

    # Mermaid flowchart header
    lines.append("flowchart TD")
    lines.append("")

    # Add node definitions
    lines.append("    %% Node definitions")
    for node in graph.nodes:
        lines.append(f"    {_get_node_shape(node, mermaid_ids[node.id])}")

    lines.append("")

    # Add edges
    lines.append("    %% Relationships")
    for edge in graph.edges:
        lines.append(f"    {_get_edge_line(edge, mermaid_ids)}")

    lines.append("")

    # Colour nodes by risk level / person type
    lines.append("    %% Styles")
    for class_name, style in CLASS_DEFS.items():
        lines.append(f"    classDef {class_name} {style}")
    for node in graph.nodes:
        lines.append(f"    class {mermaid_ids[node.id]} {_get_node_class(node)}")

    return "\n".join(lines)


def render_mermaid(graph: NetworkGraph, output_path: Path = OUTPUT_PATH) -> None:
    """Render a NetworkGraph as a Mermaid flowchart diagram.

    Generates a Mermaid flowchart TD (top-down) diagram from the
    NetworkGraph and saves it to a .mmd file.

    Node shapes:
    - Company: rectangle
    - Person: rounded

    Args:
        graph: A validated NetworkGraph instance to visualize.
        output_path: Path where the Mermaid file will be saved.
            Defaults to visuals/graph.mmd.

    Returns:
        None. The Mermaid diagram is saved to the specified output path.

    Raises:
        OSError: If the output directory cannot be created or file cannot be written.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(_generate_mermaid_content(graph) + "\n", encoding="utf-8")


def render_mermaid_html(graph: NetworkGraph, output_path: Path = HTML_OUTPUT_PATH) -> None:
    """Render a NetworkGraph as an HTML page with an embedded Mermaid diagram.

    Args:
        graph: A validated NetworkGraph instance to visualize.
        output_path: Path where the HTML file will be saved.

    Returns:
        None. The HTML file is saved to the specified output path.

    Raises:
        OSError: If the output directory cannot be created or file cannot be written.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)

    mermaid_content = _generate_mermaid_content(graph)
    title = "Company Network"
    primary = graph.nodes[0] if graph.nodes else None
    if primary is not None:
        title = f"Company Network - {primary.display_name}"

    node_count = len(graph.nodes)
    edge_count = len(graph.edges)

    html_template = f'''<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{html.escape(title)} ({node_count} nodes)</title>
    <style>
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background: #f5f5f5;
            color: #333;
            margin: 0;
        }}
        header {{
            background: linear-gradient(135deg, #1a1a2e 0%, #16213e 100%);
            color: white;
            padding: 1rem 2rem;
        }}
        header p {{
            opacity: 0.8;
            font-size: 0.9rem;
        }}
        main {{
            padding: 2rem;
            overflow: auto;
        }}
        .mermaid {{
            background: white;
            border-radius: 8px;
            padding: 1rem;
        }}
    </style>
</head>
<body>
    <header>
        <h1>{html.escape(title)}</h1>
        <p>{node_count} nodes, {edge_count} edges</p>
    </header>
    <main>
        <pre class="mermaid">
{html.escape(mermaid_content)}
        </pre>
    </main>
    <script type="module">
        import mermaid from 'https://cdn.jsdelivr.net/npm/mermaid@10/dist/mermaid.esm.min.mjs';
        mermaid.initialize({{ startOnLoad: true, flowchart: {{ useMaxWidth: false }} }});
    </script>
</body>
</html>
'''

    output_path.write_text(html_template, encoding="utf-8")
