"""Main orchestration module for the company network pipeline.

This module coordinates the end-to-end workflow:
1. Load company bundles from JSON
2. Build the positioned network graph
3. Validate graph integrity and analyse the network
4. Save graph and analysis to JSON
5. Render graph visualizations
"""

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from company_network.analysis import analyze_network
from company_network.builder import build_network
from company_network.config import load_config
from company_network.input_loader import load_bundles
from company_network.records import InvalidRecordError
from company_network.sample import create_sample_network
from company_network.schema import NetworkAnalysis, NetworkGraph
from company_network.validator import validate_network

# Try to import visualizer - matplotlib may be unavailable on headless installs
try:
    from company_network.visualizer import render_graph
    VISUALIZER_AVAILABLE = True
except ImportError:
    VISUALIZER_AVAILABLE = False
    render_graph = None  # type: ignore

from company_network.visualizer_mermaid import render_mermaid, render_mermaid_html


def save_network_json(
    graph: NetworkGraph,
    analysis: NetworkAnalysis,
    metadata: dict[str, object],
    output_path: Path,
) -> None:
    """Save a graph, its analysis and run metadata to a JSON file.

    Args:
        graph: The NetworkGraph to save.
        analysis: The NetworkAnalysis of the graph.
        metadata: Run details (company number, options, timestamp, counts).
        output_path: Path where the JSON file will be written.

    Raises:
        OSError: If the file cannot be written.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "graph": graph.model_dump(mode="json", by_alias=True),
        "analysis": analysis.model_dump(mode="json", by_alias=True),
        "metadata": metadata,
    }
    output_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a company network graph.")
    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        help="Company bundle JSON (default: NETWORK_INPUT_PATH)",
    )
    parser.add_argument(
        "--sample",
        action="store_true",
        help="Render the built-in sample network instead of reading input",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the company network pipeline.

    Orchestrates the full workflow: load bundles, build the graph,
    validate and analyse it, save JSON, and render visualizations.

    Args:
        argv: Command-line arguments. Defaults to sys.argv[1:].

    Returns:
        Exit code: 0 on success, 1 on failure.
    """
    args = _parse_args(argv)

    try:
        config = load_config()
        logging.basicConfig(
            level=config.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        options = config.build_options()

        if args.sample:
            print("[1/5] Using built-in sample network...")
            graph = create_sample_network()
            company_number = graph.nodes[0].data.company_number
            print("[2/5] Sample network ready")
        else:
            input_path = args.input or config.input_path
            print(f"[1/5] Loading company bundles from {input_path}...")
            primary, related = load_bundles(input_path)
            company_number = primary.profile.company_number
            print(f"      Loaded {company_number} with {len(related)} related companies")

            print("[2/5] Building network graph...")
            graph = build_network(primary, related, options)
        print(f"      Built {len(graph.nodes)} nodes, {len(graph.edges)} edges")

        print("[3/5] Validating and analysing network...")
        validate_network(graph)
        analysis = analyze_network(graph)
        print(
            f"      Density {analysis.network_density:.3f}, "
            f"{len(analysis.risk_factors)} risk factor(s)"
        )
        for factor in analysis.risk_factors:
            print(f"      ⚠️  [{factor.severity}] {factor.description}")

        output_path = config.output_dir / f"network_{company_number}.json"
        print(f"[4/5] Saving network to {output_path}...")
        metadata = {
            "companyNumber": company_number,
            "options": options.model_dump(),
            "generatedAt": datetime.now(timezone.utc).isoformat(),
            "nodeCount": len(graph.nodes),
            "edgeCount": len(graph.edges),
        }
        save_network_json(graph, analysis, metadata, output_path)
        print("      Network saved successfully")

        print("[5/5] Rendering visualizations...")
        if VISUALIZER_AVAILABLE:
            png_path = config.visuals_dir / "graph.png"
            render_graph(graph, png_path)
            print(f"      PNG saved to {png_path}")
        else:
            print("      PNG skipped: matplotlib is not installed")

        mermaid_path = config.visuals_dir / "graph.mmd"
        render_mermaid(graph, mermaid_path)
        print(f"      Mermaid saved to {mermaid_path}")

        html_path = config.visuals_dir / "graph.html"
        render_mermaid_html(graph, html_path)
        print(f"      HTML saved to {html_path}")

        print("\n✓ Pipeline completed successfully")
        return 0

    except FileNotFoundError as e:
        print(f"\n✗ File not found: {e}", file=sys.stderr)
        return 1

    except InvalidRecordError as e:
        print(f"\n✗ Invalid company record: {e}", file=sys.stderr)
        return 1

    except ValueError as e:
        print(f"\n✗ Validation error: {e}", file=sys.stderr)
        return 1

    except Exception as e:
        print(f"\n✗ Unexpected error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
