"""Company bundle loading module.

This module loads already-fetched Companies House records from a JSON file
on disk. No fetching or enrichment is performed.
"""

import json
from pathlib import Path

from company_network.records import CompanyBundle, coerce_bundle

# Default path to the company bundle file
BUNDLE_PATH: Path = Path("data/company_bundle.json")


def load_bundles(file_path: Path = BUNDLE_PATH) -> tuple[CompanyBundle, list[CompanyBundle]]:
    """Load a primary company bundle and its related bundles from a file.

    The file holds either a single bundle::

        {"profile": {...}, "officers": [...], "pscs": [...]}

    or a primary bundle with related bundles::

        {"primary": {...}, "related": [{...}, ...]}

    Args:
        file_path: Path to the JSON file. Defaults to data/company_bundle.json.

    Returns:
        A (primary, related) tuple of validated bundles.

    Raises:
        FileNotFoundError: If the specified file does not exist.
        ValueError: If the file is not valid JSON or not a JSON object.
        InvalidRecordError: If a bundle fails validation.
    """
    payload = json.loads(file_path.read_text(encoding="utf-8"))

    if not isinstance(payload, dict):
        raise ValueError(f"Expected a JSON object in {file_path}, got {type(payload).__name__}")

    if "primary" not in payload:
        return coerce_bundle(payload), []

    related = payload.get("related") or []
    if not isinstance(related, list):
        raise ValueError(f"'related' must be a list in {file_path}")

    return coerce_bundle(payload["primary"]), [coerce_bundle(bundle) for bundle in related]
