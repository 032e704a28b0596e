"""Configuration module for the company network pipeline.

This module provides configuration management using Pydantic models.
All configuration values are read from environment variables.
Supports loading from .env file via python-dotenv.
"""

import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from company_network.builder import BuildOptions

# Load environment variables from .env file (if present)
load_dotenv()

_TRUE_VALUES = ("true", "1", "yes")


class Config(BaseModel):
    """Application configuration loaded from environment variables.

    Attributes:
        max_depth: Default hierarchy depth for builds (1 to 3).
        include_officers: Add officer nodes by default.
        include_pscs: Add PSC nodes by default.
        include_inactive: Keep resigned officers and ceased PSCs by default.
        center_company: Run the hierarchical layout pass by default.
        input_path: JSON file with the company bundle(s) to graph.
        output_dir: Directory for the graph/analysis JSON output.
        visuals_dir: Directory for rendered diagrams.
        log_level: Logging level name for the pipeline.
    """

    model_config = ConfigDict(extra="forbid")

    max_depth: int = Field(
        default=3,
        description="Hierarchy depth to draw; related companies need depth 3",
        ge=1,
        le=3,
    )
    include_officers: bool = Field(
        default=True,
        description="Include officer nodes",
    )
    include_pscs: bool = Field(
        default=True,
        description="Include PSC nodes",
    )
    include_inactive: bool = Field(
        default=False,
        description="Include resigned officers and ceased PSCs",
    )
    center_company: bool = Field(
        default=True,
        description="Apply the hierarchical layout pass",
    )
    input_path: Path = Field(
        default=Path("data/company_bundle.json"),
        description="Company bundle JSON input",
    )
    output_dir: Path = Field(
        default=Path("data"),
        description="Directory for graph JSON output",
    )
    visuals_dir: Path = Field(
        default=Path("visuals"),
        description="Directory for rendered diagrams",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )

    def build_options(self) -> BuildOptions:
        """Return the configured defaults as BuildOptions."""
        return BuildOptions(
            max_depth=self.max_depth,
            include_officers=self.include_officers,
            include_pscs=self.include_pscs,
            include_inactive=self.include_inactive,
            center_company=self.center_company,
        )


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in _TRUE_VALUES


def load_config() -> Config:
    """Load configuration from environment variables.

    Reads the following environment variables:
    - NETWORK_MAX_DEPTH: Hierarchy depth, 1 to 3 (default: 3)
    - NETWORK_INCLUDE_OFFICERS: Include officers (default: "true")
    - NETWORK_INCLUDE_PSCS: Include PSCs (default: "true")
    - NETWORK_INCLUDE_INACTIVE: Include resigned/ceased people (default: "false")
    - NETWORK_CENTER_COMPANY: Apply hierarchical layout (default: "true")
    - NETWORK_INPUT_PATH: Bundle JSON path (default: "data/company_bundle.json")
    - NETWORK_OUTPUT_DIR: Output directory (default: "data")
    - VISUALS_DIR: Diagram directory (default: "visuals")
    - LOG_LEVEL: Logging level (default: "INFO")

    Returns:
        A validated Config instance.

    Raises:
        pydantic.ValidationError: If environment values fail validation.
        ValueError: If NETWORK_MAX_DEPTH is not an integer.
    """
    return Config(
        max_depth=int(os.environ.get("NETWORK_MAX_DEPTH", "3")),
        include_officers=_env_flag("NETWORK_INCLUDE_OFFICERS", "true"),
        include_pscs=_env_flag("NETWORK_INCLUDE_PSCS", "true"),
        include_inactive=_env_flag("NETWORK_INCLUDE_INACTIVE", "false"),
        center_company=_env_flag("NETWORK_CENTER_COMPANY", "true"),
        input_path=Path(os.environ.get("NETWORK_INPUT_PATH", "data/company_bundle.json")),
        output_dir=Path(os.environ.get("NETWORK_OUTPUT_DIR", "data")),
        visuals_dir=Path(os.environ.get("VISUALS_DIR", "visuals")),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),  # type: ignore[arg-type]
    )
