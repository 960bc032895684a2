from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from .errors import ConfigError

DEFAULT_LOCATION = "us-central1"
DEFAULT_MAX_BYTES_BILLED = "1000000000"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class ServerConfig:
    """Fixed per-process configuration. Built once at startup, never mutated."""

    project_id: str
    location: str = DEFAULT_LOCATION
    enumerate_resources: bool = False
    default_max_bytes_billed: str = DEFAULT_MAX_BYTES_BILLED
    log_level: str = "INFO"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcp-bigquery-server",
        description="Read-only BigQuery server for the Model Context Protocol.",
    )
    parser.add_argument("--project-id", required=True, help="BigQuery project id")
    parser.add_argument(
        "--location",
        default=DEFAULT_LOCATION,
        help=f"BigQuery location (default: {DEFAULT_LOCATION})",
    )
    parser.add_argument(
        "--enumerate-resources",
        action="store_true",
        help="List every table and view on resources/list instead of a fixed acknowledgement",
    )
    parser.add_argument("--log-level", default="INFO", choices=LOG_LEVELS)
    return parser


def validate_config(config: ServerConfig) -> ServerConfig:
    if not config.project_id.strip():
        raise ConfigError("--project-id must not be empty")
    if not config.location.strip():
        raise ConfigError("--location must not be empty")
    return config


def parse_args(argv: Optional[Sequence[str]] = None) -> ServerConfig:
    """Parse CLI arguments. argparse exits with status 2 and a usage message on bad input."""
    args = build_parser().parse_args(argv)
    return validate_config(
        ServerConfig(
            project_id=args.project_id,
            location=args.location,
            enumerate_resources=args.enumerate_resources,
            log_level=args.log_level,
        )
    )


def load_environment(env_file: Optional[Path] = None) -> None:
    # Lets GOOGLE_APPLICATION_CREDENTIALS and friends live in a local .env
    load_dotenv(env_file or Path.cwd() / ".env")
