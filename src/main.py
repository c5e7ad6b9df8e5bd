"""Command-line entry point for the release catalog."""

import argparse
import json
import logging
import sys
from typing import Any

from src.config import (
    ENV_LOG_LEVEL,
    ENV_RELEASES_CONFIG,
    ENV_RELEASES_URI,
    get_env_var,
    setup_logging,
)
from src.config_manager import ConfigManager
from src.errors import CatalogError
from src.release_catalog import ReleaseCatalog

logger = logging.getLogger(__name__)

ALL_BITS_ARG = "all"


def summarize(catalog: ReleaseCatalog, bits=0) -> dict[str, Any]:
    """Summarize a catalog: version lists, architectures and the latest release."""
    latest = catalog.latest(bits)
    return {
        "releases": len(catalog),
        "major_versions": catalog.version_numbers_major(bits),
        "architectures": catalog.architecture_names(bits),
        "editions": list(catalog.editions),
        "latest": {
            "version": latest.version,
            "archname": latest.archname,
            "bits": latest.sortable.bits,
            "links": [
                {
                    "name": link.display_name,
                    "label": link.short_name,
                    "url": link.url,
                    "sha256": link.hash,
                    "size": link.readable_size,
                }
                for link in latest.links
            ],
        },
    }


def parse_bits_arg(value: str):
    """Turn "32" and "64" into integers; any other value is passed through."""
    value = value.strip().lower()
    if value in ("32", "64"):
        return int(value)
    return value


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="strawberry-releases",
        description="Show the releases available in a releases.json file.",
    )
    parser.add_argument("--uri", help="URL or path of the releases file")
    parser.add_argument(
        "--bits",
        default=ALL_BITS_ARG,
        type=parse_bits_arg,
        choices=[32, 64, ALL_BITS_ARG],
        help="Restrict queries to one bit-width (32, 64 or all)",
    )
    parser.add_argument(
        "--config",
        default=get_env_var(ENV_RELEASES_CONFIG, "config/catalog.yaml"),
        help="Path to the catalog YAML configuration",
    )
    parser.add_argument(
        "--log-level",
        default=get_env_var(ENV_LOG_LEVEL, "WARNING"),
        help="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Build the catalog and print its summary as JSON."""
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = ConfigManager(args.config).load()
        releases_uri = args.uri or get_env_var(ENV_RELEASES_URI) or config.releases_uri
        catalog = ReleaseCatalog.build(releases_uri, config=config)
        summary = summarize(catalog, args.bits)
    except CatalogError as e:
        logger.error(f"Failed to load releases: {e}")
        return 1

    print(json.dumps(summary, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
