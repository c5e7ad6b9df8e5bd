"""Configuration management for the release catalog."""

from dataclasses import dataclass, field
from pathlib import Path

import yaml

DEFAULT_PACKAGE_NAME = "strawberry-perl"
DEFAULT_RELEASES_URI = "https://strawberryperl.com/releases.json"


@dataclass(frozen=True)
class EditionConfig:
    """How download links are named for one edition.

    Attributes:
        key: Edition key as it appears in the releases file (e.g., "msi")
        suffix: Display name suffix appended after "<package>-<version>"
        label: Short label appended after the version (e.g., "MSI")
    """

    key: str
    suffix: str
    label: str

    def display_name(self, package_name: str, version: str) -> str:
        return f"{package_name}-{version}{self.suffix}"

    def short_name(self, version: str) -> str:
        return f"{version} {self.label}"


# Installer, portable archive, scientific (PDL) archive, plain archive
DEFAULT_EDITIONS = (
    EditionConfig(key="msi", suffix="-64bit.msi", label="MSI"),
    EditionConfig(key="portable", suffix="-64bit-portable.zip", label="Portable zip"),
    EditionConfig(key="pdl", suffix="-64bit-PDL.zip", label="PDL zip"),
    EditionConfig(key="zip", suffix="-64bit.zip", label="zip"),
)


@dataclass
class CatalogConfig:
    """Configuration for building a release catalog.

    Attributes:
        package_name: Package name used in download display names
        releases_uri: Location of the releases JSON file (URL or local path)
        timeout: Request timeout in seconds
        max_retries: Retry attempts for the HTTP GET (0 disables retries)
        editions: Edition naming table, in link order
    """

    package_name: str = DEFAULT_PACKAGE_NAME
    releases_uri: str = DEFAULT_RELEASES_URI
    timeout: int = 30
    max_retries: int = 0
    editions: tuple[EditionConfig, ...] = field(default=DEFAULT_EDITIONS)

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "CatalogConfig":
        """Load configuration from a YAML file.

        Missing keys fall back to the defaults.

        Args:
            yaml_path: Path to the YAML configuration file

        Returns:
            CatalogConfig populated from the YAML file

        Raises:
            FileNotFoundError: If the YAML file does not exist
            KeyError: If an edition entry is missing a required field
            ValueError: If the file does not contain a mapping
        """
        with open(yaml_path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping in {yaml_path}")

        editions = DEFAULT_EDITIONS
        if "editions" in data:
            editions = tuple(
                EditionConfig(
                    key=entry["key"],
                    suffix=entry["suffix"],
                    label=entry["label"],
                )
                for entry in data["editions"]
            )

        return cls(
            package_name=data.get("package_name", DEFAULT_PACKAGE_NAME),
            releases_uri=data.get("releases_uri", DEFAULT_RELEASES_URI),
            timeout=int(data.get("timeout", 30)),
            max_retries=int(data.get("max_retries", 0)),
            editions=editions,
        )


class ConfigManager:
    """Locates and loads the catalog configuration file.

    Attributes:
        config_path: Path to the catalog YAML file
    """

    def __init__(self, config_path: str = "config/catalog.yaml") -> None:
        self.config_path = Path(config_path)

    def load(self) -> CatalogConfig:
        """Load the catalog configuration.

        Returns the built-in defaults when the file does not exist.
        """
        if not self.config_path.is_file():
            return CatalogConfig()
        return CatalogConfig.from_yaml(self.config_path)
