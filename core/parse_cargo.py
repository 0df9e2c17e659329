"""Cargo.toml dependency table parsing."""

import logging
import tomllib
from pathlib import Path

from .exceptions import ManifestError
from .models import DependencyEntry, DependencyTable

logger = logging.getLogger(__name__)


class CargoManifestParser:
    """Parser for the dependency tables of a Cargo.toml manifest."""

    # Only regular and workspace-level dependencies are compared;
    # dev-dependencies and build-dependencies are never read.
    sections = {
        "dependencies": ("dependencies",),
        "workspace.dependencies": ("workspace", "dependencies"),
    }

    def _get_table(self, manifest: dict, path: tuple[str, ...]) -> dict | None:
        value = manifest
        for part in path:
            if not isinstance(value, dict):
                return None
            value = value.get(part)
        return value if isinstance(value, dict) else None

    def _parse_entry(self, key: str, value) -> DependencyEntry:
        """Extract the requirement text of one dependency."""
        if isinstance(value, str):
            return DependencyEntry(key, value)

        if not isinstance(value, dict):
            logger.warning("`%s`: failed to get version requirement", key)
            return DependencyEntry(key, None)

        # Skip git and path dependencies
        if "git" in value or "path" in value:
            return DependencyEntry(key, None)

        # Skip dependencies inherited from a workspace
        if value.get("workspace") is True:
            return DependencyEntry(key, None)

        version = value.get("version")
        if not isinstance(version, str):
            logger.warning("`%s`: failed to get version requirement", key)
            return DependencyEntry(key, None)
        return DependencyEntry(key, version)

    def parse(self, content: str) -> dict[str, DependencyTable]:
        """Parse Cargo.toml content into dependency tables keyed by section."""
        try:
            manifest = tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            raise ManifestError(f"invalid TOML: {e}") from e

        tables: dict[str, DependencyTable] = {}
        for name, path in self.sections.items():
            table = self._get_table(manifest, path)
            if table is None:
                continue
            entries = [self._parse_entry(key, value) for key, value in table.items()]
            tables[name] = {entry.key: entry.requirement_text for entry in entries}

        return tables


def parse_cargo_tables(content: str) -> dict[str, DependencyTable]:
    """Parse Cargo.toml content into dependency tables.

    Args:
        content: The Cargo.toml file content

    Returns:
        Mapping of section name to dependency table
    """
    parser = CargoManifestParser()
    return parser.parse(content)


def read_dependency_tables(path: Path) -> dict[str, DependencyTable]:
    """Read a Cargo.toml file from disk and parse its dependency tables."""
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestError(f"failed to read manifest: {e}", {"path": str(path)}) from e
    try:
        return parse_cargo_tables(content)
    except ManifestError as e:
        e.context.setdefault("path", str(path))
        raise
