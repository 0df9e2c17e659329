"""Comparison of a working tree's manifests against a previous revision."""

import logging
from collections.abc import Callable
from pathlib import Path

from . import parse_cargo, parse_node
from .config import get_settings
from .detect import identify
from .differ import compare_manifest
from .exceptions import ManifestError
from .git import find_manifests, materialize, repository_root
from .models import DependencyTable, Report

logger = logging.getLogger(__name__)

TableParser = Callable[[str], dict[str, DependencyTable]]

PARSERS: dict[str, TableParser] = {
    "cargo": parse_cargo.parse_cargo_tables,
    "node": parse_node.parse_node_tables,
}

READERS: dict[str, Callable[[Path], dict[str, DependencyTable]]] = {
    "cargo": parse_cargo.read_dependency_tables,
    "node": parse_node.read_dependency_tables,
}


def parse_tables(kind: str, content: str) -> dict[str, DependencyTable]:
    """Parse manifest content of a known kind into dependency tables."""
    try:
        parser = PARSERS[kind]
    except KeyError:
        raise ManifestError(f"Unsupported manifest kind: {kind}") from None
    return parser(content)


def read_tables(path: Path) -> dict[str, DependencyTable]:
    """Read the dependency tables of the manifest at ``path``."""
    kind = identify("", path.name)
    try:
        reader = READERS[kind]
    except KeyError:
        raise ManifestError(f"Unsupported manifest: {path.name}", {"path": str(path)}) from None
    return reader(path)


def compare_revisions(
    previous_revision: str,
    repo_root: Path = Path("."),
    manifest_names: list[str] | None = None,
) -> Report:
    """Compare every tracked manifest in ``repo_root`` against ``previous_revision``.

    Args:
        previous_revision: Any revision git can check out
        repo_root: Working tree holding the current manifests
        manifest_names: Manifest file names to compare; defaults to settings

    Returns:
        Report of upgraded and removed dependencies per manifest

    Raises:
        GitError: if the revision cannot be materialized
        ManifestError: if a manifest cannot be read or parsed
    """
    if manifest_names is None:
        manifest_names = get_settings().manifest_names

    # ls-files paths are relative to the working directory
    repo_root = repository_root(repo_root)
    report = Report()
    manifests = find_manifests(repo_root, manifest_names)
    logger.info("Found %d manifest(s)", len(manifests))

    with materialize(previous_revision, repo_root) as snapshot:
        for relative in manifests:
            previous_path = snapshot / relative
            if not previous_path.is_file():
                # Renamed or new manifests have no previous counterpart
                report.note(f"`{relative}` does not exist in previous revision")
                continue

            current_tables = read_tables(repo_root / relative)
            previous_tables = read_tables(previous_path)
            report.add(relative, compare_manifest(relative, current_tables, previous_tables))

    return report
