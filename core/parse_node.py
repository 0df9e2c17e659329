"""Node.js package.json dependency table parsing."""

import json
import logging
import re
from pathlib import Path

from .exceptions import ManifestError
from .models import DependencyTable

logger = logging.getLogger(__name__)

# npm specs that do not name a registry version range
_NON_REGISTRY = re.compile(r"^(?:file:|link:|workspace:|npm:|git\+|git:|github:|https?://)|/")


def _normalize(spec: str) -> str | None:
    """Translate an npm version spec into requirement text.

    npm treats a bare version as an exact pin, unlike Cargo.
    """
    stripped = spec.strip()
    if _NON_REGISTRY.search(stripped):
        return None
    if stripped in ("", "latest"):
        return "*"
    if stripped[0].isdigit() and not any(c in stripped for c in " ,|"):
        return "=" + stripped
    return stripped


def parse_node_tables(content: str) -> dict[str, DependencyTable]:
    """Parse package.json content into dependency tables.

    Args:
        content: The package.json file content

    Returns:
        Mapping of section name to dependency table
    """
    try:
        manifest = json.loads(content)
    except json.JSONDecodeError as e:
        raise ManifestError(f"invalid JSON: {e}") from e

    if not isinstance(manifest, dict):
        raise ManifestError("package.json must contain an object")

    dependencies = manifest.get("dependencies")
    if not isinstance(dependencies, dict):
        return {}

    table: DependencyTable = {}
    for name, spec in dependencies.items():
        if not isinstance(spec, str):
            logger.warning("`%s`: failed to get version requirement", name)
            table[name] = None
            continue
        table[name] = _normalize(spec)
    return {"dependencies": table}


def read_dependency_tables(path: Path) -> dict[str, DependencyTable]:
    """Read a package.json file from disk and parse its dependency tables."""
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestError(f"failed to read manifest: {e}", {"path": str(path)}) from e
    try:
        return parse_node_tables(content)
    except ManifestError as e:
        e.context.setdefault("path", str(path))
        raise
