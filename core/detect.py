"""Manifest kind detection."""

import re

CARGO_MANIFEST = "Cargo.toml"
NODE_MANIFEST = "package.json"


def identify(content: str, filename: str | None = None) -> str:
    """Detect manifest kind from content and filename hints.

    Args:
        content: The manifest file content
        filename: Optional filename for additional context

    Returns:
        Detected manifest kind: 'cargo', 'node', or 'unknown'
    """
    # Filename-based detection (takes precedence)
    if filename:
        if filename.endswith(CARGO_MANIFEST):
            return "cargo"
        if filename.endswith(NODE_MANIFEST):
            return "node"

    # Content-based detection
    cargo_patterns = [
        r"^\s*\[package\]",
        r"^\s*\[(?:workspace\.)?dependencies\]",
        r"^\s*\[workspace\]",
    ]

    for pattern in cargo_patterns:
        if re.search(pattern, content, re.MULTILINE):
            return "cargo"

    node_patterns = [
        r'"dependencies"\s*:',
        r'"devDependencies"\s*:',
    ]

    for pattern in node_patterns:
        if re.search(pattern, content):
            return "node"

    return "unknown"
