"""Exception types for whats-changed."""

from typing import Optional


class WhatsChangedError(Exception):
    """Base exception for all whats-changed errors."""

    def __init__(self, message: str, context: Optional[dict] = None):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def __str__(self):
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class MalformedVersion(WhatsChangedError, ValueError):
    """Raised when version text is not a dotted numeric version."""

    pass


class UnsupportedRequirement(WhatsChangedError, ValueError):
    """Raised when a requirement cannot be evaluated (e.g. multiple comparators)."""

    pass


class ManifestError(WhatsChangedError):
    """Raised when a manifest file cannot be read or parsed."""

    pass


class GitError(WhatsChangedError):
    """Raised when a git command fails."""

    pass
