"""Minimum satisfying version for a requirement."""

from .requirement import Op, Requirement, Unsupported
from .version import Version


def _increment(version: Version) -> Version:
    """Return the smallest version strictly greater than ``version``."""
    if version.prerelease:
        return Version(
            version.major, version.minor, version.patch, version.prerelease + ("0",)
        )
    return Version(version.major, version.minor, version.patch + 1)


def minimum_version(requirement: Requirement | Unsupported) -> Version | Unsupported:
    """Compute the lowest version that satisfies a requirement.

    Upper-bound-only requirements (``<``, ``<=``) have no finite floor and
    resolve to Unsupported, as does an Unsupported input.
    """
    if isinstance(requirement, Unsupported):
        return requirement

    op = requirement.op
    partial = requirement.version

    if op in (Op.CARET, Op.TILDE, Op.EXACT, Op.EQUAL, Op.GREATER_EQ, Op.WILDCARD):
        return partial.floor()

    if op is Op.GREATER:
        if partial.minor is None:
            return Version(partial.major + 1, 0, 0)
        if partial.patch is None:
            return Version(partial.major, partial.minor + 1, 0)
        return _increment(partial.floor())

    if op in (Op.LESS, Op.LESS_EQ):
        return Unsupported(
            text=str(requirement), reason="requirement has no lower bound"
        )

    raise AssertionError(f"unhandled operator: {op}")
