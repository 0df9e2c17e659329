"""Version requirement parsing and matching.

A requirement is a single comparator: an operator followed by a partial
version, e.g. ``^1.2.3``, ``~1.2``, ``=0.4.1``, ``>=2``, ``1.*`` or ``*``.
A bare version such as ``1.2.3`` is a caret requirement.

Text that cannot be evaluated (several comparators, a range, an invalid
version) parses to :class:`Unsupported` instead of raising, so one bad entry
never prevents reporting on the rest of a dependency table.
"""

import enum
import logging
import re
from dataclasses import dataclass

from .exceptions import MalformedVersion, UnsupportedRequirement
from .version import Version, parse_version

logger = logging.getLogger(__name__)

_WILDCARDS = frozenset({"*", "x", "X"})

_REQUIREMENT_RE = re.compile(r"^(?P<op>\^|~|==|=|>=|>|<=|<)?\s*(?P<version>\S+)$")


class Op(enum.Enum):
    """Requirement operator."""

    CARET = "^"
    TILDE = "~"
    EXACT = "="
    EQUAL = "=="
    WILDCARD = "*"
    GREATER_EQ = ">="
    GREATER = ">"
    LESS_EQ = "<="
    LESS = "<"


@dataclass(frozen=True)
class PartialVersion:
    """A version whose trailing components may be omitted.

    ``major`` is None only for the bare ``*`` wildcard.
    """

    major: int | None
    minor: int | None = None
    patch: int | None = None
    prerelease: tuple[str, ...] = ()

    def floor(self) -> Version:
        """The version with every omitted component set to zero."""
        return Version(self.major or 0, self.minor or 0, self.patch or 0, self.prerelease)

    def __str__(self) -> str:
        if self.major is None:
            return "*"
        parts = [str(self.major)]
        for component in (self.minor, self.patch):
            if component is None:
                break
            parts.append(str(component))
        text = ".".join(parts)
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        return text


@dataclass(frozen=True)
class Requirement:
    """A single-comparator version requirement."""

    op: Op
    version: PartialVersion

    def __str__(self) -> str:
        if self.op is Op.WILDCARD:
            if self.version.major is None:
                return "*"
            return f"{self.version}.*"
        return f"{self.op.value}{self.version}"


@dataclass(frozen=True)
class Unsupported:
    """A requirement that could not be evaluated."""

    text: str
    reason: str


def _parse_partial(text: str) -> tuple[PartialVersion, bool]:
    """Parse a partial version, returning it and whether it holds a wildcard."""
    # Build metadata never affects matching
    head, _, _ = text.partition("+")
    numbers, dash, pre = head.partition("-")
    parts = numbers.split(".")
    if len(parts) > 3:
        raise MalformedVersion("too many version components", {"version": text})

    wildcard_at = next((i for i, part in enumerate(parts) if part in _WILDCARDS), None)
    if wildcard_at is not None:
        if any(part not in _WILDCARDS for part in parts[wildcard_at:]):
            raise MalformedVersion("wildcard must be the trailing component", {"version": text})
        if dash:
            raise MalformedVersion("wildcard version cannot carry a pre-release", {"version": text})
        parts = parts[:wildcard_at]

    components: list[int | None] = [None, None, None]
    if parts:
        # Reuse the strict version parser for numeric validation
        parsed = parse_version(".".join(parts) + (dash + pre if dash else ""))
        for i in range(len(parts)):
            components[i] = parsed.release[i]
        prerelease = parsed.prerelease
        if prerelease and len(parts) < 3:
            raise MalformedVersion("pre-release requires a full version", {"version": text})
    else:
        prerelease = ()

    return PartialVersion(components[0], components[1], components[2], prerelease), (
        wildcard_at is not None
    )


def parse(text: str) -> Requirement:
    """Parse requirement text.

    Raises:
        UnsupportedRequirement: for multiple comparators or unknown syntax
        MalformedVersion: if the embedded version is not numeric-dotted
    """
    stripped = text.strip()
    if not stripped:
        raise UnsupportedRequirement("empty requirement")
    if "," in stripped or "||" in stripped:
        raise UnsupportedRequirement("multiple comparators", {"requirement": stripped})

    match = _REQUIREMENT_RE.match(stripped)
    if not match:
        raise UnsupportedRequirement("multiple comparators", {"requirement": stripped})

    version, has_wildcard = _parse_partial(match.group("version"))
    symbol = match.group("op")

    if has_wildcard:
        if symbol not in (None, "=", "=="):
            raise UnsupportedRequirement(
                "wildcard combined with an operator", {"requirement": stripped}
            )
        return Requirement(Op.WILDCARD, version)

    if symbol is None:
        return Requirement(Op.CARET, version)
    return Requirement(Op(symbol), version)


def parse_requirement(text: str) -> Requirement | Unsupported:
    """Parse requirement text, returning Unsupported instead of raising."""
    try:
        return parse(text)
    except (UnsupportedRequirement, MalformedVersion) as e:
        logger.debug("Unsupported requirement %r: %s", text, e)
        return Unsupported(text=text, reason=str(e))


def _next(version: PartialVersion) -> Version:
    """The first version past every release the partial version names."""
    if version.minor is None:
        return Version(version.major + 1, 0, 0)
    if version.patch is None:
        return Version(version.major, version.minor + 1, 0)
    return Version(version.major, version.minor, version.patch + 1)


def _bounds(requirement: Requirement) -> tuple[Version | None, bool, Version | None, bool]:
    """Return ``(lower, lower_inclusive, upper, upper_inclusive)``.

    A bound of None is unbounded on that side.
    """
    op = requirement.op
    partial = requirement.version
    floor = partial.floor()

    if op is Op.WILDCARD:
        if partial.major is None:
            return None, True, None, False
        return floor, True, _next(partial), False

    if op in (Op.EXACT, Op.EQUAL):
        if partial.patch is not None:
            return floor, True, floor, True
        return floor, True, _next(partial), False

    if op is Op.GREATER_EQ:
        return floor, True, None, False

    if op is Op.GREATER:
        if partial.patch is not None:
            return floor, False, None, False
        return _next(partial), True, None, False

    if op is Op.LESS:
        return None, True, floor, False

    if op is Op.LESS_EQ:
        if partial.patch is not None:
            return None, True, floor, True
        return None, True, _next(partial), False

    if op is Op.TILDE:
        if partial.minor is None:
            return floor, True, Version(floor.major + 1, 0, 0), False
        return floor, True, Version(floor.major, floor.minor + 1, 0), False

    if op is Op.CARET:
        major, minor, patch = partial.major, partial.minor, partial.patch
        if major > 0 or minor is None:
            upper = Version(major + 1, 0, 0)
        elif minor > 0 or patch is None:
            upper = Version(0, minor + 1, 0)
        else:
            upper = Version(0, 0, patch + 1)
        return floor, True, upper, False

    raise AssertionError(f"unhandled operator: {op}")


def _prerelease_allowed(requirement: Requirement, version: Version) -> bool:
    # A pre-release only matches a requirement naming the same release with
    # a pre-release of its own
    partial = requirement.version
    return (
        bool(partial.prerelease)
        and partial.patch is not None
        and partial.floor().release == version.release
    )


def admits(requirement: Requirement | Unsupported, version: Version) -> bool:
    """Return whether ``version`` satisfies ``requirement``.

    Unsupported requirements admit nothing.
    """
    if isinstance(requirement, Unsupported):
        return False
    if version.prerelease and not _prerelease_allowed(requirement, version):
        return False

    lower, lower_inclusive, upper, upper_inclusive = _bounds(requirement)
    if lower is not None:
        if version < lower or (version == lower and not lower_inclusive):
            return False
    if upper is not None:
        if version > upper or (version == upper and not upper_inclusive):
            return False
    return True
