"""Semantic version model backed by python-semver."""

import enum
import functools
from dataclasses import dataclass, field

import semver

from .exceptions import MalformedVersion


class Ordering(enum.IntEnum):
    """Result of a three-way comparison."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """A semantic version. Build metadata never takes part in comparisons."""

    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: str | None = field(default=None)

    def __post_init__(self):
        # semver validates the components
        self.to_semver()

    def to_semver(self) -> semver.Version:
        try:
            return semver.Version(
                self.major,
                self.minor,
                self.patch,
                prerelease=".".join(self.prerelease) or None,
                build=self.build,
            )
        except (TypeError, ValueError) as e:
            raise MalformedVersion(str(e), {"version": repr(self)}) from e

    @classmethod
    def from_semver(cls, version: semver.Version) -> "Version":
        return cls(
            version.major,
            version.minor,
            version.patch,
            prerelease=tuple(version.prerelease.split(".")) if version.prerelease else (),
            build=version.build,
        )

    def __str__(self) -> str:
        return str(self.to_semver())

    def __eq__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return compare(self, other) is Ordering.EQUAL

    def __lt__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return compare(self, other) is Ordering.LESS

    def __hash__(self):
        return hash((self.major, self.minor, self.patch, self.prerelease))

    @property
    def release(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)


def parse_version(text: str) -> Version:
    """Parse ``MAJOR[.MINOR[.PATCH]][-PRE][+BUILD]`` into a Version.

    Omitted minor and patch components default to 0.

    Raises:
        MalformedVersion: if the text is not a semantic version
    """
    try:
        parsed = semver.Version.parse(text.strip(), optional_minor_and_patch=True)
    except (TypeError, ValueError) as e:
        raise MalformedVersion("invalid version", {"version": text}) from e
    return Version.from_semver(parsed)


def compare(a: Version, b: Version) -> Ordering:
    """Three-way comparison following semantic versioning precedence."""
    return Ordering(a.to_semver().compare(b.to_semver()))
