"""Core data models for whats-changed."""

import enum
from dataclasses import dataclass, field

from .version import Version

# Dependency key -> requirement text. None marks an entry that exists in the
# manifest but has no comparable requirement (git, path, workspace-inherited).
DependencyTable = dict[str, str | None]


@dataclass(frozen=True)
class DependencyEntry:
    """A single dependency entry in a manifest's dependency table."""

    key: str
    requirement_text: str | None


class ChangeKind(str, enum.Enum):
    """How a dependency changed between two manifest states."""

    UPGRADED = "upgraded"
    REMOVED = "removed"
    ADDED = "added"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class ChangeRecord:
    """A reported change to one dependency of one manifest file."""

    file_path: str
    dependency_key: str
    kind: ChangeKind
    new_min_version: Version | None = None

    def describe(self) -> str:
        if self.kind is ChangeKind.UPGRADED:
            return f"`{self.dependency_key}` upgraded to version {self.new_min_version}"
        return f"`{self.dependency_key}` {self.kind.value}"


@dataclass
class FileReport:
    """Changes found in one manifest file."""

    file_path: str
    changes: list[ChangeRecord]


@dataclass
class Report:
    """Changes grouped by manifest file, in processing order."""

    files: list[FileReport] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    def add(self, file_path: str, records: list[ChangeRecord]) -> None:
        if records:
            self.files.append(FileReport(file_path=file_path, changes=list(records)))

    def note(self, message: str) -> None:
        self.notes.append(message)

    @property
    def has_changes(self) -> bool:
        return bool(self.files)
