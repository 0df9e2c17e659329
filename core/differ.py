"""Dependency table comparison."""

import logging

from .models import ChangeKind, ChangeRecord, DependencyTable
from .requirement import Unsupported, admits, parse_requirement
from .resolve import minimum_version
from .version import Version

logger = logging.getLogger(__name__)


def classify(
    current_text: str | None, previous_text: str | None
) -> tuple[ChangeKind, Version | None] | None:
    """Classify one dependency present in the current table.

    Args:
        current_text: Requirement text in the current manifest
        previous_text: Requirement text in the previous manifest, or None if
            the dependency is absent there

    Returns:
        ``(kind, minimum version)``, or None when either side cannot be
        evaluated
    """
    if current_text is None:
        return None

    current = parse_requirement(current_text)
    if isinstance(current, Unsupported):
        logger.info("Skipping requirement %r: %s", current_text, current.reason)
        return None

    min_version = minimum_version(current)
    if isinstance(min_version, Unsupported):
        logger.info("Skipping requirement %r: %s", current_text, min_version.reason)
        return None

    if previous_text is None:
        return ChangeKind.ADDED, min_version

    previous = parse_requirement(previous_text)
    if isinstance(previous, Unsupported):
        logger.info("Skipping previous requirement %r: %s", previous_text, previous.reason)
        return None

    if admits(previous, min_version):
        return ChangeKind.UNCHANGED, min_version
    return ChangeKind.UPGRADED, min_version


def diff_tables(
    file_path: str, current: DependencyTable, previous: DependencyTable
) -> list[ChangeRecord]:
    """Compare two dependency tables of the same manifest file.

    Keys of ``current`` are checked for upgrades in table order; additions
    are never reported. Keys of ``previous`` missing from ``current`` are
    then reported as removed, in table order.
    """
    records: list[ChangeRecord] = []

    for key, current_text in current.items():
        if key not in previous:
            logger.debug("%s: `%s` added", file_path, key)
            continue
        if previous[key] is None:
            continue
        result = classify(current_text, previous[key])
        if result is None:
            continue
        kind, min_version = result
        if kind is ChangeKind.UPGRADED:
            records.append(ChangeRecord(file_path, key, kind, min_version))

    for key in previous:
        if key not in current:
            records.append(ChangeRecord(file_path, key, ChangeKind.REMOVED))

    return records


def compare_manifest(
    file_path: str,
    current_tables: dict[str, DependencyTable],
    previous_tables: dict[str, DependencyTable],
) -> list[ChangeRecord]:
    """Compare every dependency section of one manifest file."""
    sections = list(current_tables)
    sections += [name for name in previous_tables if name not in current_tables]

    records: list[ChangeRecord] = []
    for section in sections:
        records.extend(
            diff_tables(
                file_path,
                current_tables.get(section, {}),
                previous_tables.get(section, {}),
            )
        )
    return records
