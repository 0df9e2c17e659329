"""Git access: listing tracked manifests and materializing old revisions."""

import logging
import subprocess
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path, PurePosixPath

from .config import get_settings
from .exceptions import GitError

logger = logging.getLogger(__name__)


def run_git(args: list[str], cwd: Path) -> str:
    """Run a git command and return its stdout.

    Raises:
        GitError: if git cannot be started or exits unsuccessfully
    """
    command = [get_settings().git_executable, *args]
    logger.debug("Running %s in %s", " ".join(command), cwd)
    try:
        result = subprocess.run(
            command, cwd=cwd, capture_output=True, text=True, check=False
        )
    except OSError as e:
        raise GitError(f"failed to run git: {e}", {"command": " ".join(command)}) from e

    if result.returncode != 0:
        raise GitError(
            f"command failed: {' '.join(command)}",
            {"status": result.returncode, "stderr": result.stderr.strip()},
        )
    return result.stdout


def find_manifests(root: Path, names: list[str] | None = None) -> list[str]:
    """List files tracked (or staged) in ``root`` whose name is a manifest name.

    Args:
        root: Repository working tree
        names: Manifest file names to match; defaults to the configured names

    Returns:
        Repository-relative POSIX paths, in ``git ls-files`` order
    """
    if names is None:
        names = get_settings().manifest_names
    output = run_git(["ls-files"], cwd=root)
    return [
        line
        for line in output.splitlines()
        if line and PurePosixPath(line).name in names
    ]


def repository_root(path: Path) -> Path:
    """Return the top-level directory of the working tree containing ``path``."""
    return Path(run_git(["rev-parse", "--show-toplevel"], cwd=path).strip())


def resolve_commit(revision: str, repo: Path) -> str:
    """Resolve ``revision`` to a commit id using the refs of ``repo`` itself.

    Raises:
        GitError: if the revision does not name a commit
    """
    return run_git(["rev-parse", "--verify", "--quiet", f"{revision}^{{commit}}"], cwd=repo).strip()


@contextmanager
def materialize(revision: str, repo: Path) -> Iterator[Path]:
    """Check out ``revision`` of ``repo`` into a temporary directory.

    The revision is resolved in ``repo``, so remote-tracking branches, stashes
    and reflog entries name the same commit they name there. The directory is
    removed when the context exits, whether normally or by an exception.
    """
    commit = resolve_commit(revision, repo)
    with tempfile.TemporaryDirectory(prefix="whats-changed-") as tmp:
        snapshot = Path(tmp) / "snapshot"
        # The clone reads objects from the source store, not only its copied refs
        run_git(
            [
                "clone",
                "--quiet",
                "--shared",
                "--no-checkout",
                str(repository_root(repo)),
                str(snapshot),
            ],
            cwd=Path(tmp),
        )
        run_git(["checkout", "--quiet", commit], cwd=snapshot)
        logger.debug("Materialized %s (%s) at %s", revision, commit, snapshot)
        yield snapshot
