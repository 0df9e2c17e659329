"""Pytest configuration and fixtures."""

import shutil
import subprocess

import pytest

from core.config import get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_cargo_toml():
    """Sample Cargo.toml content for testing."""
    return """
[package]
name = "demo"
version = "0.1.0"

[dependencies]
anyhow = "1.0"
serde = { version = "1.0.100", features = ["derive"] }
local = { path = "../local" }
forked = { git = "https://example.com/forked.git" }
shared = { workspace = true }

[dev-dependencies]
tempfile = "3"
"""


@pytest.fixture
def sample_package_json():
    """Sample package.json content for testing."""
    return """
{
  "name": "test-project",
  "dependencies": {
    "express": "^4.18.0",
    "lodash": "~4.17.21",
    "left-pad": "1.3.0"
  },
  "devDependencies": {
    "jest": "^29.0.0"
  }
}
"""


def _git(repo, *args):
    subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True)


@pytest.fixture
def git_repo(tmp_path):
    """Create an empty git repository with a committer identity."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "--quiet")
    _git(repo, "config", "user.email", "test@test.com")
    _git(repo, "config", "user.name", "Test")
    _git(repo, "config", "commit.gpgsign", "false")
    return repo


@pytest.fixture
def commit(git_repo):
    """Commit the given files and return the new commit id."""

    def _commit(files: dict[str, str], message: str = "commit") -> str:
        for name, content in files.items():
            path = git_repo / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
            _git(git_repo, "add", name)
        _git(git_repo, "commit", "--quiet", "-m", message)
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            cwd=git_repo,
            check=True,
            capture_output=True,
            text=True,
        )
        return result.stdout.strip()

    return _commit


@pytest.fixture
def git(git_repo):
    """Run a git command in the test repository, or in ``cwd`` when given."""

    def _run(*args, cwd=None):
        _git(cwd or git_repo, *args)

    return _run
