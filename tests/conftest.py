"""Shared test fixtures — sample lines, catalogs, temp git repos."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from leakgate.catalog.registry import PatternCatalog

# Assembled from pieces so this file never trips a secret scanner itself.
GITHUB_TOKEN = "ghp_" + "aB3dE5fG7hJ9kL1mN3pQ5rS7tU9vW1xY3zA5"
AWS_KEY = "AKIA" + "ABCDEFGHIJKLMNOP"
STRIPE_KEY = "sk_live_" + "4eC39HqLyjWDarjtT1zdp7dc"
PEM_HEADER = "-----BEGIN RSA " + "PRIVATE KEY-----"


@pytest.fixture
def catalog() -> PatternCatalog:
    """The built-in catalog."""
    return PatternCatalog.default()


@pytest.fixture
def aws_line() -> str:
    return f'aws_key = "{AWS_KEY}"'


@pytest.fixture
def github_line() -> str:
    return f'const token = "{GITHUB_TOKEN}";'


@pytest.fixture
def pem_line() -> str:
    return PEM_HEADER


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository for integration tests."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    subprocess.run(
        ["git", "config", "user.email", "test@test.com"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    subprocess.run(
        ["git", "config", "user.name", "Test"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    readme = tmp_path / "README.md"
    readme.write_text("# Test\n")
    subprocess.run(["git", "add", "."], cwd=tmp_path, capture_output=True, check=True)
    subprocess.run(
        ["git", "commit", "-m", "init"],
        cwd=tmp_path, capture_output=True, check=True,
    )
    return tmp_path


@pytest.fixture
def stage():
    """Return a helper that writes a file into a repo and stages it."""

    def _stage(repo: Path, name: str, content: str) -> None:
        path = repo / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        subprocess.run(["git", "add", name], cwd=repo, capture_output=True, check=True)

    return _stage


@pytest.fixture
def github_token() -> str:
    return GITHUB_TOKEN


@pytest.fixture
def aws_key() -> str:
    return AWS_KEY


@pytest.fixture
def stripe_key() -> str:
    return STRIPE_KEY
