"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

_TOOLPIN_ENV = (
    "TOOLPIN_NODE_VERSION",
    "TOOLPIN_DENO_VERSION",
    "TOOLPIN_GO_TASK_VERSION",
    "TOOLPIN_DETECT_STRATEGY",
    "TOOLPIN_DETECTED_FROM",
)


@pytest.fixture(autouse=True)
def clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's own toolpin environment out of every test."""
    for name in _TOOLPIN_ENV:
        # setenv first so teardown restores the original state
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.setenv("TOOLPIN_HOME", str(tmp_path / "toolpin-home"))
    monkeypatch.setattr("toolpin.core.context._working_dir", None)


@pytest.fixture
def tree(tmp_path: Path) -> dict[str, Path]:
    """A three-level directory tree: root/project/sub."""
    root = (tmp_path / "root").resolve()
    project = root / "project"
    sub = project / "sub"
    sub.mkdir(parents=True)
    return {"root": root, "project": project, "sub": sub}
