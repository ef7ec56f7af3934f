from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest


class ProjectBuilder:
    """Builds a project directory with a package.json and node_modules tree."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.node_modules = root / "node_modules"

    def declare(
        self,
        dependencies: dict[str, str] | None = None,
        dev_dependencies: dict[str, str] | None = None,
        **extra: Any,
    ) -> Path:
        data: dict[str, Any] = {"name": "app", "version": "0.0.0", **extra}
        if dependencies is not None:
            data["dependencies"] = dependencies
        if dev_dependencies is not None:
            data["devDependencies"] = dev_dependencies
        self.node_modules.mkdir(parents=True, exist_ok=True)
        path = self.root / "package.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    def install(self, rel_dir: str, name: Any, version: Any = "1.0.0") -> Path:
        """Write node_modules/<rel_dir>/package.json declaring name/version."""
        data: dict[str, Any] = {}
        if name is not None:
            data["name"] = name
        if version is not None:
            data["version"] = version
        return self.write(rel_dir, json.dumps(data))

    def write(self, rel_dir: str, content: str, filename: str = "package.json") -> Path:
        directory = self.node_modules / rel_dir if rel_dir else self.node_modules
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / filename
        path.write_text(content, encoding="utf-8")
        return path


@pytest.fixture
def project(tmp_path: Path) -> ProjectBuilder:
    """Provide a project builder rooted at the pytest tmp_path."""
    return ProjectBuilder(tmp_path / "app")


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("NPM_PIN_CONFIG", raising=False)
