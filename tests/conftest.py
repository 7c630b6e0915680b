"""Shared fixtures: a small on-disk project and a tool registry bound to it."""
import pytest

from intellimcp_core import ProjectRegistry
from intellimcp_mcp import McpToolRegistry


@pytest.fixture
def project_dir(tmp_path):
    root = tmp_path / "demo"
    (root / "src" / "pkg").mkdir(parents=True)
    (root / "docs").mkdir()
    (root / ".git").mkdir()
    (root / "README.md").write_text("# Demo\nA demo project\n")
    (root / "src" / "main.py").write_text("import os\n\ndef main():\n    print('Hello')\n")
    (root / "src" / "pkg" / "models.py").write_text("class Model:\n    name = 'hello world'\n")
    (root / "docs" / "guide.md").write_text("Say hello to the guide.\n")
    (root / ".git" / "config").write_text("hello from git\n")
    (root / "logo.bin").write_bytes(b"\xff\xfe\x00\x81hello")
    return root


@pytest.fixture
def projects(project_dir):
    return ProjectRegistry([str(project_dir)])


@pytest.fixture
def registry(projects):
    return McpToolRegistry.create_default(projects)
