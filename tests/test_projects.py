"""Tests for the open-project registry."""
import threading

import pytest

from intellimcp_core import Project, ProjectRegistry, ProjectRegistryError


class TestProjectRegistry:
    """Test opening, finding and closing projects."""

    def test_open_and_find(self, tmp_path):
        registry = ProjectRegistry()
        project = registry.open_project(str(tmp_path))

        assert project == Project(name=tmp_path.name, base_path=str(tmp_path))
        assert registry.find_project(str(tmp_path)) == project
        assert registry.find_project(str(tmp_path) + "/") == project

    def test_open_with_name(self, tmp_path):
        registry = ProjectRegistry()
        assert registry.open_project(str(tmp_path), name="demo").name == "demo"

    def test_open_is_idempotent(self, tmp_path):
        registry = ProjectRegistry()
        first = registry.open_project(str(tmp_path), name="first")
        second = registry.open_project(str(tmp_path) + "/", name="second")

        assert second is first
        assert len(registry) == 1

    def test_find_unknown(self):
        assert ProjectRegistry().find_project("/no/such/project") is None

    def test_close_project(self, tmp_path):
        registry = ProjectRegistry([str(tmp_path)])

        assert registry.close_project(str(tmp_path)) is True
        assert registry.find_project(str(tmp_path)) is None
        assert registry.close_project(str(tmp_path)) is False

    def test_list_sorted_by_path(self, tmp_path):
        (tmp_path / "b").mkdir()
        (tmp_path / "a").mkdir()
        registry = ProjectRegistry([str(tmp_path / "b"), str(tmp_path / "a")])

        assert [p.name for p in registry.list_projects()] == ["a", "b"]

    def test_concurrent_open(self, tmp_path):
        """Concurrent opens of the same roots never create duplicates."""
        roots = []
        for i in range(5):
            root = tmp_path / f"p{i}"
            root.mkdir()
            roots.append(str(root))
        registry = ProjectRegistry()

        threads = [
            threading.Thread(target=lambda: [registry.open_project(r) for r in roots])
            for _ in range(8)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(registry) == 5


class TestLoadFile:
    """Test loading projects from a YAML file."""

    def test_load_list(self, tmp_path):
        (tmp_path / "one").mkdir()
        projects_file = tmp_path / "projects.yaml"
        projects_file.write_text(f"- {tmp_path / 'one'}\n")

        registry = ProjectRegistry()
        assert registry.load_file(str(projects_file)) == 1
        assert registry.find_project(str(tmp_path / "one")).name == "one"

    def test_load_mapping_with_names(self, tmp_path):
        projects_file = tmp_path / "projects.yaml"
        projects_file.write_text(
            "projects:\n"
            f"  - path: {tmp_path / 'api'}\n"
            "    name: backend\n"
            f"  - {tmp_path / 'web'}\n"
        )

        registry = ProjectRegistry()
        assert registry.load_file(str(projects_file)) == 2
        assert registry.find_project(str(tmp_path / "api")).name == "backend"
        assert registry.find_project(str(tmp_path / "web")).name == "web"

    def test_empty_file(self, tmp_path):
        projects_file = tmp_path / "projects.yaml"
        projects_file.write_text("")

        assert ProjectRegistry().load_file(str(projects_file)) == 0

    def test_missing_file(self, tmp_path):
        with pytest.raises(ProjectRegistryError, match="Cannot read projects file"):
            ProjectRegistry().load_file(str(tmp_path / "missing.yaml"))

    def test_invalid_yaml(self, tmp_path):
        projects_file = tmp_path / "projects.yaml"
        projects_file.write_text("projects: [unclosed\n")

        with pytest.raises(ProjectRegistryError, match="Invalid YAML"):
            ProjectRegistry().load_file(str(projects_file))

    def test_wrong_shape(self, tmp_path):
        projects_file = tmp_path / "projects.yaml"
        projects_file.write_text("projects: just-a-string\n")

        with pytest.raises(ProjectRegistryError, match="must contain a list"):
            ProjectRegistry().load_file(str(projects_file))

    def test_invalid_entry(self, tmp_path):
        projects_file = tmp_path / "projects.yaml"
        projects_file.write_text("- name: no-path\n")

        with pytest.raises(ProjectRegistryError, match="Invalid project entry"):
            ProjectRegistry().load_file(str(projects_file))
