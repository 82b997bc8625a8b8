import json
import os
import stat
import tempfile
from pathlib import Path

import pytest

from file_ops import FileOperations, PathUtils
from models import Configuration
from store import DocumentStore


class TestFileOperations:
    """Tests for FileOperations focusing on file I/O behavior"""

    def test_read_file_returns_content(self, temp_dir: Path):
        test_file = temp_dir / "test.txt"
        expected_content = "Hello, World!\nThis is a test file."
        test_file.write_text(expected_content)

        content = FileOperations.read_file(test_file)

        assert content == expected_content

    def test_read_file_raises_on_missing_file(self, temp_dir: Path):
        with pytest.raises(FileNotFoundError):
            FileOperations.read_file(temp_dir / "missing.txt")

    def test_write_file_creates_parent_directories(self, temp_dir: Path):
        test_file = temp_dir / "sub" / "dir" / "launch.json"

        FileOperations.write_file(test_file, "{}")

        assert test_file.read_text() == "{}"

    def test_write_file_overwrites_and_leaves_no_temp_files(self, temp_dir: Path):
        test_file = temp_dir / "launch.json"
        test_file.write_text("Old content")

        FileOperations.write_file(test_file, "New content")

        assert test_file.read_text() == "New content"
        assert [p.name for p in temp_dir.iterdir()] == ["launch.json"]

    def test_write_file_keeps_original_on_failure(self, temp_dir: Path, monkeypatch):
        test_file = temp_dir / "launch.json"
        test_file.write_text("original")

        def broken_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("file_ops.os.replace", broken_replace)

        with pytest.raises(OSError, match="disk full"):
            FileOperations.write_file(test_file, "new")

        assert test_file.read_text() == "original"
        assert [p.name for p in temp_dir.iterdir()] == ["launch.json"]

    def test_write_file_keeps_existing_permissions(self, temp_dir: Path):
        test_file = temp_dir / "launch.json"
        test_file.write_text("{}")
        os.chmod(test_file, 0o644)

        FileOperations.write_file(test_file, '{"version": "0.2.0"}')

        assert stat.S_IMODE(test_file.stat().st_mode) == 0o644

    def test_new_file_gets_umask_permissions(self, temp_dir: Path):
        test_file = temp_dir / "launch.json"
        old_umask = os.umask(0o022)
        try:
            FileOperations.write_file(test_file, "{}")
        finally:
            os.umask(old_umask)

        assert stat.S_IMODE(test_file.stat().st_mode) == 0o644

    def test_store_mutation_keeps_document_permissions(self, temp_dir: Path):
        launch_path = temp_dir / "launch.json"
        launch_path.write_text('{"version": "0.2.0", "configurations": []}')
        os.chmod(launch_path, 0o644)

        DocumentStore(launch_path).add(Configuration("A", "node", "launch"))

        assert stat.S_IMODE(launch_path.stat().st_mode) == 0o644

    def test_write_file_closes_descriptor_when_fdopen_fails(
        self, temp_dir: Path, monkeypatch
    ):
        test_file = temp_dir / "launch.json"
        opened = []
        closed = []
        real_mkstemp = tempfile.mkstemp
        real_close = os.close

        def tracking_mkstemp(*args, **kwargs):
            fd, name = real_mkstemp(*args, **kwargs)
            opened.append(fd)
            return fd, name

        def tracking_close(fd):
            closed.append(fd)
            real_close(fd)

        def broken_fdopen(*args, **kwargs):
            raise OSError("cannot wrap descriptor")

        monkeypatch.setattr("file_ops.tempfile.mkstemp", tracking_mkstemp)
        monkeypatch.setattr("file_ops.os.fdopen", broken_fdopen)
        monkeypatch.setattr("file_ops.os.close", tracking_close)

        with pytest.raises(OSError, match="cannot wrap descriptor"):
            FileOperations.write_file(test_file, "{}")

        assert closed == opened
        assert list(temp_dir.iterdir()) == []

    def test_dump_json_uses_two_space_indent_and_keeps_unicode(self):
        content = FileOperations.dump_json({"name": "Démarrer", "args": []})

        assert content == '{\n  "name": "Démarrer",\n  "args": []\n}'

    def test_load_json_parses_utf8(self, temp_dir: Path):
        test_file = temp_dir / "launch.json"
        test_file.write_text(json.dumps({"name": "世界"}), encoding="utf-8")

        assert FileOperations.load_json(test_file) == {"name": "世界"}

    def test_load_yaml_config_returns_dict(self, temp_dir: Path):
        config_file = temp_dir / "settings.yaml"
        config_file.write_text("launch_file: a.json\nclick_behavior: none\n")

        assert FileOperations.load_yaml_config(config_file) == {
            "launch_file": "a.json",
            "click_behavior": "none",
        }

    def test_load_yaml_config_rejects_non_mapping(self, temp_dir: Path):
        config_file = temp_dir / "settings.yaml"
        config_file.write_text("- a\n- b\n")

        with pytest.raises(ValueError, match="must be a mapping"):
            FileOperations.load_yaml_config(config_file)


class TestPathUtils:
    """Tests for PathUtils focusing on path resolution"""

    def test_resolve_workspace_prefers_argument(self, temp_dir: Path):
        assert PathUtils.resolve_workspace(temp_dir) == temp_dir.resolve()

    def test_resolve_workspace_falls_back_to_cwd(self, temp_dir: Path, monkeypatch):
        monkeypatch.delenv("LAUNCH_CATALOG_WORKSPACE", raising=False)
        monkeypatch.chdir(temp_dir)

        assert PathUtils.resolve_workspace() == temp_dir.resolve()

    def test_get_relative_path_inside_base(self, temp_dir: Path):
        path = temp_dir / ".vscode" / "launch.json"

        assert PathUtils.get_relative_path(path, temp_dir) == str(Path(".vscode/launch.json"))

    def test_get_relative_path_outside_base(self, temp_dir: Path):
        other = temp_dir.parent / "other" / "launch.json"

        assert PathUtils.get_relative_path(other, temp_dir) == str(other)
