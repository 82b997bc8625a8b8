"""
File operations for the launch document and settings files
"""

import json
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from constants import config
from log import logger


class FileOperations:
    """Utility class for file operations with consistent error handling"""

    @staticmethod
    def read_file(path: Path, encoding: str = config.DEFAULT_ENCODING) -> str:
        """Read file content with error handling"""
        try:
            with open(path, encoding=encoding) as f:
                return f.read()
        except Exception as e:
            logger.error(f"Failed to read file {path}: {e}")
            raise

    @staticmethod
    def write_file(
        path: Path, content: str, encoding: str = config.DEFAULT_ENCODING
    ) -> None:
        """Write file content through a temporary sibling and swap it in"""
        tmp_path = None
        try:
            # Create target directory if needed
            path.parent.mkdir(parents=True, exist_ok=True)

            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
            )
            tmp_path = Path(tmp_name)
            try:
                f = os.fdopen(fd, "w", encoding=encoding)
            except Exception:
                os.close(fd)
                raise
            with f:
                f.write(content)
            # mkstemp creates 0600; keep the document's own permissions
            os.chmod(tmp_path, FileOperations.target_mode(path))
            os.replace(tmp_path, path)
        except Exception as e:
            logger.error(f"Failed to write file {path}: {e}")
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise

    @staticmethod
    def target_mode(path: Path) -> int:
        """Permission bits for a write to path: existing mode, else 0666 minus umask"""
        if path.exists():
            return stat.S_IMODE(path.stat().st_mode)
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask

    @staticmethod
    def load_yaml_config(path: Path) -> dict:
        """Load YAML settings file"""
        try:
            content = FileOperations.read_file(path)
            data = yaml.safe_load(content)
            if data is None:
                return {}
            if not isinstance(data, dict):
                raise ValueError(f"Settings in {path} must be a mapping")
            return data
        except yaml.YAMLError as e:
            logger.error(f"Invalid YAML in {path}: {e}")
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

    @staticmethod
    def load_json(path: Path) -> Any:
        """Parse a JSON file. Raises OSError or ValueError"""
        return json.loads(FileOperations.read_file(path))

    @staticmethod
    def dump_json(data: Any) -> str:
        return json.dumps(data, indent=config.JSON_INDENT, ensure_ascii=False)


class PathUtils:
    """Utility class for path operations"""

    @staticmethod
    def resolve_workspace(workspace: Optional[Union[Path, str]] = None) -> Path:
        """Pick the workspace root: argument, then environment, then cwd"""
        if workspace is None:
            workspace = os.environ.get(config.ENV_VAR) or Path.cwd()
        return Path(workspace).expanduser().resolve()

    @staticmethod
    def get_relative_path(file_path: Path, base_path: Path) -> str:
        """Display-friendly path relative to base when possible"""
        try:
            return str(file_path.relative_to(base_path))
        except ValueError:
            # File is outside base path
            return str(file_path)
