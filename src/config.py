from pathlib import Path
from typing import Optional, Union

from constants import config
from log import logger
from file_ops import FileOperations, PathUtils


class SettingsValidator:
    @staticmethod
    def validate_launch_file(launch_file) -> str:
        if not isinstance(launch_file, str) or not launch_file.strip():
            raise ValueError(
                f"'launch_file' must be a non-empty string, got {launch_file!r}"
            )
        if Path(launch_file).is_absolute():
            raise ValueError(
                f"'launch_file' must be relative to the workspace, got {launch_file}"
            )
        return launch_file

    @staticmethod
    def validate_click_behavior(click_behavior) -> str:
        if click_behavior not in config.CLICK_BEHAVIORS:
            available = ", ".join(config.CLICK_BEHAVIORS)
            raise ValueError(
                f"Unknown click_behavior '{click_behavior}'. Available: {available}"
            )
        return click_behavior

    @staticmethod
    def validate_debounce(delay) -> float:
        if isinstance(delay, bool) or not isinstance(delay, (int, float)) or delay < 0:
            raise ValueError(f"'debounce_delay' must be a non-negative number, got {delay!r}")
        return float(delay)


class CatalogSettings:
    """Workspace settings, optionally overridden by the YAML settings file"""

    def __init__(self, workspace: Optional[Union[Path, str]] = None):
        self.workspace_root = PathUtils.resolve_workspace(workspace)
        self.settings_path = self.workspace_root / config.SETTINGS_FILENAME
        self.launch_file: str = config.DEFAULT_LAUNCH_FILE
        self.click_behavior: str = config.DEFAULT_CLICK_BEHAVIOR
        self.debounce_delay: float = config.DEBOUNCE_DELAY
        self._load_and_validate_settings()

    @property
    def launch_path(self) -> Path:
        return self.workspace_root / self.launch_file

    def _load_and_validate_settings(self) -> None:
        """Load and validate YAML settings when the file exists"""
        if not self.settings_path.exists():
            logger.debug(f"No settings file in {self.workspace_root}, using defaults")
            return

        try:
            data = FileOperations.load_yaml_config(self.settings_path)

            self.launch_file = SettingsValidator.validate_launch_file(
                data.get("launch_file", config.DEFAULT_LAUNCH_FILE)
            )
            self.click_behavior = SettingsValidator.validate_click_behavior(
                data.get("click_behavior", config.DEFAULT_CLICK_BEHAVIOR)
            )
            self.debounce_delay = SettingsValidator.validate_debounce(
                data.get("debounce_delay", config.DEBOUNCE_DELAY)
            )

            logger.info(
                f"Loaded settings from {self.settings_path} "
                f"(launch_file={self.launch_file}, click_behavior={self.click_behavior})"
            )

        except Exception as e:
            logger.error(f"Failed to load settings from {self.settings_path}: {e}")
            raise
