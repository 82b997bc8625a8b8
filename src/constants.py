from dataclasses import dataclass, field

@dataclass
class Config:
    SETTINGS_FILENAME: str = ".launch-catalog.yaml"
    ENV_VAR: str = "LAUNCH_CATALOG_WORKSPACE"
    LOG_LEVEL_ENV_VAR: str = "LAUNCH_CATALOG_LOG_LEVEL"
    DEFAULT_ENCODING: str = "utf-8"
    DEFAULT_VERSION: str = "0.2.0"
    DEFAULT_LAUNCH_FILE: str = ".vscode/launch.json"
    DEBOUNCE_DELAY: float = 0.05  # 50ms debounce
    JSON_INDENT: int = 2

    COPY_SUFFIX: str = " Copy"
    UNIQUE_SEPARATOR: str = " - "

    OPEN_SETTINGS_COMMAND: str = "ddd.debugConfig.openSettings"
    DEFAULT_CLICK_BEHAVIOR: str = "openSettings"
    CLICK_BEHAVIORS: tuple[str, ...] = ("openSettings", "none")

    REQUEST_TYPES: tuple[str, ...] = ("launch", "attach")

config = Config()
