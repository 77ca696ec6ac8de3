# core/config.py

"""
YAML configuration for the Homework Tracker.

Keys:
    data_dir:       directory holding homework_records.json and homework_items.json
    export_dir:     where CSV exports are written (defaults to data_dir)
    teacher_pin:    the shared PIN for the teacher views
    logging.level:  root log level name
    logging.file:   optional log file path

String values of the form `${VAR}` or `$VAR` are replaced from the environment,
so the PIN can be kept out of the file (e.g. `teacher_pin: ${HOMEWORK_PIN}`).
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml

from core.pin_gate import DEFAULT_TEACHER_PIN

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "data_dir": "~/Documents/HomeworkTracker",
    "export_dir": None,
    "teacher_pin": DEFAULT_TEACHER_PIN,
    "logging": {
        "level": "INFO",
        "file": None,
    },
}


class Config:
    def __init__(self, config_path: Optional[str] = None):
        if config_path:
            self.config_file = Path(config_path).expanduser().resolve()
        else:
            self.config_file = Path.cwd() / "config.yaml"

        self.config_dir = self.config_file.parent
        logger.debug(f"Using config file: {self.config_file}")

        self._ensure_config_exists()
        self._load_config()

    # === properties ===

    @property
    def data_dir(self) -> str:
        return os.path.expanduser(str(self.data["data_dir"]))

    @property
    def export_dir(self) -> str:
        export_dir = self.data.get("export_dir")
        return os.path.expanduser(str(export_dir)) if export_dir else self.data_dir

    @property
    def teacher_pin(self) -> str:
        return str(self.data["teacher_pin"])

    @property
    def log_level(self) -> str:
        return str(self.data["logging"].get("level") or "INFO").upper()

    @property
    def log_file(self) -> Optional[str]:
        log_file = self.data["logging"].get("file")
        return os.path.expanduser(str(log_file)) if log_file else None

    # === loading ===

    def _ensure_config_exists(self) -> None:
        """Create default config if it doesn't exist"""
        if self.config_file.exists():
            return

        try:
            logger.info(f"Creating default config file: {self.config_file}")
            self.config_dir.mkdir(parents=True, exist_ok=True)
            self.config_file.write_text(
                yaml.safe_dump(DEFAULT_CONFIG, sort_keys=False), encoding="utf-8"
            )
        except OSError as e:
            logger.warning(f"Could not write default config file: {e}")

    def _substitute_env_vars(self, data: Any) -> Any:
        """Recursively substitute environment variables in config data"""
        if isinstance(data, dict):
            return {key: self._substitute_env_vars(value) for key, value in data.items()}
        elif isinstance(data, list):
            return [self._substitute_env_vars(item) for item in data]
        elif isinstance(data, str):
            if data.startswith("${") and data.endswith("}"):
                return self._lookup_env_var(data[2:-1], data)
            elif data.startswith("$") and len(data) > 1:
                return self._lookup_env_var(data[1:], data)
            return data
        else:
            return data

    def _lookup_env_var(self, name: str, original: str) -> str:
        if name not in os.environ:
            logger.warning(
                f"Environment variable '{name}' is not set; using the literal value {original}"
            )
            return original

        return os.environ[name]

    def _merge_defaults(self, loaded: dict[str, Any]) -> dict[str, Any]:
        merged = copy.deepcopy(DEFAULT_CONFIG)

        for key, value in loaded.items():
            if isinstance(merged.get(key), dict):
                # an empty section such as "logging:" loads as None
                if value is None:
                    continue

                if not isinstance(value, dict):
                    raise ValueError(f"Invalid config format: '{key}' must be a dictionary")

                merged[key].update(value)
            else:
                merged[key] = value

        return merged

    def _load_config(self) -> None:
        """Load configuration from file, falling back to defaults on error"""
        try:
            with open(self.config_file, encoding="utf-8") as f:
                loaded = yaml.safe_load(f)

            if loaded is None:
                loaded = {}

            if not isinstance(loaded, dict):
                raise ValueError("Invalid config format: root must be a dictionary")

            self.data = self._merge_defaults(self._substitute_env_vars(loaded))
            logger.debug(f"Loaded config from {self.config_file}")

        except (OSError, yaml.YAMLError, ValueError) as e:
            logger.error(f"Error loading config: {e}")
            logger.info("Using default configuration")
            self.data = copy.deepcopy(DEFAULT_CONFIG)
