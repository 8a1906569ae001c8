"""
User configuration management for Image Duplicate Checker.

Supports configuration from multiple sources (in order of priority):
1. Runtime parameters (highest priority)
2. Environment variables
3. User config file (~/.dupecheck/config.json)
4. Default values from config.py (lowest priority)

Configuration file location: ~/.dupecheck/config.json

Example config.json:
{
    "image_extensions": [".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp"],
    "search_paths": [],
    "search_mode": "roots",
    "workers": 8
}
"""

import json
import os
from pathlib import Path
from typing import Any, Iterable, Optional
import logging

from .config import (
    IMAGE_EXTENSIONS,
    DEFAULT_WORKERS,
    DEFAULT_SEARCH_MODE,
)
from .models import ScanConfiguration

logger = logging.getLogger(__name__)


def _as_list(value: Any) -> list:
    """Accept a JSON list or a comma separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(',') if item.strip()]
    return list(value)


class UserConfig:
    """
    Manages user configuration from file and environment variables.

    Attributes are lazy-loaded and cached for performance.
    """

    _instance: Optional['UserConfig'] = None
    _config_data: Optional[dict] = None

    def __new__(cls):
        """Singleton pattern to ensure one config instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def config_dir(self) -> Path:
        """Get the configuration directory path."""
        env_dir = os.getenv('DUPECHECK_CONFIG_DIR')
        if env_dir:
            return Path(env_dir)

        return Path.home() / '.dupecheck'

    @property
    def config_file_path(self) -> Path:
        """Get the configuration file path."""
        return self.config_dir / 'config.json'

    def _load_config_file(self) -> dict:
        """Load configuration from JSON file."""
        if not self.config_file_path.exists():
            return {}

        try:
            with open(self.config_file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load config file {self.config_file_path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring config file {self.config_file_path}: expected a JSON object")
            return {}

        logger.debug(f"Loaded configuration from {self.config_file_path}")
        return data

    def _get_config_data(self) -> dict:
        """Get cached config data (lazy loading)."""
        if self._config_data is None:
            self._config_data = self._load_config_file()
        return self._config_data

    def reload(self):
        """Reload configuration from file."""
        self._config_data = None

    def get(self, key: str, default: Any = None, env_var: Optional[str] = None) -> Any:
        """
        Look up one setting.

        The environment variable wins over the config file, which wins over
        ``default``. Environment values are parsed as JSON when possible, so
        DUPECHECK_WORKERS=4 yields an int and a JSON array yields a list.
        """
        if env_var:
            env_value = os.getenv(env_var)
            if env_value is not None:
                try:
                    return json.loads(env_value)
                except (json.JSONDecodeError, TypeError):
                    return env_value

        config_data = self._get_config_data()
        if key in config_data:
            return config_data[key]

        return default

    @property
    def image_extensions(self) -> list:
        """Extensions that identify image files."""
        value = self.get(
            'image_extensions',
            default=sorted(IMAGE_EXTENSIONS),
            env_var='DUPECHECK_IMAGE_EXTENSIONS'
        )
        return _as_list(value) or sorted(IMAGE_EXTENSIONS)

    @property
    def search_paths(self) -> list:
        """Subdirectories (or glob patterns) of the workspace to search."""
        return _as_list(self.get('search_paths', default=[], env_var='DUPECHECK_SEARCH_PATHS'))

    @property
    def search_mode(self) -> str:
        """How search paths are interpreted: 'roots' or 'patterns'."""
        return str(self.get('search_mode', default=DEFAULT_SEARCH_MODE, env_var='DUPECHECK_SEARCH_MODE'))

    @property
    def workers(self) -> int:
        """Number of files hashed concurrently."""
        value = self.get('workers', default=DEFAULT_WORKERS, env_var='DUPECHECK_WORKERS')
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning(f"Invalid workers setting {value!r}, using {DEFAULT_WORKERS}")
            return DEFAULT_WORKERS

    def settings(self) -> dict:
        """Effective values of every setting, after env and file overrides."""
        return {
            'image_extensions': self.image_extensions,
            'search_paths': self.search_paths,
            'search_mode': self.search_mode,
            'workers': self.workers,
        }

    def to_scan_configuration(
        self,
        workspace_roots: Iterable[str],
        image_extensions: Optional[Iterable[str]] = None,
        search_paths: Optional[Iterable[str]] = None,
        search_mode: Optional[str] = None,
        workers: Optional[int] = None,
    ) -> ScanConfiguration:
        """
        Build the ScanConfiguration for one invocation.

        Explicit arguments override stored settings; None means "use the setting".
        """
        return ScanConfiguration(
            workspace_roots=tuple(os.path.abspath(str(r)) for r in workspace_roots),
            image_extensions=frozenset(image_extensions or self.image_extensions),
            search_paths=tuple(search_paths if search_paths is not None else self.search_paths),
            search_mode=search_mode or self.search_mode,
            workers=workers if workers is not None else self.workers,
        )

    def create_example_config(self):
        """Create an example configuration file."""
        self.config_dir.mkdir(parents=True, exist_ok=True)

        example_config = {
            "_comment": "Image Duplicate Checker configuration",
            "image_extensions": sorted(IMAGE_EXTENSIONS),
            "search_paths": [],
            "search_mode": DEFAULT_SEARCH_MODE,
            "workers": DEFAULT_WORKERS,
        }

        try:
            with open(self.config_file_path, 'w', encoding='utf-8') as f:
                json.dump(example_config, f, indent=2)
            logger.info(f"Created example config file at {self.config_file_path}")
            return True
        except OSError as e:
            logger.error(f"Failed to create example config: {e}")
            return False


# Global instance
_user_config = UserConfig()


def get_user_config() -> UserConfig:
    """Get the global UserConfig instance."""
    return _user_config
