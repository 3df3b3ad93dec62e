"""Configuration management for the originals renamer."""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigurationError
from .flickr_client import DEFAULT_ENDPOINT, DEFAULT_PER_PAGE, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = ['jpg', 'jpeg', 'tif', 'tiff', 'heic', 'heif', 'png',
                      'cr2', 'nef', 'arw', 'dng', 'raf', 'orf', 'rw2']


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge overrides into base, skipping None values."""
    for key, value in overrides.items():
        if value is None:
            continue
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


class Config:
    """Manages renamer configuration from an optional YAML file plus overrides."""

    SEARCH_PATHS = [
        "renamer.local.yml",
        "renamer.yml",
    ]

    def __init__(self, config_path: Optional[str] = None,
                 overrides: Optional[Dict[str, Any]] = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to config file. If None, searches the current
                directory and falls back to defaults when nothing is found.
            overrides: Nested dict merged over the file, e.g. from CLI options.
                None values are ignored.
        """
        self.config_path = config_path or self._find_config_file()
        self.config: Dict[str, Any] = {}
        self._load_config()
        if overrides:
            _merge(self.config, copy.deepcopy(overrides))

    def _find_config_file(self) -> Optional[str]:
        """Find configuration file in standard locations."""
        for path in self.SEARCH_PATHS:
            config_file = Path.cwd() / path
            if config_file.exists():
                logger.info(f"Found config file: {config_file}")
                return str(config_file.resolve())
        return None

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if self.config_path is None:
            logger.debug("No config file found, using defaults")
            return
        try:
            with open(self.config_path, 'r') as f:
                self.config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load config from {self.config_path}: {e}") from e
        if not isinstance(self.config, dict):
            raise ConfigurationError(f"Config file {self.config_path} must contain a mapping")
        logger.info(f"Loaded configuration from {self.config_path}")

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key_path: Dot-separated path like 'flickr.api_key'
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self.config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    def get_api_key(self) -> str:
        return self.get('flickr.api_key', '')

    def get_username(self) -> str:
        return self.get('flickr.username', '')

    def get_set_id(self) -> str:
        return str(self.get('flickr.set_id', '') or '')

    def get_endpoint(self) -> str:
        return self.get('flickr.endpoint', DEFAULT_ENDPOINT)

    def get_timeout(self) -> float:
        """Network timeout in seconds for listing service calls."""
        return self.get('flickr.timeout_seconds', DEFAULT_TIMEOUT)

    def get_per_page(self) -> int:
        return self.get('flickr.per_page', DEFAULT_PER_PAGE)

    def get_originals_dir(self) -> str:
        return self.get('originals.dir', '')

    def get_supported_extensions(self) -> List[str]:
        """Get supported original file extensions (without dots, lowercase)."""
        extensions = self.get('originals.extensions') or DEFAULT_EXTENSIONS
        return [str(ext).lower().lstrip('.') for ext in extensions]

    def get_parallel_jobs(self) -> int:
        """Get number of concurrent metadata reads."""
        return self.get('process.parallel_jobs', 4)

    def is_dry_run(self) -> bool:
        """Check if this is a dry run."""
        return self.get('process.dry_run', False)

    def is_exclusive_matching(self) -> bool:
        """Check if each remote photo may match at most one original."""
        return self.get('matching.exclusive', False)

    def get_log_level(self) -> str:
        return self.get('logging.level', 'INFO')

    def validate_config(self, require_originals: bool = True) -> List[str]:
        """
        Validate configuration and return list of errors.

        Args:
            require_originals: Whether the originals directory must be set

        Returns:
            List of validation error messages
        """
        errors = []

        if not self.get_api_key():
            errors.append("Flickr API key not configured")
        if not self.get_username():
            errors.append("Flickr username not configured")
        if not self.get_set_id():
            errors.append("Flickr set id not configured")

        if require_originals:
            originals_dir = self.get_originals_dir()
            if not originals_dir:
                errors.append("Originals directory not configured")
            elif not Path(originals_dir).expanduser().is_dir():
                errors.append(f"Originals directory does not exist: {originals_dir}")

        parallel_jobs = self.get_parallel_jobs()
        if not isinstance(parallel_jobs, int) or parallel_jobs < 1 or parallel_jobs > 32:
            errors.append(f"Invalid parallel_jobs value: {parallel_jobs} (must be 1-32)")

        timeout = self.get_timeout()
        if not isinstance(timeout, (int, float)) or timeout <= 0:
            errors.append(f"Invalid timeout_seconds value: {timeout} (must be positive)")

        per_page = self.get_per_page()
        if not isinstance(per_page, int) or per_page < 1 or per_page > DEFAULT_PER_PAGE:
            errors.append(f"Invalid per_page value: {per_page} (must be 1-{DEFAULT_PER_PAGE})")

        return errors

    def __str__(self) -> str:
        return f"Config(path={self.config_path}, set={self.get_set_id()})"
