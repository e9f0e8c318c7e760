"""
Configuration management for the Docsie connector.

Non-secret settings (timeouts, batch sizes, retry and rate-limit tuning,
logging) come from config.yaml. Credentials and ids come from environment
variables, which also override the matching YAML values.

There is no module-level configuration instance: the CLI builds one and
passes the resolved values into the clients, uploader and orchestrator.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

DEFAULT_DOCSIE_BASE_URL = "https://app.docsie.io/api_v2/003"
DEFAULT_KNOWLEDGE_BASE_ID = "docsie-kb"

REQUIRED_ENV_VARS = (
    "DOCSIE_API_KEY",
    "MAVEN_ORGANIZATION_ID",
    "MAVEN_AGENT_ID",
    "MAVEN_API_KEY",
)

# Environment variable -> dot path of the value it sets
ENV_OVERRIDES = {
    "DOCSIE_API_KEY": "docsie.api_key",
    "DOCSIE_BASE_URL": "docsie.base_url",
    "MAVEN_ORGANIZATION_ID": "maven.organization_id",
    "MAVEN_AGENT_ID": "maven.agent_id",
    "MAVEN_API_KEY": "maven.api_key",
    "MAVEN_APP_ID": "maven.app_id",
    "MAVEN_BASE_URL": "maven.base_url",
    "MAVEN_KNOWLEDGE_BASE_ID": "maven.knowledge_base_id",
}


class ConfigManager:
    """
    Loads configuration from a YAML file and the environment.
    """

    def __init__(self, config_path: str = "config.yaml", environ: Optional[Mapping[str, str]] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the YAML configuration file
            environ: Environment mapping to read overrides from (defaults to os.environ)
        """
        self.config_path = Path(config_path)
        self._environ = os.environ if environ is None else environ
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file, then apply environment overrides."""
        self._config = self._get_default_config()

        if self.config_path.exists():
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    loaded = yaml.safe_load(f) or {}
                if isinstance(loaded, dict):
                    _deep_merge(self._config, loaded)
                    logging.info(f"Configuration loaded from {self.config_path}")
                else:
                    logging.error(f"Ignoring configuration file {self.config_path}: expected a mapping")
            except (OSError, yaml.YAMLError) as e:
                logging.error(f"Failed to load configuration: {e}")
        else:
            logging.info(f"Configuration file not found: {self.config_path}, using defaults")

        self._apply_env_overrides()

    def _apply_env_overrides(self) -> None:
        for env_var, key_path in ENV_OVERRIDES.items():
            value = self._environ.get(env_var)
            if value:
                self._set(key_path, value)

    def _set(self, key_path: str, value: Any) -> None:
        keys = key_path.split('.')
        section = self._config
        for key in keys[:-1]:
            section = section.setdefault(key, {})
        section[keys[-1]] = value

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values."""
        return {
            "docsie": {
                "api_key": "",
                "base_url": DEFAULT_DOCSIE_BASE_URL,
                "timeout": 30.0,
                "page_size": 100,
                "rate_limit": {
                    "max_concurrent": 5,
                    "min_time": 0.2
                }
            },
            "maven": {
                "organization_id": "",
                "agent_id": "",
                "api_key": "",
                "app_id": "",
                "base_url": None,
                "knowledge_base_id": DEFAULT_KNOWLEDGE_BASE_ID,
                "timeout": 30.0
            },
            "upload": {
                "batch_size": 50,
                "retry": {
                    "max_attempts": 3,
                    "initial_delay": 1.0,
                    "backoff_multiplier": 2.0,
                    "max_delay": 30.0
                }
            },
            "sync": {
                "workspace_ids": []
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "paths": {
                "log_file": None
            }
        }

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "docsie.base_url")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("upload.batch_size")  # Returns 50
            config.get("docsie.rate_limit.min_time")  # Returns 0.2
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get a copy of an entire configuration section.

        Args:
            section: Name of the configuration section

        Returns:
            Dictionary containing the section configuration
        """
        return copy.deepcopy(self._config.get(section, {}))

    def reload(self) -> None:
        """Reload configuration from file and environment."""
        self._load_config()

    def validate_env(self) -> List[str]:
        """
        Return the required variables whose resolved value is missing or empty.

        A credential set in the YAML file counts as present even when the
        environment variable is not set.
        """
        return [name for name in REQUIRED_ENV_VARS if not self.get(ENV_OVERRIDES[name])]

    # Convenience properties for commonly used values

    @property
    def docsie_api_key(self) -> str:
        return self.get("docsie.api_key", "")

    @property
    def docsie_base_url(self) -> str:
        return self.get("docsie.base_url", DEFAULT_DOCSIE_BASE_URL)

    @property
    def docsie_timeout(self) -> float:
        return float(self.get("docsie.timeout", 30.0))

    @property
    def page_size(self) -> int:
        return int(self.get("docsie.page_size", 100))

    @property
    def max_concurrent(self) -> int:
        return int(self.get("docsie.rate_limit.max_concurrent", 5))

    @property
    def min_time(self) -> float:
        """Minimum spacing between Docsie requests, in seconds."""
        return float(self.get("docsie.rate_limit.min_time", 0.2))

    @property
    def maven_organization_id(self) -> str:
        return self.get("maven.organization_id", "")

    @property
    def maven_agent_id(self) -> str:
        return self.get("maven.agent_id", "")

    @property
    def maven_api_key(self) -> str:
        return self.get("maven.api_key", "")

    @property
    def maven_app_id(self) -> Optional[str]:
        return self.get("maven.app_id") or None

    @property
    def maven_base_url(self) -> Optional[str]:
        """Override for the Maven endpoint; None uses the SDK default."""
        return self.get("maven.base_url") or None

    @property
    def maven_timeout(self) -> float:
        return float(self.get("maven.timeout", 30.0))

    @property
    def knowledge_base_id(self) -> str:
        return self.get("maven.knowledge_base_id") or DEFAULT_KNOWLEDGE_BASE_ID

    @property
    def batch_size(self) -> int:
        return int(self.get("upload.batch_size", 50))

    @property
    def retry_settings(self) -> Dict[str, Any]:
        """Keyword arguments for RetryConfig."""
        return self.get_section("upload").get("retry", {})

    @property
    def workspace_ids(self) -> List[str]:
        return list(self.get("sync.workspace_ids") or [])

    @property
    def log_filename(self) -> Optional[str]:
        return self.get("paths.log_file")


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Recursively merge ``override`` into ``base`` in place."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
