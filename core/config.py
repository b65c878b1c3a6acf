import os
from dataclasses import dataclass
from typing import Mapping, Optional

import yaml

from core.errors import ConfigurationError


class ConfigLoader:
    _instance = None
    _config = None

    def __new__(cls):
        """
        Create a singleton instance of ConfigLoader.
        Loads configuration from YAML file on first instantiation.
        """
        if cls._instance is None:
            cls._instance = super(ConfigLoader, cls).__new__(cls)
            cls._load_config()
        return cls._instance

    @classmethod
    def _load_config(cls):
        """
        Load the configuration from the YAML file into the class variable _config.

        The path defaults to config.yaml in the project root and can be moved with
        the WP_MCP_CONFIG environment variable. A missing file means "all defaults".
        """
        config_path = os.environ.get("WP_MCP_CONFIG") or os.path.join(os.path.dirname(__file__), "..", "config.yaml")
        config_path = os.path.abspath(config_path)
        if not os.path.isfile(config_path):
            cls._config = {}
            return
        with open(config_path, "r", encoding="utf-8") as f:
            cls._config = yaml.safe_load(f) or {}

    @classmethod
    def reset(cls):
        """
        Drop the cached configuration so the next access reloads it.
        """
        cls._instance = None
        cls._config = None

    def get_config(self):
        """
        Return the loaded configuration dictionary.
        """
        return self._config


def get_config():
    """
    Helper function to get the singleton configuration instance's config dictionary.
    """
    return ConfigLoader().get_config()


@dataclass(frozen=True)
class Credential:
    user: str
    app_password: str


@dataclass(frozen=True)
class ClientConfig:
    """Where the WordPress REST API lives and how to authenticate against it."""

    base_url: str
    credential: Optional[Credential] = None
    timeout: float = 30.0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """Build a config from WP_URL, WP_APP_USER and WP_APP_PASSWORD.

        WP_URL is mandatory. The credential is only set when both parts are non-empty.
        """
        env = os.environ if environ is None else environ
        base_url = (env.get("WP_URL") or "").strip()
        if not base_url:
            raise ConfigurationError("WP_URL environment variable is not set.")
        if base_url.endswith("/"):
            base_url = base_url[:-1]

        user = env.get("WP_APP_USER")
        password = env.get("WP_APP_PASSWORD")
        credential = Credential(user, password) if user and password else None

        timeout = float((get_config() or {}).get("request_timeout", 30.0))
        return cls(base_url=base_url, credential=credential, timeout=timeout)
