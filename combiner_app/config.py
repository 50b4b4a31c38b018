"""Configuration for the Outfit Combiner collaborators."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Dict, Optional

DEFAULT_API_BASE_URL = "http://localhost:5000"
DEFAULT_TIMEOUT_SECONDS = 5.0
DEFAULT_CONFIG_DIR = "config/environments"

# config field -> (file key, environment variable)
_SETTINGS = {
    "api_base_url": ("api_base_url", "API_BASE_URL"),
    "api_token": ("api_token", "API_TOKEN"),
    "weather_api_key": ("openweather_api_key", "OPENWEATHER_API_KEY"),
    "default_location": ("default_location", "DEFAULT_LOCATION"),
    "request_timeout_seconds": ("request_timeout_seconds", "REQUEST_TIMEOUT_SECONDS"),
}


@dataclass
class CombinerConfig:
    """Settings for the wardrobe backend and the weather lookup.

    The combination engine is pure and takes no configuration; only the
    collaborators around it do.
    """

    api_base_url: str = DEFAULT_API_BASE_URL
    api_token: Optional[str] = None
    weather_api_key: Optional[str] = None
    default_location: Optional[str] = None
    request_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    environment: str | None = None

    @classmethod
    def from_env(cls) -> "CombinerConfig":
        """Build a config from an optional environment file and the process environment.

        ``APP_CONFIG_PATH`` names the file directly; otherwise ``APP_ENV``
        selects ``<COMBINER_CONFIG_DIR>/<env>.yaml``. Environment variables win
        over file values so deployments can inject secrets.
        """

        env_name = os.getenv("APP_ENV")
        file_values = cls._read_env_file(cls._config_path(env_name))

        values: Dict[str, Optional[str]] = {}
        for field_name, (file_key, env_key) in _SETTINGS.items():
            values[field_name] = os.getenv(env_key) or file_values.get(file_key) or None

        timeout = values.pop("request_timeout_seconds")
        base_url = values.pop("api_base_url") or DEFAULT_API_BASE_URL
        return cls(
            api_base_url=base_url.rstrip("/"),
            request_timeout_seconds=float(timeout) if timeout else DEFAULT_TIMEOUT_SECONDS,
            environment=env_name,
            **values,
        )

    @staticmethod
    def _config_path(env_name: str | None) -> Path | None:
        explicit = os.getenv("APP_CONFIG_PATH")
        if explicit:
            return Path(explicit)
        if env_name:
            return Path(os.getenv("COMBINER_CONFIG_DIR", DEFAULT_CONFIG_DIR)) / f"{env_name}.yaml"
        return None

    @staticmethod
    def _read_env_file(path: Path | None) -> Dict[str, str]:
        """Read flat ``key: value`` lines; comments and blank lines are skipped."""

        if path is None or not path.exists():
            return {}
        values: Dict[str, str] = {}
        for line in path.read_text().splitlines():
            key, sep, raw = line.strip().partition(":")
            if not sep or key.startswith("#"):
                continue
            values[key.strip()] = raw.strip().strip("\"'")
        return values
