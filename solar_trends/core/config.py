"""Configuration loading for the analyzer: config.yaml plus .env secrets."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_HTTP_TIMEOUT = 10
DEFAULT_DEADLINE_SECONDS = 30.0


def load_config(config_path: str | Path = "config.yaml") -> Dict[str, Any]:
    """
    Load configuration from the specified YAML file.

    Args:
        config_path (str | Path): Path to the configuration file. Defaults to "config.yaml".

    Returns:
        Dict[str, Any]: A dictionary containing the configuration settings.
    """
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found at {config_path}")

    with open(config_file, "r", encoding="utf-8") as file:
        config_data = yaml.safe_load(file)

    if not config_data:
        raise ValueError(f"Configuration file {config_path} is empty or invalid.")

    return config_data


def source_setting(config: Dict[str, Any], key: str, default: Any = None) -> Any:
    """Return ``config["sources"][key]`` or ``default`` when unset."""
    return (config.get("sources") or {}).get(key, default)


def http_timeout(config: Dict[str, Any]) -> float:
    return float((config.get("http") or {}).get("timeout_seconds", DEFAULT_HTTP_TIMEOUT))


def analysis_deadline(config: Dict[str, Any]) -> float:
    return float((config.get("analysis") or {}).get("deadline_seconds", DEFAULT_DEADLINE_SECONDS))


def weather_api_key() -> Optional[str]:
    """OpenWeatherMap key from the environment; ``None`` when not configured."""
    return os.getenv("OPENWEATHER_API_KEY") or None
