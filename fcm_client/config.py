from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fcm_client.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_SCOPES = [
    "https://www.googleapis.com/auth/cloud-platform",
    "https://www.googleapis.com/auth/firebase.messaging",
]

# Variables the Google client libraries read, used when no FCM_* value is set
GOOGLE_PROJECT_ENV_VARS = ("GOOGLE_CLOUD_PROJECT", "GCP_PROJECT")
GOOGLE_CREDENTIALS_ENV_VAR = "GOOGLE_APPLICATION_CREDENTIALS"

# ${VAR} or ${VAR:-default}
_PLACEHOLDER_PATTERN = re.compile(r"\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::-(?P<default>[^}]*))?\}")


def expand_env_vars(text: str) -> str:
    """
    Replace ${VAR} and ${VAR:-default} placeholders with environment values.

    Comment lines are copied unchanged, so a commented-out setting may
    reference a variable that is not set.

        firebase:
          project_id: ${GOOGLE_CLOUD_PROJECT:-my-project}

    Raises:
        ConfigurationError: If a variable without a default is not set
    """

    def substitute(match: re.Match[str]) -> str:
        name, default = match.group("name", "default")
        value = os.environ.get(name, default)
        if value is None:
            msg = f"Environment variable '{name}' is referenced but not set"
            raise ConfigurationError(msg, context={"variable": name})
        return value

    return "\n".join(
        line if line.lstrip().startswith("#") else _PLACEHOLDER_PATTERN.sub(substitute, line)
        for line in text.split("\n")
    )


def load_config_from_yaml(config_path: str | Path) -> dict:
    """
    Load a YAML configuration file and expand environment variables.

    Args:
        config_path: Path to the YAML file

    Returns:
        Dictionary containing the parsed configuration; {} for an empty file

    Raises:
        ConfigurationError: If the file is missing, invalid, or references unset variables
    """
    config_file = Path(config_path)
    if not config_file.exists():
        msg = f"Configuration file not found at {config_path}"
        raise ConfigurationError(msg, context={"config_file": str(config_path)})

    try:
        expanded_config = expand_env_vars(config_file.read_text())
    except ConfigurationError as e:
        msg = f"Error expanding environment variables in {config_path}: {e}"
        raise ConfigurationError(msg, context={"config_file": str(config_path), **e.context}) from None

    try:
        config_dict = yaml.safe_load(expanded_config)
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in {config_path}: {e}"
        raise ConfigurationError(msg, context={"config_file": str(config_path)}) from None

    if config_dict is None:
        return {}
    if not isinstance(config_dict, dict):
        msg = f"{config_path} must contain a YAML mapping/dictionary at root level"
        raise ConfigurationError(msg, context={"config_file": str(config_path)})

    return config_dict


class Settings(BaseSettings):
    """
    Client settings.

    Every field is read from ``FCM_<FIELD>``. The project id and the
    credentials file additionally fall back to the variables Google tools
    use (GOOGLE_CLOUD_PROJECT, GCP_PROJECT, GOOGLE_APPLICATION_CREDENTIALS)
    when neither an explicit value nor the FCM_ variable is set.
    """

    model_config = SettingsConfigDict(
        env_prefix="FCM_",
        env_file=None,
        case_sensitive=False,
        frozen=True,
    )

    # Firebase project and credentials
    project_id: str | None = None
    credentials_file: Path | None = Field(
        default=None,
        description="Service account JSON file; Application Default Credentials when unset",
    )
    scopes: list[str] = Field(default_factory=lambda: list(DEFAULT_SCOPES))

    # Endpoints
    fcm_base_url: str = "https://fcm.googleapis.com"
    iid_base_url: str = "https://iid.googleapis.com"

    # HTTP
    timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for each HTTP request, enforced by httpx",
    )
    verify_tls: bool = True
    ca_bundle: Path | None = None

    # Observability
    log_level: str = "INFO"
    log_json: bool = True

    @field_validator("fcm_base_url", "iid_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("timeout_seconds", mode="after")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            msg = "http.timeout_seconds must be positive"
            raise ValueError(msg)
        return v

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"logging.level must be DEBUG, INFO, WARNING, ERROR or CRITICAL, got {v!r}"
            raise ValueError(msg)
        return level

    @model_validator(mode="before")
    @classmethod
    def google_env_fallbacks(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if data.get("project_id") is None:
            project_id = next((os.environ[name] for name in GOOGLE_PROJECT_ENV_VARS if os.environ.get(name)), None)
            if project_id is not None:
                data["project_id"] = project_id
        if data.get("credentials_file") is None and os.environ.get(GOOGLE_CREDENTIALS_ENV_VAR):
            data["credentials_file"] = os.environ[GOOGLE_CREDENTIALS_ENV_VAR]
        return data


def _flatten_config(config_dict: dict) -> dict:
    """Flatten the nested YAML structure into Settings field names."""
    flat_config: dict[str, object] = {}

    firebase = config_dict.get("firebase")
    if isinstance(firebase, dict):
        for key in ("project_id", "credentials_file", "scopes"):
            if firebase.get(key) is not None:
                flat_config[key] = firebase[key]

    endpoints = config_dict.get("endpoints")
    if isinstance(endpoints, dict):
        if endpoints.get("fcm"):
            flat_config["fcm_base_url"] = endpoints["fcm"]
        if endpoints.get("iid"):
            flat_config["iid_base_url"] = endpoints["iid"]

    http = config_dict.get("http")
    if isinstance(http, dict):
        for key in ("timeout_seconds", "verify_tls", "ca_bundle"):
            if http.get(key) is not None:
                flat_config[key] = http[key]

    logging_section = config_dict.get("logging")
    if isinstance(logging_section, dict):
        flat_config["log_level"] = logging_section.get("level", "INFO")
        flat_config["log_json"] = logging_section.get("json", True)

    return flat_config


def load_settings(config_path: str | Path | None = None) -> Settings:
    """
    Build Settings from an optional YAML file plus the environment.

    Values from the file take precedence over environment variables.

    Args:
        config_path: YAML file path. Falls back to FCM_CONFIG_PATH; when
                     neither is set only the environment is used.

    Raises:
        ConfigurationError: If the file or the resulting settings are invalid
    """
    if config_path is None:
        config_path = os.environ.get("FCM_CONFIG_PATH")

    flat_config: dict = {}
    if config_path:
        flat_config = _flatten_config(load_config_from_yaml(config_path))
        logger.debug("Loaded configuration file", extra={"config_file": str(config_path)})

    try:
        return Settings(**flat_config)
    except ValidationError as e:
        msg = f"Configuration validation error: {e}"
        raise ConfigurationError(msg, context={"config_file": str(config_path)}) from e
