"""Async client for Firebase Cloud Messaging and the Instance ID topic APIs."""

from fcm_client.client import FCMClient
from fcm_client.config import Settings, load_settings
from fcm_client.exceptions import (
    ApiError,
    AuthError,
    ConfigurationError,
    ConstructionError,
    DecodeError,
    FCMClientError,
    InvalidRequestError,
    ServerError,
    TransportError,
    UnexpectedStatusError,
)
from fcm_client.logging_config import configure_json_logging, configure_logging
from fcm_client.models import *  # noqa: F403
from fcm_client.models import __all__ as _models_all

__all__ = [
    "ApiError",
    "AuthError",
    "ConfigurationError",
    "ConstructionError",
    "DecodeError",
    "FCMClient",
    "FCMClientError",
    "InvalidRequestError",
    "ServerError",
    "Settings",
    "TransportError",
    "UnexpectedStatusError",
    "configure_json_logging",
    "configure_logging",
    "load_settings",
    *_models_all,
]
