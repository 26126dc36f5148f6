"""
SDK configuration.

ClientConfig holds the API key and transport settings. It can be built
directly, from the JSON key file downloaded from the CDP portal, or from
environment variables.
"""

from __future__ import annotations
import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Optional

from .auth.authenticator import Credential
from .constants import BASE_PATH, DEFAULT_SOURCE
from .runtime.errors import ConfigurationError, InvalidKeyFormatError


DEFAULT_KEY_FILE = "cdp_api_key.json"
ENV_API_KEY_NAME = "CDP_API_KEY_NAME"
ENV_API_KEY_PRIVATE_KEY = "CDP_API_KEY_PRIVATE_KEY"


@dataclass
class ClientConfig:
    """Configuration for the CDP API client."""

    api_key_name: str = ""
    private_key: str = ""
    base_path: str = BASE_PATH
    timeout: float = 30.0
    max_retries: int = 3
    retry_delay: float = 1.0
    retry_backoff: float = 2.0
    debug: bool = False
    source: str = DEFAULT_SOURCE
    source_version: Optional[str] = None

    def credential(self) -> Credential:
        """
        Parse the configured key into a Credential.

        Raises:
            ConfigurationError: If the key name or private key is missing
            InvalidKeyFormatError: If the private key cannot be parsed
        """
        if not self.api_key_name:
            raise ConfigurationError("Invalid configuration: API key name is empty")
        if not self.private_key:
            raise ConfigurationError("Invalid configuration: private key is empty")
        return Credential.from_private_key(
            self.api_key_name,
            self.private_key,
            source=self.source,
            source_version=self.source_version,
        )

    def with_options(self, **overrides: Any) -> ClientConfig:
        return replace(self, **overrides)

    @classmethod
    def from_json(cls, file_path: str = DEFAULT_KEY_FILE, **overrides: Any) -> ClientConfig:
        """
        Load the API key from a JSON key file.

        The file holds ``{"name": ..., "privateKey": ...}``; ``id`` is accepted
        in place of ``name``. A leading ``~`` is expanded.

        Raises:
            ConfigurationError: If the file does not exist
            InvalidKeyFormatError: If the file cannot be parsed or lacks a value
        """
        path = Path(file_path).expanduser()
        if not path.exists():
            raise ConfigurationError(f"Invalid configuration: file not found at {path}")

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise InvalidKeyFormatError("Not able to parse the configuration file", cause=e)
        except OSError as e:
            raise InvalidKeyFormatError(
                f"An error occurred while reading the configuration file: {e}", cause=e
            )

        if not isinstance(data, dict):
            raise InvalidKeyFormatError("Invalid configuration: missing configuration values")

        name = data.get("name") or data.get("id")
        private_key = data.get("privateKey")
        if not name or not private_key:
            raise InvalidKeyFormatError("Invalid configuration: missing configuration values")

        return cls(api_key_name=name, private_key=private_key, **overrides)

    @classmethod
    def from_env(cls, **overrides: Any) -> ClientConfig:
        """
        Load the API key from CDP_API_KEY_NAME and CDP_API_KEY_PRIVATE_KEY.

        Raises:
            ConfigurationError: If either variable is unset
        """
        name = os.environ.get(ENV_API_KEY_NAME, "")
        private_key = os.environ.get(ENV_API_KEY_PRIVATE_KEY, "")
        if not name or not private_key:
            raise ConfigurationError(
                f"Invalid configuration: {ENV_API_KEY_NAME} and {ENV_API_KEY_PRIVATE_KEY} must be set"
            )
        return cls(api_key_name=name, private_key=private_key, **overrides)


__all__ = [
    "ClientConfig",
    "DEFAULT_KEY_FILE",
    "ENV_API_KEY_NAME",
    "ENV_API_KEY_PRIVATE_KEY",
]
