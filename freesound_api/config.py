"""
Configuration Management Module

Settings for the Freesound client, read from the environment (optionally
seeded from a ``.env`` file) or from a JSON settings file.

Environment variables:
    FREESOUND_API_KEY     API key (required)
    FREESOUND_BASE_URL    API root, defaults to https://freesound.org/apiv2
    FREESOUND_TIMEOUT     Request timeout in seconds
    FREESOUND_LOG_LEVEL   Logging level name
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dotenv import load_dotenv

from .client import DEFAULT_BASE_URL, FreesoundClient, FreesoundError

logger = logging.getLogger(__name__)

ENV_API_KEY = "FREESOUND_API_KEY"
ENV_BASE_URL = "FREESOUND_BASE_URL"
ENV_TIMEOUT = "FREESOUND_TIMEOUT"
ENV_LOG_LEVEL = "FREESOUND_LOG_LEVEL"


class FreesoundConfigError(FreesoundError):
    """Missing or invalid client configuration."""
    pass


@dataclass
class FreesoundSettings:
    """Settings needed to build a FreesoundClient."""

    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    log_level: str = "WARNING"

    def validate(self) -> None:
        """Raise FreesoundConfigError if the settings cannot be used."""
        if not self.api_key:
            raise FreesoundConfigError(f"{ENV_API_KEY} must be set")
        if self.timeout <= 0:
            raise FreesoundConfigError(f"timeout must be positive, got {self.timeout}")

    @classmethod
    def from_env(
        cls,
        env_file: Optional[Union[str, Path]] = None,
        validate: bool = True,
    ) -> FreesoundSettings:
        """
        Read settings from environment variables.

        A ``.env`` file (the given one, or one found from the working
        directory) is loaded first; variables already set in the process
        environment win. Pass ``validate=False`` to apply overrides before
        calling validate() yourself.
        """
        if env_file is not None:
            load_dotenv(env_file, override=False)
        else:
            load_dotenv(override=False)

        timeout_raw = os.getenv(ENV_TIMEOUT, "").strip()
        try:
            timeout = float(timeout_raw) if timeout_raw else 30.0
        except ValueError as e:
            raise FreesoundConfigError(f"{ENV_TIMEOUT} is not a number: {timeout_raw!r}") from e

        settings = cls(
            api_key=os.getenv(ENV_API_KEY, "").strip(),
            base_url=os.getenv(ENV_BASE_URL, "").strip() or DEFAULT_BASE_URL,
            timeout=timeout,
            log_level=os.getenv(ENV_LOG_LEVEL, "").strip().upper() or "WARNING",
        )
        if validate:
            settings.validate()
        return settings

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> FreesoundSettings:
        """Create from dictionary."""
        return cls(
            api_key=data.get('api_key', ''),
            base_url=data.get('base_url') or DEFAULT_BASE_URL,
            timeout=float(data.get('timeout', 30.0)),
            log_level=str(data.get('log_level', 'WARNING')).upper(),
        )

    def save(self, path: Path) -> None:
        """Save settings to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.debug(f"Settings saved to {path}")

    @classmethod
    def load(cls, path: Path) -> FreesoundSettings:
        """Load settings from a JSON file; a missing file yields defaults."""
        path = Path(path)
        if not path.exists():
            return cls()

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise FreesoundConfigError(f"Invalid settings file {path}: {e}") from e
        if not isinstance(data, dict):
            raise FreesoundConfigError(f"Invalid settings file {path}: expected a JSON object")
        return cls.from_dict(data)

    def create_client(self, **kwargs) -> FreesoundClient:
        """Build a FreesoundClient from these settings."""
        self.validate()
        return FreesoundClient(
            self.api_key,
            base_url=self.base_url,
            timeout=self.timeout,
            **kwargs,
        )
