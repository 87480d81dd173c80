"""Configuration loading for the GitLab client."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from glapi._version import __version__

DEFAULT_BASE_URL = "https://gitlab.com"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = f"glapi/{__version__}"


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class ClientConfig:
    """Connection settings for a GitLab instance.

    The token is optional: public projects can be read anonymously.
    """

    base_url: str = DEFAULT_BASE_URL
    token: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ClientConfig:
        """Create config from a mapping.

        Args:
            data: Mapping with optional base_url, token, timeout and user_agent keys

        Returns:
            ClientConfig instance

        Raises:
            ConfigError: If a value has the wrong shape
        """
        base_url = data.get("base_url") or DEFAULT_BASE_URL
        if not isinstance(base_url, str) or not base_url.startswith(("http://", "https://")):
            raise ConfigError(f"base_url must be an http(s) URL, got {base_url!r}")

        token = data.get("token") or None
        if token is not None and not isinstance(token, str):
            raise ConfigError("token must be a string")

        raw_timeout = data.get("timeout", DEFAULT_TIMEOUT)
        try:
            timeout = float(raw_timeout)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"timeout must be a number, got {raw_timeout!r}") from e
        if timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {timeout}")

        user_agent = data.get("user_agent") or DEFAULT_USER_AGENT

        return cls(base_url=base_url, token=token, timeout=timeout, user_agent=user_agent)

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Create config from GITLAB_BASE_URL, GITLAB_TOKEN and GITLAB_TIMEOUT."""
        return cls.from_dict(
            {
                "base_url": os.environ.get("GITLAB_BASE_URL"),
                "token": os.environ.get("GITLAB_TOKEN"),
                "timeout": os.environ.get("GITLAB_TIMEOUT", DEFAULT_TIMEOUT),
            }
        )
