"""glapi - GitLab REST API client binding."""

from glapi._version import __version__
from glapi.client import APIError, Client, DecodeError, GitLabError, InvalidIDError, TransportError
from glapi.config import ClientConfig, ConfigError

__all__ = [
    "APIError",
    "Client",
    "ClientConfig",
    "ConfigError",
    "DecodeError",
    "GitLabError",
    "InvalidIDError",
    "TransportError",
    "__version__",
]
