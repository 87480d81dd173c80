"""Client - shared HTTP layer for the GitLab REST API."""

from glapi.client.client import Client, normalize_base_url, parse_error_message
from glapi.client.exceptions import (
    APIError,
    DecodeError,
    GitLabError,
    InvalidIDError,
    TransportError,
)
from glapi.client.ids import ResourceID, path_segment
from glapi.client.models import ListOptions, RequestOptions, Response

__all__ = [
    "APIError",
    "Client",
    "DecodeError",
    "GitLabError",
    "InvalidIDError",
    "ListOptions",
    "RequestOptions",
    "ResourceID",
    "Response",
    "TransportError",
    "normalize_base_url",
    "parse_error_message",
    "path_segment",
]
