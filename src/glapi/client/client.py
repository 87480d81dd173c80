"""Client - shared HTTP layer for the GitLab REST API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from glapi.client.exceptions import APIError, DecodeError, TransportError
from glapi.client.models import Response
from glapi.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, ClientConfig
from glapi.logging import get_logger, sanitize_for_log, truncate_output

if TYPE_CHECKING:
    from glapi.labels import LabelsService

logger = get_logger("client")

API_VERSION_PATH = "api/v4/"


def normalize_base_url(base_url: str) -> str:
    """Make sure the base URL ends in ``/api/v4/``."""
    if not base_url.endswith("/"):
        base_url += "/"
    if not base_url.endswith(API_VERSION_PATH):
        base_url += API_VERSION_PATH
    return base_url


def parse_error_message(raw: Any) -> str:
    """Flatten a GitLab error payload into a single readable string.

    GitLab returns plain strings, lists, or field -> messages mappings, e.g.
    ``{"name": ["has already been taken"]}``.
    """
    if isinstance(raw, str):
        return raw
    if isinstance(raw, list):
        return "[" + ", ".join(parse_error_message(item) for item in raw) + "]"
    if isinstance(raw, dict):
        parts = [f"{{{key}: {parse_error_message(value)}}}" for key, value in raw.items()]
        return ", ".join(sorted(parts))
    return f"failed to parse unexpected error type: {type(raw).__name__}"


class Client:
    """Synchronous GitLab API client.

    Resource clients hang off it as attributes (``client.labels``) and share
    its transport.
    """

    def __init__(
        self,
        token: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            token: Personal/project access token sent as PRIVATE-TOKEN
            base_url: GitLab instance URL, with or without the /api/v4 suffix
            timeout: Transport timeout in seconds
            user_agent: User-Agent header value
            transport: Custom httpx transport (for testing/proxies)
        """
        from glapi.labels import LabelsService  # noqa: PLC0415

        self.token = token
        self.base_url = normalize_base_url(base_url)
        self.timeout = timeout
        self.user_agent = user_agent
        self._transport = transport
        self._client: httpx.Client | None = None

        self.labels: LabelsService = LabelsService(self)

    @classmethod
    def from_config(
        cls, config: ClientConfig, transport: httpx.BaseTransport | None = None
    ) -> Client:
        """Create a client from a ClientConfig."""
        return cls(
            token=config.token,
            base_url=config.base_url,
            timeout=config.timeout,
            user_agent=config.user_agent,
            transport=transport,
        )

    @property
    def client(self) -> httpx.Client:
        """Get or create the underlying HTTP client."""
        if self._client is None:
            headers = {
                "Accept": "application/json",
                "User-Agent": self.user_agent,
            }
            if self.token:
                headers["PRIVATE-TOKEN"] = self.token
            self._client = httpx.Client(
                base_url=self.base_url,
                headers=headers,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> tuple[Any, Response]:
        """Issue a single API call and decode its JSON body.

        Args:
            method: HTTP method
            path: Path relative to the API root, already escaped
            params: Query parameters
            json: JSON request body

        Returns:
            Tuple of decoded body (None when the body is empty) and response metadata

        Raises:
            TransportError: If no response was received
            APIError: If the server returned a non-2xx status
            DecodeError: If the body is not valid JSON
        """
        url = path.lstrip("/")
        logger.debug("%s %s params=%s", method, sanitize_for_log(url), params)

        try:
            http_response = self.client.request(method, url, params=params or None, json=json)
        except httpx.RequestError as e:
            logger.error("%s %s failed: %s", method, sanitize_for_log(url), e)
            raise TransportError(f"{method} {sanitize_for_log(url)}: {e}") from e

        response = Response.from_httpx(http_response)

        if not http_response.is_success:
            raise self._api_error(http_response, response)

        if not http_response.content:
            return None, response

        try:
            data = http_response.json()
        except ValueError as e:
            raise DecodeError(
                f"{method} {sanitize_for_log(response.url)}: invalid JSON in response body: {e}",
                response,
            ) from e

        return data, response

    def _api_error(self, http_response: httpx.Response, response: Response) -> APIError:
        """Build an APIError from a non-2xx response."""
        body = http_response.text
        try:
            data = http_response.json()
        except ValueError:
            data = None

        if isinstance(data, dict) and "message" in data:
            server_message = parse_error_message(data["message"])
        elif isinstance(data, dict) and "error" in data:
            server_message = parse_error_message(data["error"])
        elif body:
            server_message = f"failed to parse unknown error format: {body}"
        else:
            server_message = ""

        url = sanitize_for_log(response.url)
        logger.warning(
            "%s %s returned %d: %s",
            response.method,
            url,
            response.status_code,
            sanitize_for_log(truncate_output(server_message, 500)),
        )
        message = f"{response.method} {url}: {response.status_code} {server_message}"
        return APIError(message.rstrip(), response, server_message)
