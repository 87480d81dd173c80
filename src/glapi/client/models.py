"""Data models shared by all resource clients."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field


@dataclass
class Response:
    """Metadata of a completed HTTP exchange.

    Pagination fields are parsed from GitLab's ``X-*`` headers and are None
    when the header is missing or not an integer.
    """

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    method: str = ""
    url: str = ""
    total_items: int | None = None
    total_pages: int | None = None
    items_per_page: int | None = None
    current_page: int | None = None
    next_page: int | None = None
    previous_page: int | None = None

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> Response:
        """Build metadata from an httpx response."""
        headers = response.headers
        return cls(
            status_code=response.status_code,
            headers=dict(headers.items()),
            method=response.request.method,
            url=str(response.request.url),
            total_items=_int_header(headers, "X-Total"),
            total_pages=_int_header(headers, "X-Total-Pages"),
            items_per_page=_int_header(headers, "X-Per-Page"),
            current_page=_int_header(headers, "X-Page"),
            next_page=_int_header(headers, "X-Next-Page"),
            previous_page=_int_header(headers, "X-Prev-Page"),
        )


def _int_header(headers: httpx.Headers, name: str) -> int | None:
    value = headers.get(name)
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class RequestOptions(BaseModel):
    """Base for presence-aware request options.

    Only fields passed explicitly at construction (or assigned afterwards) are
    sent, so ``priority=0`` or ``description=""`` reach the server while
    omitted fields do not.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    def __setattr__(self, name: str, value: Any) -> None:
        super().__setattr__(name, value)
        # assigned fields count as explicitly set
        if name in type(self).model_fields:
            self.__pydantic_fields_set__.add(name)

    def to_body(self) -> dict[str, Any]:
        """Serialize explicitly set fields as a JSON body (None becomes null)."""
        return self.model_dump(mode="json", exclude_unset=True)

    def to_query(self) -> dict[str, str]:
        """Serialize explicitly set, non-None fields as query parameters."""
        params: dict[str, str] = {}
        for key, value in self.to_body().items():
            if value is None:
                continue
            if isinstance(value, bool):
                params[key] = "true" if value else "false"
            else:
                params[key] = str(value)
        return params


class ListOptions(RequestOptions):
    """Pagination options shared by list endpoints."""

    page: int | None = Field(default=None, ge=1)
    per_page: int | None = Field(default=None, ge=1, le=100)
