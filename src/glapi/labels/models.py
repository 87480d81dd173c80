"""Data models for the labels resource."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from glapi.client.models import ListOptions, RequestOptions


@dataclass(frozen=True)
class Label:
    """A project label as returned by the server."""

    id: int
    name: str
    color: str = ""
    text_color: str = ""
    description: str | None = None
    open_issues_count: int = 0
    closed_issues_count: int = 0
    open_merge_requests_count: int = 0
    subscribed: bool = False
    priority: int | None = None
    is_project_label: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> Label:
        """Create a Label from a decoded JSON object.

        Unknown keys are ignored; null optional fields map to their defaults.

        Raises:
            TypeError: If data is not a JSON object
            KeyError: If id or name is missing
            ValueError: If a known field has the wrong JSON type
        """
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")

        label_id = _checked_int("id", data["id"], None)
        name = _checked_str("name", data["name"], None)
        if label_id is None or name is None:
            raise ValueError(f"id and name must not be null, got id={label_id!r} name={name!r}")

        return cls(
            id=label_id,
            name=name,
            color=_checked_str("color", data.get("color"), ""),
            text_color=_checked_str("text_color", data.get("text_color"), ""),
            description=_checked_str("description", data.get("description"), None),
            open_issues_count=_checked_int("open_issues_count", data.get("open_issues_count"), 0),
            closed_issues_count=_checked_int(
                "closed_issues_count", data.get("closed_issues_count"), 0
            ),
            open_merge_requests_count=_checked_int(
                "open_merge_requests_count", data.get("open_merge_requests_count"), 0
            ),
            subscribed=_checked_bool("subscribed", data.get("subscribed")),
            priority=_checked_int("priority", data.get("priority"), None),
            is_project_label=_checked_bool("is_project_label", data.get("is_project_label")),
        )


def _checked_int(key: str, value: Any, default: int | None) -> int | None:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    return value


def _checked_str(key: str, value: Any, default: str | None) -> str | None:
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string, got {value!r}")
    return value


def _checked_bool(key: str, value: Any) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be a boolean, got {value!r}")
    return value


# Request options. Only explicitly set fields are sent.


class CreateLabelOptions(RequestOptions):
    """Body of POST /projects/:id/labels."""

    name: str | None = None
    color: str | None = None
    description: str | None = None
    priority: int | None = None


class UpdateLabelOptions(RequestOptions):
    """Body of PUT /projects/:id/labels/:label_id."""

    name: str | None = None
    new_name: str | None = None
    color: str | None = None
    description: str | None = None
    priority: int | None = None


class DeleteLabelOptions(RequestOptions):
    """Body of DELETE /projects/:id/labels/:label_id."""

    name: str | None = None


class ListLabelsOptions(ListOptions):
    """Query of GET /projects/:id/labels."""

    with_counts: bool | None = None
    include_ancestor_groups: bool | None = None
    search: str | None = None
