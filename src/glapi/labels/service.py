"""LabelsService - project label endpoints of the GitLab API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from glapi.client.exceptions import DecodeError
from glapi.client.ids import path_segment
from glapi.labels.models import (
    CreateLabelOptions,
    DeleteLabelOptions,
    Label,
    ListLabelsOptions,
    UpdateLabelOptions,
)
from glapi.logging import get_logger, sanitize_for_log

if TYPE_CHECKING:
    from glapi.client.client import Client
    from glapi.client.models import Response

logger = get_logger("labels")


def _decode_label(data: Any, response: Response) -> Label:
    try:
        return Label.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise DecodeError(
            f"{response.method} {sanitize_for_log(response.url)}: invalid label: {e!r}", response
        ) from e


class LabelsService:
    """Handles communication with the label related methods of the API.

    Every method validates its identifiers before touching the network, so an
    InvalidIDError never costs a request.
    """

    def __init__(self, client: Client) -> None:
        self.client = client

    def _labels_path(self, pid: int | str) -> str:
        return f"projects/{path_segment(pid)}/labels"

    def _label_path(self, pid: int | str, label: int | str) -> str:
        return f"{self._labels_path(pid)}/{path_segment(label)}"

    def list_labels(
        self, pid: int | str, opt: ListLabelsOptions | None = None
    ) -> tuple[list[Label], Response]:
        """Get all labels for a given project.

        Args:
            pid: Project ID or path
            opt: Pagination and filter options passed as query parameters

        Returns:
            Tuple of labels in server order and response metadata

        Raises:
            InvalidIDError: If pid is not an int or str
            DecodeError: If the body is not a JSON array of labels
        """
        path = self._labels_path(pid)
        params = opt.to_query() if opt is not None else None
        data, response = self.client.request("GET", path, params=params)

        if not isinstance(data, list):
            raise DecodeError(
                f"{response.method} {sanitize_for_log(response.url)}: expected a JSON array, "
                f"got {type(data).__name__}",
                response,
            )
        labels = [_decode_label(item, response) for item in data]
        logger.debug("Listed %d label(s) for project %s", len(labels), pid)
        return labels, response

    def get_label(self, pid: int | str, label: int | str) -> tuple[Label, Response]:
        """Get a single label for a given project.

        Args:
            pid: Project ID or path
            label: Label ID or name
        """
        data, response = self.client.request("GET", self._label_path(pid, label))
        return _decode_label(data, response), response

    def create_label(
        self, pid: int | str, opt: CreateLabelOptions | None = None
    ) -> tuple[Label, Response]:
        """Create a new label for a given project.

        Args:
            pid: Project ID or path
            opt: Label attributes; only explicitly set fields are sent

        Returns:
            Tuple of the created label and response metadata
        """
        path = self._labels_path(pid)
        body = opt.to_body() if opt is not None else None
        data, response = self.client.request("POST", path, json=body)
        created = _decode_label(data, response)
        logger.info("Created label %r (id=%d) in project %s", created.name, created.id, pid)
        return created, response

    def update_label(
        self, pid: int | str, label: int | str, opt: UpdateLabelOptions | None = None
    ) -> tuple[Label, Response]:
        """Update an existing label.

        Args:
            pid: Project ID or path
            label: Label ID or name
            opt: Changed attributes; only explicitly set fields are sent

        Returns:
            Tuple of the label as stored by the server and response metadata
        """
        path = self._label_path(pid, label)
        body = opt.to_body() if opt is not None else None
        data, response = self.client.request("PUT", path, json=body)
        updated = _decode_label(data, response)
        logger.info("Updated label %s in project %s", label, pid)
        return updated, response

    def delete_label(
        self, pid: int | str, label: int | str, opt: DeleteLabelOptions | None = None
    ) -> Response:
        """Delete a label by ID or name."""
        path = self._label_path(pid, label)
        body = opt.to_body() if opt is not None else None
        _, response = self.client.request("DELETE", path, json=body)
        logger.info("Deleted label %s from project %s", label, pid)
        return response

    def subscribe_to_label(self, pid: int | str, label: int | str) -> tuple[Label, Response]:
        """Subscribe the authenticated user to a label.

        Returns:
            Tuple of the label (with subscribed set) and response metadata
        """
        data, response = self.client.request("POST", f"{self._label_path(pid, label)}/subscribe")
        return _decode_label(data, response), response

    def unsubscribe_from_label(self, pid: int | str, label: int | str) -> Response:
        """Unsubscribe the authenticated user from a label."""
        _, response = self.client.request("POST", f"{self._label_path(pid, label)}/unsubscribe")
        return response

    def promote_label(self, pid: int | str, label: int | str) -> Response:
        """Promote a project label to a group label."""
        _, response = self.client.request("PUT", f"{self._label_path(pid, label)}/promote")
        logger.info("Promoted label %s of project %s to group label", label, pid)
        return response
