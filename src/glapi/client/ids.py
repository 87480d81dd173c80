"""Resource identifiers used in URL paths."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from glapi.client.exceptions import InvalidIDError


@dataclass(frozen=True)
class ResourceID:
    """A numeric ID or a textual path/name addressing a resource.

    GitLab accepts either form wherever an ID is expected, e.g. a project can
    be addressed as ``42`` or as ``"group/project"``.
    """

    value: int | str

    @classmethod
    def parse(cls, raw: Any) -> ResourceID:
        """Validate a raw identifier.

        Args:
            raw: An int, a str, or an existing ResourceID

        Returns:
            ResourceID wrapping the value

        Raises:
            InvalidIDError: If raw is any other type (bool included)
        """
        if isinstance(raw, ResourceID):
            return raw
        if isinstance(raw, bool) or not isinstance(raw, (int, str)):
            raise InvalidIDError(f"invalid ID type {raw!r}, the ID must be an int or a string")
        return cls(raw)

    @property
    def is_numeric(self) -> bool:
        return isinstance(self.value, int)

    def to_path(self) -> str:
        """Render as a single, fully escaped URL path segment."""
        if isinstance(self.value, int):
            return str(self.value)
        return quote(self.value, safe="")

    def __str__(self) -> str:
        return str(self.value)


def path_segment(raw: Any) -> str:
    """Validate raw and return its escaped path segment."""
    return ResourceID.parse(raw).to_path()
