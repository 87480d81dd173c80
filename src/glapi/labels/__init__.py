"""Labels - project label resource client."""

from glapi.labels.models import (
    CreateLabelOptions,
    DeleteLabelOptions,
    Label,
    ListLabelsOptions,
    UpdateLabelOptions,
)
from glapi.labels.service import LabelsService

__all__ = [
    "CreateLabelOptions",
    "DeleteLabelOptions",
    "Label",
    "LabelsService",
    "ListLabelsOptions",
    "UpdateLabelOptions",
]
