"""
Pydantic models for Coggle API resources.

These models define the JSON structure exchanged with the service:
- Node resources with _id, text, offset, optional parent and nested children
- Diagram resources with _id and title
- Request bodies for creating diagrams and updating nodes

Field Naming Convention:
- The service names identifiers `_id`; the models expose them as `id`
  (populated through an alias) since leading underscores are private in
  pydantic
- Request bodies are serialized with `exclude_unset` so a partial update
  only carries the fields the caller supplied
"""

from collections.abc import Mapping, Sequence
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Maximum length of a node's text accepted by the service.
MAX_TEXT_LENGTH = 3000


class Offset(BaseModel):
    """Position of a node relative to its parent (x along the branch, y vertical)."""
    model_config = ConfigDict(allow_inf_nan=False)

    x: float
    y: float

    def to_json_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


OffsetLike = Union[Offset, Mapping[str, Any], Sequence[float]]


def coerce_offset(value: OffsetLike) -> Offset:
    """Build an Offset from an Offset, an {x, y} mapping or an (x, y) pair."""
    if isinstance(value, Offset):
        return value
    if isinstance(value, Mapping):
        return Offset(x=value["x"], y=value["y"])
    x, y = value
    return Offset(x=x, y=y)


def offset_to_json(value: OffsetLike) -> Any:
    """Serialize an offset argument as sent to the service, without checking it."""
    if isinstance(value, Offset):
        return value.to_json_dict()
    if isinstance(value, Mapping):
        return dict(value)
    x, y = value
    return {"x": x, "y": y}


class NodeResource(BaseModel):
    """A node as returned by the service, possibly with embedded children."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id")
    text: str = Field(max_length=MAX_TEXT_LENGTH)
    offset: Offset
    parent: Optional[str] = None
    children: list["NodeResource"] = Field(default_factory=list)


class DiagramResource(BaseModel):
    """A diagram as returned by the service."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id")
    title: str = ""


# --- API Request Models ---

class CreateDiagramRequest(BaseModel):
    """Request to create a new diagram."""
    title: str


class UpdateNodeRequest(BaseModel):
    """Request to update an existing node (partial update)."""
    parent: Optional[str] = None
    offset: Optional[Offset] = None
    text: Optional[str] = None

    def to_body(self) -> dict:
        """Only the fields explicitly set are sent to the service."""
        return self.model_dump(exclude_unset=True)
