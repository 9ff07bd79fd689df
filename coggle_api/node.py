"""
Node - one branch of a diagram's tree.

A Node is a live projection of the service's state: it is authoritative right
after one of its mutating calls returns and may drift from the server in
between. After remove() the object is stale; its local children are left as
they were and should be discarded by the caller.
"""

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional

from pydantic import ValidationError as SchemaError

from .errors import RequestError
from .models import NodeResource, Offset, OffsetLike, UpdateNodeRequest, coerce_offset, offset_to_json
from .validation import raise_for_issues, validate_node_update

if TYPE_CHECKING:
    from .diagram import Diagram

logger = logging.getLogger(__name__)

NODES_ENDPOINT = "/api/1/diagrams/:diagram/nodes"
NODE_ENDPOINT = "/api/1/diagrams/:diagram/nodes/:node"


def _parse_resource(data: Any, status_code: int, method: str, endpoint: str) -> NodeResource:
    try:
        return NodeResource.model_validate(data)
    except SchemaError as e:
        raise RequestError(
            f"unexpected node resource: {e}",
            status_code=status_code,
            method=method,
            endpoint=endpoint,
        ) from e


class Node:
    """A node in a diagram.

    Attributes:
        diagram: The Diagram this node belongs to (shared)
        id: Node id
        text: Text shown on the branch
        offset: Position relative to the parent node
        parent_id: Id of the parent node, None for a root node
        children: Child nodes, in the order the service returned or they were added
    """

    def __init__(
        self,
        diagram: "Diagram",
        resource: NodeResource,
        parent_id: Optional[str] = None,
    ):
        self.diagram = diagram
        self.id = resource.id
        self.text = resource.text
        self.offset: Offset = resource.offset
        self.parent_id = parent_id if parent_id is not None else resource.parent
        self.children: list["Node"] = []

    @classmethod
    def from_resource(
        cls, diagram: "Diagram", resource: NodeResource, parent_id: Optional[str] = None
    ) -> "Node":
        """Build a node and, recursively, the children embedded in its resource."""
        node = cls(diagram, resource, parent_id)
        for child_resource in resource.children:
            node.children.append(cls.from_resource(diagram, child_resource, node.id))
        return node

    def __repr__(self) -> str:
        return f"Node(id={self.id!r}, text={self.text!r}, parent_id={self.parent_id!r})"

    def replace_ids(self, url: str) -> str:
        return self.diagram.replace_ids(url.replace(":node", self.id))

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization, children included."""
        return {
            "id": self.id,
            "text": self.text,
            "offset": self.offset.to_json_dict(),
            "parent_id": self.parent_id,
            "children": [child.to_dict() for child in self.children],
        }

    async def add_child(self, text: str, offset: OffsetLike) -> "Node":
        """Add a new node below this one.

        POST /api/1/diagrams/:diagram/nodes

        The arguments are passed to the service as-is; it rejects bad text or
        offsets with a RequestError.
        """
        body = {
            "parent": self.id,
            "offset": offset_to_json(offset),
            "text": text,
        }
        endpoint = self.replace_ids(NODES_ENDPOINT)
        status, data = await self.diagram.apiclient.request_json("POST", endpoint, body=body)
        child = Node.from_resource(self.diagram, _parse_resource(data, status, "POST", endpoint), self.id)
        self.children.append(child)
        logger.info(f"add_child: diagram={self.diagram.id}, parent={self.id}, node={child.id}")
        return child

    async def update(self, properties: Optional[Mapping[str, Any]] = None, **changes: Any) -> "Node":
        """Change some of this node's properties.

        PUT /api/1/diagrams/:diagram/nodes/:node

        Only the properties passed are sent; the others are left as they are
        on the service. All of them are checked first, and a ValidationError
        listing every invalid one is raised before any request is made.

        Properties may be given as a mapping, as keyword arguments, or both:
            parent: Id of the new parent node
            offset: New position relative to the parent
            text: New text, at most 3000 characters

        Returns this node, refreshed from the service's response.
        """
        properties = {**(properties or {}), **changes}
        raise_for_issues(validate_node_update(properties))

        if "offset" in properties:
            properties["offset"] = coerce_offset(properties["offset"])
        request = UpdateNodeRequest(**properties)

        endpoint = self.replace_ids(NODE_ENDPOINT)
        status, data = await self.diagram.apiclient.request_json("PUT", endpoint, body=request.to_body())
        resource = _parse_resource(data, status, "PUT", endpoint)
        if resource.parent is not None:
            self.parent_id = resource.parent
        self.text = resource.text
        self.offset = resource.offset
        logger.debug(f"update: node={self.id}, fields={sorted(properties)}")
        return self

    async def set_text(self, text: str) -> "Node":
        return await self.update(text=text)

    async def move(self, offset: OffsetLike) -> "Node":
        return await self.update(offset=offset)

    async def remove(self) -> None:
        """Delete this node; the service deletes all of its descendants too.

        DELETE /api/1/diagrams/:diagram/nodes/:node
        """
        await self.diagram.apiclient.delete(self.replace_ids(NODE_ENDPOINT))
        logger.info(f"remove: diagram={self.diagram.id}, node={self.id}")
