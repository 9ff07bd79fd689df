"""
Diagram - a single Coggle mind map reached through a CoggleApi client.

A Diagram only caches the id and title the service last reported; the node
tree is fetched on demand with get_nodes() and is never cached here.
"""

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as SchemaError

from .errors import RequestError
from .models import DiagramResource, NodeResource
from .node import NODES_ENDPOINT, Node

if TYPE_CHECKING:
    from .client import CoggleApi

logger = logging.getLogger(__name__)

WEB_URL_TEMPLATE = "/diagram/:diagram"


class Diagram:
    """One remote diagram.

    Attributes:
        apiclient: The CoggleApi used for this diagram's requests (shared)
        id: Diagram id, immutable
        title: Title as last reported by the service
    """

    def __init__(self, apiclient: "CoggleApi", resource: DiagramResource):
        self.apiclient = apiclient
        self._id = resource.id
        self.title = resource.title

    @property
    def id(self) -> str:
        return self._id

    def __repr__(self) -> str:
        return f"Diagram(id={self.id!r}, title={self.title!r})"

    def replace_ids(self, url: str) -> str:
        return url.replace(":diagram", self.id)

    def web_url(self) -> str:
        """URL of this diagram in the Coggle web app."""
        return self.apiclient.base_url + self.replace_ids(WEB_URL_TEMPLATE)

    def _build_nodes(self, body: Any, status_code: int, method: str, endpoint: str) -> list[Node]:
        """Materialize a list of node resources (with nested children) into Nodes."""
        if not isinstance(body, list):
            raise RequestError(
                f"expected a list of nodes, got {type(body).__name__}",
                status_code=status_code,
                method=method,
                endpoint=endpoint,
            )
        try:
            resources = [NodeResource.model_validate(item) for item in body]
        except SchemaError as e:
            raise RequestError(
                f"unexpected node resource: {e}",
                status_code=status_code,
                method=method,
                endpoint=endpoint,
            ) from e
        return [Node.from_resource(self, resource) for resource in resources]

    async def get_nodes(self) -> list[Node]:
        """Fetch the node tree of this diagram.

        GET /api/1/diagrams/:diagram/nodes

        Returns the top-level nodes; descendants hang off each node's children.
        """
        endpoint = self.replace_ids(NODES_ENDPOINT)
        try:
            status, body = await self.apiclient.request_json("GET", endpoint)
            nodes = self._build_nodes(body, status, "GET", endpoint)
        except RequestError as e:
            raise e.wrap("failed to get diagram nodes") from e
        logger.debug(f"get_nodes: diagram={self.id}, roots={len(nodes)}")
        return nodes

    async def arrange(self) -> list[Node]:
        """Ask the service to re-layout every node so none overlap.

        PUT /api/1/diagrams/:diagram/nodes?action=arrange

        The layout chosen by the service is not deterministic; calling this
        twice may move nodes again. Returns the full, updated node tree.
        """
        endpoint = self.replace_ids(NODES_ENDPOINT)
        try:
            status, body = await self.apiclient.request_json(
                "PUT", endpoint, {"action": "arrange"}, {}
            )
            nodes = self._build_nodes(body, status, "PUT", endpoint)
        except RequestError as e:
            raise e.wrap("failed to arrange diagram") from e
        logger.info(f"arrange: diagram={self.id}")
        return nodes
