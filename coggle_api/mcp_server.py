#!/usr/bin/env python3
"""
Coggle MCP Server

Provides MCP tools for AI agents to build and edit Coggle mind maps.
Credentials are read from COGGLE_USER_AUTH_TOKEN (and optionally
COGGLE_BASE_URL) on every call.
"""

import json
from typing import Optional

from mcp.server.fastmcp import FastMCP

from .client import CoggleApi
from .errors import CoggleError
from .tree import find_node

# Create MCP server
mcp = FastMCP("coggle")


def _result(data: dict) -> str:
    return json.dumps(data, indent=2)


async def _find(api: CoggleApi, diagram_id: str, node_id: str):
    nodes = await api.diagram(diagram_id).get_nodes()
    node = find_node(nodes, node_id)
    if node is None:
        raise CoggleError(f"node {node_id} not found in diagram {diagram_id}")
    return node


# ============================================================================
# DIAGRAM TOOLS
# ============================================================================

@mcp.tool()
async def coggle_create_diagram(title: str) -> str:
    """
    Create a new Coggle diagram.

    Args:
        title: Title of the diagram; also becomes the text of its root node

    Returns the new diagram's id and browser URL.
    """
    async with CoggleApi() as api:
        diagram = await api.create_diagram(title)
        return _result({"id": diagram.id, "title": diagram.title, "url": diagram.web_url()})


@mcp.tool()
async def coggle_get_nodes(diagram_id: str) -> str:
    """
    Get the full node tree of a diagram.

    Args:
        diagram_id: ID of the diagram

    Returns the root nodes, each with nested children, text, offset and ids.
    Use this to find node ids before adding, updating or deleting nodes.
    """
    async with CoggleApi() as api:
        nodes = await api.diagram(diagram_id).get_nodes()
        return _result({"nodes": [n.to_dict() for n in nodes]})


@mcp.tool()
async def coggle_arrange(diagram_id: str) -> str:
    """
    Automatically re-layout all nodes of a diagram so none overlap.

    Args:
        diagram_id: ID of the diagram

    Returns the node tree with updated offsets.
    """
    async with CoggleApi() as api:
        nodes = await api.diagram(diagram_id).arrange()
        return _result({"nodes": [n.to_dict() for n in nodes]})


# ============================================================================
# NODE TOOLS
# ============================================================================

@mcp.tool()
async def coggle_add_node(
    diagram_id: str,
    parent_id: str,
    text: str,
    x: float = 100,
    y: float = 0,
) -> str:
    """
    Add a branch below an existing node.

    Args:
        diagram_id: ID of the diagram
        parent_id: ID of the node to branch from
        text: Text of the new node (max 3000 characters)
        x: Horizontal offset from the parent
        y: Vertical offset from the parent

    Returns the created node with its generated ID.
    """
    async with CoggleApi() as api:
        parent = await _find(api, diagram_id, parent_id)
        child = await parent.add_child(text, {"x": x, "y": y})
        return _result({"node": child.to_dict()})


@mcp.tool()
async def coggle_update_node(
    diagram_id: str,
    node_id: str,
    text: Optional[str] = None,
    x: Optional[float] = None,
    y: Optional[float] = None,
    parent_id: Optional[str] = None,
) -> str:
    """
    Change a node's text, position or parent.

    Args:
        diagram_id: ID of the diagram
        node_id: ID of the node to update
        text: New text (optional)
        x: New horizontal offset (optional)
        y: New vertical offset (optional)
        parent_id: ID of the new parent node (optional)

    Only provided fields are updated; others remain unchanged.
    """
    async with CoggleApi() as api:
        node = await _find(api, diagram_id, node_id)
        updates = {}
        if text is not None:
            updates["text"] = text
        if parent_id is not None:
            updates["parent"] = parent_id
        if x is not None or y is not None:
            updates["offset"] = {
                "x": node.offset.x if x is None else x,
                "y": node.offset.y if y is None else y,
            }
        await node.update(updates)
        return _result({"node": node.to_dict()})


@mcp.tool()
async def coggle_delete_node(diagram_id: str, node_id: str) -> str:
    """
    Remove a node and all of its descendants.

    Args:
        diagram_id: ID of the diagram
        node_id: ID of the node to delete
    """
    async with CoggleApi() as api:
        node = await _find(api, diagram_id, node_id)
        await node.remove()
        return _result({"status": "deleted", "id": node_id})


def main():
    mcp.run()


# ============================================================================
# MAIN
# ============================================================================

if __name__ == "__main__":
    main()
