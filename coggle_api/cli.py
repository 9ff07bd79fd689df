#!/usr/bin/env python3
"""Coggle CLI - subcommands for creating and editing Coggle diagrams."""

import argparse
import asyncio
import json
import logging
import sys

from .client import CoggleApi
from .errors import CoggleError
from .tree import find_node, summarize_tree


def _json_out(data, code=0):
    print(json.dumps(data))
    sys.exit(code)


async def _require_node(api, args):
    nodes = await api.diagram(args.diagram_id).get_nodes()
    node = find_node(nodes, args.node_id)
    if node is None:
        raise CoggleError(f"node {args.node_id} not found in diagram {args.diagram_id}")
    return node


# ── Diagrams ─────────────────────────────────────────────────────────────────

async def cmd_create_diagram(api, args):
    diagram = await api.create_diagram(args.title)
    return {"id": diagram.id, "title": diagram.title, "url": diagram.web_url()}


async def cmd_web_url(api, args):
    return {"url": api.diagram(args.diagram_id).web_url()}


async def cmd_get_nodes(api, args):
    nodes = await api.diagram(args.diagram_id).get_nodes()
    return {"nodes": [n.to_dict() for n in nodes]}


async def cmd_summarize(api, args):
    nodes = await api.diagram(args.diagram_id).get_nodes()
    return {"summary": summarize_tree(nodes).to_dict()}


async def cmd_arrange(api, args):
    nodes = await api.diagram(args.diagram_id).arrange()
    return {"nodes": [n.to_dict() for n in nodes]}


# ── Nodes ────────────────────────────────────────────────────────────────────

async def cmd_add_node(api, args):
    parent = await _require_node(api, args)
    child = await parent.add_child(args.text, {"x": args.x, "y": args.y})
    return {"node": child.to_dict()}


async def cmd_update_node(api, args):
    node = await _require_node(api, args)
    updates = {}
    if args.text is not None:
        updates["text"] = args.text
    if args.parent is not None:
        updates["parent"] = args.parent
    if args.x is not None or args.y is not None:
        updates["offset"] = {
            "x": node.offset.x if args.x is None else args.x,
            "y": node.offset.y if args.y is None else args.y,
        }
    await node.update(updates)
    return {"node": node.to_dict()}


async def cmd_delete_node(api, args):
    node = await _require_node(api, args)
    await node.remove()
    return {"status": "deleted", "id": node.id}


# ── Main ─────────────────────────────────────────────────────────────────────

COMMANDS = {
    "create-diagram": cmd_create_diagram,
    "web-url": cmd_web_url,
    "get-nodes": cmd_get_nodes,
    "summarize": cmd_summarize,
    "arrange": cmd_arrange,
    "add-node": cmd_add_node,
    "update-node": cmd_update_node,
    "delete-node": cmd_delete_node,
}


def build_parser():
    parser = argparse.ArgumentParser(description="Coggle API CLI")
    parser.add_argument("--token", default=None, help="auth token (default: $COGGLE_USER_AUTH_TOKEN)")
    parser.add_argument("--base-url", default=None, help="service root (default: $COGGLE_BASE_URL)")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    # Diagrams
    p = sub.add_parser("create-diagram")
    p.add_argument("--title", required=True)

    for name in ("web-url", "get-nodes", "summarize", "arrange"):
        p = sub.add_parser(name)
        p.add_argument("--diagram-id", required=True)

    # Nodes
    p = sub.add_parser("add-node")
    p.add_argument("--diagram-id", required=True)
    p.add_argument("--parent-id", dest="node_id", required=True)
    p.add_argument("--text", required=True)
    p.add_argument("--x", type=float, default=100)
    p.add_argument("--y", type=float, default=0)

    p = sub.add_parser("update-node")
    p.add_argument("--diagram-id", required=True)
    p.add_argument("--node-id", required=True)
    p.add_argument("--text", default=None)
    p.add_argument("--parent", default=None)
    p.add_argument("--x", type=float, default=None)
    p.add_argument("--y", type=float, default=None)

    p = sub.add_parser("delete-node")
    p.add_argument("--diagram-id", required=True)
    p.add_argument("--node-id", required=True)

    return parser


async def run(args, transport=None):
    """Run one parsed command and return its JSON-serializable result."""
    async with CoggleApi(token=args.token, base_url=args.base_url, transport=transport) as api:
        return await COMMANDS[args.command](api, args)


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        result = asyncio.run(run(args))
    except CoggleError as e:
        _json_out({"status": "error", "error": str(e)}, code=1)
    _json_out(result)


if __name__ == "__main__":
    main()
