"""
Coggle API - Python client for the Coggle mind-mapping web API.

This module provides the client, the diagram and node entities it returns,
and helpers for working with fetched node trees.
"""

from .client import CoggleApi, DEFAULT_BASE_URL
from .diagram import Diagram
from .node import Node
from .errors import CoggleError, ConfigurationError, ValidationError, RequestError
from .models import (
    # Resources
    Offset,
    NodeResource,
    DiagramResource,
    # Request models
    CreateDiagramRequest,
    UpdateNodeRequest,
    MAX_TEXT_LENGTH,
)
from .validation import validate_node_update, validate_title, ValidationIssue
from .tree import walk, find_node, summarize_tree, TreeSummary

__all__ = [
    # Client and entities
    "CoggleApi",
    "DEFAULT_BASE_URL",
    "Diagram",
    "Node",
    # Errors
    "CoggleError",
    "ConfigurationError",
    "ValidationError",
    "RequestError",
    # Models
    "Offset",
    "NodeResource",
    "DiagramResource",
    "CreateDiagramRequest",
    "UpdateNodeRequest",
    "MAX_TEXT_LENGTH",
    # Validation
    "validate_node_update",
    "validate_title",
    "ValidationIssue",
    # Tree helpers
    "walk",
    "find_node",
    "summarize_tree",
    "TreeSummary",
]
