"""
Argument validation - Check caller input before it is sent to the service.

Every check runs; the collected issues are turned into a single
ValidationError naming all offending fields.
"""

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .errors import ValidationError
from .models import MAX_TEXT_LENGTH, Offset


@dataclass
class ValidationIssue:
    """A single problem found in a caller-supplied argument."""
    field: str
    message: str


def _is_finite_number(value: Any) -> bool:
    # bool is an int subclass but never a coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int too large to convert to float
        return False


def _offset_components(value: Any):
    """Return (x, y) from an offset argument, or None if it has no such shape."""
    if isinstance(value, Offset):
        return value.x, value.y
    if isinstance(value, Mapping):
        if "x" not in value or "y" not in value:
            return None
        return value["x"], value["y"]
    if isinstance(value, Sequence) and not isinstance(value, str) and len(value) == 2:
        return value[0], value[1]
    return None


def validate_title(title: Any) -> list[ValidationIssue]:
    """Check a diagram title."""
    if not isinstance(title, str):
        return [ValidationIssue("title", f"title must be a string, got {type(title).__name__}")]
    return []


def validate_node_update(properties: Mapping[str, Any]) -> list[ValidationIssue]:
    """
    Validate the properties of a partial node update.

    Checks for:
    - Unknown properties (only parent, offset and text are accepted)
    - parent that is not a string
    - offset that is not an {x, y} pair of finite numbers
    - text that is not a string or is longer than MAX_TEXT_LENGTH
    - An update with no properties at all

    Args:
        properties: The supplied subset of {parent, offset, text}

    Returns:
        List of ValidationIssue objects, empty when the update is valid
    """
    issues: list[ValidationIssue] = []

    if not properties:
        issues.append(ValidationIssue("properties", "at least one of parent, offset, text is required"))
        return issues

    for name in properties:
        if name not in ("parent", "offset", "text"):
            issues.append(ValidationIssue(name, f"unknown node property: {name}"))

    if "parent" in properties and not isinstance(properties["parent"], str):
        issues.append(ValidationIssue("parent", "parent must be a node id string"))

    if "offset" in properties:
        components = _offset_components(properties["offset"])
        if components is None:
            issues.append(ValidationIssue("offset", "offset must have x and y coordinates"))
        elif not all(_is_finite_number(c) for c in components):
            issues.append(ValidationIssue("offset", "offset x and y must be finite numbers"))

    if "text" in properties:
        text = properties["text"]
        if not isinstance(text, str):
            issues.append(ValidationIssue("text", "text must be a string"))
        elif len(text) > MAX_TEXT_LENGTH:
            issues.append(ValidationIssue(
                "text", f"text must be at most {MAX_TEXT_LENGTH} characters, got {len(text)}"
            ))

    return issues


def raise_for_issues(issues: list[ValidationIssue]) -> None:
    """Raise a ValidationError describing `issues`, if there are any."""
    if not issues:
        return
    message = "; ".join(f"{issue.field}: {issue.message}" for issue in issues)
    fields = []
    for issue in issues:
        if issue.field not in fields:
            fields.append(issue.field)
    raise ValidationError(f"invalid {', '.join(fields)}: {message}", fields=fields)
