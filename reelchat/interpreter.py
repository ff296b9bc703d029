"""
ReelChat — Payload Interpreter

The webhook answers with JSON of no fixed shape. This module finds the
recommendation list inside it: the first array, in depth-first pre-order,
whose first element is an object with a truthy ``title``.

Only the head of a candidate array is checked; the tail is returned as-is.
Empty arrays never match. The walk uses an explicit stack so hostile nesting
cannot exhaust the interpreter stack.
"""

from __future__ import annotations

import enum
import logging
import math
from typing import Any, List, Mapping, Optional, Tuple

from reelchat.config import settings

logger = logging.getLogger(__name__)


class JsonKind(enum.Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def json_kind(value: Any) -> JsonKind:
    """Classify a decoded JSON value. Raises TypeError for anything else."""
    if value is None:
        return JsonKind.NULL
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.STRING
    if isinstance(value, (list, tuple)):
        return JsonKind.ARRAY
    if isinstance(value, Mapping):
        return JsonKind.OBJECT
    raise TypeError(f"not a JSON value: {type(value).__name__}")


def _is_present(value: Any) -> bool:
    """True unless the value is null, false, zero, NaN or an empty string."""
    kind = json_kind(value)
    if kind is JsonKind.NULL:
        return False
    if kind is JsonKind.BOOLEAN:
        return value
    if kind is JsonKind.NUMBER:
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    if kind is JsonKind.STRING:
        return value != ""
    if kind is JsonKind.ARRAY or kind is JsonKind.OBJECT:
        return True
    raise AssertionError(f"unhandled JSON kind: {kind}")


def is_movie_list(value: Any) -> bool:
    """Does this array look like a recommendation list?"""
    if json_kind(value) is not JsonKind.ARRAY or not value:
        return False
    head = value[0]
    if json_kind(head) is not JsonKind.OBJECT:
        return False
    return _is_present(head.get("title"))


def extract_recommendations(
    value: Any,
    *,
    max_depth: Optional[int] = None,
    max_nodes: Optional[int] = None,
) -> Optional[List[Any]]:
    """
    Return the first movie-like array found in ``value``, or None.

    Containers deeper than ``max_depth`` are still checked as candidates but
    not descended into. Once ``max_nodes`` containers have been visited the
    scan gives up and returns None.
    """
    if max_depth is None:
        max_depth = settings.scan_max_depth
    if max_nodes is None:
        max_nodes = settings.scan_max_nodes

    stack: List[Tuple[Any, int]] = [(value, 0)]
    visited = 0
    truncated = False

    while stack:
        node, depth = stack.pop()
        kind = json_kind(node)

        if kind is JsonKind.ARRAY:
            if is_movie_list(node):
                return node
            children = list(node)
        elif kind is JsonKind.OBJECT:
            children = list(node.values())
        elif kind in (JsonKind.NULL, JsonKind.BOOLEAN, JsonKind.NUMBER, JsonKind.STRING):
            continue
        else:
            raise AssertionError(f"unhandled JSON kind: {kind}")

        visited += 1
        if visited > max_nodes:
            logger.warning("Payload scan stopped after %d containers", visited)
            return None

        if depth >= max_depth:
            truncated = True
            continue

        # reversed so the leftmost child is popped first
        stack.extend((child, depth + 1) for child in reversed(children))

    if truncated:
        logger.warning("Payload nested deeper than %d levels; deeper values were skipped", max_depth)
    return None
