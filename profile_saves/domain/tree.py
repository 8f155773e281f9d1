from __future__ import annotations

from collections.abc import Sequence

from .models import NOT_FOUND, DocumentTree, Value


def read_path(tree: DocumentTree, segments: Sequence[str]) -> Value:
    """Return the value at ``segments`` or ``NOT_FOUND``.

    Any missing or non-mapping intermediate aborts the walk.
    """
    node: Value = tree
    for segment in segments:
        if not isinstance(node, dict) or segment not in node:
            return NOT_FOUND
        node = node[segment]
    return node


def write_path(tree: DocumentTree, segments: Sequence[str], value: Value) -> Value:
    """Store ``value`` at ``segments`` and return what was there before.

    Missing intermediates are created as empty mappings. A scalar sitting on
    the way is replaced by a mapping.
    """
    if not segments:
        raise ValueError("segments must not be empty")

    node = tree
    for segment in segments[:-1]:
        child = node.get(segment)
        if not isinstance(child, dict):
            child = {}
            node[segment] = child
        node = child

    last = segments[-1]
    previous = node.get(last, NOT_FOUND)
    node[last] = value
    return previous
