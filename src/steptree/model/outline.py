"""
Outline Loader
==============
Reads a nested JSON outline and replays it onto a StepTree.

Format:
    [
        {"title": "Root", "children": [
            {"title": "First child"},
            {"title": "Second child", "children": [...]}
        ]}
    ]

A single node object is accepted in place of the top-level list.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from os import PathLike
from typing import Any, Union

from steptree.model.errors import OutlineError
from steptree.model.tree import StepTree

logger = logging.getLogger(__name__)


@dataclass
class OutlineNode:
    title: str
    children: list[OutlineNode] = field(default_factory=list)

    def count(self) -> int:
        """Number of nodes in this subtree, including itself."""
        return 1 + sum(child.count() for child in self.children)


def parse_outline(data: Any) -> list[OutlineNode]:
    """Validate decoded JSON data and convert it into OutlineNodes."""
    if isinstance(data, dict):
        return [_parse_node(data, "$")]
    if isinstance(data, list):
        return [_parse_node(item, f"$[{i}]") for i, item in enumerate(data)]
    raise OutlineError(f"expected an object or a list, got {type(data).__name__}")


def _parse_node(data: Any, path: str) -> OutlineNode:
    if not isinstance(data, dict):
        raise OutlineError(f"expected an object, got {type(data).__name__}", path)

    title = data.get("title")
    if not isinstance(title, str):
        raise OutlineError("missing or non-string 'title'", path)

    children = data.get("children", [])
    if not isinstance(children, list):
        raise OutlineError("'children' must be a list", path)

    return OutlineNode(
        title=title,
        children=[_parse_node(child, f"{path}.children[{i}]") for i, child in enumerate(children)],
    )


def load_outline(filepath: Union[str, PathLike]) -> list[OutlineNode]:
    """
    Load an outline from a JSON file.

    Raises:
        OutlineError: If the file is not valid JSON or has the wrong shape.
    """
    logger.info(f"Loading outline from: {filepath}")
    with open(filepath, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise OutlineError(f"invalid JSON ({e.msg} at line {e.lineno})") from e

    roots = parse_outline(data)
    logger.info(f"Outline has {sum(r.count() for r in roots)} nodes.")
    return roots


def build_tree(tree: StepTree, roots: list[OutlineNode]) -> None:
    """Add the outline depth-first, closing every node after its children."""
    for node in roots:
        tree.add_node(node.title)
        build_tree(tree, node.children)
        tree.end()
