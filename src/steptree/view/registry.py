from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtWidgets import QGraphicsScene

if TYPE_CHECKING:
    from steptree.view.nodes import NodeItem

_REGISTRY: dict[str, type[NodeItem]] = {}


def register_template(cls: type[NodeItem]) -> type[NodeItem]:
    """Class decorator to register a node template by its KEY."""
    key = getattr(cls, "KEY", None)
    if not key:
        raise ValueError(f"{cls.__name__} must define KEY")
    _REGISTRY[key] = cls
    return cls


def create_node(key: str, scene: QGraphicsScene) -> NodeItem:
    cls = _REGISTRY.get(key)
    if not cls:
        raise KeyError(f"No node template registered for key '{key}'")
    return cls(scene)


def list_templates() -> list[str]:
    return list(_REGISTRY.keys())
