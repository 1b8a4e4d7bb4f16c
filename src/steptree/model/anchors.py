from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class Edge(StrEnum):
    """Anchorable edges of a node."""
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"
    HORIZONTAL_CENTER = "horizontal_center"


@dataclass(frozen=True)
class AnchorLine:
    """
    One edge of a node handle, used as the target of an anchor.

    The tree only wires these references together; resolving them to
    coordinates is up to the rendering side.
    """
    node: Any
    edge: Edge

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.node!r}.{self.edge})"
