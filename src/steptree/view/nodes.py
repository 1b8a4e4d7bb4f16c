"""
Node Items
==========
Qt implementations of the node handle used by the step tree.

Each template draws a titled shape on a QGraphicsScene. Anchors are resolved
immediately against the target's scene geometry: the tree only ever anchors a
new node to nodes created before it, and those never move afterwards.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QBrush, QColor, QPainterPath, QPen
from PySide6.QtWidgets import (
    QAbstractGraphicsShapeItem, QGraphicsPathItem, QGraphicsRectItem, QGraphicsScene,
    QGraphicsSimpleTextItem
)

from steptree import config
from steptree.model.anchors import AnchorLine, Edge
from steptree.view.registry import create_node, register_template

logger = logging.getLogger(__name__)


@register_template
class NodeItem:
    """A rectangular node with a centred title."""
    KEY = "box"
    FILL_COLOR = "#A0C4FF"
    EDGE_COLOR = "black"

    def __init__(self, scene: QGraphicsScene) -> None:
        self.scene = scene
        self.width: float = config.NODE_WIDTH
        self.height: float = config.NODE_HEIGHT

        self.shape = self._make_shape(QRectF(0.0, 0.0, self.width, self.height))
        self.shape.setBrush(QBrush(QColor(self.FILL_COLOR)))
        self.shape.setPen(QPen(QColor(self.EDGE_COLOR), 1.0))

        self.label = QGraphicsSimpleTextItem(self.shape)
        self._title = ""

        scene.addItem(self.shape)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(title={self._title!r})"

    def _make_shape(self, rect: QRectF) -> QAbstractGraphicsShapeItem:
        return QGraphicsRectItem(rect)

    # ---- NodeHandle interface ----

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, text: str) -> None:
        self._title = text
        self.label.setText(text)
        bounds = self.label.boundingRect()
        self.label.setPos((self.width - bounds.width()) / 2.0, (self.height - bounds.height()) / 2.0)

    @property
    def visible(self) -> bool:
        return self.shape.isVisible()

    @visible.setter
    def visible(self, value: bool) -> None:
        self.shape.setVisible(value)

    def anchor(self, edge: Edge, line: AnchorLine) -> None:
        """
        Move this node so that `edge` lines up with `line` (plus spacing).

        Only the edges the tree anchors are supported: TOP, LEFT and
        HORIZONTAL_CENTER.
        """
        target = line.node
        if not isinstance(target, NodeItem):
            raise TypeError(f"Cannot anchor {self!r} to {type(target).__name__}")

        value = target.edge_position(line.edge)
        pos = self.shape.pos()
        match edge:
            case Edge.TOP:
                pos.setY(value + config.LEVEL_SPACING)
            case Edge.LEFT:
                pos.setX(value + config.SIBLING_SPACING)
            case Edge.HORIZONTAL_CENTER:
                pos.setX(value - self.width / 2.0)
            case _:
                raise ValueError(f"Cannot anchor the {edge} edge of {self!r}")
        self.shape.setPos(pos)

    def release(self) -> None:
        if self.shape.scene() is not None:
            self.shape.scene().removeItem(self.shape)

    # ---- geometry ----

    def edge_position(self, edge: Edge) -> float:
        """Scene coordinate of one edge (x for vertical edges, y for horizontal)."""
        pos = self.shape.pos()
        match edge:
            case Edge.TOP:
                return pos.y()
            case Edge.BOTTOM:
                return pos.y() + self.height
            case Edge.LEFT:
                return pos.x()
            case Edge.RIGHT:
                return pos.x() + self.width
            case Edge.HORIZONTAL_CENTER:
                return pos.x() + self.width / 2.0
        raise ValueError(f"Unknown edge: {edge}")


@register_template
class RoundedNodeItem(NodeItem):
    """Same layout as NodeItem, drawn as a rounded rectangle."""
    KEY = "rounded"
    FILL_COLOR = "#CAFFBF"
    RADIUS = 10.0

    def _make_shape(self, rect: QRectF) -> QAbstractGraphicsShapeItem:
        path = QPainterPath()
        path.addRoundedRect(rect, self.RADIUS, self.RADIUS, Qt.SizeMode.AbsoluteSize)
        return QGraphicsPathItem(path)


class QtNodeFactory:
    """
    Node factory for the step tree: creates items of one template on a scene.
    """

    def __init__(self, scene: QGraphicsScene, template: str = config.DEFAULT_TEMPLATE) -> None:
        self.scene = scene
        self.template = template

    def __call__(self) -> NodeItem:
        return create_node(self.template, self.scene)
