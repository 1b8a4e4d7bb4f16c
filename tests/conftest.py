"""Shared fixtures: fake node handles for the core, a headless QApplication for the view."""

from __future__ import annotations

import os

import pytest

from steptree.model.anchors import AnchorLine, Edge
from steptree.model.tree import StepTree


class FakeNode:
    """Records everything the tree does to a node handle."""

    def __init__(self, serial: int) -> None:
        self.serial = serial
        self.title = ""
        self.visible = False
        self.anchors: dict[Edge, AnchorLine] = {}
        self.released = False

    def __repr__(self) -> str:
        return f"FakeNode({self.serial}, {self.title!r})"

    def anchor(self, edge: Edge, line: AnchorLine) -> None:
        self.anchors[edge] = line

    def release(self) -> None:
        self.released = True


class FakeFactory:
    def __init__(self) -> None:
        self.created: list[FakeNode] = []

    def __call__(self) -> FakeNode:
        node = FakeNode(len(self.created))
        self.created.append(node)
        return node


@pytest.fixture
def factory() -> FakeFactory:
    return FakeFactory()


@pytest.fixture
def tree(factory: FakeFactory) -> StepTree:
    return StepTree(factory)


@pytest.fixture(scope="session")
def qapp():
    pytest.importorskip("PySide6")
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
