"""
Step Tree (Core Model)
======================
Builds an append-ordered tree of nodes and plays it back one step at a time.

Why is this file needed?
------------------------
1. Topology: Every add_node() call descends one level below the currently
   open node; end() climbs back up. The open path is kept as a chain of
   TreeFrames, each remembering where its next child should attach.
2. Playback: Nodes are revealed in creation order. A cursor marks the last
   revealed node; next_step()/prev_step() move it by one.
3. Decoupling: Node handles come from an injected factory. Nothing here
   imports Qt, so the whole state machine is testable with fake handles.

Classes:
    NodeHandle: Protocol every rendered node must satisfy.
    TreeFrame: One entry of the parent-stack.
    StepTree: The tree builder and step cursor.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional, Protocol

from steptree.model.anchors import AnchorLine, Edge
from steptree.model.errors import NoOpenNodeError, SteppingInProgressError

logger = logging.getLogger(__name__)


class NodeHandle(Protocol):
    title: str
    visible: bool

    def anchor(self, edge: Edge, line: AnchorLine) -> None: ...
    def release(self) -> None: ...


NodeFactory = Callable[[], NodeHandle]


@dataclass(eq=False)
class TreeFrame:
    """An open node on the insertion path."""
    node: NodeHandle
    parent: Optional[TreeFrame] = None
    # Edge the next child of this frame attaches to; None until a first child exists
    right_side: Optional[AnchorLine] = field(default=None)

    def ancestors(self) -> Iterator[TreeFrame]:
        frame = self.parent
        while frame is not None:
            yield frame
            frame = frame.parent


class StepTree:
    """
    Append-only tree of nodes with a linear step cursor.

    The cursor lies in [-1, len(nodes) - 1]; -1 means nothing is revealed.
    After every public call nodes[0..cursor] are visible and the rest hidden.
    """

    def __init__(self, factory: NodeFactory) -> None:
        self._factory = factory
        self._nodes: list[NodeHandle] = []
        self._cursor: int = -1
        self._current: Optional[TreeFrame] = None

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(nodes={len(self._nodes)}, "
            f"cursor={self._cursor}, depth={self.depth})"
        )

    # ------------------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------------------

    @property
    def nodes(self) -> tuple[NodeHandle, ...]:
        """Nodes in creation (= step) order."""
        return tuple(self._nodes)

    @property
    def cursor(self) -> int:
        """Index of the last revealed node, -1 if none."""
        return self._cursor

    @property
    def current(self) -> Optional[TreeFrame]:
        """Top of the parent-stack, None if no node is open."""
        return self._current

    @property
    def depth(self) -> int:
        """Number of open frames on the parent-stack."""
        if self._current is None:
            return 0
        return 1 + sum(1 for _ in self._current.ancestors())

    @property
    def at_start(self) -> bool:
        return self._cursor == -1

    @property
    def at_end(self) -> bool:
        return self._cursor == len(self._nodes) - 1

    # ------------------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------------------

    def add_node(self, title: str) -> None:
        """
        Create a node below the currently open one and open it.

        The first child of a frame is centred under it; later children are
        chained to the right of the previous one.

        Raises:
            SteppingInProgressError: If the playback is not fully revealed.
        """
        if not self.at_end:
            raise SteppingInProgressError(self._cursor, len(self._nodes))

        node = self._factory()
        node.title = title
        node.visible = True

        parent = self._current
        if parent is not None:
            node.anchor(Edge.TOP, AnchorLine(parent.node, Edge.BOTTOM))
            if parent.right_side is not None:
                node.anchor(Edge.LEFT, parent.right_side)
            else:
                node.anchor(Edge.HORIZONTAL_CENTER, AnchorLine(parent.node, Edge.HORIZONTAL_CENTER))
            parent.right_side = AnchorLine(node, Edge.RIGHT)

        self._nodes.append(node)
        self._cursor = len(self._nodes) - 1
        self._current = TreeFrame(node=node, parent=parent)
        logger.debug(f"Added node '{title}' at step {self._cursor} (depth {self.depth}).")

    def end(self) -> None:
        """Close the currently open node and return to its parent."""
        if self._current is None:
            raise NoOpenNodeError()
        self._current = self._current.parent
        logger.debug(f"Closed node, depth is now {self.depth}.")

    # ------------------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------------------

    def next_step(self) -> None:
        """Reveal the next node. No-op once everything is revealed."""
        if self._cursor >= len(self._nodes) - 1:
            return
        self._cursor += 1
        self._nodes[self._cursor].visible = True
        logger.debug(f"Step forward to {self._cursor}.")

    def prev_step(self) -> None:
        """Hide the last revealed node. No-op when nothing is revealed."""
        if self._cursor < 0:
            return
        self._nodes[self._cursor].visible = False
        self._cursor -= 1
        logger.debug(f"Step back to {self._cursor}.")

    def view_nodes(self) -> None:
        """Reveal every node and jump the cursor to the end."""
        for node in self._nodes:
            node.visible = True
        self._cursor = len(self._nodes) - 1

    def hide_nodes(self) -> None:
        """Hide every node and rewind the cursor. Nodes stay owned by the tree."""
        for node in self._nodes:
            node.visible = False
        self._cursor = -1

    def destroy_nodes(self) -> None:
        """
        Release every node and reset the tree to its empty state.

        The node sequence, the cursor and the parent-stack are all cleared,
        so no handle outlives its release inside the tree, even when a
        release() call fails part way through.
        """
        n_nodes = len(self._nodes)
        try:
            for node in self._nodes:
                node.release()
        finally:
            self._nodes.clear()
            self._cursor = -1
            self._current = None
        logger.info(f"Destroyed {n_nodes} nodes.")
