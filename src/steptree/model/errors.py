"""
Error Taxonomy
==============
Exceptions raised by the step tree when a caller breaks its contract.

All of them derive from StepTreeError so the GUI layer can catch a single
type at its slot boundaries.
"""
from __future__ import annotations


class StepTreeError(Exception):
    """Base class for step tree contract violations."""


class NoOpenNodeError(StepTreeError):
    """Raised when end() is called while no node is open."""

    def __init__(self) -> None:
        super().__init__("No open node: end() called more times than add_node().")


class SteppingInProgressError(StepTreeError):
    """Raised when a node is added while the playback is stepped back."""

    def __init__(self, cursor: int, n_nodes: int) -> None:
        self.cursor = cursor
        self.n_nodes = n_nodes
        super().__init__(
            f"Cannot add a node at step {cursor + 1}/{n_nodes}; "
            f"reveal all nodes with view_nodes() first."
        )


class OutlineError(StepTreeError, ValueError):
    """Raised when an outline document is malformed."""

    def __init__(self, message: str, path: str = "$") -> None:
        self.path = path
        super().__init__(f"{path}: {message}")
