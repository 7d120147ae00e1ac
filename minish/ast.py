"""Syntax tree nodes built by the parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag


class NodeType(IntFlag):
    PIPE = 1 << 0
    SEQ = 1 << 1
    AND = 1 << 2
    OR = 1 << 3
    REDIR = 1 << 4
    RD_INFILE = 1 << 5
    RD_HDOC = 1 << 6
    RD_TRUNC = 1 << 7
    RD_APPEND = 1 << 8
    CMD = 1 << 9
    ARG = 1 << 10
    DATA = 1 << 11


@dataclass
class Node:
    """A tree node; ``DATA`` in ``type`` marks that ``data`` is set."""

    type: NodeType
    data: str | None = None
    left: Node | None = None
    right: Node | None = None

    def kind(self) -> NodeType:
        """The node type without the DATA flag."""
        return NodeType(int(self.type) & ~int(NodeType.DATA))

    def set_data(self, data: str | None) -> None:
        """Attach data and mark the node as carrying it."""
        if data is None:
            return
        self.data = data
        self.type = NodeType(self.type | NodeType.DATA)

    def insert(self, node: Node | None, on_right: bool) -> None:
        """Push ``node`` in front of the chain on one side of this node."""
        if node is None:
            return
        if on_right:
            node.right = self.right
            node.left = None
            self.right = node
        else:
            node.left = self.left
            node.right = None
            self.left = node


def insert_and_or(root: Node | None, new_root: Node | None, last: bool) -> Node | None:
    """Add an and/or node to the chain rooted at ``root``; return the new root."""
    if new_root is None:
        return root
    if root is None:
        return new_root
    if not last:
        root.right = new_root.left
        new_root.left = root
        return new_root
    root.right = new_root
    return root