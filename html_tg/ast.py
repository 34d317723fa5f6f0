"""Syntax tree built by the parser and consumed by the flattener."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class NodeType(Enum):
    ROOT = 'root'
    TEXT = 'text'
    BOLD = 'bold'
    ITALIC = 'italic'
    UNDERLINE = 'underline'
    STRIKE = 'strike'
    SPOILER = 'spoiler'
    CODE = 'code'
    PRE = 'pre'
    LINK = 'link'
    CUSTOM_EMOJI = 'custom_emoji'


@dataclass
class Node:
    """A tree node. Children are owned by their parent; there are no back references.

    Payload fields by type:
        text: TEXT, PRE, LINK (label), CUSTOM_EMOJI (label)
        url: LINK
        document_id: CUSTOM_EMOJI
        language: PRE (never set by the parser)
    """

    type: NodeType
    text: str | None = None
    url: str | None = None
    document_id: str | None = None
    language: str | None = None
    children: list[Node] = field(default_factory=list)

    def append(self, child: Node) -> Node:
        self.children.append(child)
        return child
