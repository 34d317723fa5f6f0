"""Flatten a formatting tree into Telegram plain text with entities."""

from __future__ import annotations

from collections.abc import Callable

from aiogram.enums import MessageEntityType

from html_tg.ast import Node, NodeType
from html_tg.config import MessageEntity
from html_tg.utils import utf16_len


class EntityFlattener:
    """Walks a tree depth-first and produces plain text plus message entities.

    One instance is used for a whole traversal: ``current_offset`` is the
    running position shared by every node, so an entity's offset is the
    cursor value on entering its node and its length is how far the cursor
    moved before leaving it. Entities are appended on exit, children before
    their parent.

    Attributes:
        output_text: Accumulated plain text
        entities: List of message entities, in traversal order
        current_offset: Current position in UTF-16 units
    """

    def __init__(self) -> None:
        self._parts: list[str] = []
        self.entities: list[MessageEntity] = []
        self.current_offset: int = 0

    @property
    def output_text(self) -> str:
        return ''.join(self._parts)

    def _get_method(self, node: Node) -> Callable[[Node, int], None]:
        """Get the exit handler for a node type, falling back to no entity."""
        return getattr(self, node.type.value, self._no_entity)

    def _add_text(self, content: str | None) -> None:
        """Add text and update offset.

        Args:
            content: Text content to add
        """
        if not content:  # Early return for empty strings
            return
        self._parts.append(content)
        self.current_offset += utf16_len(content)

    def _add_entity(
        self,
        entity_type: MessageEntityType,
        offset: int,
        length: int,
        url: str | None = None,
        custom_emoji_id: str | None = None,
        language: str | None = None,
    ) -> None:
        """Add entity to the list, dropping zero-length spans.

        Args:
            entity_type: Type of entity (bold, italic, code, etc.)
            offset: Start offset of the entity in UTF-16 units
            length: Length in UTF-16 units
            url: URL for text_link entities
            custom_emoji_id: Custom emoji identifier for custom_emoji entities
            language: Programming language for pre entities
        """
        if length <= 0:  # Skip empty entities
            return

        entity: MessageEntity = {
            'type': entity_type.value,
            'offset': offset,
            'length': length,
        }
        if url is not None:
            entity['url'] = url
        if custom_emoji_id is not None:
            entity['custom_emoji_id'] = custom_emoji_id
        if language is not None:
            entity['language'] = language
        self.entities.append(entity)

    def render_node(self, node: Node) -> None:
        """Render ``node`` and its subtree.

        The walk keeps an explicit stack of ``(node, start_offset, exiting)``
        frames. A node's text is emitted on entry and its entity on exit,
        after all of its children, so arbitrarily deep trees keep the
        child-before-parent entity order.
        """
        stack: list[tuple[Node, int, bool]] = [(node, 0, False)]
        while stack:
            current, start_offset, exiting = stack.pop()
            if exiting:
                self._get_method(current)(current, start_offset)
                continue

            start_offset = self.current_offset
            self._add_text(self._node_text(current))
            stack.append((current, start_offset, True))
            stack.extend((child, 0, False) for child in reversed(current.children))

    @staticmethod
    def _node_text(node: Node) -> str | None:
        # A code block's language, when set, is emitted as its first line
        if node.type is NodeType.PRE and node.language:
            return f'{node.language}\n{node.text or ""}'
        return node.text

    def _close_entity(
        self, entity_type: MessageEntityType, start_offset: int, **extra: str
    ) -> None:
        """Wrap everything emitted since ``start_offset`` in one entity."""
        self._add_entity(entity_type, start_offset, self.current_offset - start_offset, **extra)

    def _no_entity(self, node: Node, start_offset: int) -> None:
        pass

    root = _no_entity
    text = _no_entity

    def bold(self, node: Node, start_offset: int) -> None:
        self._close_entity(MessageEntityType.BOLD, start_offset)

    def italic(self, node: Node, start_offset: int) -> None:
        self._close_entity(MessageEntityType.ITALIC, start_offset)

    def underline(self, node: Node, start_offset: int) -> None:
        self._close_entity(MessageEntityType.UNDERLINE, start_offset)

    def strike(self, node: Node, start_offset: int) -> None:
        self._close_entity(MessageEntityType.STRIKETHROUGH, start_offset)

    def spoiler(self, node: Node, start_offset: int) -> None:
        self._close_entity(MessageEntityType.SPOILER, start_offset)

    def code(self, node: Node, start_offset: int) -> None:
        self._close_entity(MessageEntityType.CODE, start_offset)

    def pre(self, node: Node, start_offset: int) -> None:
        if node.language:
            self._close_entity(MessageEntityType.PRE, start_offset, language=node.language)
        else:
            self._close_entity(MessageEntityType.PRE, start_offset)

    def link(self, node: Node, start_offset: int) -> None:
        """Close a link as text_link, or as a bare url when the label is the url."""
        if node.url and node.url != node.text:
            self._close_entity(MessageEntityType.TEXT_LINK, start_offset, url=node.url)
        else:
            self._close_entity(MessageEntityType.URL, start_offset)

    def custom_emoji(self, node: Node, start_offset: int) -> None:
        self._close_entity(
            MessageEntityType.CUSTOM_EMOJI,
            start_offset,
            custom_emoji_id=node.document_id or '',
        )

    def finalize(self) -> tuple[str, list[MessageEntity]]:
        """Return the accumulated (plain_text, entities) pair."""
        return (self.output_text, self.entities)


def flatten(root: Node) -> tuple[str, list[MessageEntity]]:
    """Flatten a tree into plain text and entities.

    Args:
        root: ROOT node produced by the parser

    Returns:
        (plain_text, entities) tuple; offsets and lengths are in UTF-16 units
    """
    flattener = EntityFlattener()
    flattener.render_node(root)
    return flattener.finalize()
