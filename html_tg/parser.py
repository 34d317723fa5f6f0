"""Stack-based parser turning tokens into a formatting tree.

The parser is deliberately forgiving: an opening marker without a closing
counterpart extends to the end of input, stray brackets and parentheses
become plain text, and nothing ever raises.
"""

from __future__ import annotations

from collections.abc import Sequence

from html_tg.ast import Node, NodeType
from html_tg.config import DEFAULT_CONFIG, ParserConfig
from html_tg.tokenizer import Token, TokenKind

# Paired markers whose content is parsed recursively
SPAN_NODE_TYPES: dict[TokenKind, NodeType] = {
    TokenKind.BOLD: NodeType.BOLD,
    TokenKind.ITALIC: NodeType.ITALIC,
    TokenKind.STRIKE: NodeType.STRIKE,
    TokenKind.SPOILER: NodeType.SPOILER,
    TokenKind.INLINE_CODE: NodeType.CODE,
}


class Parser:
    """Builds a ROOT node from a token list.

    A single instance owns the read position shared by every recursion level,
    so a nested span resumes its parent exactly where it stopped.

    Attributes:
        tokens: Token sequence being consumed
        pos: Index of the next unread token
        config: Parser configuration
    """

    def __init__(self, tokens: Sequence[Token], config: ParserConfig | None = None) -> None:
        self.tokens = tokens
        self.pos = 0
        self.config = config or DEFAULT_CONFIG

    def parse(self) -> Node:
        root = Node(NodeType.ROOT)
        self._parse_inline(root)
        return root

    def _peek(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def _collect_until(self, kind: TokenKind) -> str:
        """Join raw token literals up to ``kind`` and consume the terminator if present."""
        parts: list[str] = []
        while (token := self._peek()) is not None and token.kind is not kind:
            parts.append(token.literal)
            self.pos += 1
        if token is not None:
            self.pos += 1
        return ''.join(parts)

    def _parse_inline(self, root: Node) -> None:
        """Consume every token into ``root``.

        Open spans are kept on an explicit stack of ``(node, closing_kind)``
        frames, so nesting depth is not bounded by the interpreter's
        recursion limit.
        """
        stack: list[tuple[Node, TokenKind | None]] = [(root, None)]

        while (token := self._peek()) is not None:
            parent, closing = stack[-1]

            if closing is not None and token.kind is closing:
                self.pos += 1
                stack.pop()
                continue

            self.pos += 1
            if token.kind in SPAN_NODE_TYPES:
                span = parent.append(Node(SPAN_NODE_TYPES[token.kind]))
                stack.append((span, token.kind))
            elif token.kind is TokenKind.CODE_FENCE:
                parent.append(self._parse_code_block())
            elif token.kind is TokenKind.OPEN_BRACKET:
                if (link := self._parse_link()) is not None:
                    parent.append(link)
            else:
                # Text runs, plus any stray bracket or paren
                parent.append(Node(NodeType.TEXT, text=token.literal))

    def _parse_code_block(self) -> Node:
        code = self._collect_until(TokenKind.CODE_FENCE)
        if code.startswith('\n'):
            code = code[1:]
        return Node(NodeType.PRE, text=code.rstrip('\n'))

    def _parse_link(self) -> Node | None:
        label = self._collect_until(TokenKind.CLOSE_BRACKET)

        next_token = self._peek()
        if next_token is None or next_token.kind is not TokenKind.OPEN_PAREN:
            # Without a target the bracketed label is swallowed
            return None

        self.pos += 1
        target = self._collect_until(TokenKind.CLOSE_PAREN).strip()

        prefix = self.config.custom_emoji_prefix
        if target.startswith(prefix):
            return Node(NodeType.CUSTOM_EMOJI, text=label, document_id=target[len(prefix) :])
        return Node(NodeType.LINK, text=label, url=target)


def parse(tokens: Sequence[Token], config: ParserConfig | None = None) -> Node:
    """Parse a token list into a tree rooted at a ROOT node.

    Args:
        tokens: Output of :func:`html_tg.tokenizer.tokenize`
        config: Parser configuration (uses default if None)

    Returns:
        ROOT node owning the whole tree
    """
    return Parser(tokens, config).parse()
