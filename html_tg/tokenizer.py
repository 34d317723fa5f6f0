"""Lexical scan of cleaned markup into delimiter and text tokens."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    TEXT = 'text'
    BOLD = 'bold'
    ITALIC = 'italic'
    STRIKE = 'strike'
    SPOILER = 'spoiler'
    INLINE_CODE = 'inline_code'
    CODE_FENCE = 'code_fence'
    OPEN_BRACKET = 'open_bracket'
    CLOSE_BRACKET = 'close_bracket'
    OPEN_PAREN = 'open_paren'
    CLOSE_PAREN = 'close_paren'


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    literal: str


CODE_FENCE = '```'

# Two-character markers never share a first character, so order is irrelevant
PAIRED_MARKERS: dict[str, TokenKind] = {
    '**': TokenKind.BOLD,
    '__': TokenKind.ITALIC,
    '~~': TokenKind.STRIKE,
    '||': TokenKind.SPOILER,
}

SINGLE_MARKERS: dict[str, TokenKind] = {
    '`': TokenKind.INLINE_CODE,
    '[': TokenKind.OPEN_BRACKET,
    ']': TokenKind.CLOSE_BRACKET,
    '(': TokenKind.OPEN_PAREN,
    ')': TokenKind.CLOSE_PAREN,
}


def _match_delimiter(text: str, pos: int) -> Token | None:
    """Return the delimiter token starting at ``pos``, longest marker first."""
    if text.startswith(CODE_FENCE, pos):
        return Token(TokenKind.CODE_FENCE, CODE_FENCE)

    pair = text[pos : pos + 2]
    if pair in PAIRED_MARKERS:
        return Token(PAIRED_MARKERS[pair], pair)

    char = text[pos]
    if char in SINGLE_MARKERS:
        return Token(SINGLE_MARKERS[char], char)

    return None


def tokenize(text: str) -> list[Token]:
    """Split cleaned markup into an ordered list of tokens.

    Single left-to-right pass without backtracking. Text tokens are maximal
    runs between delimiters and are never empty. No matching or nesting is
    done here.

    Args:
        text: Cleaned markup (output of the preprocessor)

    Returns:
        List of tokens in source order

    Examples:
        >>> [t.kind.value for t in tokenize('**hi**')]
        ['bold', 'text', 'bold']
    """
    tokens: list[Token] = []
    pos = 0
    run_start = 0

    while pos < len(text):
        delimiter = _match_delimiter(text, pos)
        if delimiter is None:
            pos += 1
            continue

        if pos > run_start:
            tokens.append(Token(TokenKind.TEXT, text[run_start:pos]))
        tokens.append(delimiter)
        pos += len(delimiter.literal)
        run_start = pos

    if pos > run_start:
        tokens.append(Token(TokenKind.TEXT, text[run_start:pos]))

    return tokens
