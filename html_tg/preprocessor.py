"""HTML normalization that runs before tokenizing.

The editable message field hands over an HTML fragment: line breaks arrive as
``<br>`` tags and ``<div>`` blocks, spaces as ``&nbsp;``. This module flattens
that into a plain markup string the tokenizer can scan.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from html_tg.config import DEFAULT_CONFIG, ParserConfig

_TRAILING_BR_RE = re.compile(r'<br\s*/?>\s*$', re.IGNORECASE)
_NBSP_RE = re.compile(r'&nbsp;')
# Safari wraps an empty line as <div><br></div>
_EMPTY_DIV_LINE_RE = re.compile(r'<div><br([^>]*)?></div>')
_BR_RE = re.compile(r'<br([^>]*)?>')
_DIV_ADJACENT_RE = re.compile(r'</div>(\s*)<div>')
_DIV_OPEN_RE = re.compile(r'<div>')
_DIV_CLOSE_RE = re.compile(r'</div>')
_EMOJI_IMG_RE = re.compile(r'\[<img[^>]+alt="([^"]+)"[^>]*>]', re.MULTILINE)
_TRAILING_NEWLINES_RE = re.compile(r'\n+\Z')


class PreprocessedText(NamedTuple):
    """Cleaned markup and whether a trailing explicit line break must survive."""

    cleaned: str
    preserve_trailing_newline: bool


def preprocess(html: str, config: ParserConfig | None = None) -> PreprocessedText:
    """Normalize an editor HTML fragment into plain markup.

    Steps are order dependent: the trailing ``<br>`` check must see the raw
    input, and trailing newline trimming must run after every tag has been
    turned into a newline.

    Args:
        html: Raw HTML fragment from the editor
        config: Parser configuration (uses default if None)

    Returns:
        PreprocessedText with the cleaned string and the trailing newline flag
    """
    if config is None:
        config = DEFAULT_CONFIG

    preserve_trailing_newline = _TRAILING_BR_RE.search(html) is not None

    text = _NBSP_RE.sub(' ', html)

    text = _EMPTY_DIV_LINE_RE.sub('\n', text)
    text = _BR_RE.sub('\n', text)

    text = _DIV_ADJACENT_RE.sub('\n', text)
    text = _DIV_OPEN_RE.sub('\n', text)
    text = _DIV_CLOSE_RE.sub('', text)

    if not config.custom_emoji_supported:
        text = _EMOJI_IMG_RE.sub(r'[\1]', text)

    if not preserve_trailing_newline:
        text = _TRAILING_NEWLINES_RE.sub('', text)

    return PreprocessedText(text, preserve_trailing_newline)
