"""Main compilation pipeline from editor HTML to Telegram formatted text.

Stages: preprocess HTML, tokenize markup, parse tokens into a tree, flatten
the tree into text and entities, decode character references.
"""

from __future__ import annotations

import logging

from html_tg.charrefs import Replacement, decode_char_refs_tracked, remap_offset
from html_tg.config import DEFAULT_CONFIG, FormattedText, MessageEntity, ParserConfig
from html_tg.flattener import flatten
from html_tg.parser import parse
from html_tg.preprocessor import preprocess
from html_tg.tokenizer import tokenize

LOGGER = logging.getLogger(__name__)


def _remap_entities(
    entities: list[MessageEntity],
    replacements: list[Replacement],
) -> list[MessageEntity]:
    """Move entity spans onto the decoded text, dropping spans that collapse."""
    remapped: list[MessageEntity] = []
    for entity in entities:
        start = remap_offset(entity['offset'], replacements)
        end = remap_offset(entity['offset'] + entity['length'], replacements, is_end=True)
        if end > start:
            remapped.append({**entity, 'offset': start, 'length': end - start})
    return remapped


def compile_formatted_text(
    html: str,
    config: ParserConfig | None = None,
) -> FormattedText:
    """Convert editor HTML with inline markup to Telegram plain text with entities.

    Recognized markup: ``**bold**``, ``__italic__``, ``~~strike~~``,
    ``||spoiler||``, `` `code` ``, fenced code blocks, ``[label](url)`` links
    and ``[label](customEmoji:ID)`` custom emoji.

    Malformed markup never raises: an unclosed marker formats everything up to
    the end of input and stray brackets are kept as text.

    Args:
        html: HTML fragment from the message editor
        config: Optional configuration (uses default if None)

    Returns:
        FormattedText dict. ``entities`` is present only when at least one
        entity was produced; offsets and lengths are in UTF-16 code units.

    Examples:
        >>> compile_formatted_text('**Bold** and __italic__')
        {'text': 'Bold and italic', 'entities': [{'type': 'bold', 'offset': 0, 'length': 4},
         {'type': 'italic', 'offset': 9, 'length': 6}]}

        >>> compile_formatted_text('')
        {'text': ''}
    """
    if config is None:
        config = DEFAULT_CONFIG

    cleaned, preserve_trailing_newline = preprocess(html, config)
    tokens = tokenize(cleaned)
    root = parse(tokens, config)
    text, entities = flatten(root)

    # A trailing <br> in the editor is an explicit empty last line
    if preserve_trailing_newline and not text.endswith('\n'):
        text += '\n'

    text, replacements = decode_char_refs_tracked(text)
    if replacements:
        entities = _remap_entities(entities, replacements)

    LOGGER.debug('Compiled %d tokens into %d entities', len(tokens), len(entities))

    result: FormattedText = {'text': text}
    if entities:
        result['entities'] = entities
    return result
