"""Editor HTML and inline markup to Telegram message entities compiler.

This module converts rich text typed into a message editor (an HTML fragment
carrying ``**bold**``-style markup) into Telegram-compatible plain text with
message entities (formatting).

Example:
    >>> from html_tg import compile_formatted_text
    >>> result = compile_formatted_text('**Bold** and __italic__ text')
    >>> print(result['text'])
    Bold and italic text
    >>> # Entities are MessageEntity dicts (TypedDict)
    >>> print(result['entities'][0]['type'])
    bold
"""

from html_tg.config import DEFAULT_CONFIG, FormattedText, MessageEntity, ParserConfig
from html_tg.converter import compile_formatted_text

__version__ = '0.1.0'

__all__ = [
    'compile_formatted_text',
    'FormattedText',
    'MessageEntity',
    'ParserConfig',
    'DEFAULT_CONFIG',
]
