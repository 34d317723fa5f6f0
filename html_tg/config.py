"""Configuration and data models for rich text to Telegram conversion."""

from dataclasses import dataclass
from typing import NotRequired, TypedDict


class MessageEntity(TypedDict):
    """Telegram MessageEntity structure.

    Follows Bot API spec: https://core.telegram.org/bots/api#messageentity

    This is a TypedDict for minimal overhead and direct compatibility
    with Telegram API (which expects plain dicts).

    Required fields:
        type: Type of entity (bold, italic, code, pre, text_link, etc.)
        offset: Offset in UTF-16 code units to the start of the entity
        length: Length in UTF-16 code units

    Optional fields:
        url: For text_link only, URL that will be opened after user taps on the text
        custom_emoji_id: For custom_emoji only, unique identifier of the custom emoji
        language: For pre only, the programming language of the entity text
    """

    type: str
    offset: int
    length: int
    url: NotRequired[str]
    custom_emoji_id: NotRequired[str]
    language: NotRequired[str]


class FormattedText(TypedDict):
    """Compiled message: plain text plus formatting entities.

    ``entities`` is omitted entirely when the input produced no formatting.
    """

    text: str
    entities: NotRequired[list[MessageEntity]]


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for rich text compilation.

    Attributes:
        custom_emoji_supported: Whether the editor renders custom emoji natively.
            When False, bracketed ``<img alt="...">`` placeholders are rewritten
            to ``[alt]`` before tokenizing (default: True)
        custom_emoji_prefix: Link target prefix that turns ``[label](target)``
            into a custom emoji instead of a link (default: 'customEmoji:')
    """

    custom_emoji_supported: bool = True
    custom_emoji_prefix: str = 'customEmoji:'


# Default configuration instance
DEFAULT_CONFIG = ParserConfig()
