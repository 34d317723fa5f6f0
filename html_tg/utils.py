"""Utility functions for working with compiled Telegram entities."""

from collections.abc import Sequence
from typing import overload

from aiogram.enums import MessageEntityType
from aiogram.types import MessageEntity as AiogramEntity

from html_tg.config import MessageEntity


def utf16_len(text: str) -> int:
    """Calculate length in UTF-16 code units (for Telegram API).

    Telegram API uses UTF-16 for calculating offsets and lengths in MessageEntity.
    This function returns the proper length needed for entity calculations.

    Args:
        text: Input text string

    Returns:
        Length in UTF-16 code units

    Examples:
        >>> utf16_len("Hello")
        5
        >>> utf16_len("\N{EARTH GLOBE EUROPE-AFRICA}")
        2
    """
    return len(text.encode('utf-16-le', errors='surrogatepass')) // 2


def utf16_slice(text: str, offset: int, length: int) -> str:
    """Return the part of ``text`` covered by a UTF-16 ``offset``/``length`` span."""
    encoded = text.encode('utf-16-le', errors='surrogatepass')
    return encoded[offset * 2 : (offset + length) * 2].decode('utf-16-le', errors='surrogatepass')


@overload
def to_aiogram_entities(entities: MessageEntity) -> AiogramEntity: ...


@overload
def to_aiogram_entities(entities: Sequence[MessageEntity]) -> list[AiogramEntity]: ...


def to_aiogram_entities(
    entities: MessageEntity | Sequence[MessageEntity],
) -> AiogramEntity | list[AiogramEntity]:
    """Convert compiled MessageEntity dicts to aiogram MessageEntity format.

    Supports both single entity and list of entities.

    Args:
        entities: Single MessageEntity dict or sequence of MessageEntity dicts

    Returns:
        Single aiogram MessageEntity or list of aiogram MessageEntity instances

    Examples:
        >>> from html_tg import compile_formatted_text
        >>> result = compile_formatted_text('**Bold**')
        >>> await message.answer(
        ...     result['text'],
        ...     entities=to_aiogram_entities(result.get('entities', [])),
        ... )
    """
    # Check if single entity (has 'type' key)
    if isinstance(entities, dict) and 'type' in entities:
        return _to_aiogram_entity(entities)

    return [_to_aiogram_entity(e) for e in entities]


def _to_aiogram_entity(entity: MessageEntity) -> AiogramEntity:
    return AiogramEntity(
        type=MessageEntityType(entity['type']),
        offset=entity['offset'],
        length=entity['length'],
        url=entity.get('url'),
        custom_emoji_id=entity.get('custom_emoji_id'),
        language=entity.get('language'),
    )
