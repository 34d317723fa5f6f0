"""Tests for html_tg.charrefs - character reference decoding."""

import pytest

from html_tg.charrefs import (
    Replacement,
    decode_char_refs,
    decode_char_refs_tracked,
    remap_offset,
)

# ============================================================================
# Named references
# ============================================================================


@pytest.mark.parametrize(
    ('text', 'expected'),
    [
        ('&amp;', '&'),
        ('&lt;br&gt;', '<br>'),
        ('&quot;quoted&quot;', '"quoted"'),
        ('it&apos;s', "it's"),
        ('a&nbsp;b', 'a\N{NO-BREAK SPACE}b'),
        ('wait&hellip;', 'wait\N{HORIZONTAL ELLIPSIS}'),
        ('&copy; 2024', '\N{COPYRIGHT SIGN} 2024'),
        # Legacy names decode without ';'
        ('&amp &lt', '& <'),
        # ... also in front of trailing letters or digits
        ('&amp1', '&1'),
        ('&copy2024', '\N{COPYRIGHT SIGN}2024'),
        ('&ampx;', '&x;'),
        ('&ltb&gt', '<b>'),
        # Others need ';'
        ('&hellip', '&hellip'),
        # Unknown names and bare ampersands are kept
        ('&unknown;', '&unknown;'),
        ('AT&T', 'AT&T'),
        ('a && b', 'a && b'),
        ('&', '&'),
        # Single pass only
        ('&amp;lt;', '&lt;'),
    ],
)
def test_named_references(text: str, expected: str) -> None:
    """Named references decode from the table."""
    assert decode_char_refs(text) == expected


# ============================================================================
# Numeric references
# ============================================================================


@pytest.mark.parametrize(
    ('text', 'expected'),
    [
        ('&#65;', 'A'),
        ('&#x41;', 'A'),
        ('&#X41;', 'A'),
        ('&#0065;', 'A'),
        ('&#128512;', '\N{GRINNING FACE}'),
        ('&#x1F525;', '\N{FIRE}'),
        # Windows-1252 remap
        ('&#150;', '\N{EN DASH}'),
        ('&#x80;', '\N{EURO SIGN}'),
        # Invalid code points
        ('&#0;', '\N{REPLACEMENT CHARACTER}'),
        ('&#xD800;', '\N{REPLACEMENT CHARACTER}'),
        ('&#x110000;', '\N{REPLACEMENT CHARACTER}'),
        ('&#99999999999999999999;', '\N{REPLACEMENT CHARACTER}'),
        # Not references
        ('&#;', '&#;'),
        ('&#x;', '&#x;'),
    ],
)
def test_numeric_references(text: str, expected: str) -> None:
    """Decimal and hexadecimal references follow HTML decoding rules."""
    assert decode_char_refs(text) == expected


def test_text_without_ampersand_unchanged() -> None:
    """Fast path returns the input as is."""
    text = 'nothing to decode \N{FIRE}'
    assert decode_char_refs(text) is text


# ============================================================================
# Offset tracking
# ============================================================================


def test_tracked_decoding_reports_length_changes() -> None:
    """Replacements record UTF-16 positions in the undecoded text."""
    decoded, replacements = decode_char_refs_tracked('\N{FIRE}&amp;x&#128512;')

    assert decoded == '\N{FIRE}&x\N{GRINNING FACE}'
    assert replacements == [Replacement(2, 5, 1), Replacement(8, 9, 2)]


def test_tracked_decoding_skips_unchanged_lengths() -> None:
    """Unknown references keep their length and are not reported."""
    assert decode_char_refs_tracked('&bogus; &') == ('&bogus; &', [])


def test_tracked_decoding_legacy_prefix() -> None:
    """Only the decoded legacy prefix shortens the text."""
    decoded, replacements = decode_char_refs_tracked('&copy2024')

    assert decoded == '\N{COPYRIGHT SIGN}2024'
    assert replacements == [Replacement(0, 9, 5)]


@pytest.mark.parametrize(
    ('offset', 'is_end', 'expected'),
    [
        (0, False, 0),
        (2, False, 2),
        # After '&amp;' (2..7) the text is 4 units shorter
        (7, False, 3),
        (8, True, 4),
        # Inside the reference snaps to its decoded character
        (4, False, 2),
        (4, True, 3),
    ],
)
def test_remap_offset(offset: int, is_end: bool, expected: int) -> None:
    """Offsets move left by the length saved in preceding references."""
    replacements = [Replacement(2, 5, 1)]
    assert remap_offset(offset, replacements, is_end=is_end) == expected


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
