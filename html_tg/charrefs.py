"""Table-driven decoding of HTML character references.

Decodes named references (``&amp;``), decimal (``&#38;``) and hexadecimal
(``&#x26;``) references the way a browser does inside a text-only element.
Unknown names are left as they are. A few legacy names (``&amp``, ``&copy``)
are recognised without the semicolon, also in front of trailing letters or
digits.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from html_tg.utils import utf16_len

NAMED_REFERENCES: dict[str, str] = {
    'amp': '&',
    'lt': '<',
    'gt': '>',
    'quot': '"',
    'apos': "'",
    'nbsp': '\N{NO-BREAK SPACE}',
    # Typography
    'ensp': '\N{EN SPACE}',
    'emsp': '\N{EM SPACE}',
    'thinsp': '\N{THIN SPACE}',
    'zwnj': '\N{ZERO WIDTH NON-JOINER}',
    'zwj': '\N{ZERO WIDTH JOINER}',
    'lrm': '\N{LEFT-TO-RIGHT MARK}',
    'rlm': '\N{RIGHT-TO-LEFT MARK}',
    'shy': '\N{SOFT HYPHEN}',
    'ndash': '\N{EN DASH}',
    'mdash': '\N{EM DASH}',
    'hellip': '\N{HORIZONTAL ELLIPSIS}',
    'lsquo': '\N{LEFT SINGLE QUOTATION MARK}',
    'rsquo': '\N{RIGHT SINGLE QUOTATION MARK}',
    'sbquo': '\N{SINGLE LOW-9 QUOTATION MARK}',
    'ldquo': '\N{LEFT DOUBLE QUOTATION MARK}',
    'rdquo': '\N{RIGHT DOUBLE QUOTATION MARK}',
    'bdquo': '\N{DOUBLE LOW-9 QUOTATION MARK}',
    'laquo': '\N{LEFT-POINTING DOUBLE ANGLE QUOTATION MARK}',
    'raquo': '\N{RIGHT-POINTING DOUBLE ANGLE QUOTATION MARK}',
    'lsaquo': '\N{SINGLE LEFT-POINTING ANGLE QUOTATION MARK}',
    'rsaquo': '\N{SINGLE RIGHT-POINTING ANGLE QUOTATION MARK}',
    'bull': '\N{BULLET}',
    'middot': '\N{MIDDLE DOT}',
    'dagger': '\N{DAGGER}',
    'Dagger': '\N{DOUBLE DAGGER}',
    'prime': '\N{PRIME}',
    'Prime': '\N{DOUBLE PRIME}',
    # Symbols
    'copy': '\N{COPYRIGHT SIGN}',
    'reg': '\N{REGISTERED SIGN}',
    'trade': '\N{TRADE MARK SIGN}',
    'sect': '\N{SECTION SIGN}',
    'para': '\N{PILCROW SIGN}',
    'deg': '\N{DEGREE SIGN}',
    'plusmn': '\N{PLUS-MINUS SIGN}',
    'times': '\N{MULTIPLICATION SIGN}',
    'divide': '\N{DIVISION SIGN}',
    'minus': '\N{MINUS SIGN}',
    'micro': '\N{MICRO SIGN}',
    'frac12': '\N{VULGAR FRACTION ONE HALF}',
    'frac14': '\N{VULGAR FRACTION ONE QUARTER}',
    'frac34': '\N{VULGAR FRACTION THREE QUARTERS}',
    'sup2': '\N{SUPERSCRIPT TWO}',
    'sup3': '\N{SUPERSCRIPT THREE}',
    'iexcl': '\N{INVERTED EXCLAMATION MARK}',
    'iquest': '\N{INVERTED QUESTION MARK}',
    'larr': '\N{LEFTWARDS ARROW}',
    'rarr': '\N{RIGHTWARDS ARROW}',
    'uarr': '\N{UPWARDS ARROW}',
    'darr': '\N{DOWNWARDS ARROW}',
    'hearts': '\N{BLACK HEART SUIT}',
    # Currency
    'cent': '\N{CENT SIGN}',
    'pound': '\N{POUND SIGN}',
    'yen': '\N{YEN SIGN}',
    'euro': '\N{EURO SIGN}',
    'curren': '\N{CURRENCY SIGN}',
}

# Names a browser also accepts without the terminating semicolon
LEGACY_REFERENCES = frozenset({'amp', 'lt', 'gt', 'quot', 'nbsp', 'copy', 'reg'})

# Numeric references in 0x80-0x9F are read as Windows-1252 bytes
WINDOWS_1252_REMAP: dict[int, str] = {
    0x80: '€',
    0x82: '‚',
    0x83: 'ƒ',
    0x84: '„',
    0x85: '…',
    0x86: '†',
    0x87: '‡',
    0x88: 'ˆ',
    0x89: '‰',
    0x8A: 'Š',
    0x8B: '‹',
    0x8C: 'Œ',
    0x8E: 'Ž',
    0x91: '‘',
    0x92: '’',
    0x93: '“',
    0x94: '”',
    0x95: '•',
    0x96: '–',
    0x97: '—',
    0x98: '˜',
    0x99: '™',
    0x9A: 'š',
    0x9B: '›',
    0x9C: 'œ',
    0x9E: 'ž',
    0x9F: 'Ÿ',
}

REPLACEMENT_CHARACTER = '\N{REPLACEMENT CHARACTER}'
MAX_CODE_POINT = 0x10FFFF

_CHAR_REF_RE = re.compile(
    r'&(?:#(?P<dec>[0-9]+)|#[xX](?P<hex>[0-9a-fA-F]+)|(?P<name>[A-Za-z][A-Za-z0-9]*))(?P<semi>;?)'
)


def _parse_code_point(digits: str, base: int) -> int:
    digits = digits.lstrip('0') or '0'
    # Longer digit runs are out of range in either base
    if len(digits) > 8:
        return MAX_CODE_POINT + 1
    return int(digits, base)


def _decode_code_point(code_point: int) -> str:
    if code_point == 0 or code_point > MAX_CODE_POINT or 0xD800 <= code_point <= 0xDFFF:
        return REPLACEMENT_CHARACTER
    if code_point in WINDOWS_1252_REMAP:
        return WINDOWS_1252_REMAP[code_point]
    return chr(code_point)


def _replace(match: re.Match[str]) -> str:
    if (digits := match.group('dec')) is not None:
        return _decode_code_point(_parse_code_point(digits, 10))
    if (digits := match.group('hex')) is not None:
        return _decode_code_point(_parse_code_point(digits, 16))

    name = match.group('name')
    semi = match.group('semi')
    if name in NAMED_REFERENCES and (semi or name in LEGACY_REFERENCES):
        return NAMED_REFERENCES[name]

    # Legacy names also match as the longest prefix of a longer run: &copy2024
    for end in range(len(name) - 1, 0, -1):
        if name[:end] in LEGACY_REFERENCES:
            return NAMED_REFERENCES[name[:end]] + name[end:] + semi
    return match.group(0)


def decode_char_refs(text: str) -> str:
    """Replace character references in ``text`` with the characters they name.

    Args:
        text: Plain text that may contain ``&name;``, ``&#NNN;`` or ``&#xHH;``

    Returns:
        Decoded text; unknown references are kept verbatim

    Examples:
        >>> decode_char_refs('&lt;br&gt; &amp; &#128512;')
        '<br> & \N{GRINNING FACE}'
    """
    if '&' not in text:
        return text
    return _CHAR_REF_RE.sub(_replace, text)


class Replacement(NamedTuple):
    """One decoded reference, measured in UTF-16 units of the undecoded text."""

    offset: int
    old_length: int
    new_length: int


def decode_char_refs_tracked(text: str) -> tuple[str, list[Replacement]]:
    """Decode character references and report where the text changed length.

    Args:
        text: Plain text that may contain character references

    Returns:
        (decoded_text, replacements) tuple; replacements are in source order
        and only list references whose decoded length differs
    """
    if '&' not in text:
        return text, []

    parts: list[str] = []
    replacements: list[Replacement] = []
    last = 0
    offset = 0
    for match in _CHAR_REF_RE.finditer(text):
        before = text[last : match.start()]
        parts.append(before)
        offset += utf16_len(before)

        decoded = _replace(match)
        parts.append(decoded)
        old_length = utf16_len(match.group(0))
        new_length = utf16_len(decoded)
        if old_length != new_length:
            replacements.append(Replacement(offset, old_length, new_length))
        offset += old_length
        last = match.end()

    parts.append(text[last:])
    return ''.join(parts), replacements


def remap_offset(offset: int, replacements: list[Replacement], is_end: bool = False) -> int:
    """Translate a UTF-16 offset in undecoded text to the decoded text.

    An offset falling inside a reference snaps to the start of its decoded
    character, or to its end when ``is_end`` is set.
    """
    shift = 0
    for replacement in replacements:
        old_end = replacement.offset + replacement.old_length
        if old_end <= offset:
            shift += replacement.old_length - replacement.new_length
        elif replacement.offset < offset:
            snapped = replacement.offset - shift
            return snapped + replacement.new_length if is_end else snapped
        else:
            break
    return offset - shift
