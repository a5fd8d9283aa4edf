"""
Hangul syllable helpers for fuzzy menu comparison.

A precomposed syllable block (U+AC00..U+D7A3) encodes a lead consonant, a vowel
and an optional tail consonant as ``0xAC00 + (lead * 21 + vowel) * 28 + tail``.
Both helpers leave any other character untouched, so mixed Korean/Latin input
works too. The output is for comparison only, never for display.
"""
from __future__ import annotations

_SYLLABLE_FIRST = 0xAC00
_SYLLABLE_LAST = 0xD7A3
_LEAD_SPAN = 588  # 21 vowels * 28 tails
_TAIL_COUNT = 28

LEAD_CONSONANTS: tuple[str, ...] = (
    "ㄱ", "ㄲ", "ㄴ", "ㄷ", "ㄸ", "ㄹ", "ㅁ", "ㅂ", "ㅃ", "ㅅ",
    "ㅆ", "ㅇ", "ㅈ", "ㅉ", "ㅊ", "ㅋ", "ㅌ", "ㅍ", "ㅎ",
)
VOWELS: tuple[str, ...] = (
    "ㅏ", "ㅐ", "ㅑ", "ㅒ", "ㅓ", "ㅔ", "ㅕ", "ㅖ", "ㅗ", "ㅘ",
    "ㅙ", "ㅚ", "ㅛ", "ㅜ", "ㅝ", "ㅞ", "ㅟ", "ㅠ", "ㅡ", "ㅢ", "ㅣ",
)
TAIL_CONSONANTS: tuple[str, ...] = (
    "", "ㄱ", "ㄲ", "ㄳ", "ㄴ", "ㄵ", "ㄶ", "ㄷ", "ㄹ", "ㄺ",
    "ㄻ", "ㄼ", "ㄽ", "ㄾ", "ㄿ", "ㅀ", "ㅁ", "ㅂ", "ㅄ", "ㅅ",
    "ㅆ", "ㅇ", "ㅈ", "ㅊ", "ㅋ", "ㅌ", "ㅍ", "ㅎ",
)


def _block_index(char: str) -> int | None:
    code = ord(char)
    if _SYLLABLE_FIRST <= code <= _SYLLABLE_LAST:
        return code - _SYLLABLE_FIRST
    return None


def decompose(text: str) -> str:
    """Spell every syllable block out as lead + vowel + tail letters.

    ``decompose("김치")`` -> ``"ㄱㅣㅁㅊㅣ"``
    """
    parts: list[str] = []
    for char in text:
        index = _block_index(char)
        if index is None:
            parts.append(char)
            continue
        parts.append(LEAD_CONSONANTS[index // _LEAD_SPAN])
        parts.append(VOWELS[(index % _LEAD_SPAN) // _TAIL_COUNT])
        parts.append(TAIL_CONSONANTS[index % _TAIL_COUNT])
    return "".join(parts)


def extract_lead_consonants(text: str) -> str:
    """Reduce every syllable block to its lead consonant.

    ``extract_lead_consonants("김치찌개")`` -> ``"ㄱㅊㅉㄱ"``
    """
    parts: list[str] = []
    for char in text:
        index = _block_index(char)
        parts.append(char if index is None else LEAD_CONSONANTS[index // _LEAD_SPAN])
    return "".join(parts)
