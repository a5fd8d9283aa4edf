"""
Menu matching package.

Responsibilities:
- Normalize Hangul text (syllable decomposition, lead consonants).
- Map casual spellings and catalog synonyms to canonical dish names.
- Resolve free-text meal entries to catalog menus with a confidence and a match type.
- Rank fuzzy suggestions for type-ahead.
"""
