"""Slug generation for document identifiers and taxonomy page names"""

import re


# symbols that carry meaning in technical tag names (C#, C++, F#)
_SYMBOL_WORDS = {'#': '-sharp', '+': '-plus'}


def slugify(text: str, fallback: str = '') -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug.

    Returns `fallback` when nothing slug-worthy is left.
    """
    text = text.lower()
    for symbol, word in _SYMBOL_WORDS.items():
        text = text.replace(symbol, word)
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-') or fallback
