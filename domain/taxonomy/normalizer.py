"""Text normalization and tokenization shared by indexing and querying."""

import re

# English function words + listing noise + size/variant tokens
STOPWORDS: frozenset[str] = frozenset(
    {
        "a", "an", "the", "and", "or", "but", "for", "nor", "so", "of", "in", "on", "to", "with", "by", "at",
        "from", "is", "are", "was", "were", "be", "been", "being",
        "this", "that", "these", "those", "it", "its", "as", "if", "than", "too", "very", "can", "will", "just",
        # listing noise
        "new", "used", "like", "grade", "refurbished", "sale", "deal", "bundle", "set", "pack", "compatible",
        # units/variants
        "gb", "tb", "inch", "inches", "mm", "cm", "xl", "xxl", "pro", "max", "mini", "ultra", "series", "gen",
        "generation",
    }
)

_CURLY_QUOTES = re.compile(r"[\u2018\u2019]")
# Keep a few symbols that carry meaning in product names (wi-fi, at&t, 3.5mm -> "3", "5mm")
_DISALLOWED_CHARS = re.compile(r"[^a-z0-9\s'+&/-]")
_WHITESPACE = re.compile(r"\s+")
_TOKEN_SPLIT = re.compile(r"[^a-z0-9+]+")


def normalize_text(text: str | None) -> str:
    """
    Lowercase text and reduce it to the characters the tokenizer understands.

    Examples:
        >>> normalize_text("  Apple  iPhone’s Wi-Fi (Case)!")
        "apple iphone's wi-fi case"

    Args:
        text: Raw text (None is treated as empty)

    Returns:
        Normalized single-spaced string
    """
    if not text:
        return ""
    s = text.lower()
    s = _CURLY_QUOTES.sub("'", s)
    s = _DISALLOWED_CHARS.sub(" ", s)
    s = _WHITESPACE.sub(" ", s)
    return s.strip()


def tokenize(text: str | None, stopwords: frozenset[str] = STOPWORDS) -> list[str]:
    """
    Split text into comparable tokens.

    Tokens are maximal runs of [a-z0-9+] after normalization; single-character
    tokens and stop words are dropped. Order and repeats are preserved.
    """
    norm = normalize_text(text)
    if not norm:
        return []
    return [tok for tok in _TOKEN_SPLIT.split(norm) if len(tok) > 1 and tok not in stopwords]
