import pytest

from domain.taxonomy.normalizer import STOPWORDS, normalize_text, tokenize

SAMPLES = [
    "Apple iPhone 13 Pro Max 128GB - Used",
    "  Wi-Fi   Router & Modem  ",
    "Sony WH-1000XM4 Wireless Noise Cancelling Headphones",
    "3.5mm Audio Cable (6 ft)",
    "Kid’s “Deluxe” C++ Programming Book!!",
    "",
    "The new bundle pack",
    "Café Crème – Espresso Cups, Set of 4",
]


def test_normalize_text_lowercases_and_strips_symbols() -> None:
    assert normalize_text("  Apple  iPhone’s Wi-Fi (Case)!") == "apple iphone's wi-fi case"


def test_normalize_text_keeps_whitelisted_symbols() -> None:
    assert normalize_text("AT&T 5G/LTE +Plus") == "at&t 5g/lte +plus"


def test_normalize_text_handles_none_and_empty() -> None:
    assert normalize_text(None) == ""
    assert normalize_text("   ") == ""


def test_tokenize_drops_stopwords_and_variant_tokens() -> None:
    assert tokenize("Apple iPhone 13 Pro Max 128GB - Used") == ["apple", "iphone", "13", "128gb"]


def test_tokenize_splits_on_hyphen_slash_and_ampersand() -> None:
    assert tokenize("Wi-Fi Router & Modem") == ["wi", "fi", "router", "modem"]
    assert tokenize("Headphones & Headsets") == ["headphones", "headsets"]
    assert tokenize("5G/LTE") == ["5g", "lte"]


def test_tokenize_keeps_plus_inside_tokens() -> None:
    assert tokenize("C++ Programming Book") == ["c++", "programming", "book"]


def test_tokenize_drops_single_character_tokens() -> None:
    assert tokenize("3.5mm Audio Cable") == ["5mm", "audio", "cable"]


def test_tokenize_preserves_order_and_repeats() -> None:
    assert tokenize("phone phone case") == ["phone", "phone", "case"]


def test_tokenize_only_filler_words_yields_nothing() -> None:
    assert tokenize("The new bundle pack of XL GB") == []
    assert tokenize(None) == []


def test_listing_noise_is_in_stopwords() -> None:
    for word in ["new", "used", "bundle", "pack", "gb", "mm", "xl", "pro", "gen"]:
        assert word in STOPWORDS


@pytest.mark.parametrize("text", SAMPLES)
def test_normalization_is_idempotent(text: str) -> None:
    assert normalize_text(normalize_text(text)) == normalize_text(text)
    tokens = tokenize(text)
    assert tokenize(" ".join(tokens)) == tokens


@pytest.mark.parametrize("text", SAMPLES)
def test_tokenize_is_deterministic(text: str) -> None:
    assert tokenize(text) == tokenize(text)
