from transync.core.textnorm import normalize


def test_normalize_quotes_punctuation_and_case():
    text = "Hello,   “World”\n it’s  fine!"
    assert normalize(text) == ["hello", '"world"', "it's", "fine"]


def test_normalize_empty():
    assert normalize("") == []
    assert normalize("  \n\t ") == []
    assert normalize("...!?") == []


def test_normalize_is_deterministic():
    text = "Q1: So -- where were you born?"
    assert normalize(text) == normalize(text) == ["q1", "so", "where", "were", "you", "born"]


def test_normalize_keeps_ascii_word_characters_only():
    assert normalize("Café NAÏVE straße_2") == ["caf", "nave", "strae_2"]
