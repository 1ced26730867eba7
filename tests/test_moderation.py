import pytest

from utils.moderation import clean_body


def test_masks_blocked_word():
    assert clean_body("This is a kerfuffle opinion I have") == "This is a **** opinion I have"


@pytest.mark.parametrize("word", ["Sharbert", "SHARBERT", "sharbert", "Fornax"])
def test_masks_case_insensitively(word):
    assert clean_body(f"I hear {word} is great") == "I hear **** is great"


def test_only_whole_words_are_masked():
    assert clean_body("so many kerfuffles today") == "so many kerfuffles today"
    assert clean_body("Sharbert! is fine") == "Sharbert! is fine"


def test_rejoins_with_single_spaces():
    assert clean_body("  hello\tkerfuffle \n world ") == "hello **** world"


def test_clean_text_is_unchanged():
    text = "I had something interesting for breakfast"
    assert clean_body(text) == text
