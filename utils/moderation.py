"""Profanity masking for chirp bodies, applied once at creation."""

BLOCKED_WORDS = frozenset({"kerfuffle", "sharbert", "fornax"})
MASK = "****"


def clean_body(text: str, blocked=BLOCKED_WORDS, mask: str = MASK) -> str:
    """
    Mask whole words found in `blocked` (case-insensitive) and rejoin with
    single spaces. Words with punctuation attached or longer words that
    contain a blocked word ("kerfuffles", "Sharbert!") are left as they are.
    """
    return " ".join(mask if word.lower() in blocked else word for word in text.split())
