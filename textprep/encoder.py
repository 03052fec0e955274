"""
Sequence Encoder

Maps text to vocabulary indices using the same normalization as the
vocabulary builder. By default words missing from the vocabulary are
skipped, so an encoded review can be shorter than its word count.

Functions:
    encode: Text -> list of indices
    encode_batch: Encode several texts
    decode: Indices -> text (for inspection)
"""

from typing import Iterable, List

from textprep.config import OOV_MODES
from textprep.errors import InvalidConfigError
from textprep.vocabulary import Vocabulary, tokenize


def encode(text: str, vocabulary: Vocabulary, oov: str = "drop") -> List[int]:
    """
    Encode text into vocabulary indices.

    Args:
        text: Raw input text
        vocabulary: Frozen vocabulary to look words up in
        oov: "drop" skips unknown words, "index" maps them to vocabulary.oov_index

    Returns:
        List of integer indices, one per known word (or per word with oov="index")
    """
    if oov not in OOV_MODES:
        raise InvalidConfigError(f"oov must be one of {OOV_MODES}, got {oov!r}")

    indices = []
    for token in tokenize(text):
        index = vocabulary.index_of(token)
        if index is not None:
            indices.append(index)
        elif oov == "index":
            indices.append(vocabulary.oov_index)

    return indices


def encode_batch(
    texts: Iterable[str], vocabulary: Vocabulary, oov: str = "drop"
) -> List[List[int]]:
    """Encode multiple texts at once."""
    return [encode(text, vocabulary, oov) for text in texts]


def decode(indices: Iterable[int], vocabulary: Vocabulary) -> str:
    """
    Turn indices back into space-separated words.

    Padding is skipped and the OOV index renders as <UNK>. Punctuation and
    casing are lost during normalization, so this is not an exact inverse.
    """
    tokens = []
    for index in indices:
        token = vocabulary.token_at(int(index))
        if token is not None:
            tokens.append(token)
    return " ".join(tokens)
