"""
Word-Level Vocabulary

This module turns raw review text into tokens and builds a frequency-ranked
vocabulary from a training corpus.

Normalization:
1. Lowercase the text
2. Replace punctuation with whitespace (apostrophes are kept so "don't"
   stays a single word)
3. Split on whitespace

Index layout:
    0                  padding (never a word)
    1 .. N             words, most frequent first
    N + 1              out-of-vocabulary marker (only used when requested)

Words with equal frequency keep the order in which they were first seen, so
building the vocabulary twice from the same corpus gives the same indices.

Classes:
    Vocabulary: Frozen word -> index mapping

Functions:
    normalize_text: Lowercase and strip punctuation
    tokenize: Split normalized text into words
    build_vocabulary: Count words and keep the most frequent ones
"""

import json
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence

from textprep.config import require_positive
from textprep.errors import InvalidConfigError

# Characters treated as word separators (Keras Tokenizer default filters)
PUNCTUATION = '!"#$%&()*+,-./:;<=>?@[\\]^_`{|}~\t\n'
_SEPARATOR_TABLE = str.maketrans({char: " " for char in PUNCTUATION})

PAD_INDEX = 0


def normalize_text(text: str) -> str:
    """
    Normalize text for tokenization.

    Args:
        text: Raw input text

    Returns:
        Lowercased text with punctuation replaced by single spaces
    """
    return " ".join(text.lower().translate(_SEPARATOR_TABLE).split())


def tokenize(text: str) -> List[str]:
    """Split text into normalized words."""
    return normalize_text(text).split()


class Vocabulary:
    """
    Frozen mapping from word to integer index.

    Build one with build_vocabulary() or Vocabulary.load(); the mapping is
    not modified afterwards, so the same instance can be shared across
    encoding threads.

    Attributes:
        padding_index: Index reserved for padding (0)
        oov_index: Index reserved for out-of-vocabulary words (len + 1)
        size_with_reserved: Number of indices including padding and OOV

    Example:
        >>> vocabulary = build_vocabulary(["bad movie bad"], max_words=2)
        >>> vocabulary.index_of("bad")
        1
        >>> vocabulary.token_at(2)
        'movie'
    """

    UNK_TOKEN = "<UNK>"
    padding_index = PAD_INDEX

    def __init__(self, tokens: Sequence[str], counts: Optional[Sequence[int]] = None):
        """
        Create a vocabulary from words in rank order.

        Args:
            tokens: Distinct words, most frequent first; tokens[i] gets index i + 1
            counts: Optional corpus frequency of each word
        """
        if len(set(tokens)) != len(tokens):
            raise InvalidConfigError("Vocabulary tokens must be distinct")
        if counts is not None and len(counts) != len(tokens):
            raise InvalidConfigError(
                f"Got {len(counts)} counts for {len(tokens)} tokens"
            )

        self._index_to_token: List[str] = list(tokens)
        self._token_to_index: Dict[str, int] = {
            token: index for index, token in enumerate(self._index_to_token, start=1)
        }
        self._counts: Dict[str, int] = (
            dict(zip(self._index_to_token, counts)) if counts is not None else {}
        )

    def __len__(self) -> int:
        """Number of words (reserved indices not included)."""
        return len(self._index_to_token)

    def __contains__(self, token: str) -> bool:
        return token in self._token_to_index

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vocabulary):
            return NotImplemented
        return self._index_to_token == other._index_to_token

    def __repr__(self) -> str:
        return f"Vocabulary(size={len(self)})"

    @property
    def oov_index(self) -> int:
        return len(self) + 1

    @property
    def size_with_reserved(self) -> int:
        """Input dimension for an embedding layer (words + padding + OOV)."""
        return len(self) + 2

    @property
    def token_to_index(self) -> Dict[str, int]:
        """Copy of the word -> index mapping."""
        return dict(self._token_to_index)

    @property
    def tokens(self) -> List[str]:
        """Words in index order (index 1 first)."""
        return list(self._index_to_token)

    @property
    def counts(self) -> Dict[str, int]:
        """Copy of the corpus frequency of each kept word (empty if unknown)."""
        return dict(self._counts)

    def index_of(self, token: str) -> Optional[int]:
        """Return the index of a word, or None if it is not in the vocabulary."""
        return self._token_to_index.get(token)

    def token_at(self, index: int) -> Optional[str]:
        """
        Return the word stored at an index.

        Returns None for the padding index and for indices outside the
        vocabulary; the OOV index returns UNK_TOKEN.
        """
        if index == self.oov_index:
            return self.UNK_TOKEN
        if 1 <= index <= len(self):
            return self._index_to_token[index - 1]
        return None

    def save(self, path: str) -> None:
        """
        Save the vocabulary to a JSON file.

        Args:
            path: File path to save to
        """
        data = {
            "tokens": self._index_to_token,
            "counts": [self._counts[token] for token in self._index_to_token]
            if self._counts
            else None,
            "special_tokens": {"pad": self.padding_index, "oov": self.oov_index},
        }

        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    @classmethod
    def load(cls, path: str) -> "Vocabulary":
        """
        Load a vocabulary from a JSON file written by save().

        Args:
            path: File path to load from

        Returns:
            Loaded Vocabulary
        """
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        return cls(data["tokens"], data.get("counts"))


def count_tokens(texts: Iterable[str]) -> Counter:
    """
    Count word frequency across a corpus.

    The Counter preserves first-seen order, which build_vocabulary relies on
    for tie-breaking.
    """
    counter: Counter = Counter()
    for text in texts:
        counter.update(tokenize(text))
    return counter


def build_vocabulary(texts: Iterable[str], max_words: int) -> Vocabulary:
    """
    Build a vocabulary of the most frequent words in a corpus.

    Algorithm:
    1. Normalize and tokenize every text
    2. Count each word over the whole corpus
    3. Rank by descending count, ties in first-seen order
    4. Keep the top max_words words and number them from 1

    Args:
        texts: Raw training texts
        max_words: Maximum number of words to keep

    Returns:
        Vocabulary with min(max_words, distinct words) entries

    Raises:
        InvalidConfigError: If max_words is not a positive integer
    """
    require_positive("max_words", max_words)

    # most_common orders equal counts by first insertion
    ranked = count_tokens(texts).most_common(max_words)

    return Vocabulary(
        tokens=[token for token, _ in ranked],
        counts=[count for _, count in ranked],
    )


# =============================================================================
# EDUCATIONAL DEMO
# Run with: python -m textprep.vocabulary
# =============================================================================
if __name__ == "__main__":
    print("=" * 70)
    print("VOCABULARY DEMO - Ranking Words by Frequency")
    print("=" * 70)
    print()

    corpus = [
        "This movie was GREAT. Great acting, great story!",
        "Bad movie... the story didn't work.",
        "I don't think this movie was bad at all.",
    ]

    print("Normalization lowercases and strips punctuation:")
    for text in corpus:
        print(f"  '{text}'")
        print(f"    -> {tokenize(text)}")
    print()

    vocabulary = build_vocabulary(corpus, max_words=8)
    print(f"Top {len(vocabulary)} words (index: word x count):")
    for token in vocabulary.tokens:
        print(f"  {vocabulary.index_of(token)}: {token} x {vocabulary.counts[token]}")
    print()
    print(f"Padding index: {vocabulary.padding_index}")
    print(f"OOV index:     {vocabulary.oov_index}")
    print(f"Embedding input dimension: {vocabulary.size_with_reserved}")
