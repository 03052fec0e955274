"""
Pretrained Word Embeddings

Instead of learning word vectors from a small labeled set, the embedding
layer can start from vectors trained on a large corpus (GloVe). This module
reads the GloVe text format and lines the vectors up with our vocabulary
indices, producing a weight matrix an embedding layer can be initialized with.

GloVe text format, one word per line:
    the 0.418 0.24968 -0.41242 ...

Functions:
    load_glove: Parse a GloVe text file into word -> vector
    build_embedding_matrix: Arrange vectors by vocabulary index
"""

import logging
import os
from typing import Dict, Mapping, Optional

import numpy as np

from textprep.config import require_positive
from textprep.errors import InvalidConfigError, MissingDataError
from textprep.vocabulary import Vocabulary

logger = logging.getLogger(__name__)


def load_glove(path: str) -> Dict[str, np.ndarray]:
    """
    Load word vectors from a GloVe text file.

    Args:
        path: Path to e.g. glove.6B.100d.txt

    Returns:
        Dict mapping word to a float32 vector

    Raises:
        MissingDataError: If the file does not exist
        InvalidConfigError: If lines disagree on the vector dimension
    """
    if not os.path.isfile(path):
        raise MissingDataError(f"Embedding file not found: {path}")

    vectors: Dict[str, np.ndarray] = {}
    dimension: Optional[int] = None

    with open(path, "r", encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            values = line.rstrip().split(" ")
            if len(values) < 2:
                continue

            word = values[0]
            try:
                vector = np.asarray(values[1:], dtype=np.float32)
            except ValueError as e:
                raise InvalidConfigError(
                    f"{path}:{line_number}: non-numeric vector value ({e})"
                ) from e

            if dimension is None:
                dimension = len(vector)
            elif len(vector) != dimension:
                raise InvalidConfigError(
                    f"{path}:{line_number}: expected {dimension} values, "
                    f"got {len(vector)}"
                )

            vectors[word] = vector

    logger.info(
        "Loaded %d word vectors (dim=%s) from %s", len(vectors), dimension, path
    )
    return vectors


def build_embedding_matrix(
    vocabulary: Vocabulary, vectors: Mapping[str, np.ndarray], embedding_dim: int
) -> np.ndarray:
    """
    Build an embedding weight matrix aligned with vocabulary indices.

    Row i holds the vector of the word at index i. Rows for the padding index,
    the OOV index and words without a pretrained vector stay zero.

    Args:
        vocabulary: Vocabulary the matrix is indexed by
        vectors: Word -> vector mapping (e.g. from load_glove)
        embedding_dim: Vector dimension

    Returns:
        float32 array of shape (vocabulary.size_with_reserved, embedding_dim)
    """
    require_positive("embedding_dim", embedding_dim)

    matrix = np.zeros((vocabulary.size_with_reserved, embedding_dim), dtype=np.float32)

    found = 0
    for token in vocabulary.tokens:
        vector = vectors.get(token)
        if vector is None:
            continue
        if len(vector) != embedding_dim:
            raise InvalidConfigError(
                f"Vector for {token!r} has dimension {len(vector)}, "
                f"expected {embedding_dim}"
            )
        matrix[vocabulary.index_of(token)] = vector
        found += 1

    logger.info(
        "Embedding matrix %s: %d of %d words have pretrained vectors",
        matrix.shape,
        found,
        len(vocabulary),
    )
    return matrix
