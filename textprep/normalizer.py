"""
Fixed-Length Normalizer

Neural networks consume rectangular batches, but reviews have different
lengths. Every encoded review is forced to exactly max_length entries:

    too long:  keep the LAST max_length indices (drop from the front)
    too short: prepend padding indices (left-pad)

    max_length = 5
    [1, 2, 1]              -> [0, 0, 1, 2, 1]
    [4, 3, 1, 2, 1, 7, 5]  -> [1, 2, 1, 7, 5]

Functions:
    pad_sequence: Normalize one sequence
    pad_sequences: Normalize a batch into a 2D feature matrix
"""

from typing import List, Sequence

import numpy as np

from textprep.config import require_positive
from textprep.vocabulary import PAD_INDEX


def pad_sequence(
    sequence: Sequence[int], max_length: int, padding_index: int = PAD_INDEX
) -> List[int]:
    """
    Truncate or left-pad one sequence to max_length.

    Args:
        sequence: Encoded indices
        max_length: Output width
        padding_index: Value used for padding

    Returns:
        List of exactly max_length integers

    Raises:
        InvalidConfigError: If max_length is not a positive integer
    """
    require_positive("max_length", max_length)
    max_length = int(max_length)

    values = list(sequence)
    if len(values) >= max_length:
        return values[len(values) - max_length :]

    return [padding_index] * (max_length - len(values)) + values


def pad_sequences(
    sequences: Sequence[Sequence[int]],
    max_length: int,
    padding_index: int = PAD_INDEX,
    dtype=np.int64,
) -> np.ndarray:
    """
    Normalize a batch of sequences into a feature matrix.

    Args:
        sequences: Encoded sequences of any length
        max_length: Width of every row
        padding_index: Value used for padding
        dtype: Integer dtype of the result

    Returns:
        Array of shape (len(sequences), max_length)
    """
    require_positive("max_length", max_length)
    max_length = int(max_length)

    features = np.full((len(sequences), max_length), padding_index, dtype=dtype)
    for row, sequence in enumerate(sequences):
        features[row] = pad_sequence(sequence, max_length, padding_index)

    return features


# =============================================================================
# EDUCATIONAL DEMO
# Run with: python -m textprep.normalizer
# =============================================================================
if __name__ == "__main__":
    print("=" * 70)
    print("NORMALIZER DEMO - Making Every Review the Same Width")
    print("=" * 70)
    print()

    batch = [[1, 2, 1], [4, 3, 1, 2, 1, 7, 5], []]
    matrix = pad_sequences(batch, max_length=5)

    print("Encoded reviews:")
    for sequence in batch:
        print(f"  {sequence} (len={len(sequence)})")
    print()
    print(f"Feature matrix shape: {matrix.shape}")
    print(matrix)
    print()
    print("Short rows are padded on the left with 0; long rows keep their end.")
