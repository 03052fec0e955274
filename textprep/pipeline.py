"""
Preprocessing Pipeline

Runs the full text-to-tensor flow over a corpus:

    load train -> build vocabulary -> encode -> pad -> shuffle/split
    load test  ------------------------> encode -> pad   (training vocabulary)

The vocabulary is built from training texts only and then frozen, so test
words never leak into the index.

Classes:
    PreparedSplit: Feature matrix plus label vector
    PreparedDataset: Everything a training script needs

Functions:
    prepare_split: Encode and pad already loaded documents
    shuffle_split: Shuffle rows and carve off a validation split
    prepare_corpus: Run the whole pipeline on a corpus directory
    save_prepared: Write arrays, vocabulary and config to a directory
    load_prepared: Read them back
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from textprep.config import PipelineConfig
from textprep.encoder import encode_batch
from textprep.errors import InvalidConfigError, MissingDataError
from textprep.loader import Document, load_documents, texts_and_labels
from textprep.normalizer import pad_sequences
from textprep.vocabulary import Vocabulary, build_vocabulary

logger = logging.getLogger(__name__)

ARRAYS_FILE = "dataset.npz"
VOCABULARY_FILE = "vocabulary.json"
CONFIG_FILE = "config.json"


@dataclass
class PreparedSplit:
    """
    Model-ready arrays for one split.

    Attributes:
        features: Index matrix, shape (num_documents, max_len)
        labels: 0/1 labels, shape (num_documents,)
    """

    features: np.ndarray
    labels: np.ndarray

    def __len__(self) -> int:
        return self.features.shape[0]


@dataclass
class PreparedDataset:
    """
    Output of a pipeline run.

    Attributes:
        vocabulary: Vocabulary built from the training split
        train: Shuffled training rows
        validation: Rows held out from training (may be empty)
        test: Test split encoded with the training vocabulary (None if absent)
        config: Configuration used for the run
    """

    vocabulary: Vocabulary
    train: PreparedSplit
    validation: PreparedSplit
    test: Optional[PreparedSplit]
    config: PipelineConfig


def prepare_split(
    documents: Sequence[Document], vocabulary: Vocabulary, config: PipelineConfig
) -> PreparedSplit:
    """
    Encode and pad loaded documents with a frozen vocabulary.

    Args:
        documents: Loaded documents
        vocabulary: Vocabulary to encode with
        config: Supplies max_len and the OOV mode

    Returns:
        PreparedSplit in document order
    """
    texts, labels = texts_and_labels(documents)
    sequences = encode_batch(texts, vocabulary, oov=config.oov)
    features = pad_sequences(sequences, config.max_len)

    lengths = [len(sequence) for sequence in sequences]
    if lengths:
        truncated = sum(1 for length in lengths if length > config.max_len)
        logger.debug(
            "Encoded %d documents: mean length %.1f, %d truncated to %d",
            len(lengths),
            float(np.mean(lengths)),
            truncated,
            config.max_len,
        )

    return PreparedSplit(features=features, labels=labels)


def shuffle_split(
    features: np.ndarray,
    labels: np.ndarray,
    training_samples: Optional[int],
    validation_samples: int,
    seed: int,
) -> Tuple[PreparedSplit, PreparedSplit]:
    """
    Shuffle rows, then split them into training and validation parts.

    The loader returns all negatives before all positives, so rows are
    shuffled before splitting. Validation rows follow the training rows in
    the shuffled order and never overlap with them.

    Args:
        features: Feature matrix
        labels: Label vector
        training_samples: Number of training rows (None = everything not used
            for validation)
        validation_samples: Number of validation rows
        seed: Seed for the shuffle

    Returns:
        Tuple of (train, validation)

    Raises:
        InvalidConfigError: If more rows are requested than available
    """
    num_rows = features.shape[0]
    if training_samples is None:
        training_samples = num_rows - validation_samples

    if training_samples < 0 or training_samples + validation_samples > num_rows:
        raise InvalidConfigError(
            f"Requested {training_samples} training + {validation_samples} "
            f"validation samples, but only {num_rows} are available"
        )

    indices = np.random.default_rng(seed).permutation(num_rows)
    features = features[indices]
    labels = labels[indices]

    end = training_samples + validation_samples
    train = PreparedSplit(features[:training_samples], labels[:training_samples])
    validation = PreparedSplit(
        features[training_samples:end], labels[training_samples:end]
    )
    return train, validation


def prepare_corpus(
    root: str, config: Optional[PipelineConfig] = None
) -> PreparedDataset:
    """
    Run the full pipeline on a corpus directory.

    Args:
        root: Corpus root containing train/ (and optionally test/)
        config: Pipeline configuration (defaults if None)

    Returns:
        PreparedDataset

    Raises:
        MissingDataError: If the train split has no files
        InvalidConfigError: If the requested split sizes do not fit
    """
    config = config or PipelineConfig()

    train_documents = load_documents(root, "train", num_workers=config.num_workers)
    vocabulary = build_vocabulary(
        (doc.text for doc in train_documents), config.top_n_words
    )
    logger.info(
        "Built vocabulary of %d words (cap %d)", len(vocabulary), config.top_n_words
    )

    prepared = prepare_split(train_documents, vocabulary, config)
    train, validation = shuffle_split(
        prepared.features,
        prepared.labels,
        config.training_samples,
        config.validation_samples,
        config.seed,
    )
    logger.info("Train rows: %d, validation rows: %d", len(train), len(validation))

    test = None
    try:
        test_documents = load_documents(root, "test", num_workers=config.num_workers)
    except MissingDataError:
        logger.info("No test split under %s", root)
    else:
        test = prepare_split(test_documents, vocabulary, config)
        logger.info("Test rows: %d", len(test))

    return PreparedDataset(
        vocabulary=vocabulary,
        train=train,
        validation=validation,
        test=test,
        config=config,
    )


def save_prepared(dataset: PreparedDataset, output_dir: str) -> str:
    """
    Save a prepared dataset.

    Writes dataset.npz (all arrays), vocabulary.json and config.json.

    Args:
        dataset: Pipeline output
        output_dir: Directory to write into (created if missing)

    Returns:
        Path of the .npz file
    """
    os.makedirs(output_dir, exist_ok=True)

    arrays = {
        "x_train": dataset.train.features,
        "y_train": dataset.train.labels,
        "x_val": dataset.validation.features,
        "y_val": dataset.validation.labels,
    }
    if dataset.test is not None:
        arrays["x_test"] = dataset.test.features
        arrays["y_test"] = dataset.test.labels

    arrays_path = os.path.join(output_dir, ARRAYS_FILE)
    np.savez(arrays_path, **arrays)

    dataset.vocabulary.save(os.path.join(output_dir, VOCABULARY_FILE))

    with open(os.path.join(output_dir, CONFIG_FILE), "w", encoding="utf-8") as f:
        json.dump(dataset.config.to_dict(), f, indent=2)

    logger.info("Saved prepared dataset to %s", output_dir)
    return arrays_path


def load_prepared(output_dir: str) -> PreparedDataset:
    """
    Load a dataset written by save_prepared().

    Args:
        output_dir: Directory passed to save_prepared()

    Returns:
        PreparedDataset

    Raises:
        MissingDataError: If any of the three files is missing
    """
    paths = [
        os.path.join(output_dir, name)
        for name in (ARRAYS_FILE, VOCABULARY_FILE, CONFIG_FILE)
    ]
    missing = [path for path in paths if not os.path.isfile(path)]
    if missing:
        raise MissingDataError(f"Prepared dataset incomplete, missing: {missing}")

    arrays_path, vocabulary_path, config_path = paths

    with open(config_path, "r", encoding="utf-8") as f:
        config = PipelineConfig.from_dict(json.load(f))

    with np.load(arrays_path) as data:
        train = PreparedSplit(data["x_train"], data["y_train"])
        validation = PreparedSplit(data["x_val"], data["y_val"])
        test = None
        if "x_test" in data.files:
            test = PreparedSplit(data["x_test"], data["y_test"])

    return PreparedDataset(
        vocabulary=Vocabulary.load(vocabulary_path),
        train=train,
        validation=validation,
        test=test,
        config=config,
    )
