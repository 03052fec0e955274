"""
Corpus Loader

Reads a labeled review corpus laid out as one document per file:

    root/
        train/
            neg/*.txt   -> label 0
            pos/*.txt   -> label 1
        test/
            neg/*.txt
            pos/*.txt

This is the layout of the Large Movie Review Dataset (aclImdb).

Classes:
    Document: One loaded text file with its label

Functions:
    load_documents: Load every document of a split
    texts_and_labels: Split documents into parallel text/label sequences
"""

import concurrent.futures
import logging
import os
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from textprep.config import require_positive
from textprep.errors import CorruptDataError, MissingDataError

logger = logging.getLogger(__name__)

# Label directories in load order
LABELS = {"neg": 0, "pos": 1}
FILE_SUFFIX = ".txt"


@dataclass(frozen=True)
class Document:
    """
    A single review.

    Attributes:
        text: Raw file contents
        label: 0 (negative) or 1 (positive)
        path: File the text was read from
    """

    text: str
    label: int
    path: str


def _read_text(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise CorruptDataError(f"{path} is not valid UTF-8: {e}") from e


def _list_files(split_dir: str) -> List[Tuple[str, int]]:
    """Return (path, label) pairs in deterministic order."""
    entries = []
    for label_name, label in LABELS.items():
        label_dir = os.path.join(split_dir, label_name)
        if not os.path.isdir(label_dir):
            logger.debug("Skipping missing label directory %s", label_dir)
            continue
        for name in sorted(os.listdir(label_dir)):
            if name.endswith(FILE_SUFFIX):
                entries.append((os.path.join(label_dir, name), label))
    return entries


def load_documents(
    root: str, split: str = "train", num_workers: int = 1
) -> List[Document]:
    """
    Load all documents of one split.

    Documents come back negatives first, then positives, with files sorted by
    name inside each label directory. Reading with several workers does not
    change that order.

    Args:
        root: Corpus root directory
        split: Split subdirectory name ("train" or "test")
        num_workers: Number of reader threads (1 reads sequentially)

    Returns:
        List of Document

    Raises:
        MissingDataError: If no .txt files exist under root/split/{neg,pos}
        InvalidConfigError: If num_workers is not a positive integer
    """
    require_positive("num_workers", num_workers)

    split_dir = os.path.join(root, split)
    entries = _list_files(split_dir)
    if not entries:
        raise MissingDataError(
            f"No {FILE_SUFFIX} files found under {split_dir}/{{neg,pos}}"
        )

    paths = [path for path, _ in entries]
    if num_workers > 1:
        with concurrent.futures.ThreadPoolExecutor(
            max_workers=num_workers, thread_name_prefix="corpus-read"
        ) as pool:
            texts = list(pool.map(_read_text, paths))
    else:
        texts = [_read_text(path) for path in paths]

    documents = [
        Document(text=text, label=label, path=path)
        for (path, label), text in zip(entries, texts)
    ]

    num_positive = sum(doc.label for doc in documents)
    logger.info(
        "Loaded %d documents from %s (%d neg, %d pos)",
        len(documents),
        split_dir,
        len(documents) - num_positive,
        num_positive,
    )
    return documents


def texts_and_labels(documents: Sequence[Document]) -> Tuple[List[str], np.ndarray]:
    """
    Split documents into parallel sequences.

    Args:
        documents: Loaded documents

    Returns:
        Tuple of (texts, labels) where labels is an int64 array
    """
    texts = [doc.text for doc in documents]
    labels = np.array([doc.label for doc in documents], dtype=np.int64)
    return texts, labels
