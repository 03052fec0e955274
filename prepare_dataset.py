#!/usr/bin/env python3
"""
Prepare a Review Corpus for Embedding Training

This script runs the preprocessing pipeline over an aclImdb-style corpus and
writes model-ready arrays to disk.

Usage:
    python prepare_dataset.py data/aclImdb --output-dir prepared
    python prepare_dataset.py data/aclImdb --max-len 100 \
        --training-samples 200 --validation-samples 10000 \
        --glove data/glove.6B.100d.txt --embedding-dim 100

The script will:
1. Load the train split and build a vocabulary of the most frequent words
2. Encode and pad every review to a fixed width
3. Shuffle and split training/validation rows
4. Encode the test split (if present) with the training vocabulary
5. Optionally build a GloVe embedding matrix
6. Save dataset.npz, vocabulary.json and config.json
"""

import argparse
import logging
import os
import sys

import numpy as np

from textprep.config import PipelineConfig
from textprep.embeddings import build_embedding_matrix, load_glove
from textprep.errors import TextPrepError
from textprep.pipeline import prepare_corpus, save_prepared

EMBEDDING_FILE = "embedding_matrix.npy"


def setup_logging(log_file: str = None) -> logging.Logger:
    """
    Set up logging to console and optionally to file.

    Args:
        log_file: Optional path of a log file

    Returns:
        Configured package logger
    """
    logger = logging.getLogger("textprep")
    logger.setLevel(logging.INFO)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)

    return logger


def build_parser() -> argparse.ArgumentParser:
    defaults = PipelineConfig()
    parser = argparse.ArgumentParser(
        description="Turn a labeled review corpus into padded index matrices"
    )
    parser.add_argument("data_dir", help="Corpus root containing train/ and test/")
    parser.add_argument("--output-dir", default="prepared", help="Where to write outputs")
    parser.add_argument(
        "--top-n-words",
        type=int,
        default=defaults.top_n_words,
        help="Vocabulary cap (most frequent words kept)",
    )
    parser.add_argument(
        "--max-len", type=int, default=defaults.max_len, help="Row width"
    )
    parser.add_argument(
        "--training-samples",
        type=int,
        default=None,
        help="Keep only this many shuffled training rows",
    )
    parser.add_argument(
        "--validation-samples",
        type=int,
        default=defaults.validation_samples,
        help="Rows held out from training for validation",
    )
    parser.add_argument("--seed", type=int, default=defaults.seed)
    parser.add_argument(
        "--oov",
        choices=["drop", "index"],
        default=defaults.oov,
        help="Skip unknown words or map them to the OOV index",
    )
    parser.add_argument(
        "--num-workers", type=int, default=defaults.num_workers, help="Reader threads"
    )
    parser.add_argument("--glove", default=None, help="GloVe text file (optional)")
    parser.add_argument("--embedding-dim", type=int, default=100)
    parser.add_argument("--log-file", default=None)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_logging(args.log_file)

    try:
        config = PipelineConfig(
            top_n_words=args.top_n_words,
            max_len=args.max_len,
            training_samples=args.training_samples,
            validation_samples=args.validation_samples,
            seed=args.seed,
            oov=args.oov,
            num_workers=args.num_workers,
        )
        dataset = prepare_corpus(args.data_dir, config)

        # Nothing is written until every step has succeeded
        matrix = None
        if args.glove:
            vectors = load_glove(args.glove)
            matrix = build_embedding_matrix(
                dataset.vocabulary, vectors, args.embedding_dim
            )

        save_prepared(dataset, args.output_dir)
        if matrix is not None:
            np.save(os.path.join(args.output_dir, EMBEDDING_FILE), matrix)
    except TextPrepError as e:
        logger.error("%s", e)
        return 1

    logger.info("Done. Outputs in %s", args.output_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
