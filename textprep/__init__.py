"""
Text-to-Tensor Preprocessing for Word Embeddings

This package turns a directory of labeled movie reviews into fixed-width
integer matrices that an embedding layer can consume. It covers the
preparation steps of a word-embedding sentiment classifier; the model itself
lives in whatever deep-learning library trains on the output.

Modules:
    loader: Read root/{split}/{neg,pos}/*.txt into labeled documents
    vocabulary: Normalize text and build a frequency-ranked vocabulary
    encoder: Map text to vocabulary indices
    normalizer: Truncate/left-pad sequences into a feature matrix
    embeddings: Align pretrained GloVe vectors with the vocabulary
    pipeline: Run the whole flow and save/load its outputs
    config: Pipeline configuration
    errors: MissingDataError, InvalidConfigError
"""

from textprep.config import PipelineConfig
from textprep.encoder import decode, encode, encode_batch
from textprep.errors import (
    CorruptDataError,
    InvalidConfigError,
    MissingDataError,
    TextPrepError,
)
from textprep.loader import Document, load_documents, texts_and_labels
from textprep.normalizer import pad_sequence, pad_sequences
from textprep.pipeline import prepare_corpus
from textprep.vocabulary import Vocabulary, build_vocabulary, normalize_text, tokenize

__version__ = "1.0.0"

__all__ = [
    "CorruptDataError",
    "Document",
    "InvalidConfigError",
    "MissingDataError",
    "PipelineConfig",
    "TextPrepError",
    "Vocabulary",
    "build_vocabulary",
    "decode",
    "encode",
    "encode_batch",
    "load_documents",
    "normalize_text",
    "pad_sequence",
    "pad_sequences",
    "prepare_corpus",
    "texts_and_labels",
    "tokenize",
]
