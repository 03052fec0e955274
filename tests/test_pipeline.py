"""
Tests for the end-to-end preprocessing pipeline.

The fixture corpus ranks words as bad (4), movie (3), great (3), ... with
movie ahead of great because it is seen first.
"""

import numpy as np
import pytest

from textprep.config import PipelineConfig
from textprep.errors import InvalidConfigError, MissingDataError
from textprep.loader import load_documents
from textprep.pipeline import (
    PreparedSplit,
    load_prepared,
    prepare_corpus,
    prepare_split,
    save_prepared,
    shuffle_split,
)
from textprep.vocabulary import build_vocabulary


class TestPrepareSplit:
    """Test suite for prepare_split."""

    def test_worked_example(self, tmp_path):
        label_dir = tmp_path / "train" / "neg"
        label_dir.mkdir(parents=True)
        (label_dir / "0.txt").write_text("bad movie bad")

        documents = load_documents(str(tmp_path), "train")
        vocabulary = build_vocabulary([doc.text for doc in documents], max_words=2)

        padded = prepare_split(documents, vocabulary, PipelineConfig(max_len=5))
        truncated = prepare_split(documents, vocabulary, PipelineConfig(max_len=2))

        np.testing.assert_array_equal(padded.features, [[0, 0, 1, 2, 1]])
        np.testing.assert_array_equal(truncated.features, [[2, 1]])
        np.testing.assert_array_equal(padded.labels, [0])

    def test_oov_index_mode(self, corpus_dir):
        documents = load_documents(str(corpus_dir), "test")
        vocabulary = build_vocabulary(["bad movie great"], max_words=3)
        config = PipelineConfig(max_len=4, oov="index")

        split = prepare_split(documents, vocabulary, config)

        # "terrible movie bad plot" -> OOV, movie, bad, OOV
        np.testing.assert_array_equal(split.features[0], [4, 2, 1, 4])


class TestShuffleSplit:
    """Test suite for shuffle_split."""

    @pytest.fixture
    def arrays(self):
        features = np.arange(20).reshape(10, 2)
        labels = np.array([0] * 5 + [1] * 5)
        return features, labels

    def test_sizes(self, arrays):
        train, validation = shuffle_split(*arrays, training_samples=4, validation_samples=3, seed=0)

        assert len(train) == 4
        assert len(validation) == 3

    def test_default_uses_remaining_rows(self, arrays):
        train, validation = shuffle_split(*arrays, training_samples=None, validation_samples=2, seed=0)

        assert len(train) == 8
        assert len(validation) == 2

    def test_no_overlap_and_labels_aligned(self, arrays):
        features, labels = arrays
        train, validation = shuffle_split(features, labels, None, 4, seed=1)

        rows = np.concatenate([train.features, validation.features])
        row_labels = np.concatenate([train.labels, validation.labels])

        assert sorted(rows[:, 0].tolist()) == features[:, 0].tolist()
        for row, label in zip(rows, row_labels):
            original = row[0] // 2
            assert labels[original] == label

    def test_seed_is_deterministic(self, arrays):
        first, _ = shuffle_split(*arrays, None, 0, seed=7)
        second, _ = shuffle_split(*arrays, None, 0, seed=7)

        np.testing.assert_array_equal(first.features, second.features)

    def test_too_many_rows_requested(self, arrays):
        with pytest.raises(InvalidConfigError):
            shuffle_split(*arrays, training_samples=8, validation_samples=3, seed=0)

    def test_validation_larger_than_corpus(self, arrays):
        with pytest.raises(InvalidConfigError):
            shuffle_split(*arrays, training_samples=None, validation_samples=11, seed=0)


class TestPrepareCorpus:
    """Test suite for prepare_corpus."""

    @pytest.fixture
    def config(self):
        return PipelineConfig(top_n_words=3, max_len=4, validation_samples=2)

    def test_vocabulary_from_train_only(self, corpus_dir, config):
        dataset = prepare_corpus(str(corpus_dir), config)

        assert dataset.vocabulary.tokens == ["bad", "movie", "great"]
        assert "terrible" not in dataset.vocabulary

    def test_shapes(self, corpus_dir, config):
        dataset = prepare_corpus(str(corpus_dir), config)

        assert dataset.train.features.shape == (3, 4)
        assert dataset.validation.features.shape == (2, 4)
        assert dataset.test.features.shape == (2, 4)
        assert dataset.train.labels.shape == (3,)

    def test_test_split_encoded_with_training_vocabulary(self, corpus_dir, config):
        dataset = prepare_corpus(str(corpus_dir), config)

        np.testing.assert_array_equal(
            dataset.test.features, [[0, 0, 2, 1], [0, 0, 0, 3]]
        )
        np.testing.assert_array_equal(dataset.test.labels, [0, 1])

    def test_training_samples_cap(self, corpus_dir):
        config = PipelineConfig(top_n_words=3, max_len=4, training_samples=2, validation_samples=1)
        dataset = prepare_corpus(str(corpus_dir), config)

        assert len(dataset.train) == 2
        assert len(dataset.validation) == 1

    def test_without_test_split(self, train_only_corpus_dir, config):
        dataset = prepare_corpus(str(train_only_corpus_dir), config)

        assert dataset.test is None

    def test_missing_train_split(self, tmp_path):
        with pytest.raises(MissingDataError):
            prepare_corpus(str(tmp_path))

    def test_split_too_large(self, corpus_dir):
        config = PipelineConfig(top_n_words=3, max_len=4, validation_samples=6)

        with pytest.raises(InvalidConfigError):
            prepare_corpus(str(corpus_dir), config)

    def test_default_config(self, corpus_dir):
        dataset = prepare_corpus(str(corpus_dir))

        assert dataset.train.features.shape == (5, 150)
        assert len(dataset.validation) == 0


class TestSaveLoadPrepared:
    """Test suite for save_prepared / load_prepared."""

    def test_roundtrip(self, corpus_dir, tmp_path):
        config = PipelineConfig(top_n_words=3, max_len=4, validation_samples=1)
        dataset = prepare_corpus(str(corpus_dir), config)
        output_dir = tmp_path / "prepared"

        arrays_path = save_prepared(dataset, str(output_dir))
        loaded = load_prepared(str(output_dir))

        assert arrays_path.endswith("dataset.npz")
        assert loaded.vocabulary == dataset.vocabulary
        assert loaded.config == config
        np.testing.assert_array_equal(loaded.train.features, dataset.train.features)
        np.testing.assert_array_equal(loaded.validation.labels, dataset.validation.labels)
        np.testing.assert_array_equal(loaded.test.features, dataset.test.features)

    def test_roundtrip_without_test(self, train_only_corpus_dir, tmp_path):
        dataset = prepare_corpus(str(train_only_corpus_dir), PipelineConfig(max_len=3))
        save_prepared(dataset, str(tmp_path / "out"))

        assert load_prepared(str(tmp_path / "out")).test is None

    def test_load_incomplete(self, tmp_path):
        with pytest.raises(MissingDataError):
            load_prepared(str(tmp_path))

    def test_prepared_split_len(self):
        split = PreparedSplit(np.zeros((3, 2), dtype=np.int64), np.zeros(3, dtype=np.int64))

        assert len(split) == 3
