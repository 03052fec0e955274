"""
Tests for the prepare_dataset command-line script.
"""

import logging

import numpy as np

import prepare_dataset


class TestPrepareDatasetScript:
    """Test suite for prepare_dataset.main."""

    def test_writes_outputs(self, corpus_dir, tmp_path):
        output_dir = tmp_path / "out"

        status = prepare_dataset.main(
            [str(corpus_dir), "--output-dir", str(output_dir), "--top-n-words", "3", "--max-len", "4"]
        )

        assert status == 0
        for name in ("dataset.npz", "vocabulary.json", "config.json"):
            assert (output_dir / name).is_file()

        with np.load(output_dir / "dataset.npz") as data:
            assert data["x_train"].shape == (5, 4)
            assert data["x_test"].shape == (2, 4)

    def test_embedding_matrix(self, corpus_dir, tmp_path):
        glove = tmp_path / "glove.txt"
        glove.write_text("bad 1 2\nmovie 3 4\n", encoding="utf-8")
        output_dir = tmp_path / "out"

        status = prepare_dataset.main(
            [
                str(corpus_dir),
                "--output-dir", str(output_dir),
                "--top-n-words", "3",
                "--glove", str(glove),
                "--embedding-dim", "2",
            ]
        )

        assert status == 0
        matrix = np.load(output_dir / "embedding_matrix.npy")
        assert matrix.shape == (5, 2)
        np.testing.assert_allclose(matrix[1], [1, 2])

    def test_missing_corpus_returns_error(self, tmp_path):
        status = prepare_dataset.main([str(tmp_path / "missing"), "--output-dir", str(tmp_path / "out")])

        assert status == 1

    def test_invalid_config_returns_error(self, corpus_dir, tmp_path):
        status = prepare_dataset.main([str(corpus_dir), "--max-len", "0"])

        assert status == 1

    def test_log_file(self, corpus_dir, tmp_path):
        log_file = tmp_path / "logs" / "prepare.log"

        prepare_dataset.main(
            [str(corpus_dir), "--output-dir", str(tmp_path / "out"), "--log-file", str(log_file)]
        )

        assert "Built vocabulary" in log_file.read_text()

    def test_missing_glove_writes_nothing(self, corpus_dir, tmp_path):
        output_dir = tmp_path / "out"

        status = prepare_dataset.main(
            [
                str(corpus_dir),
                "--output-dir", str(output_dir),
                "--glove", str(tmp_path / "missing_glove.txt"),
            ]
        )

        assert status == 1
        assert not output_dir.exists() or list(output_dir.iterdir()) == [], (
            "A failed run must not leave partial outputs"
        )

    def test_wrong_embedding_dim_writes_nothing(self, corpus_dir, tmp_path):
        glove = tmp_path / "glove.txt"
        glove.write_text("bad 1 2\n", encoding="utf-8")
        output_dir = tmp_path / "out"

        status = prepare_dataset.main(
            [
                str(corpus_dir),
                "--output-dir", str(output_dir),
                "--glove", str(glove),
                "--embedding-dim", "3",
            ]
        )

        assert status == 1
        assert not output_dir.exists()

    def test_undecodable_review_returns_error(self, corpus_dir, tmp_path):
        (corpus_dir / "train" / "neg" / "zz.txt").write_bytes(b"bad \xff movie")
        output_dir = tmp_path / "out"

        status = prepare_dataset.main([str(corpus_dir), "--output-dir", str(output_dir)])

        assert status == 1
        assert not output_dir.exists()


class TestSetupLogging:
    """Test suite for prepare_dataset.setup_logging."""

    def test_reconfiguring_closes_old_file_handler(self, tmp_path):
        logger = prepare_dataset.setup_logging(str(tmp_path / "first.log"))
        first_handler = next(
            h for h in logger.handlers if isinstance(h, logging.FileHandler)
        )

        logger = prepare_dataset.setup_logging(str(tmp_path / "second.log"))

        assert first_handler not in logger.handlers
        assert first_handler.stream is None, "Old log file should be closed"
        file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1

        prepare_dataset.setup_logging()
        assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)
