"""Shared fixtures: a tiny aclImdb-style corpus on disk."""

import pytest

TRAIN_REVIEWS = {
    "neg": [
        "Bad movie. Bad acting, bad story!",
        "Boring and bad; I didn't like it.",
    ],
    "pos": [
        "A great movie with great acting.",
        "Great story, I loved this movie.",
        "Wonderful!",
    ],
}

TEST_REVIEWS = {
    "neg": ["Terrible movie, bad plot."],
    "pos": ["Great fun."],
}


def write_split(root, split, reviews):
    for label, texts in reviews.items():
        label_dir = root / split / label
        label_dir.mkdir(parents=True, exist_ok=True)
        for i, text in enumerate(texts):
            (label_dir / f"{i}_review.txt").write_text(text, encoding="utf-8")


@pytest.fixture
def corpus_dir(tmp_path):
    """Corpus with train and test splits."""
    root = tmp_path / "aclImdb"
    write_split(root, "train", TRAIN_REVIEWS)
    write_split(root, "test", TEST_REVIEWS)
    return root


@pytest.fixture
def train_only_corpus_dir(tmp_path):
    """Corpus with no test split."""
    root = tmp_path / "train_only"
    write_split(root, "train", TRAIN_REVIEWS)
    return root
