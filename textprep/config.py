"""
Pipeline Configuration

All knobs that shape the prepared dataset live in one dataclass so a run can
be saved next to its outputs and reproduced later.

Classes:
    PipelineConfig: Validated configuration for a preprocessing run
"""

import numbers
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional

from textprep.errors import InvalidConfigError

OOV_MODES = ("drop", "index")


def _is_integer(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def require_positive(name: str, value: Any) -> None:
    """Raise InvalidConfigError unless value is a positive integer."""
    if not _is_integer(value) or value <= 0:
        raise InvalidConfigError(f"{name} must be a positive integer, got {value!r}")


def require_non_negative(name: str, value: Any) -> None:
    """Raise InvalidConfigError unless value is an integer >= 0."""
    if not _is_integer(value) or value < 0:
        raise InvalidConfigError(
            f"{name} must be a non-negative integer, got {value!r}"
        )


@dataclass
class PipelineConfig:
    """
    Configuration for the text-to-tensor pipeline.

    Attributes:
        top_n_words: Vocabulary cap; only the most frequent words get an index
        max_len: Width of every row in the feature matrix
        training_samples: Keep only this many shuffled training rows (None = all)
        validation_samples: Rows carved off the shuffled training split
        seed: Seed for the training-split shuffle
        oov: "drop" skips unknown words, "index" maps them to the OOV index
        num_workers: Threads used to read files (1 = sequential)

    Typical configuration (IMDB word-embedding notebook):
        top_n_words=10000, max_len=100, training_samples=200,
        validation_samples=10000
    """

    top_n_words: int = 10000
    max_len: int = 150
    training_samples: Optional[int] = None
    validation_samples: int = 0
    seed: int = 42
    oov: str = "drop"
    num_workers: int = 1

    def __post_init__(self):
        require_positive("top_n_words", self.top_n_words)
        require_positive("max_len", self.max_len)
        require_non_negative("validation_samples", self.validation_samples)
        if self.training_samples is not None:
            require_non_negative("training_samples", self.training_samples)
        require_positive("num_workers", self.num_workers)
        if self.oov not in OOV_MODES:
            raise InvalidConfigError(
                f"oov must be one of {OOV_MODES}, got {self.oov!r}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Return the configuration as a plain dict (JSON serializable)."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PipelineConfig":
        """
        Build a config from a dict, ignoring unknown keys.

        Args:
            data: Mapping as produced by to_dict()

        Returns:
            Validated PipelineConfig
        """
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
