"""
Exceptions raised by the preprocessing pipeline.

Both concrete errors are fatal to a pipeline run: nothing is retried and no
partial results are returned. The caller fixes the input or configuration and
runs again.
"""


class TextPrepError(Exception):
    """Base class for all pipeline errors."""


class MissingDataError(TextPrepError, FileNotFoundError):
    """No input files were found under the expected directory layout."""


class InvalidConfigError(TextPrepError, ValueError):
    """A size parameter or option value is out of range."""


class CorruptDataError(TextPrepError, ValueError):
    """An input file exists but its contents cannot be decoded or parsed."""
