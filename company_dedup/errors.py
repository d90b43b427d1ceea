from __future__ import annotations
from typing import Iterable, List


class DedupError(Exception):
    """Base class for company_dedup errors."""


class InvalidConfigurationError(DedupError, ValueError):
    """Raised when a configuration has one or more out-of-range fields.

    ``errors`` holds every violation, not just the first one found.
    """

    def __init__(self, errors: Iterable[str]):
        self.errors: List[str] = list(errors)
        super().__init__(f"Invalid config: {', '.join(self.errors)}")


class EmptyInputError(DedupError):
    """Raised by the file loader when a file holds no usable names."""


class UnsupportedFormatError(DedupError):
    """Raised for unknown input extensions or output formats."""


class InputReadError(DedupError):
    """Raised when an input file exists but cannot be decoded or parsed."""
