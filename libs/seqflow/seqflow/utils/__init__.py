"""Utility helpers."""

from seqflow.utils.awaitables import maybe_await
from seqflow.utils.logging_setup import setup_logging

__all__ = [
    "maybe_await",
    "setup_logging",
]
