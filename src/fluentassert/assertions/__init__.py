"""Assertion library for test validation."""

from .base import AssertionFailedError, AssertionMetadata, AssertionResult
from .collection import CollectionAssertions, GenericCollectionAssertions

__all__ = [
    "AssertionFailedError",
    "AssertionMetadata",
    "AssertionResult",
    "CollectionAssertions",
    "GenericCollectionAssertions",
]
