"""fluentassert - readable assertions for test suites."""

from .api import should
from .assertions import (
    AssertionFailedError,
    AssertionMetadata,
    AssertionResult,
    CollectionAssertions,
    GenericCollectionAssertions,
)
from .config import ConfigError, FluentConfig, load_config
from .constraints import AndConstraint
from .context import assertion_results_collector
from .predicates import Predicate, predicate
from .version import __version__


__all__ = [
    # Entry point
    "should",
    # Assertions
    "AndConstraint",
    "CollectionAssertions",
    "GenericCollectionAssertions",
    "Predicate",
    "predicate",
    # Results
    "AssertionFailedError",
    "AssertionMetadata",
    "AssertionResult",
    "assertion_results_collector",
    # Configuration
    "ConfigError",
    "FluentConfig",
    "load_config",
]
