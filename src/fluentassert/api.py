"""Fluent entry point."""

from collections.abc import Iterable
from typing import TypeVar

from fluentassert.assertions.collection import GenericCollectionAssertions
from fluentassert.config import DEFAULT_CONFIG, FluentConfig

T = TypeVar("T")


def should(subject: Iterable[T] | None, *, config: FluentConfig = DEFAULT_CONFIG) -> GenericCollectionAssertions[T]:
    """Start an assertion chain on a sequence.

    Parameters
    ----------
    subject : Iterable | None
        The sequence under assertion. ``None`` is accepted and reported as
        absent by every assertion.
    config : FluentConfig, optional
        Rendering limits for failure messages, see :func:`~fluentassert.config.load_config`.

    Returns
    -------
    GenericCollectionAssertions
        Assertions bound to ``subject``.
    """
    return GenericCollectionAssertions(subject, config=config)
