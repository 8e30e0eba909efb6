"""Assertions over sequences.

Every method either returns an :class:`~fluentassert.constraints.AndConstraint`
for chaining or raises :class:`~fluentassert.assertions.base.AssertionFailedError`
through a :class:`~fluentassert.execution.Verification`. Methods take an
optional reason phrase plus its ``str.format`` arguments::

    should(users).contain_match(lambda u: u.is_admin, "because {0} seeds an admin", "the fixture")

An absent subject (``None``) is reported as a failure by every method.
"""

from __future__ import annotations

import logging
import types
from collections.abc import Callable, Collection, Iterable
from typing import Any, Generic, Self, TypeVar

from fluentassert.config import DEFAULT_CONFIG, FluentConfig
from fluentassert.constraints import AndConstraint
from fluentassert.execution import Verification
from fluentassert.predicates import Predicate
from fluentassert.predicates import predicate as make_predicate

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _bind_subject(subject: Iterable[T] | None) -> Collection[T] | None:
    # One-shot iterables are materialised so every scan sees the same items.
    if subject is None or isinstance(subject, Collection):
        return subject
    if isinstance(subject, Iterable):
        return tuple(subject)
    msg = f"Expected an iterable subject, got {type(subject).__name__}"
    raise TypeError(msg)


def _contains(subject: Iterable[Any], value: Any) -> bool:
    return any(item is value or item == value for item in subject)


def _is_lambda(value: Any) -> bool:
    return isinstance(value, types.LambdaType) and value.__name__ == "<lambda>"


class CollectionAssertions(Generic[T]):
    """Subject binding and the checks that do not depend on the element type."""

    def __init__(self, subject: Iterable[T] | None, config: FluentConfig = DEFAULT_CONFIG) -> None:
        self._subject = _bind_subject(subject)
        self._config = config

    @property
    def subject(self) -> Collection[T] | None:
        return self._subject

    def _verify(self, assertion_name: str, reference: Any, reason: str, reason_args: tuple[Any, ...]) -> Verification:
        return Verification(
            assertion_name,
            actual=self._subject,
            reference=reference,
            config=self._config,
        ).because_of(reason, *reason_args)

    def _passed(self, verification: Verification) -> AndConstraint[Self]:
        verification.succeed()
        return AndConstraint(self)

    def contain_all(self, expected: Iterable[Any], reason: str = "", *reason_args: Any) -> AndConstraint[Self]:
        """Assert that the collection contains every one of the expected items."""
        expected_items = list(expected)
        verification = self._verify("contain_all", expected_items, reason, reason_args)

        if self._subject is None:
            verification.fail_with("Expected collection to contain {1}{0}, but found {2}.", expected_items, self._subject)

        missing = [item for item in expected_items if not _contains(self._subject, item)]
        if missing:
            verification.fail_with(
                "Expected collection {1} to contain {2}{0}, but could not find {3}.",
                self._subject,
                expected_items,
                missing,
            )

        return self._passed(verification)


class GenericCollectionAssertions(CollectionAssertions[T]):
    """Containment and predicate assertions over a typed sequence."""

    def contain(self, expected: T | Predicate[T], reason: str = "", *reason_args: Any) -> AndConstraint[Self]:
        """Assert that the collection contains the specified item.

        Passing a :class:`~fluentassert.predicates.Predicate` checks for an
        item matching it instead, see :meth:`contain_match`. So does a
        lambda, unless the collection itself holds callables.
        """
        if isinstance(expected, Predicate):
            return self.contain_match(expected, reason, *reason_args)

        if _is_lambda(expected):
            if self._subject is None or not any(callable(item) for item in self._subject):
                return self.contain_match(expected, reason, *reason_args)
            logger.warning("Collection holds callables, so the lambda passed to contain() is matched as a value")

        verification = self._verify("contain", expected, reason, reason_args)

        if self._subject is None:
            verification.fail_with("Expected collection to contain {1}{0}, but found {2}.", expected, self._subject)

        if not _contains(self._subject, expected):
            verification.fail_with("Expected collection {1} to contain {2}{0}.", self._subject, expected)

        return self._passed(verification)

    def contain_items(self, original_items: Iterable[T], *additional_items: T) -> AndConstraint[Self]:
        """Assert that the collection contains some extra items in addition to the original items."""
        combined = list(original_items)
        combined.extend(additional_items)
        return self.contain_all(combined)

    def contain_match(
        self, predicate: Callable[[T], Any] | Predicate[T], reason: str = "", *reason_args: Any
    ) -> AndConstraint[Self]:
        """Assert that the collection contains at least one item that matches the predicate."""
        condition = make_predicate(predicate)
        verification = self._verify("contain_match", condition, reason, reason_args)

        if self._subject is None:
            verification.fail_with("Expected collection to contain {1}{0}, but found {2}.", condition, self._subject)

        if not any(condition(item) for item in self._subject):
            verification.fail_with("Collection {1} should have an item matching {2}{0}.", self._subject, condition)

        return self._passed(verification)

    def only_contain(
        self, predicate: Callable[[T], Any] | Predicate[T], reason: str = "", *reason_args: Any
    ) -> AndConstraint[Self]:
        """Assert that the collection only contains items that match the predicate."""
        condition = make_predicate(predicate)
        verification = self._verify("only_contain", condition, reason, reason_args)

        if self._subject is None:
            verification.fail_with(
                "Expected collection to contain only items matching {1}{0}, but found {2}.",
                condition,
                self._subject,
            )

        # Full scan: the mismatching items are part of the message.
        mismatching_items = [item for item in self._subject if not condition(item)]
        if mismatching_items:
            verification.fail_with(
                "Expected collection to contain only items matching {1}{0}, but {2} do(es) not match.",
                condition,
                mismatching_items,
            )

        return self._passed(verification)

    def not_contain_match(
        self, predicate: Callable[[T], Any] | Predicate[T], reason: str = "", *reason_args: Any
    ) -> AndConstraint[Self]:
        """Assert that the collection does not contain any items that match the predicate."""
        condition = make_predicate(predicate)
        verification = self._verify("not_contain_match", condition, reason, reason_args)

        if self._subject is None:
            verification.fail_with("Expected collection not to contain {1}{0}, but found {2}.", condition, self._subject)

        if any(condition(item) for item in self._subject):
            verification.fail_with("Collection {1} should not have any items matching {2}{0}.", self._subject, condition)

        return self._passed(verification)


__all__ = ["CollectionAssertions", "GenericCollectionAssertions"]
