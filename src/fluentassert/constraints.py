"""Continuation returned by successful assertions."""

from dataclasses import dataclass
from typing import Generic, TypeVar

TAssertions = TypeVar("TAssertions")


@dataclass(frozen=True, slots=True)
class AndConstraint(Generic[TAssertions]):
    """Wraps the assertions object so further assertions can be chained.

    ``and`` is a keyword, hence the trailing underscore::

        should(items).contain(1).and_.not_contain_match(lambda x: x < 0)
    """

    and_: TAssertions
