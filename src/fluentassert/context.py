from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from fluentassert.assertions.base import AssertionResult


ASSERTION_RESULTS: ContextVar[list[AssertionResult] | None] = ContextVar("assertion_results", default=None)


@contextmanager
def assertion_results_collector(sink: list[AssertionResult]) -> Iterator[list[AssertionResult]]:
    """Record every assertion evaluated inside the block into ``sink``.

    Passing and failing assertions are both recorded; a failure still raises.
    """
    token = ASSERTION_RESULTS.set(sink)
    try:
        yield sink
    finally:
        ASSERTION_RESULTS.reset(token)


def record_assertion_result(result: AssertionResult) -> None:
    """Append a result to the active collector, if there is one."""
    sink = ASSERTION_RESULTS.get()
    if sink is not None:
        sink.append(result)


__all__ = ["ASSERTION_RESULTS", "assertion_results_collector", "record_assertion_result"]
