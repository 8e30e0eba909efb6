"""Failure reporting shared by every assertion.

Assertion methods decide pass or fail; this module turns a failure into a
message and raises it::

    Verification("contain", actual=subject, reference=expected).because_of(
        reason, *reason_args
    ).fail_with("Expected collection {1} to contain {2}{0}.", subject, expected)

Templates use ``str.format`` positional fields. ``{0}`` is always the reason
(empty, or `` because ...``) and ``{1}``, ``{2}``... are the diagnostic
arguments passed to :meth:`Verification.fail_with`, rendered with
:func:`~fluentassert.formatting.format_value`.
"""

from __future__ import annotations

import logging
from typing import Any, NoReturn

from fluentassert.assertions.base import AssertionFailedError, AssertionMetadata, AssertionResult
from fluentassert.config import DEFAULT_CONFIG, FluentConfig
from fluentassert.context import ASSERTION_RESULTS, record_assertion_result
from fluentassert.formatting import format_value

logger = logging.getLogger(__name__)

REASON_PREFIX = "because"


def format_reason(reason: str, *reason_args: Any) -> str:
    """Format a reason phrase for insertion into a message template.

    Empty reasons produce an empty string. Otherwise the placeholders are
    filled, ``because`` is prepended unless the phrase already starts with
    it, and a leading space separates it from the preceding text. A phrase
    whose placeholders do not match its arguments is used verbatim.
    """
    if not reason or not reason.strip():
        return ""
    text = reason
    if reason_args:
        try:
            text = reason.format(*reason_args)
        except (AttributeError, IndexError, KeyError, ValueError) as exc:
            logger.warning("Using reason %r verbatim, its placeholders do not match the arguments: %s", reason, exc)
    text = text.strip()
    if not text.startswith(REASON_PREFIX):
        text = f"{REASON_PREFIX} {text}"
    return f" {text}"


class Verification:
    """Reports the outcome of a single assertion call.

    The reason is kept unformatted until a failure is reported, so it never
    influences whether an assertion passes.
    """

    def __init__(
        self,
        assertion_name: str,
        *,
        actual: Any,
        reference: Any,
        config: FluentConfig = DEFAULT_CONFIG,
    ) -> None:
        self._assertion_name = assertion_name
        self._actual = actual
        self._reference = reference
        self._config = config
        self._reason = ""
        self._reason_args: tuple[Any, ...] = ()

    def because_of(self, reason: str = "", *reason_args: Any) -> Verification:
        """Attach the caller's reason to any failure reported afterwards."""
        self._reason = reason
        self._reason_args = reason_args
        return self

    def fail_with(self, template: str, *args: Any) -> NoReturn:
        """Format the failure message and raise AssertionFailedError."""
        reason_text = format_reason(self._reason, *self._reason_args)
        rendered = [format_value(arg, self._config) for arg in args]
        message = template.format(reason_text, *rendered)
        result = AssertionResult(metadata=self._metadata(reason_text.strip()), passed=False, message=message)
        record_assertion_result(result)
        logger.debug("%s failed: %s", self._assertion_name, message)
        raise AssertionFailedError(result)

    def succeed(self) -> None:
        """Record a passing outcome when a results collector is active."""
        if ASSERTION_RESULTS.get() is None:
            return
        metadata = self._metadata(self._reason.strip())
        record_assertion_result(AssertionResult(metadata=metadata, passed=True))

    def _metadata(self, reason: str) -> AssertionMetadata:
        return AssertionMetadata(
            assertion_name=self._assertion_name,
            actual=format_value(self._actual, self._config),
            reference=format_value(self._reference, self._config),
            reason=reason,
        )


__all__ = ["REASON_PREFIX", "Verification", "format_reason"]
