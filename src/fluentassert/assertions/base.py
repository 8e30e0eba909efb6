"""Base assertion result types and the failure signal."""

import inspect
import logging
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, SerializationInfo, field_serializer

logger = logging.getLogger(__name__)

_LIBRARY_PREFIX = "fluentassert"


class AssertionMetadata(BaseModel):
    """Metadata for an assertion.

    Attributes:
    ----------
    assertion_name: str | None
        Name of the assertion method that was evaluated (e.g. "contain")
    test_name: str | None
        Name of the test function the assertion was made from
    actual: str
        Rendered subject of the assertion
    reference: str
        Rendered expected value or predicate text
    reason: str
        Formatted reason, empty when none was given
    """
    # Identifiers
    assertion_id: UUID = Field(default_factory=uuid4)
    assertion_name: str | None = None
    test_name: str | None = None

    # Assertion inputs
    actual: str
    reference: str
    reason: str = ""

    @field_serializer("actual", "reference")
    def _truncate(self, v: str, info: SerializationInfo) -> str:
        """Truncate the values in the actual and reference fields to 50 characters."""
        ctx = info.context or {}
        if ctx.get("truncate"):
            max_len = 50
            if len(v) <= max_len:
                return v
            return v[:max_len] + "..."
        return v

    def model_post_init(self, __context) -> None:
        """
        Auto-fill the test_name field from the first test function on the stack.
        """
        if self.test_name:
            return

        frame = inspect.currentframe()

        if frame is None:
            logger.warning("No frame found for test_name")
            return

        frame = frame.f_back

        while frame:
            module_name = frame.f_globals.get("__name__", "")

            if module_name.startswith(("pydantic", _LIBRARY_PREFIX)):
                frame = frame.f_back
                continue

            func_name = frame.f_code.co_name
            if func_name.startswith("test_"):
                self.test_name = func_name
                break

            frame = frame.f_back


class AssertionResult(BaseModel):
    """Result of evaluating an assertion.

    Attributes:
    ----------
    metadata: AssertionMetadata
        Metadata for the assertion result
    passed: bool
        Whether the assertion passed
    message: str | None
        Failure message, None when the assertion passed
    """

    metadata: AssertionMetadata
    passed: bool
    message: str | None = None

    def __repr__(self) -> str:
        return self.model_dump_json(
            indent=2,
            exclude_none=True,
            context={"truncate": True},
        )

    def __bool__(self) -> bool:
        return self.passed


class AssertionFailedError(AssertionError):
    """AssertionError with attached AssertionResult."""

    def __init__(self, result: AssertionResult):
        self.assertion_result = result
        super().__init__(result.message or f"{result.metadata.assertion_name} failed")
