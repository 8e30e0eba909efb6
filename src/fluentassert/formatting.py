"""Render values for failure messages."""

from typing import Any

from rich.pretty import pretty_repr

from fluentassert.config import DEFAULT_CONFIG, FluentConfig
from fluentassert.predicates import Predicate

# Wide enough that rich never wraps a message argument onto several lines.
_SINGLE_LINE_WIDTH = 10_000


def format_value(value: Any, config: FluentConfig = DEFAULT_CONFIG) -> str:
    """Render a value the way it appears inside a failure message.

    ``None`` renders as the configured null representation and predicates
    render as their text. Everything else, strings included, goes through
    rich's pretty printer on a single line, so a string is quoted the same
    way on its own as inside a collection.
    """
    if value is None:
        return config.null_repr
    if isinstance(value, Predicate):
        return value.text
    return pretty_repr(
        value,
        max_width=_SINGLE_LINE_WIDTH,
        max_length=config.max_items,
        max_string=config.max_string,
    )
