"""Describable predicates.

A :class:`Predicate` pairs a boolean callable with the text shown for it in
failure messages. The text is resolved once, when the predicate is built:

- an explicit ``description`` wins;
- for a lambda, the body is recovered from the source file with :mod:`ast`
  (``lambda x: x > 0`` renders as ``x > 0``);
- anything else renders as its ``__name__``, or its repr when it has none.
"""

from __future__ import annotations

import ast
import inspect
import logging
import types
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_LAMBDA_NAME = "<lambda>"


@dataclass(frozen=True, slots=True)
class Predicate(Generic[T]):
    """A boolean function over one element together with its display text."""

    fn: Callable[[T], Any]
    text: str

    def __call__(self, item: T) -> bool:
        return bool(self.fn(item))

    def __str__(self) -> str:
        return self.text


def predicate(fn: Callable[[T], Any] | Predicate[T], description: str | None = None) -> Predicate[T]:
    """Build a Predicate from a callable.

    Can be called directly or used as a decorator:

        is_even = predicate(lambda x: x % 2 == 0)

        @predicate
        def is_positive(x): ...

    Args:
        fn: The callable to wrap. An existing Predicate is returned as is,
            or re-labelled when ``description`` is given.
        description: Text to show in failure messages instead of the
            derived one.

    Raises:
        TypeError: If ``fn`` is not callable.
    """
    if isinstance(fn, Predicate):
        if description is None:
            return fn
        return Predicate(fn=fn.fn, text=description)

    if not callable(fn):
        msg = f"predicate expects a callable, got {type(fn).__name__}"
        raise TypeError(msg)

    return Predicate(fn=fn, text=description or describe(fn))


def describe(fn: Callable[..., Any]) -> str:
    """Return the display text for a callable."""
    name = getattr(fn, "__name__", None)
    if name != _LAMBDA_NAME:
        return name or repr(fn)

    body = _lambda_body_source(fn)
    if body is None:
        return _LAMBDA_NAME
    return body


@dataclass(frozen=True, slots=True)
class _LambdaSite:
    """A lambda parsed from source with the file position its body starts at."""

    node: ast.Lambda
    body_start: tuple[int, int]


def _lambda_body_source(fn: Callable[..., Any]) -> str | None:
    code = getattr(fn, "__code__", None)
    if code is None:
        return None

    try:
        lines, first_lineno = inspect.getsourcelines(fn)
    except (OSError, TypeError) as exc:
        logger.warning("Cannot recover source for %r: %s", fn, exc)
        return None

    arg_names = code.co_varnames[: code.co_argcount]
    candidates = [
        site
        for site in _parse_lambdas("".join(lines), first_lineno)
        if tuple(arg.arg for arg in site.node.args.args) == arg_names
    ]
    if not candidates:
        logger.warning("No lambda matching %r found in its source", fn)
        return None

    if len(candidates) > 1:
        candidates = _narrow_candidates(candidates, code)

    texts = {ast.unparse(site.node.body) for site in candidates}
    if len(texts) != 1:
        logger.warning("Cannot tell which lambda in the source of %r is the predicate", fn)
        return None
    return texts.pop()


def _narrow_candidates(candidates: list[_LambdaSite], code: types.CodeType) -> list[_LambdaSite]:
    # Instruction positions pin the lambda down even when closures make the
    # bytecode of a standalone recompile differ from the original.
    positions = {
        (lineno, col)
        for lineno, _end_lineno, col, _end_col in code.co_positions()
        if lineno is not None and col is not None
    }
    by_position = [site for site in candidates if site.body_start in positions]
    if by_position:
        return by_position

    return [site for site in candidates if _compiles_to(site.node, code)]


def _parse_lambdas(source: str, first_lineno: int) -> list[_LambdaSite]:
    """Find every complete lambda expression in a source fragment.

    ``inspect.getsourcelines`` returns whole lines, which are often not valid
    Python on their own (a lambda in the middle of a call chain), so each
    ``lambda`` keyword is parsed from its own offset, trimming the tail until
    the longest slice that parses as a lambda is found. Body positions are
    reported in file coordinates: 1-based lines, UTF-8 byte columns, the
    same units as ``co_positions``.
    """
    found: list[_LambdaSite] = []
    start = source.find("lambda")
    while start != -1:
        line_start = source.rfind("\n", 0, start) + 1
        lineno = first_lineno + source.count("\n", 0, start)
        col = len(source[line_start:start].encode("utf-8"))
        for end in range(len(source), start, -1):
            try:
                node = ast.parse(source[start:end].strip(), mode="eval").body
            except SyntaxError:
                continue
            if isinstance(node, ast.Lambda):
                body = node.body
                body_col = body.col_offset + (col if body.lineno == 1 else 0)
                found.append(_LambdaSite(node=node, body_start=(lineno + body.lineno - 1, body_col)))
                break
        start = source.find("lambda", start + 1)
    return found


def _compiles_to(node: ast.Lambda, code: types.CodeType) -> bool:
    expression = ast.fix_missing_locations(ast.Expression(body=node))
    try:
        compiled = compile(expression, "<predicate>", "eval")
    except (SyntaxError, ValueError):
        return False
    for const in compiled.co_consts:
        if isinstance(const, types.CodeType):
            return (
                const.co_code == code.co_code
                and const.co_names == code.co_names
                and const.co_consts == code.co_consts
            )
    return False


__all__ = ["Predicate", "describe", "predicate"]
