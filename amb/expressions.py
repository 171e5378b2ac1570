"""
Expressions and binder patterns.

An expression is any callable taking the current bindings (a read-only
mapping of every name bound so far plus the caller's context) and returning
a value. Python source text is accepted in place of a callable and compiled
once into a SourceExpression.

A pattern is a binder name, the wildcard ``_``, or a nested tuple of
patterns that destructures the bound value.
"""

import builtins
import keyword
from types import MappingProxyType
from typing import Any, Callable, Mapping

from amb.errors import AmbCompileError

WILDCARD = "_"

Bindings = Mapping[str, Any]
Expression = Callable[[Bindings], Any]


class SourceExpression:
    """A Python expression compiled from source and evaluated against bindings."""

    def __init__(self, source, line_number=None):
        self.source = source.strip()
        self.line_number = line_number
        try:
            self._code = compile(self.source, "<amb>", "eval")
        except SyntaxError as e:
            raise AmbCompileError(
                f"Invalid expression: {self.source}",
                line_number=line_number,
                context=self.source,
                suggestion=e.msg,
            )

    def __call__(self, bindings):
        namespace = {"__builtins__": builtins}
        namespace.update(bindings)
        return eval(self._code, namespace)

    def __repr__(self):
        return f"SourceExpression({self.source!r})"

    def __eq__(self, other):
        if isinstance(other, SourceExpression):
            return self.source == other.source
        return NotImplemented

    def __hash__(self):
        return hash(self.source)


def as_expression(value, line_number=None) -> Expression:
    """Accept a callable as-is or compile Python source into one."""
    if isinstance(value, str):
        return SourceExpression(value, line_number=line_number)
    if callable(value):
        return value
    raise AmbCompileError(
        f"Expected a callable or expression source, got {type(value).__name__}",
        line_number=line_number,
        suggestion="Pass a function of the bindings, e.g. lambda env: env['x'] + 1",
    )


def normalize_pattern(pattern):
    """Validate a binder pattern, turning lists into tuples."""
    if isinstance(pattern, str):
        if pattern != WILDCARD and (not pattern.isidentifier() or keyword.iskeyword(pattern)):
            raise AmbCompileError(f"Invalid binder name {pattern!r}")
        return pattern
    if isinstance(pattern, (list, tuple)):
        if not pattern:
            raise AmbCompileError("Destructuring pattern must not be empty")
        return tuple(normalize_pattern(p) for p in pattern)
    raise AmbCompileError(f"Invalid binder pattern {pattern!r}")


def pattern_names(pattern):
    """Names introduced by a pattern, left to right."""
    if isinstance(pattern, str):
        return [] if pattern == WILDCARD else [pattern]
    names = []
    for part in pattern:
        names.extend(pattern_names(part))
    return names


def format_pattern(pattern):
    if isinstance(pattern, str):
        return pattern
    inner = ", ".join(format_pattern(p) for p in pattern)
    if len(pattern) == 1:
        inner += ","
    return f"({inner})"


def _assign(pattern, value, target):
    if isinstance(pattern, str):
        if pattern != WILDCARD:
            target[pattern] = value
        return
    items = tuple(value)
    if len(items) != len(pattern):
        raise ValueError(
            f"cannot destructure {len(items)} value(s) into pattern {format_pattern(pattern)}"
        )
    for part, item in zip(pattern, items):
        _assign(part, item, target)


def bind_pattern(pattern, value, bindings) -> Bindings:
    """Return a new read-only mapping with the pattern bound to value.

    The enclosing bindings are copied, so every branch owns its own scope and
    a later shadowing bind never touches an earlier one.
    """
    scope = dict(bindings)
    _assign(pattern, value, scope)
    return MappingProxyType(scope)
