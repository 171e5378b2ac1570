"""
amb Introspection - structural summaries of compiled Programs.

Used by `ambc check` and by tooling that wants to show what a search will
explore before running it.
"""

from amb.expressions import format_pattern, pattern_names
from amb.steps import Bind, Compute


def _binder(step):
    if isinstance(step, Bind):
        return format_pattern(step.pattern)
    if isinstance(step, Compute) and step.binder is not None:
        return format_pattern(step.binder)
    return None


def describe_program(program):
    """
    Describe each step of a program, terminal last.

    Returns:
        List of dicts with keys kind, binder, line, source and summary.
    """
    rows = []
    for step in program.steps:
        rows.append({
            "kind": step.kind,
            "binder": _binder(step),
            "line": step.line_number,
            "source": step.source,
            "summary": step.describe(),
        })
    if program.terminal is not None:
        terminal = program.terminal
        rows.append({
            "kind": terminal.kind,
            "binder": None,
            "line": terminal.line_number,
            "source": terminal.source,
            "summary": terminal.describe(),
        })
    return rows


def choice_dimensions(program):
    """Binders of the Bind steps, outermost (slowest varying) first."""
    return [format_pattern(step.pattern) for step in program.steps if isinstance(step, Bind)]


def bound_names(program):
    """Every name bound by the program, in binding order, without repeats."""
    names = []
    for step in program.steps:
        pattern = step.pattern if isinstance(step, Bind) else getattr(step, "binder", None)
        if pattern is None:
            continue
        for name in pattern_names(pattern):
            if name not in names:
                names.append(name)
    return names
