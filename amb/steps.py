"""
Step Model - the data representation of a search program.

A Program is an ordered sequence of steps followed by one terminal
(result) expression:

    Bind     introduces a choice dimension over an iterable
    Assert   prunes the current branch when its predicate is false
    Compute  evaluates an expression, optionally binding its value

Steps are pure data. Behavior lives in the desugaring compiler.
"""

from typing import Annotated, Any, Callable, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from amb.errors import AmbCompileError
from amb.expressions import as_expression, format_pattern, normalize_pattern


def _expression_label(expr):
    source = getattr(expr, "source", None)
    if source:
        return source
    return getattr(expr, "__name__", repr(expr))


class Step(BaseModel):
    """Abstract base for all steps. Immutable once constructed.

    Only the concrete subclasses are used in programs; each provides describe().
    """
    model_config = ConfigDict(frozen=True)

    line_number: Optional[int] = None
    source: Optional[str] = None

    def describe(self) -> str:
        raise NotImplementedError


class Bind(Step):
    kind: Literal["bind"] = "bind"
    pattern: Any
    iterable: Callable

    @field_validator("pattern", mode="before")
    @classmethod
    def _check_pattern(cls, value):
        return normalize_pattern(value)

    @field_validator("iterable", mode="before")
    @classmethod
    def _check_iterable(cls, value):
        return as_expression(value)

    def describe(self):
        return f"bind {format_pattern(self.pattern)} <- {_expression_label(self.iterable)}"


class Assert(Step):
    kind: Literal["assert"] = "assert"
    predicate: Callable

    @field_validator("predicate", mode="before")
    @classmethod
    def _check_predicate(cls, value):
        return as_expression(value)

    def describe(self):
        return f"require {_expression_label(self.predicate)}"


class Compute(Step):
    kind: Literal["compute"] = "compute"
    expr: Callable
    binder: Any = None

    @field_validator("binder", mode="before")
    @classmethod
    def _check_binder(cls, value):
        if value is None:
            return None
        return normalize_pattern(value)

    @field_validator("expr", mode="before")
    @classmethod
    def _check_expr(cls, value):
        return as_expression(value)

    def describe(self):
        label = _expression_label(self.expr)
        if self.binder is None:
            return f"compute {label}"
        return f"let {format_pattern(self.binder)} = {label}"


class Terminal(Step):
    """The designated result-producing step of a program."""
    kind: Literal["return"] = "return"
    expr: Callable

    @field_validator("expr", mode="before")
    @classmethod
    def _check_expr(cls, value):
        return as_expression(value)

    def describe(self):
        return f"return {_expression_label(self.expr)}"


AnyStep = Annotated[Union[Bind, Assert, Compute], Field(discriminator="kind")]


class Program(BaseModel):
    """An ordered list of steps plus exactly one terminal expression.

    The only program without a terminal is the empty one, which enumerates
    nothing at all.
    """
    model_config = ConfigDict(frozen=True)

    steps: Tuple[AnyStep, ...] = ()
    terminal: Optional[Terminal] = None

    @model_validator(mode="after")
    def _check_terminal(self):
        if self.steps and self.terminal is None:
            last = self.steps[-1]
            raise AmbCompileError(
                f"The program must end with a result expression, but its last step is '{last.describe()}'",
                line_number=last.line_number,
                context=last.source,
                suggestion="End the program with an expression (without ';') or 'return <expr>;'",
            )
        return self

    @classmethod
    def empty(cls):
        return cls()

    @property
    def is_empty(self):
        return not self.steps and self.terminal is None


class ProgramBuilder:
    """
    Fluent builder for Programs.

    Expressions may be callables of the bindings mapping or Python source
    strings evaluated against the bindings:

        program = (
            ProgramBuilder()
            .bind("x", "range(1, 6)")
            .bind("y", lambda env: range(1, 6))
            .require("x + y == 5")
            .returns(lambda env: (env["x"], env["y"]))
        )
    """

    def __init__(self):
        self._steps: List[Step] = []

    def bind(self, pattern, iterable, **meta):
        self._steps.append(Bind(pattern=pattern, iterable=iterable, **meta))
        return self

    def require(self, predicate, **meta):
        self._steps.append(Assert(predicate=predicate, **meta))
        return self

    def compute(self, expr, binder=None, **meta):
        self._steps.append(Compute(expr=expr, binder=binder, **meta))
        return self

    def returns(self, expr, **meta) -> Program:
        return Program(steps=self._steps, terminal=Terminal(expr=expr, **meta))

    def build(self) -> Program:
        """Finish without a terminal; only valid for an empty builder."""
        return Program(steps=self._steps)
