"""
amb AST Transformer - converts parse trees into Programs.

Expressions are rebuilt as Python source strings (Python's own precedence
applies once they are compiled); statements become Steps carrying their
line number and source line for diagnostics.
"""

from lark import Transformer, v_args

from amb.errors import get_line_context
from amb.expressions import SourceExpression
from amb.steps import Assert, Bind, Compute, Program, Terminal

_LOGICAL = {"&&": "and", "||": "or"}


class ChoiceSource:
    """The iterable of a recognised choice(...) construct."""

    def __init__(self, expr):
        self.expr = expr

    def __repr__(self):
        return f"choice({self.expr})"


class AmbTransformer(Transformer):
    """
    Transforms amb parse trees into a Program.

    Requires a parser built with propagate_positions=True so statements can
    report their line numbers.
    """

    def __init__(self, source_code=None):
        """
        Initialize the transformer.

        Args:
            source_code: Optional source text, used to attach the offending
                line to steps for error messages.
        """
        super().__init__()
        self._source_code = source_code

    def _meta(self, meta):
        line = getattr(meta, "line", None)
        return {
            "line_number": line,
            "source": get_line_context(self._source_code, line),
        }

    def _expr(self, text, meta):
        return SourceExpression(text, line_number=getattr(meta, "line", None))

    # --- Program structure ---

    def start(self, args):
        return args[0]

    def amb_block(self, args):
        return args[0]

    def body(self, args):
        steps = list(args)
        terminal = None
        if steps and isinstance(steps[-1], Terminal):
            terminal = steps.pop()
        return Program(steps=steps, terminal=terminal)

    # --- Statements ---

    @v_args(meta=True)
    def bind_stmt(self, meta, args):
        pattern, choice = args
        return Bind(pattern=pattern, iterable=self._expr(choice.expr, meta), **self._meta(meta))

    @v_args(meta=True)
    def let_stmt(self, meta, args):
        # Not a choice construct: binds its name without branching
        pattern, expr = args
        return Compute(expr=self._expr(expr, meta), binder=pattern, **self._meta(meta))

    @v_args(meta=True)
    def require_stmt(self, meta, args):
        return Assert(predicate=self._expr(args[0], meta), **self._meta(meta))

    @v_args(meta=True)
    def expr_stmt(self, meta, args):
        return Compute(expr=self._expr(args[0], meta), **self._meta(meta))

    @v_args(meta=True)
    def return_result(self, meta, args):
        return Terminal(expr=self._expr(args[0], meta), **self._meta(meta))

    @v_args(meta=True)
    def tail_result(self, meta, args):
        return Terminal(expr=self._expr(args[0], meta), **self._meta(meta))

    def choice_call(self, args):
        return ChoiceSource(args[0])

    # --- Patterns ---

    def name_pattern(self, args):
        return str(args[0])

    def tuple_pattern(self, args):
        return tuple(args)

    # --- Expressions ---

    def range_expr(self, args):
        low, op, high = args
        if str(op) == "..=":
            return f"range({low}, ({high}) + 1)"
        return f"range({low}, {high})"

    def binary_expr(self, args):
        parts = []
        for item in args:
            text = str(item)
            parts.append(_LOGICAL.get(text, text))
        return " ".join(parts)

    def unary_expr(self, args):
        op, operand = str(args[0]), args[1]
        if op == "-":
            return f"-{operand}"
        return f"(not {operand})"

    def call_expr(self, args):
        callee = args[0]
        params = args[1] if len(args) > 1 else ""
        return f"{callee}({params})"

    def call_args(self, args):
        return ", ".join(args)

    def attr_expr(self, args):
        return f"{args[0]}.{args[1]}"

    def index_expr(self, args):
        return f"{args[0]}[{args[1]}]"

    def paren_expr(self, args):
        return f"({args[0]})"

    def tuple_expr(self, args):
        if len(args) == 1:
            return f"({args[0]},)"
        return f"({', '.join(args)})"

    def list_expr(self, args):
        return f"[{', '.join(a for a in args if a is not None)}]"

    def name(self, args):
        return str(args[0])

    def number(self, args):
        return str(args[0])

    def string(self, args):
        return str(args[0])
