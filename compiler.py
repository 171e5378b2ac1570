import re

from lark import Lark
from lark.exceptions import UnexpectedInput, VisitError

from amb.debug import debug_log, set_verbose
from amb.desugar import desugar
from amb.errors import (
    AmbCompileError,
    detect_common_error_patterns,
    get_line_context,
)
from amb.grammar import amb_grammar
from amb.transformer import AmbTransformer

__all__ = ["compile_source", "load_search", "get_parser", "set_verbose"]

_PARSER = None


def get_parser():
    """Build the Earley parser once per process."""
    global _PARSER
    if _PARSER is None:
        _PARSER = Lark(amb_grammar, parser='earley', propagate_positions=True)
    return _PARSER


def _read_source(file_path):
    with open(file_path, 'r') as f:
        return f.read()


def compile_source(file_path, source_code=None):
    """Parse and validate an amb source file into a Program."""
    # STEP 1: READ
    if source_code is None:
        source_code = _read_source(file_path)

    debug_log(f"Compiling source: {file_path}")

    # STEP 2: PARSE
    try:
        tree = get_parser().parse(source_code)
    except UnexpectedInput as e:
        line_number = getattr(e, 'line', None)
        column = getattr(e, 'column', None)
        if line_number is not None and line_number < 1:
            line_number = column = None
        if line_number is None:
            match = re.search(r'line (\d+) col (\d+)', str(e))
            if match:
                line_number = int(match.group(1))
                column = int(match.group(2))

        context = get_line_context(source_code, line_number) if line_number else None

        suggestion_text, error_type = detect_common_error_patterns(source_code)
        if not suggestion_text:
            suggestion_text = "Check syntax around this line"
        debug_log(f"Syntax error ({error_type or 'generic'}) in {file_path}")

        raise AmbCompileError(
            message="Syntax error",
            line_number=line_number,
            column=column,
            context=context,
            suggestion=suggestion_text
        )

    # STEP 3: TRANSFORM
    try:
        program = AmbTransformer(source_code).transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, AmbCompileError):
            raise e.orig_exc from None
        raise AmbCompileError(
            message=f"Transformation error: {e.orig_exc}",
            suggestion="Check syntax and binder names"
        )

    debug_log(f"Compiled {len(program.steps)} step(s) from {file_path}")
    return program


def load_search(file_path, source_code=None):
    """Compile an amb source file straight into a Search."""
    return desugar(compile_source(file_path, source_code))
