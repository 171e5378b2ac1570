# amb - Core Compiler Components
"""
Core modules for the amb backtracking-search compiler:
- errors: Error handling and diagnostics
- steps: Step Model (Bind, Assert, Compute, Terminal, Program) and builder
- expressions: Expression callables and binder patterns
- desugar: Program to lazy search pipeline compiler
- runtime: Search factory, lazy Enumerator and run configuration
- grammar: Lark grammar for amb source blocks
- transformer: Parse tree to Program transformation
- introspection: Structural summaries of Programs
"""

from .errors import AmbCompileError, AmbConfigError
from .steps import Assert, Bind, Compute, Program, ProgramBuilder, Terminal
from .expressions import SourceExpression
from .desugar import desugar
from .runtime import Enumerator, Search, Stage
from .grammar import amb_grammar
from .transformer import AmbTransformer
from .introspection import choice_dimensions, describe_program

__all__ = [
    'AmbCompileError',
    'AmbConfigError',
    'Assert',
    'Bind',
    'Compute',
    'Program',
    'ProgramBuilder',
    'Terminal',
    'SourceExpression',
    'desugar',
    'Enumerator',
    'Search',
    'Stage',
    'amb_grammar',
    'AmbTransformer',
    'choice_dimensions',
    'describe_program',
]
