"""
Lazy enumerator runtime.

A Search is the compiled form of a Program: calling it with an optional
external context returns a fresh Enumerator, an ordinary Python iterator
over the program's results. Nothing is evaluated until the first pull, and
each pull resumes the depth-first traversal exactly where the previous one
stopped.
"""

from enum import Enum
from types import MappingProxyType


class Stage(str, Enum):
    """Whether a producer yields at most one result or a sequence of them."""
    LEAF = "leaf"
    OUTER = "outer"


class _Nothing:
    """Marks a leaf evaluation that produced no result."""
    __slots__ = ()

    def __repr__(self):
        return "NOTHING"


NOTHING = _Nothing()


def _single(producer, bindings):
    result = producer(bindings)
    if result is not NOTHING:
        yield result


class Enumerator:
    """Pull-based iterator over the results of one search traversal.

    An Enumerator owns only its traversal state. It needs no teardown and may
    be abandoned at any point. After a user expression raises, the error
    propagates from the pull that reached it and the enumerator is exhausted.
    """

    def __init__(self, producer, stage, bindings):
        self._producer = producer
        self._stage = stage
        self._bindings = bindings
        self._iterator = None

    def __iter__(self):
        return self

    def __next__(self):
        if self._iterator is None:
            if self._stage is Stage.LEAF:
                self._iterator = _single(self._producer, self._bindings)
            else:
                self._iterator = self._producer(self._bindings)
        return next(self._iterator)

    @property
    def started(self):
        return self._iterator is not None


class Search:
    """Enumerator factory produced by the desugaring compiler.

    Usage:
        search = desugar(program)
        for result in itertools.islice(search(n=20), 10):
            ...

    The context passed at invocation is visible to every step as read-only
    bindings. Programs may shadow context names with their own binders.
    """

    def __init__(self, program, producer, stage):
        self.program = program
        self.stage = stage
        self._producer = producer

    def __call__(self, context=None, **names) -> Enumerator:
        if context is None and not names:
            bindings = MappingProxyType({})
        elif names:
            merged = dict(context or {})
            merged.update(names)
            bindings = MappingProxyType(merged)
        else:
            bindings = MappingProxyType(context)
        return Enumerator(self._producer, self.stage, bindings)

    def __repr__(self):
        return f"Search(steps={len(self.program.steps)}, stage={self.stage.value})"
