"""
Desugaring compiler - turns a Program into a lazy search pipeline.

The steps are folded from last to first. Each fold wraps the producer built
so far and reports its stage:

    terminal  -> leaf producer returning one result (stage LEAF)
    Assert    -> guard around the inner producer (stage unchanged)
    Compute   -> evaluate once, then delegate (stage unchanged)
    Bind      -> iterate the source and drive the inner producer per value:
                 over a LEAF producer keep the non-empty outcomes,
                 over an OUTER producer concatenate the inner sequences
                 (stage becomes OUTER)

A leaf producer returns a value or NOTHING. An outer producer is a
generator function, so it does no work until it is pulled.
"""

from amb.debug import debug_log
from amb.expressions import bind_pattern
from amb.runtime.enumerator import NOTHING, Search, Stage
from amb.steps import Assert, Bind, Compute, Program


def _empty(bindings):
    return iter(())


def _terminal(terminal):
    expr = terminal.expr

    def produce(bindings):
        return expr(bindings)
    return produce


def _wrap_assert(step, inner, stage):
    predicate = step.predicate

    if stage is Stage.LEAF:
        def guarded(bindings):
            if not predicate(bindings):
                return NOTHING
            return inner(bindings)
    else:
        def guarded(bindings):
            if predicate(bindings):
                yield from inner(bindings)
    return guarded, stage


def _wrap_compute(step, inner, stage):
    expr = step.expr
    binder = step.binder

    def scope(bindings):
        value = expr(bindings)
        if binder is None:
            return bindings
        return bind_pattern(binder, value, bindings)

    if stage is Stage.LEAF:
        def computed(bindings):
            return inner(scope(bindings))
    else:
        def computed(bindings):
            yield from inner(scope(bindings))
    return computed, stage


def _wrap_bind(step, inner, stage):
    source = step.iterable
    pattern = step.pattern

    if stage is Stage.LEAF:
        # optional-mapping: one attempt per value, keep the hits
        def choose(bindings):
            for value in source(bindings):
                result = inner(bind_pattern(pattern, value, bindings))
                if result is not NOTHING:
                    yield result
    else:
        # flatten-mapping: concatenate the nested searches in order
        def choose(bindings):
            for value in source(bindings):
                yield from inner(bind_pattern(pattern, value, bindings))
    return choose, Stage.OUTER


_WRAPPERS = {
    Bind: _wrap_bind,
    Assert: _wrap_assert,
    Compute: _wrap_compute,
}


def compose(steps, terminal):
    """Build the producer for steps followed by terminal.

    Returns (producer, stage).
    """
    producer, stage = _terminal(terminal), Stage.LEAF
    for step in reversed(steps):
        wrap = _WRAPPERS[type(step)]
        producer, stage = wrap(step, producer, stage)
        debug_log(f"desugar: {step.describe()} -> {stage.value}")
    return producer, stage


def desugar(program: Program) -> Search:
    """Compile a Program into a Search (an Enumerator factory)."""
    if program.is_empty:
        debug_log("desugar: empty program -> empty search")
        return Search(program, _empty, Stage.OUTER)
    producer, stage = compose(program.steps, program.terminal)
    debug_log(f"desugar: compiled {len(program.steps)} step(s), root stage {stage.value}")
    return Search(program, producer, stage)
