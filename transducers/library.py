"""
Primitive transducers, and the terminal reducers pipelines end in.

Every primitive is built with transducer / simple_transducer, so each one
halts when its downstream halts and starts halted around a halted reducer.
"""
from collections import namedtuple
from operator import add
from transducers.core import PipelineTypeError, Reducer, reducer, simple_transducer, transducer
from transducers.reply import cont, halt
from transducers.steppers import list_stepper
from transducers.util import NIL, cons, unroll, unroll_reversed

# Whether capture() keeps its first value and halts, or keeps the latest value.
CAPTURE_HALTS_ON_FIRST = True

Failure = namedtuple('Failure', ['reason', 'index'])
Failure.__doc__ = """Output of a pipeline which halted because an element was rejected."""

def mapping(fn, accepts=object, produces=object):
    def mapped(feed):
        def step(down, value):
            return feed(down, fn(value))
        return step
    return simple_transducer(mapped, accepts, produces)

def filtering(pred, accepts=object):
    def filtered(feed):
        def step(down, value):
            if pred(value):
                return feed(down, value)
            return down
        return step
    return simple_transducer(filtered, accepts, accepts)

def taking(n):
    """
    Forwards the first n elements, then halts.
    The local state is the count remaining. Taking zero or fewer elements is
    halted before the first step.
    """
    def taker(feed):
        def take(remaining, down, value):
            down = feed(down, value)
            remaining -= 1
            if remaining <= 0:
                return halt((0, down))
            return cont((remaining, down))
        return take
    if n <= 0:
        return transducer(taker, init=halt(0))
    return transducer(taker, init=n)

def dropping(n):
    def dropper(feed):
        def drop(remaining, down, value):
            if remaining > 0:
                return cont((remaining - 1, down))
            return cont((0, feed(down, value)))
        return drop
    return transducer(dropper, init=max(n, 0))

def _flush_into(down, values):
    for value in values:
        down = down.step(value)
    return down

def folding(fn, init):
    """
    Accumulates every element with fn, starting from init. The accumulation is
    passed downstream once, when the pipeline finishes.
    """
    def folder(feed):
        def fold_step(acc, down, value):
            return cont((fn(acc, value), down))
        return fold_step
    def emit(done):
        def finish(acc, down):
            return done(_flush_into(down, [acc]))
        return finish
    return transducer(folder, emit, init=init)

def reversing():
    """Buffers everything and replays it backwards on finish. Finite sources only."""
    def reverser(feed):
        def buffer(seen, down, value):
            return cont((cons(value, seen), down))
        return buffer
    def replay(done):
        def finish(seen, down):
            return done(_flush_into(down, unroll(seen)))
        return finish
    return transducer(reverser, replay, init=NIL)

def concatenating(stepper=list_stepper):
    """
    Each input is a collection. Its elements are forwarded one at a time using
    stepper, stopping in the middle of a collection if downstream halts.
    """
    def concatenator(feed):
        def forward(down, value):
            down = feed(down, value)
            if down.is_halted():
                return halt(down)
            return cont(down)
        def step(down, collection):
            return stepper(forward, cont(down), collection).state()
        return step
    return simple_transducer(concatenator)

def repeating():
    """Inputs are (count, value) pairs. Forwards value count times."""
    def repeater(feed):
        def step(down, pair):
            times, value = pair
            for _ in range(times):
                if down.is_halted():
                    break
                down = feed(down, value)
            return down
        return step
    return simple_transducer(repeater)

def with_index():
    def indexer(feed):
        def index(i, down, value):
            return cont((i + 1, feed(down, (i, value))))
        return index
    return transducer(indexer, init=0, produces=tuple)

def with_count():
    """Forwards everything. The output becomes (downstream output, elements seen)."""
    def counter(feed):
        def tally(n, down, value):
            return cont((n + 1, feed(down, value)))
        return tally
    def report(done):
        def finish(n, down):
            return (done(down), n)
        return finish
    return transducer(counter, report, init=0)

def interspersing(sep):
    def interleaver(feed):
        def step(started, down, value):
            if started:
                down = feed(down, sep)
            return cont((True, feed(down, value)))
        return step
    return transducer(interleaver, init=False)

def asserting(pred, describe=repr):
    """
    Forwards elements while pred holds. The first element failing pred halts the
    pipeline, whose output is then Failure(describe(element), index).
    """
    def checker(feed):
        def check(state, down, value):
            index, _ = state
            if pred(value):
                return cont(((index + 1, None), feed(down, value)))
            return halt(((index, Failure(describe(value), index)), down))
        return check
    def verdict(done):
        def finish(state, down):
            _, failure = state
            if failure is not None:
                return failure
            return done(down)
        return finish
    return transducer(checker, verdict, init=(0, None))

def partitioning(pred, true_branch=None, false_branch=None):
    """
    Routes each element to true_branch or false_branch depending on pred. The
    branches are independent reducers, collect() by default. The output is the
    pair (true output, false output). Halts only once both branches have.
    """
    branches = (true_branch or collect(), false_branch or collect())
    for branch in branches:
        if not isinstance(branch, Reducer):
            raise PipelineTypeError("Partition branches must be Reducers, got %r" % (branch,))

    def route(branches, value):
        trues, falses = branches
        if pred(value):
            trues = trues.step(value)
        else:
            falses = falses.step(value)
        if trues.is_halted() and falses.is_halted():
            return halt((trues, falses))
        return cont((trues, falses))

    def finish(branches):
        trues, falses = branches
        return (trues.finish(), falses.finish())

    if all(branch.is_halted() for branch in branches):
        return reducer(halt(branches), route, finish)
    return reducer(branches, route, finish)

def collect():
    def collected(acc, value):
        return cont(cons(value, acc))
    return reducer(NIL, collected, unroll_reversed)

def fold(fn, init):
    def folded(acc, value):
        return cont(fn(acc, value))
    return reducer(init, folded)

def sum_of():
    return fold(add, 0)

def count():
    return fold(lambda n, _: n + 1, 0)

def joined_with(seperator):
    def joint(acc, value):
        return cont(cons(str(value), acc))
    def join(acc):
        return seperator.join(unroll_reversed(acc))
    return reducer(NIL, joint, join)

def capture(halt_on_first=None):
    """
    Captures a single value, None until one arrives. By default the first value
    is kept and the reducer halts. With halt_on_first=False, the latest value is
    kept instead.
    """
    if halt_on_first is None:
        halt_on_first = CAPTURE_HALTS_ON_FIRST
    def captured(_, value):
        if halt_on_first:
            return halt(value)
        return cont(value)
    return reducer(None, captured)
