"""
Reducers and transducers.

A Reducer is a value holding a Reply of its state. Stepping it returns the
next reducer, finishing it computes an output from whatever state it holds.
Once its reply is a Halt, stepping is a no-op.

A Transducer turns a downstream Reducer into a new Reducer whose state is the
pair (local, down). Transducers are composed with compose/chain, and the
resulting pipeline is driven over a collection by a stepper.

    >>> reduce(list_stepper, chain(mapping(inc), taking(2), collect()), [3, 7, 9])
    [4, 8]
"""
import logging
from transducers.reply import Reply, cont, halt, merge
from transducers.steppers import iter_stepper
from transducers.util import identity

logger = logging.getLogger(__name__)

class PipelineTypeError(TypeError):
    """Raised when stages are wired together in a way that can't work."""
    pass

def _type_name(t):
    if isinstance(t, tuple):
        return "(%s)" % ", ".join(_type_name(x) for x in t)
    return getattr(t, '__name__', repr(t))

def _is_subtype(a, b):
    if isinstance(a, tuple):
        return all(_is_subtype(x, b) for x in a)
    return issubclass(a, b)

def _check_link(upstream, downstream):
    """
    upstream feeds downstream, so what it produces must be accepted.
    A stage producing object hasn't declared its output (pass-through stages
    produce whatever reaches them), so there is nothing to check.
    """
    if upstream.produces is object:
        return
    if not _is_subtype(upstream.produces, downstream.accepts):
        raise PipelineTypeError(
            "%s produces %s, but %s accepts %s" % (
                upstream, _type_name(upstream.produces),
                downstream, _type_name(downstream.accepts)))

def _check_reply(reply, source):
    if not isinstance(reply, Reply):
        raise PipelineTypeError(
            "Step of %s must return a Reply, got %s" % (source, type(reply).__name__))
    return reply

class Reducer:
    def __init__(self, reply, step_fn, finish_fn, accepts=object, name='reducer'):
        self._reply = _check_reply(reply, name)
        self._step_fn = step_fn
        self._finish_fn = finish_fn
        self.accepts = accepts
        self.__name__ = name

    def step(self, value):
        if self._reply.is_halted():
            return self
        reply = _check_reply(self._step_fn(self._reply.state(), value), self)
        return Reducer(reply, self._step_fn, self._finish_fn, self.accepts, self.__name__)

    def finish(self):
        return self._finish_fn(self._reply.state())

    def is_halted(self):
        return self._reply.is_halted()

    def reply(self):
        return self._reply

    def state(self):
        return self._reply.state()

    def __repr__(self):
        return "<Reducer %s %r>" % (self.__name__, self._reply)

class Transducer:
    def __init__(self, wrap, accepts=object, produces=object, name='transducer'):
        self._wrap = wrap
        self.accepts = accepts
        self.produces = produces
        self.__name__ = name

    def __call__(self, down):
        if not isinstance(down, Reducer):
            raise PipelineTypeError(
                "%s can only wrap a Reducer, got %s" % (self, type(down).__name__))
        _check_link(self, down)
        return self._wrap(down)

    def __or__(self, other):
        return chain(self, other)

    def __repr__(self):
        return "<Transducer %s>" % self.__name__

def _start(init):
    """init values start a stage running, init Replies pick their own tag."""
    if isinstance(init, Reply):
        return init
    return cont(init)

def reducer(init, step, finish=identity, accepts=object):
    """
    Builds a terminal reducer.
    init is the starting state. A Halt(init) makes a reducer which never steps.
    step is (state, value) -> Reply.
    finish is (state -> output).
    """
    return Reducer(_start(init), step, finish, accepts, getattr(step, '__name__', 'reducer'))

def _feed(down, value):
    return down.step(value)

def _done(down):
    return down.finish()

def _passthrough(done):
    def finish(local, down):
        return done(down)
    return finish

def transducer(step_map, finish_map=None, init=None, accepts=object, produces=object):
    """
    Builds a transducer out of functions which rewrite the downstream reducer's
    step and finish.

    step_map receives feed, (down, value) -> down, and returns the step of the
    new stage: (local, down, value) -> Reply((local, down)).
    finish_map receives done, (down -> output), and returns the finish of the
    new stage: (local, down) -> output. Defaults to the downstream finish.
    init is the starting local state. A Halt(local) starts the stage halted.

    A stage wrapping a halted reducer starts halted, and a stage halts as soon
    as its downstream does.
    """
    name = getattr(step_map, '__name__', 'transducer')
    stage_step = step_map(_feed)
    stage_finish = (finish_map or _passthrough)(_done)

    def step(state, value):
        local, down = state
        reply = _check_reply(stage_step(local, down, value), name)
        _, down = reply.state()
        return merge(down.reply(), reply)

    def finish(state):
        local, down = state
        return stage_finish(local, down)

    def wrap(down):
        start = _start(init).map(lambda local: (local, down))
        return Reducer(merge(down.reply(), start), step, finish, accepts, name)

    return Transducer(wrap, accepts, produces, name)

def simple_transducer(step_map, accepts=object, produces=object):
    """
    Builds a transducer without local state.
    step_map receives feed, (down, value) -> down, and returns (down, value) -> down.
    """
    def stateless(feed):
        stage = step_map(feed)
        def step(local, down, value):
            return cont((local, stage(down, value)))
        return step
    stateless.__name__ = getattr(step_map, '__name__', 'transducer')
    return transducer(stateless, accepts=accepts, produces=produces)

def compose(right, left):
    """
    Fuses two stages. left is nearer the input and feeds right.
    Composing a transducer with a reducer gives a reducer, composing two
    transducers gives a transducer.
    """
    if not isinstance(left, Transducer):
        raise PipelineTypeError("Can't compose %r, only transducers feed other stages" % (left,))
    if isinstance(right, Reducer):
        return left(right)
    if not isinstance(right, Transducer):
        raise PipelineTypeError("Can't compose %r, expected a Transducer or Reducer" % (right,))
    _check_link(left, right)
    def composed(down):
        return left(right(down))
    name = "%s_%s" % (left.__name__, right.__name__)
    return Transducer(composed, left.accepts, right.produces, name)

def _forwarded(feed):
    return feed

def chain(*stages):
    """
    Composes stages in the order data flows through them. The last stage may be
    a reducer, in which case the chain is a reducer.
    chain() is the identity transducer.
    """
    if not stages:
        return simple_transducer(_forwarded)
    for stage in stages[:-1]:
        if isinstance(stage, Reducer):
            raise ValueError("Only the last stage of a chain may be a reducer, got %r" % (stage,))
    combined = stages[-1]
    for stage in reversed(stages[:-1]):
        combined = compose(combined, stage)
    return combined

def advance(reducer, value):
    """Steps the reducer with value, reporting whether it halted."""
    reducer = reducer.step(value)
    if reducer.is_halted():
        return halt(reducer)
    return cont(reducer)

def drive(stepper, reducer, collection):
    """
    Feeds the collection to the reducer without finishing it.
    Returns a Reply of the resulting reducer: Halt if the reducer halted, Empty
    if a polled source ran dry for now, Continue if the collection ran out.
    """
    if not isinstance(reducer, Reducer):
        raise PipelineTypeError("Can't drive %r, expected a Reducer" % (reducer,))
    if reducer.is_halted():
        logger.debug("%r halted before the first element", reducer)
        return halt(reducer)
    return stepper(advance, cont(reducer), collection)

def reduce(stepper, reducer, collection):
    """Feeds the collection through the reducer and returns its output."""
    return drive(stepper, reducer, collection).state().finish()

def transduce(xform, terminal, collection, stepper=iter_stepper):
    return reduce(stepper, compose(terminal, xform), collection)
