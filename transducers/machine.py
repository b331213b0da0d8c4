"""
Push machines: the status based encoding of a pipeline stage.

A machine's status is one of
    TERMINATED: it will never produce or accept anything again.
    WAITING: it needs an input before it can make progress.
    Producing(value, next): value is ready, next is the machine after it.

Inputs are pushed with feed and the end of input with close. Both only queue
the signal; a machine consumes its queue, strictly first in first out, while
it is waiting. Status is worked out when asked for with settle().

Machines are values. feed, close and settle return new machines.
"""
import copy
import logging
from collections import namedtuple
from transducers.fifo import Queue
from transducers.reply import cont, halt

logger = logging.getLogger(__name__)

class ProtocolError(RuntimeError):
    pass

class _Signal:
    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return self.name

TERMINATED = _Signal("Terminated")
WAITING = _Signal("Waiting")
# Marks the end of input inside a pending queue.
END = _Signal("End")

Producing = namedtuple('Producing', ['value', 'next'])

class Machine:
    def __init__(self):
        self._pending = Queue()
        self._closed = False

    def _advance(self):
        """Returns (status, machine), ignoring pending input."""
        raise NotImplementedError()

    def _accept(self, value):
        """Returns the machine after value. Only called while waiting."""
        raise NotImplementedError()

    def _terminate(self):
        """Returns the machine after the end of input. Only called while waiting."""
        raise NotImplementedError()

    def _with(self, pending, closed):
        machine = copy.copy(self)
        machine._pending = pending
        machine._closed = closed
        return machine

    def feed(self, value):
        return self._with(self._pending.push(value), self._closed)

    def close(self):
        return self._with(self._pending.push(END), self._closed)

    def settle(self):
        """
        Consumes pending input until the machine produces, terminates, or waits
        with nothing left to consume. Returns (status, machine). When producing,
        machine is the one after the produced value.
        """
        pending, closed = self._pending, self._closed
        machine = self
        while True:
            status, machine = machine._advance()
            if isinstance(status, Producing):
                successor = status.next._with(pending, closed)
                return Producing(status.value, successor), successor
            if status is TERMINATED:
                return TERMINATED, machine
            if closed:
                raise ProtocolError("%r is waiting for input after the end of input" % machine)
            if not pending:
                return WAITING, machine._with(pending, closed)
            signal, pending = pending.pop()
            if signal is END:
                closed = True
                machine = machine._terminate()
            else:
                machine = machine._accept(signal)

    def status(self):
        status, _ = self.settle()
        return status

class Mealy(Machine):
    def __init__(self, step, state, flush=None, outputs=Queue(), halted=False):
        super().__init__()
        self._step = step
        self._state = state
        self._flush = flush
        self._outputs = outputs
        self._halted = halted

    def _advance(self):
        if self._outputs:
            value, rest = self._outputs.pop()
            successor = Mealy(self._step, self._state, self._flush, rest, self._halted)
            return Producing(value, successor), successor
        if self._halted:
            return TERMINATED, self
        return WAITING, self

    def _accept(self, value):
        reply = self._step(self._state, value)
        state, outputs = reply.state()
        return Mealy(self._step, state, self._flush, Queue.of(outputs), reply.is_halted())

    def _terminate(self):
        outputs = self._flush(self._state) if self._flush else ()
        return Mealy(self._step, self._state, self._flush, Queue.of(outputs), True)

    def __repr__(self):
        return "<Mealy %s>" % getattr(self._step, '__name__', 'machine')

def mealy(step, init, flush=None):
    """
    step is (state, value) -> Reply((state, outputs)). A Halt terminates the
    machine once outputs have been produced.
    flush is (state -> outputs), produced at the end of input.
    """
    return Mealy(step, init, flush)

class Composite(Machine):
    """right consumes what left produces."""
    def __init__(self, right, left):
        super().__init__()
        self._right = right
        self._left = left

    def _advance(self):
        right, left = self._right, self._left
        while True:
            status, right = right.settle()
            if status is TERMINATED:
                return TERMINATED, Composite(right, left)
            if isinstance(status, Producing):
                successor = Composite(right, left)
                return Producing(status.value, successor), successor
            upstream, left = left.settle()
            if isinstance(upstream, Producing):
                right = right.feed(upstream.value)
            elif upstream is TERMINATED:
                logger.debug("%r terminated, closing %r", self._left, right)
                right = right.close()
            else:
                return WAITING, Composite(right, left)

    def _accept(self, value):
        return Composite(self._right, self._left.feed(value))

    def _terminate(self):
        return Composite(self._right, self._left.close())

    def __repr__(self):
        return "<Composite %r %r>" % (self._left, self._right)

def compose(right, left):
    """left is nearer the input and feeds right."""
    for machine in (right, left):
        if not isinstance(machine, Machine):
            raise TypeError("Can't compose %s, expected a Machine" % type(machine).__name__)
    return Composite(right, left)

def chain(*machines):
    """Composes machines in the order data flows through them."""
    if not machines:
        raise ValueError("chain needs at least one machine")
    combined = machines[-1]
    for machine in reversed(machines[:-1]):
        combined = compose(combined, machine)
    return combined

def run(machine, iterable):
    """
    Pushes the iterable through the machine and returns everything it produced.
    Nothing more is pulled from the iterable once the machine terminates.
    """
    outputs = []
    source = iter(iterable)
    status, machine = machine.settle()
    while status is not TERMINATED:
        if isinstance(status, Producing):
            outputs.append(status.value)
        else:
            try:
                value = next(source)
            except StopIteration:
                machine = machine.close()
            else:
                machine = machine.feed(value)
        status, machine = machine.settle()
    return outputs

def mapping(fn):
    def mapped(state, value):
        return cont((state, (fn(value),)))
    return mealy(mapped, None)

def filtering(pred):
    def filtered(state, value):
        return cont((state, (value,) if pred(value) else ()))
    return mealy(filtered, None)

def expanding(fn):
    """Produces every element of fn(value), in order."""
    def expanded(state, value):
        return cont((state, tuple(fn(value))))
    return mealy(expanded, None)

def taking(n):
    def take(remaining, value):
        remaining -= 1
        if remaining <= 0:
            return halt((0, (value,)))
        return cont((remaining, (value,)))
    if n <= 0:
        return Mealy(take, 0, halted=True)
    return mealy(take, n)

def folding(fn, init):
    """Produces the accumulation once, at the end of input."""
    def fold_step(acc, value):
        return cont((fn(acc, value), ()))
    def flush(acc):
        return (acc,)
    return mealy(fold_step, init, flush)
