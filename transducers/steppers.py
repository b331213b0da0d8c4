"""
Steppers drive a step function across a concrete collection.

Every stepper has the shape stepper(fn, reply, collection) -> Reply, where fn
is (state, element) -> Reply. Elements are handed over in the collection's
order, and the stepper checks for a Halt before taking each element, so
nothing is pulled from the source once a step halts. An empty collection
returns the starting reply unchanged.
"""
import logging
from transducers.reply import merge

logger = logging.getLogger(__name__)

def list_stepper(fn, reply, sequence):
    """Steps over anything supporting len and indexing."""
    index = 0
    length = len(sequence)
    while index < length and not reply.is_halted():
        reply = fn(reply.state(), sequence[index])
        index += 1
    if reply.is_halted():
        logger.debug("halted after %d of %d elements", index, length)
    return reply

def iter_stepper(fn, reply, iterable):
    """Steps over any iterable, including infinite generators."""
    if reply.is_halted():
        return reply
    consumed = 0
    for value in iterable:
        consumed += 1
        reply = fn(reply.state(), value)
        if reply.is_halted():
            logger.debug("halted after %d elements", consumed)
            break
    return reply

def poll_stepper(fn, reply, poll):
    """
    Steps over a pull based source. poll is a function of no arguments
    returning cont(element) for the next element, empty(None) when nothing is
    available yet, or halt(None) when the source is exhausted.

    When the source runs dry the result is an Empty of the current state, and
    stepping can be resumed later from that reply.
    """
    while not reply.is_halted():
        polled = poll()
        if polled.is_halted():
            break
        if polled.is_empty():
            return merge(polled, reply)
        reply = fn(reply.state(), polled.state())
    if reply.is_empty():
        return reply.refill()
    return reply
