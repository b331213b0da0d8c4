from transducers import chain, collect, drive, mapping, reduce, taking
from transducers.reply import cont, empty, halt
from transducers.steppers import iter_stepper, list_stepper, poll_stepper
from transducers.util import irange

summing = lambda total, x: cont(total + x)

def halting_at(limit, calls):
    """Sums, halting once the total reaches limit. Records every element seen."""
    def step(total, x):
        calls.append(x)
        total += x
        if total >= limit:
            return halt(total)
        return cont(total)
    return step

def poller(replies):
    replies = iter(replies)
    return lambda: next(replies)

def test_list_stepper():
    assert list_stepper(summing, cont(0), [1, 2, 3]) == cont(6)
    assert list_stepper(summing, cont(0), (1, 2)) == cont(3)
    assert list_stepper(summing, cont(0), "") == cont(0)

def test_list_stepper_empty_is_unchanged():
    start = cont(5)
    assert list_stepper(summing, start, []) is start

def test_list_stepper_short_circuits():
    calls = []
    assert list_stepper(halting_at(3, calls), cont(0), [1, 2, 3, 4]) == halt(3)
    assert calls == [1, 2]

def test_list_stepper_starting_halted():
    calls = []
    assert list_stepper(halting_at(3, calls), halt(0), [1, 2]) == halt(0)
    assert calls == []

def test_iter_stepper():
    assert iter_stepper(summing, cont(0), iter([1, 2, 3])) == cont(6)
    assert iter_stepper(summing, cont(0), range(4)) == cont(6)
    assert iter_stepper(summing, cont(0), []) == cont(0)

def test_iter_stepper_short_circuits(recording):
    calls = []
    source = recording([1, 2, 3, 4])
    assert iter_stepper(halting_at(3, calls), cont(0), source) == halt(3)
    assert calls == [1, 2]
    assert source.consumed == [1, 2]

def test_iter_stepper_starting_halted(recording):
    source = recording([1, 2])
    assert iter_stepper(summing, halt(0), source) == halt(0)
    assert source.consumed == []

def test_iter_stepper_infinite():
    calls = []
    assert iter_stepper(halting_at(10, calls), cont(0), irange(1, 1)) == halt(10)
    assert calls == [1, 2, 3, 4]
    assert reduce(iter_stepper, chain(mapping(lambda x: x * 2), taking(3), collect()), irange(0, 1)) == [0, 2, 4]

def test_poll_stepper_resumes_after_empty():
    poll = poller([cont(1), cont(2), empty(None), cont(3), halt(None)])
    reply = poll_stepper(summing, cont(0), poll)
    assert reply == empty(3)
    reply = poll_stepper(summing, reply, poll)
    assert reply == cont(6)

def test_poll_stepper_exhausted():
    assert poll_stepper(summing, cont(0), poller([halt(None)])) == cont(0)
    assert poll_stepper(summing, empty(4), poller([halt(None)])) == cont(4)

def test_poll_stepper_stops_polling_on_halt():
    polled = []
    def poll():
        polled.append(True)
        return cont(2)
    calls = []
    assert poll_stepper(halting_at(5, calls), cont(0), poll) == halt(6)
    assert len(polled) == 3

def test_poll_pipeline():
    poll = poller([cont(1), empty(None), cont(2), cont(3), empty(None), halt(None)])
    pipeline = chain(mapping(lambda x: x + 1), collect())
    reply = drive(poll_stepper, pipeline, poll)
    assert reply.is_empty()
    assert reply.state().finish() == [2]
    reply = drive(poll_stepper, reply.state(), poll)
    assert reply.is_empty()
    reply = drive(poll_stepper, reply.state(), poll)
    assert not reply.is_empty()
    assert not reply.is_halted()
    assert reply.state().finish() == [2, 3, 4]
