from transducers.util import NIL, cons, reverse_onto, unroll

class Queue:
    """
    First in first out queue made of two cons lists. Pushes go onto the inbox,
    pops come off the outbox. When the outbox runs dry the inbox is reversed
    into it, so each element is moved once: push and pop are amortized O(1).

    Queues are values. push and pop return new queues and leave the contents of
    the receiver untouched. A queue keeps the reversal it did for its first pop,
    so popping the same queue again does not repeat it.
    """
    def __init__(self, inbox=NIL, outbox=NIL, size=0):
        self._inbox = inbox
        self._outbox = outbox
        self._size = size

    @classmethod
    def of(cls, values):
        q = cls()
        for v in values:
            q = q.push(v)
        return q

    def push(self, value):
        return Queue(cons(value, self._inbox), self._outbox, self._size + 1)

    def pop(self):
        """Returns (value, rest). Raises IndexError on an empty queue."""
        if self._outbox is NIL:
            if self._inbox is NIL:
                raise IndexError("pop from an empty queue")
            # Same contents, rearranged once, so popping this value again is cheap.
            self._inbox, self._outbox = NIL, reverse_onto(self._inbox)
        value, outbox = self._outbox
        return value, Queue(self._inbox, outbox, self._size - 1)

    def peek(self):
        value, _ = self.pop()
        return value

    def __len__(self):
        return self._size

    def __bool__(self):
        return self._size > 0

    def __iter__(self):
        return iter(unroll(self._outbox) + unroll(reverse_onto(self._inbox)))

    def __repr__(self):
        return "Queue(%r)" % list(self)
