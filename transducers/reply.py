"""
Replies are what every step hands back: the new state, tagged with whether the
caller may keep stepping.

Continue(s): more input is welcome.
Halt(s): processing is over, s is final. Halt is sticky, nothing turns it
back into a Continue.
Empty(s): the source has nothing right now. Used by pull based sources, it
can be refilled into a Continue or promoted into a Halt.
"""

class Reply(object):
    # Strength orders the tags for merge; Halt is the strongest.
    strength = 0

    def __init__(self, state):
        self._state = state

    def state(self):
        return self._state

    def is_halted(self):
        return False

    def is_empty(self):
        return False

    def map(self, fn):
        """Transform the state, keeping the tag."""
        return self.__class__(fn(self._state))

    def and_then(self, fn):
        """
        fn is (state -> Reply). The result keeps fn's tag, unless this reply
        was a Halt, in which case the result is a Halt as well.
        """
        reply = fn(self._state)
        if not isinstance(reply, Reply):
            raise TypeError("and_then expected a Reply, got %s" % type(reply))
        return reply

    def __eq__(self, other):
        return type(self) == type(other) and self._state == other._state

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash((type(self).__name__, self._state))

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self._state)

class Continue(Reply):
    pass

class Empty(Reply):
    strength = 1

    def is_empty(self):
        return True

    def refill(self):
        return Continue(self._state)

    def promote(self):
        return Halt(self._state)

class Halt(Reply):
    strength = 2

    def is_halted(self):
        return True

    def and_then(self, fn):
        return Halt(Reply.and_then(self, fn).state())

cont = Continue
halt = Halt
empty = Empty

def merge(a, b):
    """
    Strengthening merge: b's state under the stronger of the two tags.
    merge(Halt(x), Continue(y)) == Halt(y).
    """
    if a.strength > b.strength:
        return a.__class__(b.state())
    return b
