def identity(x):
    return x

def invert(v):
    return not v

def finvert(f):
    def inverted(*args, **kwargs):
        return invert(f(*args, **kwargs))
    return inverted

def irange(start, increment):
    while True:
        yield start
        start += increment

# Cons lists are nested (head, tail) pairs ending in NIL. Pushing shares the
# tail, so reducers can keep them as state and stay immutable.
NIL = None

def cons(head, tail):
    return (head, tail)

def unroll(cell):
    """Returns the cons list as a python list, head first."""
    out = []
    while cell is not NIL:
        head, cell = cell
        out.append(head)
    return out

def unroll_reversed(cell):
    """Returns the cons list as a python list, in insertion order."""
    out = unroll(cell)
    out.reverse()
    return out

def reverse_onto(cell, onto=NIL):
    while cell is not NIL:
        head, cell = cell
        onto = (head, onto)
    return onto
