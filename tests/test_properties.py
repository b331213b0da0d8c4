from operator import add
from hypothesis import given, settings
from hypothesis import strategies as st
from tests.conftest import Recording
from transducers import \
    chain,        \
    collect,      \
    compose,      \
    dropping,     \
    filtering,    \
    folding,      \
    capture,      \
    mapping,      \
    partitioning, \
    reducer,      \
    reduce,       \
    reversing,    \
    taking,       \
    transduce
from transducers.reply import cont, halt, merge
from transducers.steppers import list_stepper
from transducers.util import finvert, identity

values = st.lists(st.integers(), max_size=30)
counts = st.integers(min_value=-5, max_value=40)
predicates = st.sampled_from([
    lambda x: x % 2 == 0,
    lambda x: x > 0,
    lambda x: x % 3 == 1,
])

@given(values)
def test_identity_preserves_order(ints):
    assert transduce(mapping(identity), collect(), ints) == ints

@given(values, counts)
def test_take_drop_complement(ints, k):
    taken = transduce(taking(k), collect(), ints)
    dropped = transduce(dropping(k), collect(), ints)
    if 0 <= k <= len(ints):
        assert taken + dropped == ints
    if k >= len(ints):
        assert taken == ints
    if k <= 0:
        assert taken == []

@given(values, predicates)
def test_partition_is_two_filters(ints, pred):
    trues, falses = reduce(list_stepper, partitioning(pred), ints)
    assert trues == transduce(filtering(pred), collect(), ints)
    assert falses == transduce(filtering(finvert(pred)), collect(), ints)
    assert sorted(trues + falses) == sorted(ints)

@given(values)
def test_reverse_involution(ints):
    assert transduce(chain(reversing(), reversing()), collect(), ints) == ints
    assert transduce(reversing(), collect(), ints) == ints[::-1]

@given(values)
def test_fold_sums(ints):
    assert transduce(folding(add, 0), capture(), ints) == sum(ints)

@given(st.lists(st.integers(), min_size=1, max_size=30))
def test_take_zero_consumes_nothing(ints):
    source = Recording(ints)
    pipeline = chain(taking(0), mapping(identity), filtering(lambda x: True), collect())
    assert transduce(chain(), pipeline, source) == []
    assert source.consumed == []

@given(st.lists(st.booleans(), max_size=30))
def test_halt_never_resurrects(flags):
    def step(seen, flag):
        if flag:
            return halt(seen + 1)
        return cont(seen + 1)
    pipeline = chain(mapping(identity), filtering(lambda x: True), reducer(0, step))
    was_halted = False
    for flag in flags:
        pipeline = pipeline.step(flag)
        if was_halted:
            assert pipeline.is_halted()
        was_halted = pipeline.is_halted()
    expected = flags.index(True) + 1 if True in flags else len(flags)
    assert pipeline.finish() == expected
    assert pipeline.is_halted() == (True in flags)

@given(st.lists(st.sampled_from([cont, halt]), max_size=30))
def test_and_then_is_sticky(tags):
    reply = cont(0)
    for tag in tags:
        reply = reply.and_then(lambda s: tag(s + 1))
    assert reply.is_halted() == (halt in tags)
    assert reply.state() == len(tags)

@given(st.lists(st.sampled_from([cont, halt]), min_size=1, max_size=30))
def test_merge_is_sticky(tags):
    merged = cont(0)
    for i, tag in enumerate(tags):
        merged = merge(merged, tag(i))
    assert merged.is_halted() == (halt in tags)

@settings(max_examples=50)
@given(values, counts, predicates)
def test_compose_associative(ints, k, pred):
    a, b, c = mapping(lambda x: x * 3), filtering(pred), taking(k)
    left_nested = compose(compose(c, b), a)
    right_nested = compose(c, compose(b, a))
    assert transduce(left_nested, collect(), ints) == transduce(right_nested, collect(), ints)
