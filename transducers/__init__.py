from transducers.reply import Reply, Continue, Halt, Empty, cont, halt, empty, merge
from transducers.core import \
    PipelineTypeError, \
    Reducer,           \
    Transducer,        \
    advance,           \
    chain,             \
    compose,           \
    drive,             \
    reduce,            \
    reducer,           \
    simple_transducer, \
    transduce,         \
    transducer
from transducers.steppers import list_stepper, iter_stepper, poll_stepper
from transducers.library import \
    Failure,        \
    asserting,      \
    capture,        \
    collect,        \
    concatenating,  \
    count,          \
    dropping,       \
    filtering,      \
    fold,           \
    folding,        \
    interspersing,  \
    joined_with,    \
    mapping,        \
    partitioning,   \
    repeating,      \
    reversing,      \
    sum_of,         \
    taking,         \
    with_count,     \
    with_index
from transducers.progress import progress
