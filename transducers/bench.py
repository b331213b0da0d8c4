import logging
import timeit
from functools import partial
import click
from tabulate import tabulate
from transducers.core import chain, reduce
from transducers.library import collect, filtering, mapping, sum_of, taking
from transducers.steppers import iter_stepper, list_stepper

logger = logging.getLogger(__name__)

DEFAULT_NUMBER = 100
DEFAULT_SIZE = 10000

def is_even(n):
    return n % 2 == 0

def square(x):
    return x * x

def inc(x):
    return x + 1

def sum_even_loop(ns):
    total = 0
    for n in ns:
        if is_even(n):
            total += n
    return total

def sum_even_comprehension(ns):
    return sum([n for n in ns if is_even(n)])

def sum_even_filter(ns):
    return sum(filter(is_even, ns))

def sum_even_transduce(ns):
    return reduce(list_stepper, chain(filtering(is_even), sum_of()), ns)

def inc_square_loop(nums):
    out = []
    for n in nums:
        out.append((n + 1) * (n + 1))
    return out

def inc_square_comprehension(nums):
    return [(num + 1) * (num + 1) for num in nums]

def inc_square_map(nums):
    return list(map(square, map(inc, nums)))

def inc_square_transduce(nums):
    return reduce(list_stepper, chain(mapping(inc), mapping(square), collect()), nums)

# The first ten even squares: early termination against full passes.
def take_early_comprehension(ns):
    return [square(n) for n in ns if is_even(n)][:10]

def take_early_loop(ns):
    out = []
    for n in ns:
        if is_even(n):
            out.append(square(n))
            if len(out) == 10:
                break
    return out

def take_early_transduce(ns):
    return reduce(iter_stepper, chain(filtering(is_even), mapping(square), taking(10), collect()), ns)

CASES = {
    'sum_even': [sum_even_loop, sum_even_comprehension, sum_even_filter, sum_even_transduce],
    'inc_square': [inc_square_loop, inc_square_comprehension, inc_square_map, inc_square_transduce],
    'take_early': [take_early_loop, take_early_comprehension, take_early_transduce],
}

def performance_compare(*cases, case_args=(), timeit_kwargs=None):
    """Times each case. Returns rows of (name, time, scale relative to the fastest)."""
    results = {}
    for case in cases:
        name = case.__name__
        results[name] = timeit.timeit(partial(case, *case_args), **(timeit_kwargs or {}))
    lowest = min(results.values()) or 1
    return [(name, time, "%.2f" % (time / lowest)) for (name, time) in results.items()]

@click.command()
@click.option('--number', default=DEFAULT_NUMBER, show_default=True, help='Runs per case.')
@click.option('--size', default=DEFAULT_SIZE, show_default=True, help='Length of the input list.')
@click.argument('cases', nargs=-1, type=click.Choice(sorted(CASES)))
def main(number, size, cases):
    """Compares transducer pipelines against loops, comprehensions and builtins."""
    if number < 1:
        raise click.BadParameter("must be at least 1", param_hint='--number')
    if size < 0:
        raise click.BadParameter("can't be negative", param_hint='--size')
    logger.debug("benchmarking %s with number=%d size=%d", cases, number, size)
    nums = list(range(size))
    for name in cases or sorted(CASES):
        table = performance_compare(*CASES[name], case_args=[nums], timeit_kwargs={'number': number})
        click.echo(name)
        click.echo(tabulate(table, headers=['case', 'time', 'scale']))
        click.echo()
