import tqdm
from transducers.core import transducer
from transducers.reply import cont

def progress(label='', total=None, quiet=False):
    """
    Passes elements through untouched while ticking a tqdm progress bar.
    The bar is opened by the first element, and closed when downstream halts
    or on finish. A pipeline which is driven but neither halts nor finishes
    leaves its bar open.
    """
    def ticker(feed):
        def tick(bar, down, value):
            if bar is None:
                bar = tqdm.tqdm(desc=label, total=total, disable=quiet, leave=False)
            bar.update(1)
            down = feed(down, value)
            if down.is_halted():
                bar.close()
                return cont((None, down))
            return cont((bar, down))
        return tick
    def closer(done):
        def finish(bar, down):
            if bar is not None:
                bar.close()
            return done(down)
        return finish
    return transducer(ticker, closer, init=None)
