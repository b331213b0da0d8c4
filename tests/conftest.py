import pytest


def pytest_addoption(parser):
    parser.addoption("--all", action="store_true", help="run all sequence length and count combinations")


def pytest_generate_tests(metafunc):
    if metafunc.config.getoption("all"):
        lengths = range(0, 12)
        counts = range(-2, 14)
    else:
        lengths = [0, 1, 2, 5]
        counts = [-1, 0, 1, 3, 7]
    if "xs" in metafunc.fixturenames:
        metafunc.parametrize("xs", [list(range(length)) for length in lengths])
    if "n" in metafunc.fixturenames:
        metafunc.parametrize("n", counts)


class Recording:
    """
    Iterable source which remembers every element pulled from it.
    """
    def __init__(self, values):
        self.values = values
        self.consumed = []

    def __iter__(self):
        for value in self.values:
            self.consumed.append(value)
            yield value


@pytest.fixture
def recording():
    return Recording
