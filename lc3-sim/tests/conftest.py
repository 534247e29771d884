import pytest

from lc3.console_io import BufferedIO
from lc3.cpu_core import CPU


@pytest.fixture
def io():
    return BufferedIO()


@pytest.fixture
def cpu(io):
    return CPU(io)
