import io
import os
import sys
import threading

import pytest

from lc3.cpu_core import CPU, MachineState
from lc3.errors import Cancelled
from lc3.terminal import TerminalIO, raw_mode

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="POSIX pipes")


@pytest.fixture
def pipe():
    r, w = os.pipe()
    reader = os.fdopen(r, "rb", buffering=0)
    yield reader, w
    reader.close()
    os.close(w)


def test_poll_and_read(pipe):
    reader, w = pipe
    term = TerminalIO(stdin=reader, stdout=io.BytesIO())
    assert not term.key_available()
    os.write(w, b"x")
    assert term.key_available()
    assert term.read_char() == ord("x")


def test_read_cancelled(pipe):
    reader, _ = pipe
    cancel = threading.Event()
    cancel.set()
    term = TerminalIO(stdin=reader, stdout=io.BytesIO(), cancel=cancel)
    with pytest.raises(Cancelled):
        term.read_char()


def test_write(pipe):
    reader, _ = pipe
    out = io.BytesIO()
    term = TerminalIO(stdin=reader, stdout=out)
    term.write_byte(0x141)
    term.write_text("B\n")
    term.flush()
    assert out.getvalue() == b"AB\n"


def test_raw_mode_not_a_tty(pipe):
    reader, _ = pipe
    with raw_mode(reader):
        pass


def test_cancelled_getc_leaves_machine_at_trap(pipe):
    reader, _ = pipe
    cancel = threading.Event()
    cancel.set()
    cpu = CPU(TerminalIO(stdin=reader, stdout=io.BytesIO(), cancel=cancel))
    cpu.load_words(0x3000, [0xF020, 0xF025])   # GETC, HALT
    cpu.reg[7] = 0x1234
    with pytest.raises(Cancelled):
        cpu.step()
    assert cpu.reg.pc == 0x3000
    assert cpu.reg[7] == 0x1234
    assert cpu.state is MachineState.RUNNING
