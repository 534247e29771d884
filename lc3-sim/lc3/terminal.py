"""Host terminal as an LC-3 console: raw keyboard input, byte output.

POSIX uses termios/tty/select, Windows uses msvcrt.
"""
import logging
import os
import sys
import time
from contextlib import contextmanager

from .console_io import ConsoleIO
from .errors import Cancelled

log = logging.getLogger(__name__)

WINDOWS = sys.platform == "win32"

if WINDOWS:
    import msvcrt
else:
    import select
    import termios
    import tty

POLL_INTERVAL = 0.1  # seconds between cancellation checks while blocked


class TerminalIO(ConsoleIO):
    def __init__(self, stdin=None, stdout=None, cancel=None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout.buffer
        self.cancel = cancel

    def _ready(self, timeout: float) -> bool:
        if WINDOWS:
            return msvcrt.kbhit()
        r, _, _ = select.select([self.stdin], [], [], timeout)
        return bool(r)

    def key_available(self) -> bool:
        return self._ready(0)

    def read_char(self) -> int:
        while not self._ready(POLL_INTERVAL):
            if self.cancel is not None and self.cancel.is_set():
                raise Cancelled("input cancelled")
            if WINDOWS:
                time.sleep(POLL_INTERVAL)  # kbhit() does not wait
        if WINDOWS:
            return msvcrt.getch()[0]
        data = os.read(self.stdin.fileno(), 1)
        if not data:
            raise EOFError("stdin closed")
        return data[0]

    def write_byte(self, b: int) -> None:
        self.stdout.write(bytes([b & 0xFF]))

    def flush(self) -> None:
        self.stdout.flush()


@contextmanager
def raw_mode(stream=None):
    """Disable line buffering and echo for the duration of the block.

    The previous terminal settings are restored on every exit path.
    No-op when the stream is not a tty or on Windows.
    """
    stream = stream or sys.stdin
    if WINDOWS or not stream.isatty():
        yield
        return
    fd = stream.fileno()
    saved = termios.tcgetattr(fd)
    tty.setcbreak(fd)
    log.debug("terminal in cbreak mode")
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)
        log.debug("terminal mode restored")
