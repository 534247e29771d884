"""Console device seen by the machine: keyboard poll/read and display write.

The CPU and memory only ever talk to a `ConsoleIO`; how characters reach
a real terminal (or a Qt widget) is up to the implementation.
"""
from abc import ABC, abstractmethod
from collections import deque


class ConsoleIO(ABC):
    @abstractmethod
    def key_available(self) -> bool:
        """Non-blocking: is a character waiting?"""

    @abstractmethod
    def read_char(self) -> int:
        """Block until a character arrives and return its byte value."""

    @abstractmethod
    def write_byte(self, b: int) -> None:
        ...

    def flush(self) -> None:
        pass

    def would_block(self) -> bool:
        """True if read_char() cannot be serviced right now.

        Blocking devices simply wait, so the default is False.
        """
        return False

    def write_text(self, text: str) -> None:
        for ch in text.encode("latin-1", errors="replace"):
            self.write_byte(ch)


class BufferedIO(ConsoleIO):
    """In-memory console: keys are queued with feed(), output collects in `output`."""

    def __init__(self, keys=b""):
        self._keys = deque()
        self.output = bytearray()
        self.feed(keys)

    def feed(self, keys) -> None:
        if isinstance(keys, str):
            keys = keys.encode("latin-1")
        self._keys.extend(keys)

    def key_available(self) -> bool:
        return bool(self._keys)

    def read_char(self) -> int:
        if not self._keys:
            raise EOFError("no input queued")
        return self._keys.popleft()

    def write_byte(self, b: int) -> None:
        self.output.append(b & 0xFF)

    def would_block(self) -> bool:
        return not self._keys

    def take_output(self) -> str:
        """Return and clear everything written so far."""
        text = self.output.decode("latin-1")
        self.output.clear()
        return text
