from array import array

MEM_SIZE = 1 << 16  # Number of 16-bit words in memory

MR_KBSR = 0xFE00  # keyboard status, bit 15 = character ready
MR_KBDR = 0xFE02  # keyboard data


class Memory:
    def __init__(self, io=None):
        self.mem = array("H", bytes(2 * MEM_SIZE))
        self.io = io

    def read(self, addr: int) -> int:
        """Read a 16-bit word. Reading KBSR polls the keyboard first."""
        addr &= 0xFFFF
        if addr == MR_KBSR:
            if self.io is not None and self.io.key_available():
                self.mem[MR_KBSR] = 1 << 15
                self.mem[MR_KBDR] = self.io.read_char() & 0xFF
            else:
                self.mem[MR_KBSR] = 0
        return self.mem[addr]

    def write(self, addr: int, value: int):
        """Write a 16-bit word to memory"""
        self.mem[addr & 0xFFFF] = value & 0xFFFF  # Mask to 16 bits

    def load(self, origin: int, words) -> int:
        """Copy `words` into memory starting at `origin`.

        Words that would land past 0xFFFF are dropped. Returns the number
        of words actually stored.
        """
        origin &= 0xFFFF
        words = list(words)[:MEM_SIZE - origin]
        for i, word in enumerate(words):
            self.mem[origin + i] = word & 0xFFFF
        return len(words)
