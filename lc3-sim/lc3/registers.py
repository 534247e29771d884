from dataclasses import dataclass, field
from enum import IntFlag
from typing import List

GENERAL_REGS = 8          # R0–R7
SPECIAL_REGS = ["PC", "IR", "COND"]
R7 = 7                    # link register for JSR/JSRR/TRAP
PC_START = 0x3000


class Flag(IntFlag):
    POS = 1 << 0
    ZRO = 1 << 1
    NEG = 1 << 2


@dataclass
class Registers:
    gpr: List[int] = field(default_factory=lambda: [0]*GENERAL_REGS)
    pc: int = PC_START
    ir: int = 0
    cond: Flag = Flag.ZRO

    def __getitem__(self, idx: int) -> int:
        if 0 <= idx < GENERAL_REGS:
            return self.gpr[idx]
        raise IndexError("Invalid register index")

    def __setitem__(self, idx: int, value: int) -> None:
        if 0 <= idx < GENERAL_REGS:
            self.gpr[idx] = value & 0xFFFF
        else:
            raise IndexError("Invalid register index")

    def update_flags(self, idx: int) -> Flag:
        """Set exactly one of N/Z/P from the value now held in R[idx]."""
        value = self[idx]
        if value == 0:
            self.cond = Flag.ZRO
        elif value & 0x8000:
            self.cond = Flag.NEG
        else:
            self.cond = Flag.POS
        return self.cond
