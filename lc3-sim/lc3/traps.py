"""TRAP service routines (console I/O and HALT).

Each routine receives the CPU; R7 already holds the return address.
"""
import logging
from enum import IntEnum

log = logging.getLogger(__name__)

IN_PROMPT = "Enter a character: "
HALT_NOTICE = "HALT\n"


class TrapVector(IntEnum):
    GETC  = 0x20   # read char, no echo
    OUT   = 0x21   # write char in R0
    PUTS  = 0x22   # one char per word string at R0
    IN    = 0x23   # prompt, read char with echo
    PUTSP = 0x24   # two chars per word string at R0
    HALT  = 0x25


def trap_getc(cpu):
    cpu.reg[0] = cpu.io.read_char() & 0xFF
    cpu.reg.update_flags(0)


def trap_out(cpu):
    cpu.io.write_byte(cpu.reg[0] & 0xFF)
    cpu.io.flush()


def trap_puts(cpu):
    addr = cpu.reg[0]
    word = cpu.mem.read(addr)
    while word != 0:
        cpu.io.write_byte(word & 0xFF)
        addr = (addr + 1) & 0xFFFF
        word = cpu.mem.read(addr)
    cpu.io.flush()


def trap_in(cpu):
    cpu.io.write_text(IN_PROMPT)
    cpu.io.flush()
    ch = cpu.io.read_char() & 0xFF
    cpu.io.write_byte(ch)
    cpu.io.flush()
    cpu.reg[0] = ch
    cpu.reg.update_flags(0)


def trap_putsp(cpu):
    addr = cpu.reg[0]
    word = cpu.mem.read(addr)
    while word != 0:
        cpu.io.write_byte(word & 0xFF)
        hi = word >> 8
        if hi:
            cpu.io.write_byte(hi)
        addr = (addr + 1) & 0xFFFF
        word = cpu.mem.read(addr)
    cpu.io.flush()


def trap_halt(cpu):
    log.debug("HALT trap at PC=0x%04X", cpu.reg.pc)
    cpu.io.write_text(HALT_NOTICE)
    cpu.io.flush()
    cpu.halt()


TRAP_ROUTINES = {
    TrapVector.GETC:  trap_getc,
    TrapVector.OUT:   trap_out,
    TrapVector.PUTS:  trap_puts,
    TrapVector.IN:    trap_in,
    TrapVector.PUTSP: trap_putsp,
    TrapVector.HALT:  trap_halt,
}

# traps that block on the keyboard
INPUT_TRAPS = frozenset({TrapVector.GETC, TrapVector.IN})
