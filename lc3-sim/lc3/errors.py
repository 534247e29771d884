"""Exceptions raised by the LC-3 machine and its loaders."""


class VMError(RuntimeError):
    """Base class for every error raised by the simulator."""


class IllegalOpcode(VMError):
    """RTI or the reserved opcode was fetched. Execution cannot continue."""

    def __init__(self, opcode: int, instr: int, addr: int):
        self.opcode = opcode
        self.instr = instr
        self.addr = addr
        super().__init__(
            f"illegal opcode {opcode:04b} (instr 0x{instr:04X} at 0x{addr:04X})")


class UnknownTrapVector(VMError):
    """TRAP was executed with a vector that has no service routine."""

    def __init__(self, vector: int, addr: int):
        self.vector = vector
        self.addr = addr
        super().__init__(f"unknown trap vector x{vector:02X} at 0x{addr:04X}")


class ImageLoadError(VMError):
    """A program image could not be read. Memory is left untouched."""


class Cancelled(VMError):
    """A blocking read was abandoned because shutdown was requested."""
