import operator


def sext(val: int, bits: int) -> int:
    """
    Sign-extend the low `bits` bits of val to a 16-bit unsigned word.
    e.g. sext(0b11111, 5) == 0xFFFF, sext(0b01111, 5) == 0x000F
    """
    val &= (1 << bits) - 1
    if val >> (bits - 1):
        val |= 0xFFFF << bits
    return val & 0xFFFF


def field(instr: int, lo: int, width: int) -> int:
    """Unsigned bit-field instr[lo+width-1:lo]."""
    return (instr >> lo) & ((1 << width) - 1)


class ALU:
    OPS = {
        "ADD": operator.add,
        "AND": operator.and_,
        "NOT": lambda a, _b: ~a,
    }

    @classmethod
    def execute(cls, op: str, a: int, b: int = 0) -> int:
        try:
            return cls.OPS[op](a, b) & 0xFFFF
        except KeyError as e:
            raise ValueError(f"Unsupported ALU op {op}") from e
