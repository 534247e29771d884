from lc3.cpu_core import MachineState
from lc3.registers import Flag
from lc3.traps import TrapVector, IN_PROMPT
from encode import HALT, trap

STR_ADDR = 0x4000


def put_string(cpu, words, addr=STR_ADDR):
    cpu.load_words(addr, list(words) + [0])
    cpu.reg[0] = addr


def test_vectors():
    assert [v.value for v in TrapVector] == [0x20, 0x21, 0x22, 0x23, 0x24, 0x25]


def test_trap_links_r7(io, cpu):
    io.feed("a")
    cpu.load_words(0x3000, [trap(TrapVector.GETC)])
    cpu.step()
    assert cpu.reg[7] == 0x3001


def test_getc_no_echo(io, cpu):
    io.feed("a")
    cpu.load_words(0x3000, [trap(TrapVector.GETC), HALT])
    cpu.run()
    assert cpu.reg[0] == 0x61
    assert cpu.reg.cond == Flag.POS
    assert io.take_output() == "HALT\n"


def test_getc_nul_sets_zero(io, cpu):
    io.feed(b"\x00")
    cpu.reg.cond = Flag.POS
    cpu.load_words(0x3000, [trap(TrapVector.GETC)])
    cpu.step()
    assert cpu.reg[0] == 0
    assert cpu.reg.cond == Flag.ZRO


def test_out_writes_low_byte(io, cpu):
    cpu.reg[0] = 0x0141
    cpu.reg.cond = Flag.NEG
    cpu.load_words(0x3000, [trap(TrapVector.OUT)])
    cpu.step()
    assert io.take_output() == "A"
    assert cpu.reg.cond == Flag.NEG


def test_puts_stops_at_zero(io, cpu):
    put_string(cpu, map(ord, "Hi!"))
    cpu.mem.write(STR_ADDR + 4, ord("X"))   # past the terminator
    cpu.load_words(0x3000, [trap(TrapVector.PUTS)])
    cpu.step()
    assert io.take_output() == "Hi!"


def test_puts_low_byte_only(io, cpu):
    put_string(cpu, [0x4142, 0x0043])
    cpu.load_words(0x3000, [trap(TrapVector.PUTS)])
    cpu.step()
    assert io.take_output() == "BC"


def test_puts_empty(io, cpu):
    put_string(cpu, [])
    cpu.load_words(0x3000, [trap(TrapVector.PUTS)])
    cpu.step()
    assert io.take_output() == ""


def test_in_prompts_and_echoes(io, cpu):
    io.feed("z")
    cpu.load_words(0x3000, [trap(TrapVector.IN)])
    cpu.step()
    assert io.take_output() == IN_PROMPT + "z"
    assert cpu.reg[0] == ord("z")
    assert cpu.reg.cond == Flag.POS


def test_putsp(io, cpu):
    put_string(cpu, [0x6548, 0x6C6C, 0x006F])   # "He" "ll" "o"
    cpu.load_words(0x3000, [trap(TrapVector.PUTSP)])
    cpu.step()
    assert io.take_output() == "Hello"


def test_putsp_odd_length(io, cpu):
    put_string(cpu, [0x0041])
    cpu.load_words(0x3000, [trap(TrapVector.PUTSP)])
    cpu.step()
    assert io.output == b"A"


def test_halt(io, cpu):
    cpu.load_words(0x3000, [HALT])
    assert cpu.step() is MachineState.HALTED
    assert io.take_output() == "HALT\n"
    assert cpu.reg.pc == 0x3001
    assert cpu.reg[7] == 0x3001


def test_hello_world_program(io, cpu):
    cpu.load_words(0x3000, [
        0xE002,                 # LEA R0, x3003
        trap(TrapVector.PUTS),
        HALT,
    ] + [ord(c) for c in "hello\n"] + [0])
    cpu.run()
    assert io.take_output() == "hello\nHALT\n"
