import logging
from enum import Enum, IntEnum

from .registers import Registers, R7
from .memory import Memory
from .alu import ALU, sext, field
from .console_io import BufferedIO
from .errors import Cancelled, IllegalOpcode, UnknownTrapVector
from .traps import TRAP_ROUTINES, INPUT_TRAPS
from . import loader

log = logging.getLogger(__name__)


class Opcode(IntEnum):
    BR   = 0b0000
    ADD  = 0b0001
    LD   = 0b0010
    ST   = 0b0011
    JSR  = 0b0100
    AND  = 0b0101
    LDR  = 0b0110
    STR  = 0b0111
    RTI  = 0b1000   # unused
    NOT  = 0b1001
    LDI  = 0b1010
    STI  = 0b1011
    JMP  = 0b1100
    RES  = 0b1101   # reserved
    LEA  = 0b1110
    TRAP = 0b1111


class MachineState(Enum):
    RUNNING = "RUNNING"
    HALTED = "HALTED"
    FAULTED = "FAULTED"   # illegal opcode / unknown trap


class CPU:
    """
    LC-3 하드웨어 동작을 최소-단위로 모사한 소프트-CPU.
    ─────────────────────────────────────────────────────
    • fetch()  : 메모리에서 16-bit 명령어 읽고 PC++
    • decode_execute(): opcode 해석 → 핸들러 테이블로 디스패치
    • step()   : 한 사이클 실행 (fetch → decode/exec)
    • run()    : HALT 또는 취소 요청까지 반복
    • reset()  : 레지스터/메모리 초기화
    """

    def __init__(self, io=None):
        self.io = io if io is not None else BufferedIO()
        self.reg = Registers()   # R0..R7, PC, IR, COND
        self.mem = Memory(self.io)   # 64K words + KBSR/KBDR hook
        self.state = MachineState.RUNNING
        self.cycles = 0
        self._dispatch = self._build_dispatch()

    def _build_dispatch(self):
        table = {
            Opcode.BR:   self.op_br,
            Opcode.ADD:  self.op_add,
            Opcode.LD:   self.op_ld,
            Opcode.ST:   self.op_st,
            Opcode.JSR:  self.op_jsr,
            Opcode.AND:  self.op_and,
            Opcode.LDR:  self.op_ldr,
            Opcode.STR:  self.op_str,
            Opcode.RTI:  self.op_illegal,
            Opcode.NOT:  self.op_not,
            Opcode.LDI:  self.op_ldi,
            Opcode.STI:  self.op_sti,
            Opcode.JMP:  self.op_jmp,
            Opcode.RES:  self.op_illegal,
            Opcode.LEA:  self.op_lea,
            Opcode.TRAP: self.op_trap,
        }
        missing = set(Opcode) - set(table)
        if missing:
            raise RuntimeError(f"no handler for {sorted(missing)}")
        return [table[op] for op in sorted(table)]

    @property
    def running(self) -> bool:
        return self.state is MachineState.RUNNING

    def halt(self):
        self.state = MachineState.HALTED

    # ───────────────────────────── loading ─────────────────────────────
    def load_image(self, path) -> int:
        """Load an object file into memory. Returns its origin."""
        return loader.load_image(self.mem, path)

    def load_words(self, origin: int, words) -> int:
        return self.mem.load(origin, words)

    # ───────────────────────────── fetch ─────────────────────────────
    def fetch(self):
        """현재 PC 위치에서 16-bit 명령어를 읽어 IR에 저장, PC += 1"""
        self.reg.ir = self.mem.read(self.reg.pc)
        self.reg.pc = (self.reg.pc + 1) & 0xFFFF  # 16-bit wrap-around
        self.cycles += 1

    # ───────────────────────── decode / execute ──────────────────────
    def decode_execute(self):
        instr = self.reg.ir
        self._dispatch[instr >> 12](instr)      # bits[15:12]

    # ───────────── ALU: ADD / AND / NOT ─────────────
    def _alu(self, op: str, instr: int):
        dr  = field(instr, 9, 3)
        sr1 = field(instr, 6, 3)
        if (instr >> 5) & 1:                    # imm5
            operand = sext(instr, 5)
        else:                                   # SR2
            operand = self.reg[instr & 0x7]
        self.reg[dr] = ALU.execute(op, self.reg[sr1], operand)
        self.reg.update_flags(dr)

    def op_add(self, instr: int):
        self._alu("ADD", instr)

    def op_and(self, instr: int):
        self._alu("AND", instr)

    def op_not(self, instr: int):
        dr = field(instr, 9, 3)
        sr = field(instr, 6, 3)
        self.reg[dr] = ALU.execute("NOT", self.reg[sr])
        self.reg.update_flags(dr)

    # ───────────── control flow: BR / JMP / JSR ─────────────
    def op_br(self, instr: int):
        nzp = field(instr, 9, 3)                # n=bit11, z=bit10, p=bit9
        if nzp & self.reg.cond:
            # incremented PC + SEXT(offset9)
            self.reg.pc = (self.reg.pc + sext(instr, 9)) & 0xFFFF

    def op_jmp(self, instr: int):
        self.reg.pc = self.reg[field(instr, 6, 3)]   # BaseR, R7 = RET

    def op_jsr(self, instr: int):
        self.reg[R7] = self.reg.pc              # 링크(증가된 PC)
        if (instr >> 11) & 1:                   # JSR (PC + off11)
            self.reg.pc = (self.reg.pc + sext(instr, 11)) & 0xFFFF
        else:                                   # JSRR (BaseR), read after linking
            self.reg.pc = self.reg[field(instr, 6, 3)]

    # ───────────── memory access ─────────────
    def _pc_offset9(self, instr: int) -> int:
        return (self.reg.pc + sext(instr, 9)) & 0xFFFF

    def _base_offset6(self, instr: int) -> int:
        return (self.reg[field(instr, 6, 3)] + sext(instr, 6)) & 0xFFFF

    def _load(self, instr: int, value: int):
        dr = field(instr, 9, 3)
        self.reg[dr] = value
        self.reg.update_flags(dr)

    def op_ld(self, instr: int):
        self._load(instr, self.mem.read(self._pc_offset9(instr)))

    def op_ldi(self, instr: int):
        ptr = self.mem.read(self._pc_offset9(instr))
        self._load(instr, self.mem.read(ptr))

    def op_ldr(self, instr: int):
        self._load(instr, self.mem.read(self._base_offset6(instr)))

    def op_lea(self, instr: int):
        self._load(instr, self._pc_offset9(instr))

    def op_st(self, instr: int):
        self.mem.write(self._pc_offset9(instr), self.reg[field(instr, 9, 3)])

    def op_sti(self, instr: int):
        ptr = self.mem.read(self._pc_offset9(instr))
        self.mem.write(ptr, self.reg[field(instr, 9, 3)])

    def op_str(self, instr: int):
        self.mem.write(self._base_offset6(instr), self.reg[field(instr, 9, 3)])

    # ───────────── TRAP / illegal ─────────────
    def op_trap(self, instr: int):
        self.reg[R7] = self.reg.pc
        vector = instr & 0xFF                   # trapvect8
        routine = TRAP_ROUTINES.get(vector)
        if routine is None:
            raise UnknownTrapVector(vector, (self.reg.pc - 1) & 0xFFFF)
        routine(self)

    def op_illegal(self, instr: int):
        raise IllegalOpcode(instr >> 12, instr, (self.reg.pc - 1) & 0xFFFF)

    # ───────────────────────────── runner ─────────────────────────────
    def step(self) -> MachineState:
        """한 명령어 사이클(fetch-decode-exec) 실행"""
        if not self.running:
            return self.state
        pc, ir, link = self.reg.pc, self.reg.ir, self.reg[R7]
        self.fetch()
        try:
            self.decode_execute()
        except (IllegalOpcode, UnknownTrapVector) as e:
            self.state = MachineState.FAULTED
            log.debug("machine fault: %s", e)
            raise
        except Cancelled:
            # GETC/IN abandoned before R0 was written: back to the TRAP
            self.reg.pc, self.reg.ir, self.reg[R7] = pc, ir, link
            self.cycles -= 1
            log.debug("input cancelled, PC rolled back to 0x%04X", pc)
            raise
        if not self.running:
            log.debug("%s after %d instructions", self.state.value, self.cycles)
        return self.state

    def run(self, cancel=None) -> MachineState:
        """Run until HALT. `cancel` (e.g. threading.Event) is checked between instructions."""
        log.debug("run from PC=0x%04X", self.reg.pc)
        while self.running:
            if cancel is not None and cancel.is_set():
                log.info("run cancelled at PC=0x%04X", self.reg.pc)
                break
            self.step()
        return self.state

    def waiting_for_input(self) -> bool:
        """Next instruction is GETC/IN and the console has nothing to give."""
        instr = self.mem.mem[self.reg.pc]        # peek, no KBSR side effect
        return (instr >> 12 == Opcode.TRAP
                and (instr & 0xFF) in INPUT_TRAPS
                and self.io.would_block())

    def run_for(self, limit: int) -> int:
        """Execute at most `limit` instructions; stop early on HALT or empty input."""
        done = 0
        while done < limit and self.running and not self.waiting_for_input():
            self.step()
            done += 1
        return done

    def reset(self):
        """CPU/레지스터/메모리를 초기 상태로 되돌림"""
        self.__init__(self.io)
