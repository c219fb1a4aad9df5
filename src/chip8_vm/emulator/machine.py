"""
CHIP-8 Machine
==============

The decode/execute engine. A Machine owns every piece of VM state:

- 4KB memory with the font at $000 and the program at $200
- 8-bit registers V0-VF (VF is the carry/borrow/collision flag)
- 12-bit index register I
- 16-bit program counter, starting at $200
- a 16-entry call stack with an explicit stack pointer
- the 64x32 frame buffer
- delay and sound timers (60Hz of wall time)
- the 16-key keyboard
- a read-only Quirks selection
- a `halted` flag drivers may read and write

One `step()` call:
    1. ticks the timers
    2. fetches the big-endian word at PC
    3. decodes it (a DecodeError leaves PC on the failing word)
    4. advances PC by 2
    5. executes the instruction

and returns the executed Instruction for tracing. Fatal conditions are
raised as `DecodeError` or `MachineError` subclasses; the machine never
recovers on its own.

LD Vx, K (Fx0A) does not block. If no press event is passed to `step`,
the machine rewinds PC so the same instruction runs again on the next
step. Timers keep ticking while it waits.

Example:
    >>> m = Machine(bytes([0x6A, 0x02, 0x12, 0x02]))
    >>> m.step()
    Ldl(vx=<Register.VA: 10>, byte=2)
    >>> m.registers[Register.VA]
    2
    >>> _ = m.step()
    >>> m.halted
    True
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, Tuple

from ..errors import (
    DecodeError,
    InvalidKeyError,
    StackOverflowError,
    StackUnderflowError,
)
from ..isa import (
    U12,
    Register,
    Instruction,
    decode,
    Cls, Ret, Jp, Call, Seq, SneLit, Se, Ldl, Addl,
    Ld, Or, And, Xor, AddC, SubC, ShrC, SubN, ShlC,
    Sne, Ldi, Jpl, Rnd, Drw, Skp, Sknp,
    MovDt, LdKb, LdDt, LdSt, AddI, LdSpr, LdBcd, PushReg, PopReg,
)
from .display import FrameBuffer
from .keyboard import Key, KeyLike, Keyboard, resolve_key
from .memory import FONT_GLYPH_SIZE, Memory, PROGRAM_START
from .quirks import QUIRKS_DEFAULT, Quirks
from .timers import Timers

logger = logging.getLogger(__name__)

STACK_LIMIT = 16

VF = Register.VF


class RandomSource(Protocol):
    """Uniform random bit source (random.Random satisfies this)."""

    def getrandbits(self, k: int) -> int:
        ...


@dataclass
class MachineState:
    """
    Program counter, call stack and run flag.

    Registers, memory and peripherals live in their own objects; this holds
    the control-flow state.
    """
    pc: int = PROGRAM_START
    sp: int = 0
    stack: List[int] = field(default_factory=lambda: [0] * STACK_LIMIT)
    halted: bool = False


class Machine:
    """
    CHIP-8 virtual machine.

    Attributes:
        memory: 4KB Memory
        registers: bytearray of 16 general purpose registers
        index_register: 12-bit I register (U12)
        frame_buffer: 64x32 FrameBuffer
        timers: delay and sound Timers
        keyboard: 16-key Keyboard
        quirks: Quirks selection (read-only)
        on_instruction: Optional trace hook called after each executed
            instruction with (address, instruction)
    """

    def __init__(
        self,
        program: bytes = b"",
        quirks: Quirks = QUIRKS_DEFAULT,
        rng: Optional[RandomSource] = None,
        timers: Optional[Timers] = None,
    ):
        """
        Build a machine with the program loaded at $200.

        Args:
            program: Program image
            quirks: Opcode semantics selection
            rng: Random source for RND (defaults to a fresh random.Random)
            timers: Timers instance (tests inject one with a fake clock)

        Raises:
            ProgramTooLargeError: If the program is longer than $E00 bytes
        """
        self.memory = Memory(program)
        self.registers = bytearray(len(Register))
        self.index_register = U12(0)
        self.frame_buffer = FrameBuffer()
        self.timers = timers if timers is not None else Timers()
        self.keyboard = Keyboard()
        self._quirks = quirks
        self._rng: RandomSource = rng if rng is not None else random.Random()
        self._state = MachineState()

        self.on_instruction: Optional[Callable[[int, Instruction], None]] = None

        logger.debug(
            f"Machine created: {len(program)} byte program, quirks: {quirks.describe()}"
        )

    # ========================================
    # Register and State Properties
    # ========================================

    @property
    def quirks(self) -> Quirks:
        """Quirks selection (fixed at construction)."""
        return self._quirks

    @property
    def pc(self) -> int:
        """Program counter (16-bit)."""
        return self._state.pc

    @pc.setter
    def pc(self, value: int) -> None:
        self._state.pc = value & 0xFFFF

    @property
    def i(self) -> int:
        """Index register I as a plain int."""
        return int(self.index_register)

    @property
    def sp(self) -> int:
        """Stack pointer, the number of live return addresses (0-16)."""
        return self._state.sp

    @property
    def stack(self) -> Tuple[int, ...]:
        """Live return addresses, oldest first."""
        return tuple(self._state.stack[:self._state.sp])

    @property
    def halted(self) -> bool:
        """
        Run flag for drivers.

        Set by the machine when it executes a jump to its own address (the
        usual CHIP-8 "end of program" idiom). Drivers may set or clear it to
        pause, resume or single-step; the machine itself does not consult it
        in `step()`.
        """
        return self._state.halted

    @halted.setter
    def halted(self, value: bool) -> None:
        self._state.halted = bool(value)

    def _set_reg(self, reg: Register, value: int) -> None:
        self.registers[reg] = value & 0xFF

    def _set_flag(self, value: bool) -> None:
        self.registers[VF] = 1 if value else 0

    # ========================================
    # Stack Operations
    # ========================================

    def _push(self, value: int, address: int) -> None:
        if self._state.sp == STACK_LIMIT:
            raise StackOverflowError(address)
        self._state.stack[self._state.sp] = value
        self._state.sp += 1

    def _pop(self, address: int) -> int:
        if self._state.sp == 0:
            raise StackUnderflowError(address)
        self._state.sp -= 1
        return self._state.stack[self._state.sp]

    # ========================================
    # Main Execution Loop
    # ========================================

    def fetch(self) -> int:
        """Read the instruction word at PC without side effects."""
        return self.memory.read_word(self.pc)

    def step(self, next_key: Optional[KeyLike] = None) -> Instruction:
        """
        Execute exactly one instruction.

        Args:
            next_key: A key press event observed since the last step, used
                only by LD Vx, K. Pass None when no key was pressed.

        Returns:
            The instruction that was executed (or re-armed, for LD Vx, K)

        Raises:
            DecodeError: The word at PC is not an instruction; PC is left
                pointing at it
            MachineError: Stack overflow/underflow or invalid key
            ValueError: next_key does not name one of the 16 keys; the
                machine is left untouched
        """
        # A bad key reference must fail before any state changes
        key = resolve_key(next_key) if next_key is not None else None

        self.timers.tick()

        address = self.pc
        word = self.fetch()
        try:
            instr = decode(word)
        except DecodeError as e:
            e.address = address
            logger.debug(f"Decode failure at ${address:04X}: word ${word:04X}")
            raise

        self.pc = address + 2
        self._execute(instr, address, key)

        if self.on_instruction:
            self.on_instruction(address, instr)

        return instr

    def run(self, max_steps: int, next_key: Optional[KeyLike] = None) -> int:
        """
        Step until the machine halts or max_steps instructions have run.

        Args:
            max_steps: Upper bound on steps
            next_key: Press event passed to every step

        Returns:
            Number of steps executed
        """
        steps = 0
        while steps < max_steps and not self.halted:
            self.step(next_key)
            steps += 1
        return steps

    # ========================================
    # Instruction Dispatch
    # ========================================

    def _execute(self, instr: Instruction, address: int, key: Optional[Key]) -> None:
        """
        Apply one decoded instruction. PC already points past it.

        Args:
            instr: Decoded instruction
            address: Address the instruction was fetched from
            key: Press event for LD Vx, K
        """
        v = self.registers

        match instr:
            # ============================================
            # Flow Control
            # ============================================
            case Cls():
                self.frame_buffer.clear()
            case Ret():
                self.pc = self._pop(address)
            case Jp(addr=addr):
                if int(addr) == address:
                    if not self.halted:
                        logger.debug(f"Self-jump at ${address:04X}, halting")
                    self.halted = True
                self.pc = int(addr)
            case Call(addr=addr):
                self._push(self.pc, address)
                self.pc = int(addr)
            case Jpl(addr=addr):
                self.pc = v[Register.V0] + int(addr)

            # ============================================
            # Conditional Skips
            # ============================================
            case Seq(vx=vx, byte=byte):
                if v[vx] == byte:
                    self.pc += 2
            case SneLit(vx=vx, byte=byte):
                if v[vx] != byte:
                    self.pc += 2
            case Se(vx=vx, vy=vy):
                if v[vx] == v[vy]:
                    self.pc += 2
            case Sne(vx=vx, vy=vy):
                if v[vx] != v[vy]:
                    self.pc += 2
            case Skp(vx=vx):
                if self.keyboard.is_pressed(self._key_for(v[vx], address)):
                    self.pc += 2
            case Sknp(vx=vx):
                if not self.keyboard.is_pressed(self._key_for(v[vx], address)):
                    self.pc += 2

            # ============================================
            # Literals
            # ============================================
            case Ldl(vx=vx, byte=byte):
                self._set_reg(vx, byte)
            case Addl(vx=vx, byte=byte):
                self._set_reg(vx, v[vx] + byte)
            case Rnd(vx=vx, byte=byte):
                self._set_reg(vx, self._rng.getrandbits(8) & byte)

            # ============================================
            # Register-Register ALU
            # ============================================
            case Ld(vx=vx, vy=vy):
                self._set_reg(vx, v[vy])
            case Or(vx=vx, vy=vy):
                self._set_reg(vx, v[vx] | v[vy])
                self._logic_flag()
            case And(vx=vx, vy=vy):
                self._set_reg(vx, v[vx] & v[vy])
                self._logic_flag()
            case Xor(vx=vx, vy=vy):
                self._set_reg(vx, v[vx] ^ v[vy])
                self._logic_flag()
            case AddC(vx=vx, vy=vy):
                total = v[vx] + v[vy]
                self._set_reg(vx, total)
                self._set_flag(total > 0xFF)
            case SubC(vx=vx, vy=vy):
                # VF = NOT borrow
                a, b = v[vx], v[vy]
                self._set_reg(vx, a - b)
                self._set_flag(a >= b)
            case SubN(vx=vx, vy=vy):
                a, b = v[vx], v[vy]
                self._set_reg(vx, b - a)
                self._set_flag(b >= a)
            case ShrC(vx=vx, vy=vy):
                source = v[vx] if self._quirks.shifting else v[vy]
                self._set_reg(vx, source >> 1)
                self._set_flag(source & 0x01)
            case ShlC(vx=vx, vy=vy):
                source = v[vx] if self._quirks.shifting else v[vy]
                self._set_reg(vx, source << 1)
                self._set_flag(source & 0x80)

            # ============================================
            # Index Register and Display
            # ============================================
            case Ldi(addr=addr):
                self.index_register = U12(int(addr))
            case AddI(vx=vx):
                self.index_register.modify(lambda i: i + v[vx])
            case LdSpr(vx=vx):
                self.index_register.modify(lambda _: v[vx] * FONT_GLYPH_SIZE)
            case Drw(vx=vx, vy=vy, nibble=nibble):
                rows = self.memory.read_bytes(self.i, int(nibble))
                collision = self.frame_buffer.draw_sprite(v[vx], v[vy], rows)
                self._set_flag(collision)

            # ============================================
            # Timers and Keyboard Wait
            # ============================================
            case MovDt(vx=vx):
                self._set_reg(vx, self.timers.delay)
            case LdDt(vx=vx):
                self.timers.delay = v[vx]
            case LdSt(vx=vx):
                self.timers.sound = v[vx]
            case LdKb(vx=vx):
                if key is None:
                    # Re-run this instruction next step
                    self.pc = address
                    return
                self._set_reg(vx, int(key))

            # ============================================
            # Memory
            # ============================================
            case LdBcd(vx=vx):
                value = v[vx]
                self.memory[self.i] = value // 100
                self.memory[self.i + 1] = (value // 10) % 10
                self.memory[self.i + 2] = value % 10
            case PushReg(vx=vx):
                count = vx.index + 1
                for offset in range(count):
                    self.memory[self.i + offset] = v[offset]
                self._advance_index(count)
            case PopReg(vx=vx):
                count = vx.index + 1
                for offset in range(count):
                    v[offset] = self.memory[self.i + offset]
                self._advance_index(count)

            case _:
                raise TypeError(f"Unhandled instruction {instr!r}")

    def _logic_flag(self) -> None:
        if self._quirks.vf_reset:
            self.registers[VF] = 0

    def _advance_index(self, count: int) -> None:
        if self._quirks.memory:
            self.index_register.modify(lambda i: i + count)

    def _key_for(self, value: int, address: int) -> Key:
        key = Key.from_value(value)
        if key is None:
            raise InvalidKeyError(value, address)
        return key

    # ========================================
    # Diagnostics
    # ========================================

    def state_dump(self, instr: Optional[Instruction] = None) -> str:
        """
        Text dump of registers, keypad, timers, PC and stack.

        Args:
            instr: Last executed instruction, shown next to PC
        """
        lines = ["REGS:"]
        for row in range(0, len(Register), 4):
            lines.append("  ".join(
                f"V{r:X} = 0x{self.registers[r]:02X}" for r in range(row, row + 4)
            ))
        lines.append(f" I = 0x{self.i:04X}")
        lines.append("")
        lines.append("KEYPAD:")
        lines.append(self.keyboard.render())
        lines.append("")
        lines.append("TIMERS:")
        lines.append(f"DT = 0x{self.timers.delay:02X}")
        lines.append(f"ST = 0x{self.timers.sound:02X}")
        lines.append("")
        lines.append("PC:")
        if instr is not None:
            lines.append(f"0x{self.pc:04X} -> {instr}")
        else:
            lines.append(f"0x{self.pc:04X}")
        lines.append("")
        lines.append(f"STACK (SP = {self.sp}):")
        for slot in range(STACK_LIMIT - 1, -1, -1):
            value = self._state.stack[slot] if slot < self.sp else 0
            marker = " <- SP" if slot == self.sp else ""
            lines.append(f"{slot:2}: 0x{value:04X}{marker}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"Machine(pc=${self.pc:04X}, i=${self.i:03X}, sp={self.sp}, "
            f"halted={self.halted})"
        )
