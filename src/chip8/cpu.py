"""
CHIP-8 CPU emulation
Register file, call stack, instruction handlers and the per-cycle driver.
"""
import logging
import os
import random

import cython

from .decoder import Op, decode
from .errors import StackOverflowError, StackUnderflowError
from .framebuffer import Framebuffer
from .keypad import Keypad
from .memory import ADDRESS_MASK, PROGRAM_BASE
from .timers import Timers

logger = logging.getLogger(__name__)

STACK_DEPTH = 16
REGISTER_COUNT = 16
VF = 0xF


class CPU:
    def __init__(self, memory, framebuffer=None, keypad=None, timers=None,
                 debug: cython.bint = False, seed=None):
        self.memory = memory
        self.framebuffer = framebuffer if framebuffer is not None else Framebuffer()
        self.keypad = keypad if keypad is not None else Keypad()
        self.timers = timers if timers is not None else Timers()
        self.debug: cython.bint = debug
        self.trace: cython.bint = debug and bool(os.getenv('CHIP8_TRACE'))
        self.rng = random.Random(seed)

        # V0-VF, VF doubles as the flag register
        self.v = bytearray(REGISTER_COUNT)
        self.i: cython.int = 0
        self.pc: cython.int = PROGRAM_BASE

        self.stack: list = [0] * STACK_DEPTH
        self.sp: cython.int = 0

        # Completed cycles
        self.cycles: cython.longlong = 0

        self.instruction_table = self._build_instruction_table()

    def _build_instruction_table(self):
        """Map every Op to its handler"""
        return {
            Op.CLS: self._cls,
            Op.RET: self._ret,
            Op.JP: self._jp,
            Op.CALL: self._call,
            Op.SE_BYTE: self._se_byte,
            Op.SNE_BYTE: self._sne_byte,
            Op.SE_REG: self._se_reg,
            Op.LD_BYTE: self._ld_byte,
            Op.ADD_BYTE: self._add_byte,
            Op.LD_REG: self._ld_reg,
            Op.OR: self._or,
            Op.AND: self._and,
            Op.XOR: self._xor,
            Op.ADD_REG: self._add_reg,
            Op.SUB: self._sub,
            Op.SHR: self._shr,
            Op.SUBN: self._subn,
            Op.SHL: self._shl,
            Op.SNE_REG: self._sne_reg,
            Op.LD_I: self._ld_i,
            Op.JP_V0: self._jp_v0,
            Op.RND: self._rnd,
            Op.DRW: self._drw,
            Op.SKP: self._skp,
            Op.SKNP: self._sknp,
            Op.LD_VX_DT: self._ld_vx_dt,
            Op.LD_VX_K: self._ld_vx_k,
            Op.LD_DT_VX: self._ld_dt_vx,
            Op.LD_ST_VX: self._ld_st_vx,
            Op.ADD_I_VX: self._add_i_vx,
            Op.LD_F_VX: self._ld_f_vx,
            Op.LD_B_VX: self._ld_b_vx,
            Op.LD_I_VX: self._ld_i_vx,
            Op.LD_VX_I: self._ld_vx_i,
            Op.INVALID: self._invalid,
        }

    def reset(self):
        """Return registers, stack, timers, framebuffer and keypad to the power-on state"""
        self.v[:] = bytes(REGISTER_COUNT)
        self.i = 0
        self.pc = PROGRAM_BASE
        self.stack = [0] * STACK_DEPTH
        self.sp = 0
        self.cycles = 0
        self.timers.reset()
        self.keypad.reset()
        self.framebuffer.clear()

    def step(self):
        """Execute one cycle: fetch, advance PC, dispatch, tick timers.

        Returns:
            The executed Instruction
        """
        word = self.memory.read_word(self.pc)
        self.pc = (self.pc + 2) & ADDRESS_MASK

        instruction = decode(word)
        if self.trace:
            logger.debug("PC=0x%03X %04X %s I=0x%03X V=%s", (self.pc - 2) & ADDRESS_MASK,
                         word, instruction.op.name, self.i, self.v.hex())

        self.instruction_table[instruction.op](instruction)

        self.timers.tick()
        self.cycles += 1
        return instruction

    def skip(self):
        """Skip the next instruction word"""
        self.pc = (self.pc + 2) & ADDRESS_MASK

    # === FLOW CONTROL ===

    def _cls(self, ins):
        """00E0 - Clear the display"""
        self.framebuffer.clear()

    def _ret(self, ins):
        """00EE - Return from subroutine"""
        if self.sp == 0:
            raise StackUnderflowError((self.pc - 2) & ADDRESS_MASK)
        self.sp -= 1
        self.pc = self.stack[self.sp]

    def _jp(self, ins):
        """1nnn - Jump to nnn"""
        self.pc = ins.nnn

    def _call(self, ins):
        """2nnn - Call subroutine at nnn"""
        if self.sp >= STACK_DEPTH:
            raise StackOverflowError((self.pc - 2) & ADDRESS_MASK)
        self.stack[self.sp] = self.pc
        self.sp += 1
        self.pc = ins.nnn

    def _jp_v0(self, ins):
        """Bnnn - Jump to V0 + nnn"""
        self.pc = (self.v[0] + ins.nnn) & ADDRESS_MASK

    # === CONDITIONAL SKIPS ===

    def _se_byte(self, ins):
        if self.v[ins.x] == ins.kk:
            self.skip()

    def _sne_byte(self, ins):
        if self.v[ins.x] != ins.kk:
            self.skip()

    def _se_reg(self, ins):
        if self.v[ins.x] == self.v[ins.y]:
            self.skip()

    def _sne_reg(self, ins):
        if self.v[ins.x] != self.v[ins.y]:
            self.skip()

    def _skp(self, ins):
        """Ex9E - Skip if key Vx is held"""
        if self.keypad.is_pressed(self.v[ins.x]):
            self.skip()

    def _sknp(self, ins):
        """ExA1 - Skip if key Vx is not held"""
        if not self.keypad.is_pressed(self.v[ins.x]):
            self.skip()

    # === LOADS AND 8-BIT ARITHMETIC ===

    def _ld_byte(self, ins):
        self.v[ins.x] = ins.kk

    def _add_byte(self, ins):
        """7xkk - Add without touching VF"""
        self.v[ins.x] = (self.v[ins.x] + ins.kk) & 0xFF

    def _ld_reg(self, ins):
        self.v[ins.x] = self.v[ins.y]

    def _or(self, ins):
        self.v[ins.x] |= self.v[ins.y]

    def _and(self, ins):
        self.v[ins.x] &= self.v[ins.y]

    def _xor(self, ins):
        self.v[ins.x] ^= self.v[ins.y]

    # Flag-setting ALU ops write Vx first and VF last, so VF holds the flag
    # when x is F.

    def _add_reg(self, ins):
        """8xy4 - Vx += Vy, VF = carry"""
        total = self.v[ins.x] + self.v[ins.y]
        self.v[ins.x] = total & 0xFF
        self.v[VF] = 1 if total > 0xFF else 0

    def _sub(self, ins):
        """8xy5 - Vx -= Vy, VF = NOT borrow"""
        vx = self.v[ins.x]
        vy = self.v[ins.y]
        self.v[ins.x] = (vx - vy) & 0xFF
        self.v[VF] = 1 if vx > vy else 0

    def _shr(self, ins):
        """8xy6 - Vx >>= 1, VF = bit shifted out"""
        vx = self.v[ins.x]
        self.v[ins.x] = vx >> 1
        self.v[VF] = vx & 0x01

    def _subn(self, ins):
        """8xy7 - Vx = Vy - Vx, VF = NOT borrow"""
        vx = self.v[ins.x]
        vy = self.v[ins.y]
        self.v[ins.x] = (vy - vx) & 0xFF
        self.v[VF] = 1 if vy > vx else 0

    def _shl(self, ins):
        """8xyE - Vx <<= 1, VF = bit shifted out"""
        vx = self.v[ins.x]
        self.v[ins.x] = (vx << 1) & 0xFF
        self.v[VF] = (vx & 0x80) >> 7

    def _rnd(self, ins):
        """Cxkk - Vx = random byte AND kk"""
        self.v[ins.x] = self.rng.randrange(256) & ins.kk

    # === INDEX REGISTER AND MEMORY ===

    def _ld_i(self, ins):
        self.i = ins.nnn

    def _add_i_vx(self, ins):
        """Fx1E - I += Vx, wrapped to 12 bits"""
        self.i = (self.i + self.v[ins.x]) & ADDRESS_MASK

    def _ld_f_vx(self, ins):
        """Fx29 - Point I at the glyph for digit Vx"""
        self.i = self.memory.glyph_address(self.v[ins.x])

    def _ld_b_vx(self, ins):
        """Fx33 - Store BCD of Vx at I, I+1, I+2"""
        value = self.v[ins.x]
        self.memory.write_byte(self.i, value // 100)
        self.memory.write_byte(self.i + 1, (value // 10) % 10)
        self.memory.write_byte(self.i + 2, value % 10)

    def _ld_i_vx(self, ins):
        """Fx55 - Store V0..Vx at I; I is left unchanged"""
        for offset in range(ins.x + 1):
            self.memory.write_byte(self.i + offset, self.v[offset])

    def _ld_vx_i(self, ins):
        """Fx65 - Load V0..Vx from I; I is left unchanged"""
        for offset in range(ins.x + 1):
            self.v[offset] = self.memory.read_byte(self.i + offset)

    # === DISPLAY ===

    def _drw(self, ins):
        """Dxyn - Draw an n-row sprite from I at (Vx, Vy), VF = collision"""
        x = self.v[ins.x]
        y = self.v[ins.y]
        sprite = [self.memory.read_byte(self.i + row) for row in range(ins.n)]
        self.v[VF] = 0
        if self.framebuffer.draw_sprite(x, y, sprite):
            self.v[VF] = 1

    # === TIMERS AND INPUT ===

    def _ld_vx_dt(self, ins):
        self.v[ins.x] = self.timers.delay

    def _ld_dt_vx(self, ins):
        self.timers.set_delay(self.v[ins.x])

    def _ld_st_vx(self, ins):
        self.timers.set_sound(self.v[ins.x])

    def _ld_vx_k(self, ins):
        """Fx0A - Wait for a key by re-executing until one is held"""
        key = self.keypad.first_pressed()
        if key is None:
            self.pc = (self.pc - 2) & ADDRESS_MASK
            return
        self.v[ins.x] = key

    def _invalid(self, ins):
        """Unassigned opcode - no-op"""
        if self.debug:
            logger.debug("Unknown opcode: 0x%04X at PC: 0x%03X", ins.word, (self.pc - 2) & ADDRESS_MASK)
