"""
CHIP-8 instruction decoder
Maps a 16-bit instruction word to an Instruction value.

Dispatch is two-level: the top nibble selects a primary entry, and the four
family nibbles (0x0, 0x8, 0xE, 0xF) select again on a secondary key (the low
nibble, or the low byte for 0xF). Anything unassigned decodes to Op.INVALID.
"""
from collections import namedtuple
from enum import Enum
from functools import lru_cache


class Op(Enum):
    CLS = '00E0'
    RET = '00EE'
    JP = '1nnn'
    CALL = '2nnn'
    SE_BYTE = '3xkk'
    SNE_BYTE = '4xkk'
    SE_REG = '5xy0'
    LD_BYTE = '6xkk'
    ADD_BYTE = '7xkk'
    LD_REG = '8xy0'
    OR = '8xy1'
    AND = '8xy2'
    XOR = '8xy3'
    ADD_REG = '8xy4'
    SUB = '8xy5'
    SHR = '8xy6'
    SUBN = '8xy7'
    SHL = '8xyE'
    SNE_REG = '9xy0'
    LD_I = 'Annn'
    JP_V0 = 'Bnnn'
    RND = 'Cxkk'
    DRW = 'Dxyn'
    SKP = 'Ex9E'
    SKNP = 'ExA1'
    LD_VX_DT = 'Fx07'
    LD_VX_K = 'Fx0A'
    LD_DT_VX = 'Fx15'
    LD_ST_VX = 'Fx18'
    ADD_I_VX = 'Fx1E'
    LD_F_VX = 'Fx29'
    LD_B_VX = 'Fx33'
    LD_I_VX = 'Fx55'
    LD_VX_I = 'Fx65'
    INVALID = '????'


# Primary table: high nibble -> Op, or a (secondary key, family table) pair
FAMILY_0 = {
    0x0: Op.CLS,
    0xE: Op.RET,
}

FAMILY_8 = {
    0x0: Op.LD_REG,
    0x1: Op.OR,
    0x2: Op.AND,
    0x3: Op.XOR,
    0x4: Op.ADD_REG,
    0x5: Op.SUB,
    0x6: Op.SHR,
    0x7: Op.SUBN,
    0xE: Op.SHL,
}

FAMILY_E = {
    0xE: Op.SKP,
    0x1: Op.SKNP,
}

FAMILY_F = {
    0x07: Op.LD_VX_DT,
    0x0A: Op.LD_VX_K,
    0x15: Op.LD_DT_VX,
    0x18: Op.LD_ST_VX,
    0x1E: Op.ADD_I_VX,
    0x29: Op.LD_F_VX,
    0x33: Op.LD_B_VX,
    0x55: Op.LD_I_VX,
    0x65: Op.LD_VX_I,
}

LOW_NIBBLE = 0x000F
LOW_BYTE = 0x00FF

PRIMARY_TABLE = (
    (LOW_NIBBLE, FAMILY_0),  # 0x0
    Op.JP,                   # 0x1
    Op.CALL,                 # 0x2
    Op.SE_BYTE,              # 0x3
    Op.SNE_BYTE,             # 0x4
    Op.SE_REG,               # 0x5
    Op.LD_BYTE,              # 0x6
    Op.ADD_BYTE,             # 0x7
    (LOW_NIBBLE, FAMILY_8),  # 0x8
    Op.SNE_REG,              # 0x9
    Op.LD_I,                 # 0xA
    Op.JP_V0,                # 0xB
    Op.RND,                  # 0xC
    Op.DRW,                  # 0xD
    (LOW_NIBBLE, FAMILY_E),  # 0xE
    (LOW_BYTE, FAMILY_F),    # 0xF
)


class Instruction(namedtuple('Instruction', ['op', 'word', 'x', 'y', 'n', 'kk', 'nnn'])):
    """A decoded instruction word and its operand fields"""
    __slots__ = ()

    def __repr__(self):
        return f"Instruction({self.op.name}, 0x{self.word:04X})"


def lookup(word):
    """Resolve the Op for an instruction word with at most two table lookups"""
    entry = PRIMARY_TABLE[(word >> 12) & 0xF]
    if isinstance(entry, Op):
        return entry
    mask, family = entry
    return family.get(word & mask, Op.INVALID)


@lru_cache(maxsize=4096)
def decode(word):
    """Decode a 16-bit word into an Instruction"""
    word &= 0xFFFF
    return Instruction(
        op=lookup(word),
        word=word,
        x=(word >> 8) & 0xF,
        y=(word >> 4) & 0xF,
        n=word & 0xF,
        kk=word & 0xFF,
        nnn=word & 0xFFF,
    )
