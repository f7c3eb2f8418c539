"""
CHIP-8 Memory
4096 bytes of flat RAM with the built-in hex font and the program area.

Every access is masked to 12 bits, so addresses past 0xFFF wrap to 0x000.
"""
import logging

import cython

from .errors import LoadError

logger = logging.getLogger(__name__)

MEMORY_SIZE = 4096
ADDRESS_MASK = 0xFFF
FONT_BASE = 0x050
PROGRAM_BASE = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_BASE  # 3584 bytes

GLYPH_SIZE = 5

# Glyphs 0-F, 5 rows each, MSB is the leftmost pixel
FONT = (
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
)


class Memory:
    def __init__(self, debug: cython.bint = False):
        self.debug: cython.bint = debug
        self.ram = bytearray(MEMORY_SIZE)
        self.load_font()

    def load_font(self):
        """Seed the font region with the 16 hex glyphs"""
        self.ram[FONT_BASE:FONT_BASE + len(FONT)] = bytes(FONT)

    def reset(self):
        """Clear all memory and re-seed the font"""
        self.ram[:] = bytes(MEMORY_SIZE)
        self.load_font()

    def load_program(self, data):
        """Copy program bytes verbatim to PROGRAM_BASE.

        Args:
            data: any bytes-like sequence (bytes, bytearray, list of ints)

        Raises:
            LoadError: program is larger than MAX_PROGRAM_SIZE. Memory is left untouched.
        """
        program = bytes(data)
        if len(program) > MAX_PROGRAM_SIZE:
            raise LoadError(len(program), MAX_PROGRAM_SIZE)

        self.ram[PROGRAM_BASE:PROGRAM_BASE + len(program)] = program

        if self.debug:
            logger.debug("Loaded %d bytes at 0x%03X", len(program), PROGRAM_BASE)

    def read_byte(self, address: cython.int) -> cython.int:
        """Read a byte, wrapping the address to 12 bits"""
        return self.ram[address & ADDRESS_MASK]

    def write_byte(self, address: cython.int, value: cython.int) -> None:
        """Write a byte, wrapping the address to 12 bits"""
        self.ram[address & ADDRESS_MASK] = value & 0xFF

    def read_word(self, address: cython.int) -> cython.int:
        """Read a big-endian instruction word"""
        high = self.read_byte(address)
        low = self.read_byte(address + 1)
        return (high << 8) | low

    def glyph_address(self, digit: cython.int) -> cython.int:
        """Address of the font glyph for the low nibble of digit"""
        return FONT_BASE + (digit & 0x0F) * GLYPH_SIZE
