"""
Pytest configuration and shared fixtures for CHIP-8 emulator tests
"""
import pytest
import sys
import os

# Add src to Python path so we can import chip8 modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from chip8.memory import Memory
from chip8.cpu import CPU


@pytest.fixture
def memory():
    """Create a fresh Memory instance for testing."""
    return Memory()


@pytest.fixture
def cpu(memory):
    """Create a CPU instance with memory for testing."""
    return CPU(memory, debug=False, seed=1234)


@pytest.fixture
def cpu_with_debug(memory):
    """Create a CPU instance with debug enabled for testing."""
    return CPU(memory, debug=True, seed=1234)


def load_words(cpu, *words):
    """Load big-endian instruction words at 0x200"""
    program = bytearray()
    for word in words:
        program += bytes([(word >> 8) & 0xFF, word & 0xFF])
    cpu.memory.load_program(program)


def execute(cpu, word):
    """Load a single instruction at the current PC and run one cycle"""
    cpu.memory.write_byte(cpu.pc, word >> 8)
    cpu.memory.write_byte(cpu.pc + 1, word & 0xFF)
    return cpu.step()
