"""
CHIP-8 interpreter exceptions.
"""


class Chip8Error(Exception):
    """Base class for every error raised by the interpreter."""


class LoadError(Chip8Error):
    """Program does not fit in the memory above the program base."""

    def __init__(self, size, capacity):
        super().__init__(f"Program is {size} bytes, only {capacity} bytes fit above 0x200")
        self.size = size
        self.capacity = capacity


class StackOverflowError(Chip8Error):
    """CALL with all 16 stack slots in use."""

    def __init__(self, address):
        super().__init__(f"Stack overflow at 0x{address:03X}")
        self.address = address


class StackUnderflowError(Chip8Error):
    """RET with an empty stack."""

    def __init__(self, address):
        super().__init__(f"Stack underflow at 0x{address:03X}")
        self.address = address
