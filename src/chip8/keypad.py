"""
CHIP-8 hex keypad state.
The host presses and releases keys between cycles; the CPU only reads.
"""
import cython

KEY_COUNT = 16


class Keypad:
    def __init__(self):
        self.keys: list = [False] * KEY_COUNT

    def reset(self):
        self.keys = [False] * KEY_COUNT

    def press(self, key: cython.int) -> None:
        self.keys[key & 0x0F] = True

    def release(self, key: cython.int) -> None:
        self.keys[key & 0x0F] = False

    def is_pressed(self, key: cython.int) -> bool:
        return self.keys[key & 0x0F]

    def first_pressed(self):
        """Lowest-numbered held key, or None"""
        for key, held in enumerate(self.keys):
            if held:
                return key
        return None
