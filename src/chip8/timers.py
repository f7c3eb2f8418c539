"""
CHIP-8 delay and sound timers.
Both count down by one per cycle while nonzero and stop at zero.
"""
import cython


class Timers:
    def __init__(self):
        self.delay: cython.int = 0
        self.sound: cython.int = 0

    def reset(self):
        self.delay = 0
        self.sound = 0

    def set_delay(self, value: cython.int) -> None:
        self.delay = value & 0xFF

    def set_sound(self, value: cython.int) -> None:
        self.sound = value & 0xFF

    def tick(self) -> None:
        """Decrement each nonzero timer by one"""
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1

    @property
    def sound_active(self) -> bool:
        """True while the host should be emitting a tone"""
        return self.sound > 0
