"""
Main CHIP-8 emulator class
Coordinates CPU, memory, framebuffer, keypad and timers, and drives the host loop.
"""
import logging

from .cpu import CPU
from .framebuffer import Framebuffer
from .keypad import Keypad
from .memory import Memory
from .timers import Timers

logger = logging.getLogger(__name__)

# Host timing
FRAME_RATE = 60
DEFAULT_CYCLES_PER_FRAME = 10  # ~600 instructions per second


class Chip8:
    def __init__(self, debug=False, seed=None, cycles_per_frame=DEFAULT_CYCLES_PER_FRAME):
        self.debug = debug
        self.cycles_per_frame = cycles_per_frame

        self.memory = Memory(debug)
        self.framebuffer = Framebuffer()
        self.keypad = Keypad()
        self.timers = Timers()
        self.cpu = CPU(self.memory, self.framebuffer, self.keypad, self.timers,
                       debug=debug, seed=seed)

        self.running = False

    def load_program(self, data):
        """Load raw program bytes at 0x200"""
        self.memory.load_program(data)

    def load_rom(self, rom_path):
        """Load a ROM file into memory"""
        try:
            with open(rom_path, 'rb') as f:
                rom_data = f.read()
        except FileNotFoundError:
            raise FileNotFoundError(f"ROM file not found: {rom_path}")

        self.load_program(rom_data)
        if self.debug:
            logger.debug("Loaded ROM: %s (%d bytes)", rom_path, len(rom_data))

    def reset(self):
        """Return the whole machine to its power-on state"""
        self.memory.reset()
        self.cpu.reset()

    def step(self):
        """Execute one cycle"""
        return self.cpu.step()

    def run_cycles(self, count):
        """Headless run: execute count cycles, stopping early if stop() is called"""
        self.running = True
        try:
            return self._execute(count)
        finally:
            self.running = False

    def _execute(self, count):
        """Execute up to count cycles while running is set"""
        executed = 0
        while executed < count and self.running:
            self.cpu.step()
            executed += 1
        return executed

    def run(self, scale=10, max_cycles=None):
        """Run the windowed main loop until the window closes"""
        import pygame

        from .screen import Screen

        screen = Screen(scale=scale)
        clock = pygame.time.Clock()
        self.running = True
        total = 0

        try:
            while self.running:
                if not screen.poll_input(self.keypad):
                    break

                budget = self.cycles_per_frame
                if max_cycles is not None:
                    budget = min(budget, max_cycles - total)
                total += self._execute(budget)
                if self.framebuffer.dirty:
                    screen.render(self.framebuffer)
                    self.framebuffer.dirty = False

                if max_cycles is not None and total >= max_cycles:
                    break
                clock.tick(FRAME_RATE)
        except KeyboardInterrupt:
            if self.debug:
                logger.debug("Emulation stopped. Total cycles: %d", self.cpu.cycles)
        finally:
            self.running = False
            screen.close()

        return total

    def stop(self):
        """Stop the emulator"""
        self.running = False
