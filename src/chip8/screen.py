"""
pygame display sink and key source for the CHIP-8 emulator.
"""
import logging

import numpy
import pygame

from .framebuffer import HEIGHT, WIDTH

logger = logging.getLogger(__name__)

# Host keyboard -> hex keypad
#   1 2 3 4      1 2 3 C
#   Q W E R  ->  4 5 6 D
#   A S D F      7 8 9 E
#   Z X C V      A 0 B F
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}

COLOR_OFF = (0, 0, 0)
COLOR_ON = (255, 255, 255)
PALETTE = numpy.array([COLOR_OFF, COLOR_ON], dtype=numpy.uint8)


class Screen:
    def __init__(self, scale=10, title="CHIP-8"):
        self.scale = scale

        pygame.init()
        pygame.display.init()
        self.surface = pygame.display.set_mode((WIDTH * scale, HEIGHT * scale))
        pygame.display.set_caption(title)
        self.surface.fill(COLOR_OFF)
        pygame.display.flip()

    def render(self, framebuffer):
        """Scale the framebuffer cells onto the window"""
        lit = (framebuffer.rows() != 0).astype(numpy.uint8)
        rgb_buffer = PALETTE[lit]

        # pygame surfaces are indexed (x, y)
        frame_surface = pygame.surfarray.make_surface(rgb_buffer.swapaxes(0, 1))
        scaled_surface = pygame.transform.scale(frame_surface, (WIDTH * self.scale, HEIGHT * self.scale))
        self.surface.blit(scaled_surface, (0, 0))
        pygame.display.flip()

    def poll_input(self, keypad):
        """Apply pending keyboard events to the keypad.

        Returns:
            False once the window is closed or ESC is pressed
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return False
                if event.key in KEY_MAP:
                    keypad.press(KEY_MAP[event.key])
            elif event.type == pygame.KEYUP:
                if event.key in KEY_MAP:
                    keypad.release(KEY_MAP[event.key])
        return True

    def close(self):
        pygame.quit()
