"""
CHIP-8 framebuffer
64x32 monochrome cells stored flat and row-major in a numpy array.

A lit cell holds PIXEL_ON (all bits set) so a renderer can use the value
directly as a color sample.
"""
import cython
import numpy

WIDTH = 64
HEIGHT = 32
PIXEL_ON = 0xFFFFFFFF
PIXEL_OFF = 0


class Framebuffer:
    def __init__(self):
        self.pixels = numpy.zeros(WIDTH * HEIGHT, dtype=numpy.uint32)
        # Set by clear/draw, reset by the host once it has rendered
        self.dirty: cython.bint = False

    def clear(self):
        self.pixels.fill(PIXEL_OFF)
        self.dirty = True

    def rows(self):
        """(HEIGHT, WIDTH) view of the cells"""
        return self.pixels.reshape(HEIGHT, WIDTH)

    def draw_sprite(self, x: cython.int, y: cython.int, sprite) -> bool:
        """XOR sprite rows into the framebuffer with the origin at (x, y).

        The origin wraps to the screen; pixels that fall past the right or
        bottom edge are clipped.

        Args:
            x: origin column (wrapped modulo WIDTH)
            y: origin row (wrapped modulo HEIGHT)
            sprite: sequence of row bytes, MSB is the leftmost pixel

        Returns:
            True if any lit cell was turned off
        """
        x %= WIDTH
        y %= HEIGHT
        collision = False

        for row, bits in enumerate(sprite):
            py = y + row
            if py >= HEIGHT:
                break
            for col in range(8):
                px = x + col
                if px >= WIDTH:
                    break
                if not (bits & (0x80 >> col)):
                    continue
                index = py * WIDTH + px
                if self.pixels[index] != PIXEL_OFF:
                    self.pixels[index] = PIXEL_OFF
                    collision = True
                else:
                    self.pixels[index] = PIXEL_ON

        self.dirty = True
        return collision
