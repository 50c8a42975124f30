import logging

import numpy as np

logger = logging.getLogger(__name__)

# Constants
SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32


class Framebuffer:
    """
    The monochrome screen of the machine.  Pixels are indexed as (row, column), so (x, y) lives at pixels[y, x].
    Coordinates outside of the screen wrap around, each axis on its own.
    """
    def __init__(self):
        """
        Constructor.
        """
        self.pixels = np.zeros((SCREEN_HEIGHT, SCREEN_WIDTH), np.bool_)

    @staticmethod
    def wrap(x: int, y: int):
        """
        Wrap the provided coordinates onto the screen.
        :param x: The x-coordinate (column).
        :param y: The y-coordinate (row).
        :return: The wrapped row and column.
        """
        return y % SCREEN_HEIGHT, x % SCREEN_WIDTH

    def get_pixel(self, x: int, y: int) -> bool:
        """
        Get the state of a pixel.
        :param x: The x-coordinate (column).
        :param y: The y-coordinate (row).
        :return: True if the pixel is set, False otherwise.
        """
        return bool(self.pixels[self.wrap(x, y)])

    def set_pixel(self, x: int, y: int, value: bool) -> None:
        """
        Set the state of a pixel.
        :param x: The x-coordinate (column).
        :param y: The y-coordinate (row).
        :param value: The new state of the pixel.
        """
        self.pixels[self.wrap(x, y)] = value

    def toggle_pixel(self, x: int, y: int) -> bool:
        """
        Flip the state of a pixel.
        :param x: The x-coordinate (column).
        :param y: The y-coordinate (row).
        :return: True if the pixel was set before the toggle (and is therefore now unset), False otherwise.
        """
        was_set = self.get_pixel(x, y)
        self.set_pixel(x, y, not was_set)
        return was_set

    def clear(self) -> None:
        """
        Unset every pixel.
        """
        self.pixels.fill(False)

    def to_text(self, on: str = "#", off: str = ".") -> str:
        """
        Render the screen as text, one line per row.
        :param on: The character used for set pixels.
        :param off: The character used for unset pixels.
        :return: The rendered screen.
        """
        return "\n".join("".join(on if pixel else off for pixel in row) for row in self.pixels)

    def __str__(self) -> str:
        return self.to_text()
