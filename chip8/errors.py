class Chip8Error(Exception):
    """
    Base class for all errors raised by the interpreter.
    """


class ProgramTooLargeError(Chip8Error):
    """
    Raised when a program does not fit in the memory available from the program start address onwards.
    """
    def __init__(self, size: int, limit: int):
        super().__init__(f"Program is {size} bytes but at most {limit} bytes fit in memory.")
        self.size = size
        self.limit = limit


class RomLoadError(Chip8Error):
    """
    Raised when a ROM file could not be read.
    """
