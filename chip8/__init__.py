from chip8.decode import DecodedOpcode, Instruction, decode
from chip8.errors import Chip8Error, ProgramTooLargeError, RomLoadError
from chip8.framebuffer import Framebuffer, SCREEN_HEIGHT, SCREEN_WIDTH
from chip8.interpreter import Interpreter, GAME_START_ADDRESS, MAX_PROGRAM_SIZE

__all__ = [
    "Chip8Error",
    "DecodedOpcode",
    "Framebuffer",
    "GAME_START_ADDRESS",
    "Instruction",
    "Interpreter",
    "MAX_PROGRAM_SIZE",
    "ProgramTooLargeError",
    "RomLoadError",
    "SCREEN_HEIGHT",
    "SCREEN_WIDTH",
    "decode",
]
