"""
Decoding of raw 16-bit opcodes into an instruction kind and its operand fields.
"""
from enum import Enum
from typing import NamedTuple

UPPER_CHAR_MASK = 0xF000
ADDRESS_MASK = 0x0FFF
BYTE_MASK = 0x00FF


class Instruction(Enum):
    CLEAR_SCREEN = "00E0"
    RETURN_FROM_SUBROUTINE = "00EE"
    GOTO = "1NNN"
    CALL_SUBROUTINE = "2NNN"
    IF_EQUAL = "3XNN"
    IF_NOT_EQUAL = "4XNN"
    IF_REGISTER_EQUAL = "5XY0"
    SET_REGISTER_VALUE = "6XNN"
    ADD_VALUE = "7XNN"
    SET_REGISTER_VALUE_OTHER_REGISTER = "8XY0"
    SET_REGISTER_BITWISE_OR = "8XY1"
    SET_REGISTER_BITWISE_AND = "8XY2"
    SET_REGISTER_BITWISE_XOR = "8XY3"
    ADD_OTHER_REGISTER = "8XY4"
    SUBTRACT_FROM_FIRST_REGISTER = "8XY5"
    BIT_SHIFT_RIGHT = "8XY6"
    SUBTRACT_FROM_SECOND_REGISTER = "8XY7"
    BIT_SHIFT_LEFT = "8XYE"
    IF_REGISTER_NOT_EQUAL = "9XY0"
    SET_REGISTER_I = "ANNN"
    GOTO_ADDITION = "BNNN"
    RANDOM_BITWISE_AND = "CXNN"
    DRAW_SPRITE = "DXYN"
    IF_KEY_PRESSED = "EX9E"
    IF_KEY_NOT_PRESSED = "EXA1"
    GET_DELAY_TIMER = "FX07"
    WAIT_FOR_KEY_PRESS = "FX0A"
    SET_DELAY_TIMER = "FX15"
    SET_SOUND_TIMER = "FX18"
    REGISTER_I_ADDITION = "FX1E"
    SET_REGISTER_I_TO_HEX_SPRITE_ADDRESS = "FX29"
    BINARY_CODED_DECIMAL = "FX33"
    REGISTER_DUMP = "FX55"
    REGISTER_LOAD = "FX65"
    UNRECOGNIZED = "????"


class DecodedOpcode(NamedTuple):
    """
    An opcode split into its fields.
    """
    raw: int
    instruction: Instruction
    x: int
    y: int
    n: int
    nn: int
    nnn: int

    def hex(self) -> str:
        return f"{self.raw:04x}"


# Lookup tables keyed by the first nibble, then the distinguishing low bits.
_SYSTEM_INSTRUCTIONS = {
    0x00E0: Instruction.CLEAR_SCREEN,
    0x00EE: Instruction.RETURN_FROM_SUBROUTINE,
}

_SIMPLE_INSTRUCTIONS = {
    0x1: Instruction.GOTO,
    0x2: Instruction.CALL_SUBROUTINE,
    0x3: Instruction.IF_EQUAL,
    0x4: Instruction.IF_NOT_EQUAL,
    0x6: Instruction.SET_REGISTER_VALUE,
    0x7: Instruction.ADD_VALUE,
    0xA: Instruction.SET_REGISTER_I,
    0xB: Instruction.GOTO_ADDITION,
    0xC: Instruction.RANDOM_BITWISE_AND,
    0xD: Instruction.DRAW_SPRITE,
}

_ARITHMETIC_INSTRUCTIONS = {
    0x0: Instruction.SET_REGISTER_VALUE_OTHER_REGISTER,
    0x1: Instruction.SET_REGISTER_BITWISE_OR,
    0x2: Instruction.SET_REGISTER_BITWISE_AND,
    0x3: Instruction.SET_REGISTER_BITWISE_XOR,
    0x4: Instruction.ADD_OTHER_REGISTER,
    0x5: Instruction.SUBTRACT_FROM_FIRST_REGISTER,
    0x6: Instruction.BIT_SHIFT_RIGHT,
    0x7: Instruction.SUBTRACT_FROM_SECOND_REGISTER,
    0xE: Instruction.BIT_SHIFT_LEFT,
}

_KEY_INSTRUCTIONS = {
    0x9E: Instruction.IF_KEY_PRESSED,
    0xA1: Instruction.IF_KEY_NOT_PRESSED,
}

_MISC_INSTRUCTIONS = {
    0x07: Instruction.GET_DELAY_TIMER,
    0x0A: Instruction.WAIT_FOR_KEY_PRESS,
    0x15: Instruction.SET_DELAY_TIMER,
    0x18: Instruction.SET_SOUND_TIMER,
    0x1E: Instruction.REGISTER_I_ADDITION,
    0x29: Instruction.SET_REGISTER_I_TO_HEX_SPRITE_ADDRESS,
    0x33: Instruction.BINARY_CODED_DECIMAL,
    0x55: Instruction.REGISTER_DUMP,
    0x65: Instruction.REGISTER_LOAD,
}


def get_upper_char(byte: int) -> int:
    """
    Get the upper character (first 4 bits) of the given byte.
    """
    return (byte & 0xF0) >> 4


def get_lower_char(byte: int) -> int:
    """
    Get the lower character (last 4 bits) of the given byte.
    """
    return byte & 0x0F


def classify(opcode: int) -> Instruction:
    """
    Work out which instruction a raw opcode encodes.
    :param opcode: The 16-bit opcode.
    :return: The instruction, Instruction.UNRECOGNIZED if none matches.
    """
    first_char = (opcode & UPPER_CHAR_MASK) >> 12
    last_byte = opcode & BYTE_MASK
    last_char = get_lower_char(last_byte)

    if first_char == 0x0:
        return _SYSTEM_INSTRUCTIONS.get(opcode, Instruction.UNRECOGNIZED)
    if first_char in _SIMPLE_INSTRUCTIONS:
        return _SIMPLE_INSTRUCTIONS[first_char]
    if first_char == 0x5 and last_char == 0:
        return Instruction.IF_REGISTER_EQUAL
    if first_char == 0x9 and last_char == 0:
        return Instruction.IF_REGISTER_NOT_EQUAL
    if first_char == 0x8:
        return _ARITHMETIC_INSTRUCTIONS.get(last_char, Instruction.UNRECOGNIZED)
    if first_char == 0xE:
        return _KEY_INSTRUCTIONS.get(last_byte, Instruction.UNRECOGNIZED)
    if first_char == 0xF:
        return _MISC_INSTRUCTIONS.get(last_byte, Instruction.UNRECOGNIZED)
    return Instruction.UNRECOGNIZED


def decode(opcode: int) -> DecodedOpcode:
    """
    Split a 16-bit opcode into its instruction and operand fields.
    :param opcode: The 16-bit opcode.
    :return: The decoded opcode.
    """
    return DecodedOpcode(
        raw=opcode,
        instruction=classify(opcode),
        x=get_lower_char(opcode >> 8),
        y=get_upper_char(opcode & BYTE_MASK),
        n=get_lower_char(opcode),
        nn=opcode & BYTE_MASK,
        nnn=opcode & ADDRESS_MASK,
    )
