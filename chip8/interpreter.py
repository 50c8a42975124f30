import logging
import random

from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from chip8.decode import DecodedOpcode, Instruction, decode
from chip8.errors import ProgramTooLargeError, RomLoadError
from chip8.framebuffer import Framebuffer

logger = logging.getLogger(__name__)

# Constants
MEMORY_SIZE = 4096
REGISTER_COUNT = 16
STACK_SIZE = 16
KEY_COUNT = 16
BYTE_MASK = 255
FLAG_REGISTER = 15
GAME_START_ADDRESS = 512
INTERPRETER_END_ADDRESS = 80
MAX_PROGRAM_SIZE = MEMORY_SIZE - GAME_START_ADDRESS
DIGIT_SPRITE_SIZE = 5
SPRITE_WIDTH = 8
SOUND_TIMER_THRESHOLD = 1

DIGIT_SPRITES = bytes.fromhex(
    "f0909090f0"  # 0
    "2060202070"  # 1
    "f010f080f0"  # 2
    "f010f010f0"  # 3
    "9090f01010"  # 4
    "f080f010f0"  # 5
    "f080f090f0"  # 6
    "f010204040"  # 7
    "f090f090f0"  # 8
    "f090f010f0"  # 9
    "f090f09090"  # A
    "e090e090e0"  # B
    "f0808080f0"  # C
    "e0909090e0"  # D
    "f080f080f0"  # E
    "f080f08080"  # F
)

# Initialize the random number generator
random.seed()


class WaitForKey:
    """
    A class which handles the blocking-for-key-press state.
    """
    def __init__(self):
        self.is_waiting = False
        self.storing_register = 0


class Interpreter:
    """
    The CHIP-8 virtual machine: memory, registers, stack, timers, keypad and screen, advanced one instruction per step.
    """
    def __init__(self):
        """
        Constructor.
        """
        self.ram = bytearray(MEMORY_SIZE)
        self.registers = bytearray(REGISTER_COUNT)
        self.register_i = 0
        self.program_counter = GAME_START_ADDRESS
        self.stack: List[int] = [0] * STACK_SIZE
        self.stack_pointer = 0
        self.delay = 0
        self.sound = 0
        self.keys: List[bool] = [False] * KEY_COUNT
        self.framebuffer = Framebuffer()
        self.waiting_for_key = WaitForKey()
        self.draw_flag = False
        self.old_instructions = False

        self.opcode_handlers: Dict[Instruction, Callable[[DecodedOpcode], None]] = {
            Instruction.CLEAR_SCREEN: self.opcode_clear_screen,
            Instruction.RETURN_FROM_SUBROUTINE: self.opcode_return_from_subroutine,
            Instruction.GOTO: self.opcode_goto,
            Instruction.CALL_SUBROUTINE: self.opcode_call_subroutine,
            Instruction.IF_EQUAL: self.opcode_if_equal,
            Instruction.IF_NOT_EQUAL: self.opcode_if_not_equal,
            Instruction.IF_REGISTER_EQUAL: self.opcode_if_register_equal,
            Instruction.SET_REGISTER_VALUE: self.opcode_set_register_value,
            Instruction.ADD_VALUE: self.opcode_add_value,
            Instruction.SET_REGISTER_VALUE_OTHER_REGISTER: self.opcode_set_register_value_other_register,
            Instruction.SET_REGISTER_BITWISE_OR: self.opcode_set_register_bitwise_or,
            Instruction.SET_REGISTER_BITWISE_AND: self.opcode_set_register_bitwise_and,
            Instruction.SET_REGISTER_BITWISE_XOR: self.opcode_set_register_bitwise_xor,
            Instruction.ADD_OTHER_REGISTER: self.opcode_add_other_register,
            Instruction.SUBTRACT_FROM_FIRST_REGISTER: self.opcode_subtract_from_first_register,
            Instruction.BIT_SHIFT_RIGHT: self.opcode_bit_shift_right,
            Instruction.SUBTRACT_FROM_SECOND_REGISTER: self.opcode_subtract_from_second_register,
            Instruction.BIT_SHIFT_LEFT: self.opcode_bit_shift_left,
            Instruction.IF_REGISTER_NOT_EQUAL: self.opcode_if_register_not_equal,
            Instruction.SET_REGISTER_I: self.opcode_set_register_i,
            Instruction.GOTO_ADDITION: self.opcode_goto_addition,
            Instruction.RANDOM_BITWISE_AND: self.opcode_random_bitwise_and,
            Instruction.DRAW_SPRITE: self.opcode_draw_sprite,
            Instruction.IF_KEY_PRESSED: self.opcode_if_key_pressed,
            Instruction.IF_KEY_NOT_PRESSED: self.opcode_if_key_not_pressed,
            Instruction.GET_DELAY_TIMER: self.opcode_get_delay_timer,
            Instruction.WAIT_FOR_KEY_PRESS: self.opcode_wait_for_key_press,
            Instruction.SET_DELAY_TIMER: self.opcode_set_delay_timer,
            Instruction.SET_SOUND_TIMER: self.opcode_set_sound_timer,
            Instruction.REGISTER_I_ADDITION: self.opcode_register_i_addition,
            Instruction.SET_REGISTER_I_TO_HEX_SPRITE_ADDRESS: self.opcode_set_register_i_to_hex_sprite_address,
            Instruction.BINARY_CODED_DECIMAL: self.opcode_binary_coded_decimal,
            Instruction.REGISTER_DUMP: self.opcode_register_dump,
            Instruction.REGISTER_LOAD: self.opcode_register_load,
            Instruction.UNRECOGNIZED: self.opcode_unrecognized,
        }

        self.load_digit_sprites()

    def reset(self) -> None:
        """
        Reset the state of the interpreter, discarding any loaded program.
        """
        self.ram = bytearray(MEMORY_SIZE)
        self.registers = bytearray(REGISTER_COUNT)
        self.register_i = 0
        self.program_counter = GAME_START_ADDRESS
        self.stack = [0] * STACK_SIZE
        self.stack_pointer = 0
        self.delay = 0
        self.sound = 0
        self.keys = [False] * KEY_COUNT
        self.framebuffer.clear()
        self.waiting_for_key.is_waiting = False
        self.draw_flag = False

        self.load_digit_sprites()
        logger.debug("Interpreter reset.")

    def load_digit_sprites(self) -> None:
        """
        Load the sprites for the hexadecimal digits 0-f into memory.
        """
        self.ram[0:INTERPRETER_END_ADDRESS] = DIGIT_SPRITES

    # region Host Interface
    def load(self, program: bytes) -> None:
        """
        Copy a program into memory, starting at the game start address.  Memory outside of the program's range is left alone.
        :param program: The raw program bytes.
        :raises ProgramTooLargeError: If the program does not fit in memory.
        """
        if len(program) > MAX_PROGRAM_SIZE:
            raise ProgramTooLargeError(len(program), MAX_PROGRAM_SIZE)

        self.ram[GAME_START_ADDRESS:GAME_START_ADDRESS + len(program)] = program
        logger.debug(f"Loaded a program of {len(program)} bytes at address {hex(GAME_START_ADDRESS)}.")

    def load_file(self, path: Union[str, Path]) -> None:
        """
        Read a ROM file and load it into memory.
        :param path: The path of the ROM file.
        :raises RomLoadError: If the file does not exist or cannot be read.
        :raises ProgramTooLargeError: If the program does not fit in memory.
        """
        path = Path(path)

        if not path.is_file():
            raise RomLoadError(f"Game could not be loaded as the path does not exist!  Path: {path}.")

        logger.debug(f"Loading game at path {path}.")
        try:
            with path.open("rb") as file:
                game = file.read()
        except OSError as error:
            raise RomLoadError(f"Game could not be read!  Path: {path}.") from error

        self.load(game)

    def step(self) -> None:
        """
        Execute one instruction (or keep waiting for a key press), then tick both timers.
        """
        if self.waiting_for_key.is_waiting:
            self.poll_waiting_key()
        else:
            self.fetch_and_run_opcode()

        self.decrement_timers()

    def get_pixel(self, x: int, y: int) -> bool:
        return self.framebuffer.get_pixel(x, y)

    def is_sound_pending(self) -> bool:
        """
        Whether the host should be playing the tone.
        :return: True if the sound timer is above the threshold, False otherwise.
        """
        return self.sound > SOUND_TIMER_THRESHOLD

    def set_key(self, key: int, pressed: bool) -> None:
        """
        Set the state of a key on the hexadecimal keypad.
        :param key: The key, from 0 to 15.
        :param pressed: True if the key is held down, False otherwise.
        """
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"Key {key} is not on the keypad.")

        self.keys[key] = pressed
        logger.debug(f"Key State Changed.  Key: {key}, Pressed: {pressed}.")

    def set_compatibility_mode(self, old_instructions: bool) -> None:
        """
        Select the legacy interpretation of ambiguous instructions.  The flag is recorded but no instruction consults it.
        :param old_instructions: True to use the old instructions, False for the contemporary ones.
        """
        self.old_instructions = old_instructions
        logger.debug(f"Old instructions set to {old_instructions}.")

    def clear_draw_flag(self) -> None:
        self.draw_flag = False

    def dump_memory(self) -> str:
        """
        Dump the full memory of the interpreter as hex, 16 bytes per line.
        """
        lines = []
        for address in range(0, MEMORY_SIZE, 16):
            lines.append(f"{address:03x}: {self.ram[address:address + 16].hex(' ')}")
        return "\n".join(lines)
    # endregion

    # region Timers
    def decrement_timers(self) -> None:
        """
        Decrement the delay and sound timers, neither going below 0.
        """
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1
    # endregion

    # region Helpers
    def read_byte(self, address: int) -> int:
        return self.ram[address % MEMORY_SIZE]

    def write_byte(self, address: int, value: int) -> None:
        self.ram[address % MEMORY_SIZE] = value

    def next_instruction(self) -> None:
        self.program_counter += 2

    def skip_next_instruction_if(self, condition: bool) -> None:
        """
        Move to the instruction after next if the condition holds, to the next one otherwise.
        :param condition: Whether to skip.
        """
        if condition:
            self.program_counter += 4
            logger.debug("Instruction skipped.")
        else:
            self.program_counter += 2
            logger.debug("Instruction not skipped.")

    def get_pressed_key(self) -> Optional[int]:
        """
        Find a pressed key, the highest one if several are held.
        :return: The key, or None if no key is pressed.
        """
        for key in reversed(range(KEY_COUNT)):
            if self.keys[key]:
                return key
        return None

    def poll_waiting_key(self) -> None:
        """
        Check the keypad while blocked on a key press.
        """
        key = self.get_pressed_key()
        if key is not None:
            self.store_key_press_in_waiting_register(key)

    def store_key_press_in_waiting_register(self, key: int) -> None:
        """
        Stores the provided key in the waiting register and resumes execution.
        """
        if not self.waiting_for_key.is_waiting:
            return

        self.waiting_for_key.is_waiting = False
        self.registers[self.waiting_for_key.storing_register] = key
        self.next_instruction()
        logger.debug(f"Storing the key {key} in the register {self.waiting_for_key.storing_register}, completing the blocking opcode.")

    @staticmethod
    def bounded_subtract(minuend: int, subtrahend: int):
        """
        Subtract the subtrahend from the minuend, bounded by the confines of a byte.
        :param minuend: The integer from which to subtract.
        :param subtrahend: The integer to subtract.
        :return: The result of the subtraction and the not borrow (1 if there was no borrow, 0 otherwise).
        """
        difference_of_registers = minuend - subtrahend
        result = difference_of_registers % 256
        not_borrow = 1 if difference_of_registers >= 0 else 0
        return result, not_borrow
    # endregion

    # region Opcodes
    def fetch_and_run_opcode(self) -> None:
        """
        Fetches the current instruction and executes it.
        """
        opcode = (self.read_byte(self.program_counter) << 8) | self.read_byte(self.program_counter + 1)
        self.run_opcode(decode(opcode))

    def run_opcode(self, opcode: DecodedOpcode) -> None:
        """
        Route the decoded opcode to the method which executes it.
        :param opcode: The opcode to execute.
        """
        self.opcode_handlers[opcode.instruction](opcode)

    def opcode_unrecognized(self, opcode: DecodedOpcode) -> None:
        """
        Report an opcode which is not part of the instruction set.  Nothing else happens, the program counter included.
        :param opcode: The opcode to execute.
        """
        logger.error(f"Unimplemented / Invalid Opcode: {opcode.hex()}.")

    def opcode_clear_screen(self, opcode: DecodedOpcode) -> None:
        """
        Clear the screen.
        :param opcode: The opcode to execute.
        """
        self.framebuffer.clear()
        self.draw_flag = True
        self.next_instruction()
        logger.debug(f"Execute Opcode {opcode.hex()}: Clearing the screen.")

    def opcode_return_from_subroutine(self, opcode: DecodedOpcode) -> None:
        """
        Return from the current subroutine, continuing after the instruction which called it.
        :param opcode: The opcode to execute.
        """
        if self.stack_pointer == 0:
            logger.error("Tried to return from a subroutine when the stack is empty.  Ignoring.")
            self.next_instruction()
            return

        self.stack_pointer -= 1
        self.program_counter = self.stack[self.stack_pointer]
        self.next_instruction()
        logger.debug(f"Execute Opcode {opcode.hex()}: Return from subroutine, continue at {hex(self.program_counter)}.")

    def opcode_goto(self, opcode: DecodedOpcode) -> None:
        """
        Jump to the provided address.
        :param opcode: The opcode to execute.
        """
        self.program_counter = opcode.nnn
        logger.debug(f"Execute Opcode {opcode.hex()}: Jump to address {hex(opcode.nnn)}.")

    def opcode_call_subroutine(self, opcode: DecodedOpcode) -> None:
        """
        Call the subroutine at the given address.
        :param opcode: The opcode to execute.
        """
        if self.stack_pointer == STACK_SIZE:
            logger.error("Tried to call a subroutine when the stack is full.  Ignoring.")
            self.next_instruction()
            return

        self.stack[self.stack_pointer] = self.program_counter
        self.stack_pointer += 1
        self.program_counter = opcode.nnn
        logger.debug(f"Execute Opcode {opcode.hex()}: Call subroutine at address {hex(opcode.nnn)}.")

    def opcode_if_equal(self, opcode: DecodedOpcode) -> None:
        """
        Skip the next instruction if the value of the provided register is equal to the provided value.
        :param opcode: The opcode to execute.
        """
        register_value = self.registers[opcode.x]
        logger.debug(f"Execute Opcode {opcode.hex()}: Skip next instruction if register {opcode.x}'s value ({register_value}) is {opcode.nn}.")
        self.skip_next_instruction_if(register_value == opcode.nn)

    def opcode_if_not_equal(self, opcode: DecodedOpcode) -> None:
        """
        Skip the next instruction if the value of the provided register is not equal to the provided value.
        :param opcode: The opcode to execute.
        """
        register_value = self.registers[opcode.x]
        logger.debug(f"Execute Opcode {opcode.hex()}: Skip next instruction if register {opcode.x}'s value ({register_value}) is not {opcode.nn}.")
        self.skip_next_instruction_if(register_value != opcode.nn)

    def opcode_if_register_equal(self, opcode: DecodedOpcode) -> None:
        """
        Skip the next instruction if the values of the two provided registers are equal.
        :param opcode: The opcode to execute.
        """
        first_register_value = self.registers[opcode.x]
        second_register_value = self.registers[opcode.y]
        logger.debug(f"Execute Opcode {opcode.hex()}: Skip next instruction if register {opcode.x}'s value ({first_register_value}) is equal to register {opcode.y}'s value ({second_register_value}).")
        self.skip_next_instruction_if(first_register_value == second_register_value)

    def opcode_set_register_value(self, opcode: DecodedOpcode) -> None:
        """
        Set the value of the provided register to the provided value.
        :param opcode: The opcode to execute.
        """
        self.registers[opcode.x] = opcode.nn
        self.next_instruction()
        logger.debug(f"Execute Opcode {opcode.hex()}: Set the value of register {opcode.x} to {opcode.nn}.")

    def opcode_add_value(self, opcode: DecodedOpcode) -> None:
        """
        Adds the provided value to the value of the provided register.  The carry flag (register 15) is not set.
        :param opcode: The opcode to execute.
        """
        self.registers[opcode.x] = (self.registers[opcode.x] + opcode.nn) % 256
        self.next_instruction()
        logger.debug(f"Execute Opcode {opcode.hex()}: Add {opcode.nn} to the value of register {opcode.x}.")

    def opcode_set_register_value_other_register(self, opcode: DecodedOpcode) -> None:
        """
        Set the value of the first provided register to the value of the second provided register.
        :param opcode: The opcode to execute.
        """
        second_register_value = self.registers[opcode.y]
        self.registers[opcode.x] = second_register_value
        self.next_instruction()
        logger.debug(f"Execute Opcode {opcode.hex()}: Set the value of register {opcode.x} to the value of register {opcode.y} ({second_register_value}).")

    def opcode_set_register_bitwise_or(self, opcode: DecodedOpcode) -> None:
        """
        Sets the value of the first provided register to the bitwise or of itself and the value of the second provided register.
        :param opcode: The opcode to execute.
        """
        result = self.registers[opcode.x] | self.registers[opcode.y]
        self.registers[opcode.x] = result
        self.next_instruction()
        logger.debug(f"Execute Opcode {opcode.hex()}: Set the value of register {opcode.x} to the bitwise or of itself and the value of register {opcode.y} ({result}).")

    def opcode_set_register_bitwise_and(self, opcode: DecodedOpcode) -> None:
        """
        Sets the value of the first provided register to the bitwise and of itself and the value of the second provided register.
        :param opcode: The opcode to execute.
        """
        result = self.registers[opcode.x] & self.registers[opcode.y]
        self.registers[opcode.x] = result
        self.next_instruction()
        logger.debug(f"Execute Opcode {opcode.hex()}: Set the value of register {opcode.x} to the bitwise and of itself and the value of register {opcode.y} ({result}).")

    def opcode_set_register_bitwise_xor(self, opcode: DecodedOpcode) -> None:
        """
        Sets the value of the first provided register to the bitwise xor of itself and the value of the second provided register.
        :param opcode: The opcode to execute.
        """
        result = self.registers[opcode.x] ^ self.registers[opcode.y]
        self.registers[opcode.x] = result
        self.next_instruction()
        logger.debug(f"Execute Opcode {opcode.hex()}: Set the value of register {opcode.x} to the bitwise xor of itself and the value of register {opcode.y} ({result}).")

    def opcode_add_other_register(self, opcode: DecodedOpcode) -> None:
        """
        Sets the value of the first provided register to the sum of itself and the value of the second provided register.  The carry flag (register 15) is set.
        The flag is written before the sum, so the sum wins when the first register is register 15.
        :param opcode: The opcode to execute.
        """
        first_register_value = self.registers[opcode.x]
        second_register_value = self.registers[opcode.y]
        sum_of_registers = first_register_value + second_register_value
        result = sum_of_registers % 256
        carry = 1 if sum_of_registers > BYTE_MASK else 0
        self.registers[FLAG_REGISTER] = carry
        self.registers[opcode.x] = result
        self.next_instruction()
        logger.debug(f"Execute Opcode {opcode.hex()}: Set the value of register {opcode.x} to the sum of itself and the value of register {opcode.y} ({first_register_value} + {second_register_value} = {result}, carry = {carry}).")

    def opcode_subtract_from_first_register(self, opcode: DecodedOpcode) -> None:
        """
        Sets the value of the first provided register to the difference of itself and the value of the second provided register.  The not borrow flag (register 15) is set.
        :param opcode: The opcode to execute.
        """
        first_register_value = self.registers[opcode.x]
        second_register_value = self.registers[opcode.y]
        result, not_borrow = self.bounded_subtract(first_register_value, second_register_value)
        self.registers[FLAG_REGISTER] = not_borrow
        self.registers[opcode.x] = result
        self.next_instruction()
        logger.debug(f"Execute Opcode {opcode.hex()}: Set the value of register {opcode.x} to the difference of itself and the value of register {opcode.y} ({first_register_value} - {second_register_value} = {result}, not borrow = {not_borrow}).")

    def opcode_bit_shift_right(self, opcode: DecodedOpcode) -> None:
        """
        Store the value of the second provided register shifted right by 1 in the first provided register.  Set register 15 to the least significant bit before the shift.
        :param opcode: The opcode to execute.
        """
        second_register_value = self.registers[opcode.y]
        bit_shift = second_register_value >> 1
        least_significant_bit = second_register_value & 1
        self.registers[FLAG_REGISTER] = least_significant_bit
        self.registers[opcode.x] = bit_shift
        self.next_instruction()
        logger.debug(f"Execute Opcode {opcode.hex()}: Shift the value of register {opcode.y} to the right by 1 into register {opcode.x} ({second_register_value} >> 1 = {bit_shift}, previous least significant bit = {least_significant_bit}).")

    def opcode_subtract_from_second_register(self, opcode: DecodedOpcode) -> None:
        """
        Sets the value of the first provided register to the difference of the value of the second provided register and itself.  The not borrow flag (register 15) is set.
        :param opcode: The opcode to execute.
        """
        first_register_value = self.registers[opcode.x]
        second_register_value = self.registers[opcode.y]
        result, not_borrow = self.bounded_subtract(second_register_value, first_register_value)
        self.registers[FLAG_REGISTER] = not_borrow
        self.registers[opcode.x] = result
        self.next_instruction()
        logger.debug(f"Execute Opcode {opcode.hex()}: Set the value of register {opcode.x} to the difference of the value of register {opcode.y} and itself ({second_register_value} - {first_register_value} = {result}, not borrow = {not_borrow}).")

    def opcode_bit_shift_left(self, opcode: DecodedOpcode) -> None:
        """
        Store the value of the second provided register shifted left by 1 in the first provided register.  Set register 15 to the most significant bit before the shift.
        :param opcode: The opcode to execute.
        """
        second_register_value = self.registers[opcode.y]
        bit_shift = (second_register_value << 1) & BYTE_MASK
        most_significant_bit = second_register_value >> 7
        self.registers[FLAG_REGISTER] = most_significant_bit
        self.registers[opcode.x] = bit_shift
        self.next_instruction()
        logger.debug(f"Execute Opcode {opcode.hex()}: Shift the value of register {opcode.y} to the left by 1 into register {opcode.x} ({second_register_value} << 1 = {bit_shift}, previous most significant bit = {most_significant_bit}).")

    def opcode_if_register_not_equal(self, opcode: DecodedOpcode) -> None:
        """
        Skip the next instruction if the values of the two provided registers are not equal.
        :param opcode: The opcode to execute.
        """
        first_register_value = self.registers[opcode.x]
        second_register_value = self.registers[opcode.y]
        logger.debug(f"Execute Opcode {opcode.hex()}: Skip next instruction if register {opcode.x}'s value ({first_register_value}) is not equal to register {opcode.y}'s value ({second_register_value}).")
        self.skip_next_instruction_if(first_register_value != second_register_value)

    def opcode_set_register_i(self, opcode: DecodedOpcode) -> None:
        """
        Sets the value of register I to the provided value.
        :param opcode: The opcode to execute.
        """
        self.register_i = opcode.nnn
        self.next_instruction()
        logger.debug(f"Execute Opcode {opcode.hex()}: Set register I to {hex(opcode.nnn)}.")

    def opcode_goto_addition(self, opcode: DecodedOpcode) -> None:
        """
        Jump to the provided address plus the value of register 0.
        :param opcode: The opcode to execute.
        """
        register_value = self.registers[0]
        self.program_counter = opcode.nnn + register_value
        logger.debug(f"Execute Opcode {opcode.hex()}: Jump to the provided address plus the value of register 0 ({hex(opcode.nnn)} + {hex(register_value)} = {hex(self.program_counter)}).")

    def opcode_random_bitwise_and(self, opcode: DecodedOpcode) -> None:
        """
        Set the value of the provided register to the bitwise and of the provided value and a random number [0, 255].
        :param opcode: The opcode to execute.
        """
        random_value = random.randint(0, 255)
        result = opcode.nn & random_value
        self.registers[opcode.x] = result
        self.next_instruction()
        logger.debug(f"Execute Opcode {opcode.hex()}: Set the value of register {opcode.x} to the bitwise and of the provided value and a random number [0, 255] ({opcode.nn} & {random_value} = {result}).")

    def opcode_draw_sprite(self, opcode: DecodedOpcode) -> None:
        """
        Draws the sprite with the provided height found at the address denoted by the value of register I to the provided x and y coordinates.  The collision flag (register 15) is set to 1 if a pixel was unset, 0 otherwise.
        :param opcode: The opcode to execute.
        """
        register_x_value = self.registers[opcode.x]
        register_y_value = self.registers[opcode.y]
        pixel_unset = 0
        for row in range(opcode.n):
            byte = self.read_byte(self.register_i + row)
            for column in range(SPRITE_WIDTH):
                if (byte >> (SPRITE_WIDTH - 1 - column)) & 1:
                    if self.framebuffer.toggle_pixel(register_x_value + column, register_y_value + row):
                        pixel_unset = 1
        self.registers[FLAG_REGISTER] = pixel_unset
        self.draw_flag = True
        self.next_instruction()
        logger.debug(f"Execute Opcode {opcode.hex()}: Drawing the sprite with a height of {opcode.n} and found at address {self.register_i} to the screen at ({register_x_value}, {register_y_value}), pixel unset = {pixel_unset}.")

    def opcode_if_key_pressed(self, opcode: DecodedOpcode) -> None:
        """
        Skip the next instruction if the key represented by the value of the provided register is pressed.  Only the lower 4 bits of the register select the key.
        :param opcode: The opcode to execute.
        """
        key = self.registers[opcode.x] & 0x0F
        pressed = self.keys[key]
        logger.debug(f"Execute Opcode {opcode.hex()}: Skip next instruction if the key represented by the value of register {opcode.x} ({key}) is pressed ({pressed}).")
        self.skip_next_instruction_if(pressed)

    def opcode_if_key_not_pressed(self, opcode: DecodedOpcode) -> None:
        """
        Skip the next instruction if the key represented by the value of the provided register is not pressed.
        :param opcode: The opcode to execute.
        """
        key = self.registers[opcode.x] & 0x0F
        pressed = self.keys[key]
        logger.debug(f"Execute Opcode {opcode.hex()}: Skip next instruction if the key represented by the value of register {opcode.x} ({key}) is not pressed ({pressed}).")
        self.skip_next_instruction_if(not pressed)

    def opcode_get_delay_timer(self, opcode: DecodedOpcode) -> None:
        """
        Sets the value of the provided register to the value of the delay timer.
        :param opcode: The opcode to execute.
        """
        self.registers[opcode.x] = self.delay
        self.next_instruction()
        logger.debug(f"Execute Opcode {opcode.hex()}: Set the value of register {opcode.x} to the value of the delay timer ({self.delay}).")

    def opcode_wait_for_key_press(self, opcode: DecodedOpcode) -> None:
        """
        Store a pressed key in the provided register.  If no key is pressed, block on this instruction until one is.
        :param opcode: The opcode to execute.
        """
        self.waiting_for_key.is_waiting = True
        self.waiting_for_key.storing_register = opcode.x
        logger.debug(f"Execute Opcode {opcode.hex()}: Blocking operation until a keypress is detected and stored in register {opcode.x}.")
        self.poll_waiting_key()

    def opcode_set_delay_timer(self, opcode: DecodedOpcode) -> None:
        """
        Sets the delay timer to the value of the provided register.
        :param opcode: The opcode to execute.
        """
        self.delay = self.registers[opcode.x]
        self.next_instruction()
        logger.debug(f"Execute Opcode {opcode.hex()}: Set the value of the delay timer to value of register {opcode.x} ({self.delay}).")

    def opcode_set_sound_timer(self, opcode: DecodedOpcode) -> None:
        """
        Sets the sound timer to the value of the provided register.
        :param opcode: The opcode to execute.
        """
        self.sound = self.registers[opcode.x]
        self.next_instruction()
        logger.debug(f"Execute Opcode {opcode.hex()}: Set the value of the sound timer to value of register {opcode.x} ({self.sound}).")

    def opcode_register_i_addition(self, opcode: DecodedOpcode) -> None:
        """
        Add the value of the provided register to register I.  Register 15 is left alone.
        :param opcode: The opcode to execute.
        """
        register_value = self.registers[opcode.x]
        register_i_value = self.register_i
        self.register_i = register_i_value + register_value
        self.next_instruction()
        logger.debug(f"Execute Opcode {opcode.hex()}: Adds the value of register {opcode.x} to the value of register I ({register_i_value} + {register_value} = {self.register_i}).")

    def opcode_set_register_i_to_hex_sprite_address(self, opcode: DecodedOpcode) -> None:
        """
        Sets the value of register I to the address of the hexadecimal sprite represented by the value in the provided register.
        :param opcode: The opcode to execute.
        """
        register_value = self.registers[opcode.x]
        self.register_i = register_value * DIGIT_SPRITE_SIZE
        self.next_instruction()
        logger.debug(f"Execute Opcode {opcode.hex()}: Set the value of register I to the address ({self.register_i}) of the hexadecimal sprite represented by the value of register {opcode.x} ({register_value}).")

    def opcode_binary_coded_decimal(self, opcode: DecodedOpcode) -> None:
        """
        Store the Binary Coded Decimal representation of the value of the provided register in memory, starting at the value of register I.
        Hundreds digit stored in memory at the location of the value of register I.
        Tens digit stored in memory at the location of the value of register I + 1.
        Units digit stored in memory at the location of the value of register I + 2.
        :param opcode: The opcode to execute.
        """
        register_value = self.registers[opcode.x]
        hundreds = register_value // 100 % 10
        tens = register_value // 10 % 10
        units = register_value % 10
        self.write_byte(self.register_i, hundreds)
        self.write_byte(self.register_i + 1, tens)
        self.write_byte(self.register_i + 2, units)
        self.next_instruction()
        logger.debug(f"Execute Opcode {opcode.hex()}: Store the Binary Coded Decimal representation of the value of register {opcode.x} ({register_value}), starting at the value of register I ({hex(self.register_i)}).")

    def opcode_register_dump(self, opcode: DecodedOpcode) -> None:
        """
        Store the values of all registers from register 0 to the provided register in memory, starting at the value of register I.
        Register I is left pointing just past the last stored value.
        :param opcode: The opcode to execute.
        """
        last_register = opcode.x
        logger.debug(f"Execute Opcode {opcode.hex()}: Dumping the values of all registers from register 0 to register {last_register} into memory, starting at the value of register I ({hex(self.register_i)}).")
        for register in range(last_register + 1):
            self.write_byte(self.register_i + register, self.registers[register])
        self.register_i += last_register + 1
        self.next_instruction()

    def opcode_register_load(self, opcode: DecodedOpcode) -> None:
        """
        Load the values of all registers from register 0 to the provided register from memory, starting at the value of register I.
        Register I is left pointing just past the last loaded value.
        :param opcode: The opcode to execute.
        """
        last_register = opcode.x
        logger.debug(f"Execute Opcode {opcode.hex()}: Loading the values of all registers from register 0 to register {last_register} from memory, starting at the value of register I ({hex(self.register_i)}).")
        for register in range(last_register + 1):
            self.registers[register] = self.read_byte(self.register_i + register)
        self.register_i += last_register + 1
        self.next_instruction()
    # endregion
