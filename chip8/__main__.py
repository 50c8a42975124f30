import argparse
import logging
import sys

from pathlib import Path
from typing import List, Optional

import easygui

from chip8.errors import Chip8Error
from chip8.interpreter import Interpreter

logger = logging.getLogger("chip8")

GAMES_PATH = str(Path.cwd().joinpath("games/.chip8"))
ROM_SUFFIX = ".chip8"
DEFAULT_STEPS = 1000


def parse_key(value: str) -> int:
    """
    Parse a hexadecimal keypad key from the command line.
    :param value: The key as a hex digit.
    :return: The key index.
    """
    try:
        key = int(value, 16)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not a hex digit.")
    if not 0 <= key <= 15:
        raise argparse.ArgumentTypeError(f"{value!r} is not on the keypad (0-f).")
    return key


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chip8", description="Run a CHIP-8 program headlessly and print the resulting screen.")
    parser.add_argument("rom", nargs="?", type=Path, help="Path of the ROM to run.  A file picker is shown when omitted.")
    parser.add_argument("--steps", type=int, default=DEFAULT_STEPS, help=f"Number of instructions to execute.  (Default: {DEFAULT_STEPS})")
    parser.add_argument("--key", dest="keys", action="append", type=parse_key, default=[], metavar="HEX", help="Hold a keypad key down for the whole run.  May be repeated.")
    parser.add_argument("--old-instructions", action="store_true", help="Use the old interpretation of ambiguous instructions.")
    parser.add_argument("--dump-memory", action="store_true", help="Print the memory after running.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every executed instruction.")
    return parser


def pick_rom() -> Optional[Path]:
    """
    Ask the user for a game to run.
    :return: The path of the selected game, None if nothing was picked.
    """
    file_name = easygui.fileopenbox(title="Select a Game", default=GAMES_PATH, filetypes=[["*.chip8", "CHIP-8"]])

    if not file_name:
        easygui.msgbox("Pick a game to play!", "No Game Selected")
        return None

    return Path(file_name)


def run(interpreter: Interpreter, steps: int) -> None:
    for _ in range(steps):
        interpreter.step()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="[%(levelname)s]:  %(message)s", stream=sys.stdout)

    rom = args.rom or pick_rom()
    if rom is None:
        return 1

    if rom.suffix != ROM_SUFFIX:
        logger.warning(f"Game does not appear to be a CHIP-8 game as the '{ROM_SUFFIX}' file type was not found in the file name.  Path: {rom}.")

    interpreter = Interpreter()
    interpreter.set_compatibility_mode(args.old_instructions)
    for key in args.keys:
        interpreter.set_key(key, True)

    try:
        interpreter.load_file(rom)
    except Chip8Error as error:
        logger.error(str(error))
        return 1

    run(interpreter, args.steps)

    print(interpreter.framebuffer.to_text())
    print(f"Sound pending: {interpreter.is_sound_pending()}")
    if args.dump_memory:
        print(interpreter.dump_memory())

    return 0


if __name__ == "__main__":
    sys.exit(main())
