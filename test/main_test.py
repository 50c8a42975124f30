from unittest import mock

import pytest

from chip8 import __main__ as cli


class TestArguments:
    def test_parse_key(self):
        assert cli.parse_key("a") == 10, "Hex key parsed incorrectly."
        assert cli.parse_key("0") == 0, "Hex key parsed incorrectly."

    def test_parse_bad_key(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["rom.chip8", "--key", "g"])
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["rom.chip8", "--key", "10"])

    def test_defaults(self):
        args = cli.build_parser().parse_args(["rom.chip8"])
        assert args.steps == cli.DEFAULT_STEPS, "Unexpected default step count."
        assert args.keys == [], "Keys held by default."
        assert not args.old_instructions, "Old instructions enabled by default."


class TestMain:
    def test_runs_rom(self, tmp_path, capsys):
        rom = tmp_path.joinpath("digit.chip8")
        # V0 = 0, I = sprite for V0, draw it at (V1, V1)
        rom.write_bytes(bytes.fromhex("6000f029d115"))

        assert cli.main([str(rom), "--steps", "3"]) == 0, "Running a valid ROM failed."
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith("####."), "Top of the 0 sprite not printed."
        assert lines[1].startswith("#..#."), "Second row of the 0 sprite not printed."
        assert lines[32] == "Sound pending: False", "Sound state not reported."

    def test_dump_memory(self, tmp_path, capsys):
        rom = tmp_path.joinpath("empty.chip8")
        rom.write_bytes(bytes.fromhex("1200"))

        assert cli.main([str(rom), "--steps", "1", "--dump-memory"]) == 0, "Running a valid ROM failed."
        output = capsys.readouterr().out
        assert "200: 12 00" in output, "Memory dump not printed."

    def test_held_keys(self, tmp_path, capsys):
        rom = tmp_path.joinpath("wait.chip8")
        # Wait for a key into V0, draw its digit sprite
        rom.write_bytes(bytes.fromhex("f00af029d115"))

        assert cli.main([str(rom), "--steps", "3", "--key", "1"]) == 0, "Running a valid ROM failed."
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith("..#."), "Digit sprite of the held key not drawn."

    def test_missing_rom(self, tmp_path):
        assert cli.main([str(tmp_path.joinpath("missing.chip8"))]) == 1, "Missing ROM did not fail."

    def test_oversized_rom(self, tmp_path):
        rom = tmp_path.joinpath("huge.chip8")
        rom.write_bytes(bytes(4000))
        assert cli.main([str(rom)]) == 1, "Oversized ROM did not fail."

    @mock.patch.object(cli, "easygui")
    def test_picker_cancelled(self, mock_easygui):
        mock_easygui.fileopenbox.return_value = None

        assert cli.main([]) == 1, "Cancelling the game picker did not fail."
        mock_easygui.fileopenbox.assert_called_once()
        mock_easygui.msgbox.assert_called_once()

    @mock.patch.object(cli, "easygui")
    def test_picker_selection(self, mock_easygui, tmp_path):
        rom = tmp_path.joinpath("pick.chip8")
        rom.write_bytes(bytes.fromhex("1200"))
        mock_easygui.fileopenbox.return_value = str(rom)

        assert cli.main(["--steps", "1"]) == 0, "Running the picked ROM failed."
        mock_easygui.msgbox.assert_not_called()
